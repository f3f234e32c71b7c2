"""
Security components.

Components:
- IamRolesComponent: ECS task execution role and per-container task roles
"""

from IAC.components.security.iam_roles import IamRoleOutputs, IamRolesComponent

__all__ = [
    "IamRolesComponent",
    "IamRoleOutputs",
]
