"""
Networking components for VPC infrastructure.

Components:
- VpcComponent: VPC with public/app/data subnets, NAT gateway, route tables
- SecurityGroupsComponent: Security groups for ALB, proxy, app, database
"""

from IAC.components.networking.vpc import VpcComponent, VpcOutputs
from IAC.components.networking.security_groups import SecurityGroupsComponent, SecurityGroupOutputs

__all__ = [
    "VpcComponent",
    "VpcOutputs",
    "SecurityGroupsComponent",
    "SecurityGroupOutputs",
]
