"""
Configuration module for Pulumi infrastructure.

Provides type-safe configuration loading from Pulumi stack config files.
"""

from IAC.configs.base import EnvironmentConfig
from IAC.configs.environment import get_config, validate_task_size
from IAC.configs.constants import (
    VPC_CIDR,
    SUBNET_CIDRS,
    DEFAULT_TAGS,
    FARGATE_TASK_SIZES,
    PORTS,
)

__all__ = [
    "EnvironmentConfig",
    "get_config",
    "validate_task_size",
    "VPC_CIDR",
    "SUBNET_CIDRS",
    "DEFAULT_TAGS",
    "FARGATE_TASK_SIZES",
    "PORTS",
]
