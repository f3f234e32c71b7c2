"""
Infrastructure constants for the web application.

Contains CIDR blocks, Fargate sizes, ports, and default configurations.
"""

from typing import Final

# VPC Configuration
VPC_CIDR: Final[str] = "10.0.0.0/16"

# Subnet CIDR blocks, one per tier and AZ
SUBNET_CIDRS: Final[dict[str, str]] = {
    "public_a": "10.0.0.0/24",   # ALB, NAT gateway
    "public_b": "10.0.1.0/24",
    "app_a": "10.0.10.0/24",     # ECS tasks
    "app_b": "10.0.11.0/24",
    "data_a": "10.0.20.0/24",    # Database
    "data_b": "10.0.21.0/24",
}

# Number of availability zones used by the VPC
AZ_COUNT: Final[int] = 2

# Valid Fargate task sizes: CPU units -> allowed memory (MiB)
FARGATE_TASK_SIZES: Final[dict[int, tuple[int, ...]]] = {
    256: (512, 1024, 2048),
    512: (1024, 2048, 3072, 4096),
    1024: (2048, 3072, 4096, 5120, 6144, 7168, 8192),
    2048: tuple(range(4096, 16385, 1024)),
    4096: tuple(range(8192, 30721, 1024)),
}

# RDS Instance classes by environment
RDS_INSTANCE_CLASSES: Final[dict[str, str]] = {
    "dev": "db.t3.micro",
    "staging": "db.t3.small",
    "prod": "db.t3.medium",
}

# Database configuration
DATABASE_DEFAULTS: Final[dict[str, str]] = {
    "name": "webapp",
    "username": "webapp",
    "postgres_version": "16",
    "aurora_version": "16.4",
}

# ECR configuration
ECR_DEFAULTS: Final[dict[str, int]] = {
    "max_images": 10,
}

# Container names, also the ECR repository suffixes
CONTAINERS: Final[dict[str, str]] = {
    "app": "app",
    "proxy": "proxy",
}

# Health check path polled by the ALB target group
HEALTH_CHECK_PATH: Final[str] = "/api/health"

# Default tags applied to all resources
DEFAULT_TAGS: Final[dict[str, str]] = {
    "Project": "webapp",
    "ManagedBy": "pulumi",
}

# Port configurations
PORTS: Final[dict[str, int]] = {
    "http": 80,
    "https": 443,
    "app": 8000,
    "postgres": 5432,
}
