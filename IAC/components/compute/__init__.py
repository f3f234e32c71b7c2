"""
Compute components for ECS Fargate.

Components:
- EcsClusterComponent: ECS cluster and Cloud Map namespace
- AlbComponent: Internet-facing Application Load Balancer
- FargateServiceComponent: One container as an ECS service
"""

from IAC.components.compute.alb import AlbComponent, AlbOutputs
from IAC.components.compute.ecs_cluster import EcsClusterComponent, EcsClusterOutputs
from IAC.components.compute.fargate_service import (
    FargateServiceArgs,
    FargateServiceComponent,
    FargateServiceOutputs,
)

__all__ = [
    "AlbComponent",
    "AlbOutputs",
    "EcsClusterComponent",
    "EcsClusterOutputs",
    "FargateServiceArgs",
    "FargateServiceComponent",
    "FargateServiceOutputs",
]
