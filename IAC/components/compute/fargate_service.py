"""
Fargate service component.

Creates:
- CloudWatch log group for the container
- Fargate task definition with a single container
- Optional Cloud Map service so other tasks can resolve this one by name
- ECS service (rolling deploys keep 100% healthy, burst to 200%),
  optionally registered with an ALB target group
"""

from dataclasses import dataclass, field
from typing import Any, Optional

import pulumi
import pulumi_aws as aws

from IAC.configs.environment import validate_task_size
from IAC.utils.tags import create_tags


def container_definition(
    name: str,
    image: pulumi.Input[str],
    port: int,
    log_group: pulumi.Input[str],
    region: str,
    environment: Optional[dict[str, pulumi.Input[str]]] = None,
    secrets: Optional[dict[str, pulumi.Input[str]]] = None,
) -> dict[str, Any]:
    """
    Build one ECS container definition.

    Args:
        name: Container name
        image: Image URI with tag
        port: Container port (TCP)
        log_group: CloudWatch log group for the awslogs driver
        region: AWS region of the log group
        environment: Plain environment variables
        secrets: Env var name -> Secrets Manager / SSM ARN (valueFrom)
    """
    return {
        "name": name,
        "image": image,
        "essential": True,
        "portMappings": [{"containerPort": port, "protocol": "tcp"}],
        "environment": [
            {"name": key, "value": value}
            for key, value in sorted((environment or {}).items())
        ],
        "secrets": [
            {"name": key, "valueFrom": value}
            for key, value in sorted((secrets or {}).items())
        ],
        "logConfiguration": {
            "logDriver": "awslogs",
            "options": {
                "awslogs-group": log_group,
                "awslogs-region": region,
                "awslogs-stream-prefix": name,
            },
        },
    }


@dataclass
class FargateServiceArgs:
    """Inputs describing one Fargate service."""
    container_name: str
    image: pulumi.Input[str]
    container_port: int
    cpu: int
    memory: int
    desired_count: int
    execution_role_arn: pulumi.Input[str]
    task_role_arn: pulumi.Input[str]
    subnet_ids: list[pulumi.Input[str]]
    security_group_id: pulumi.Input[str]
    log_retention_days: int = 14
    environment: dict[str, pulumi.Input[str]] = field(default_factory=dict)
    secrets: dict[str, pulumi.Input[str]] = field(default_factory=dict)
    target_group_arn: Optional[pulumi.Input[str]] = None
    namespace_id: Optional[pulumi.Input[str]] = None


@dataclass
class FargateServiceOutputs:
    """Output values from Fargate service component."""
    service_name: pulumi.Output[str]
    task_definition_arn: pulumi.Output[str]
    log_group_name: pulumi.Output[str]


class FargateServiceComponent(pulumi.ComponentResource):
    """One container running as an ECS Fargate service."""

    def __init__(
        self,
        name: str,
        environment: str,
        cluster_arn: pulumi.Input[str],
        args: FargateServiceArgs,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:compute:FargateService", name, None, opts)

        validate_task_size(args.cpu, args.memory)

        child_opts = pulumi.ResourceOptions(parent=self)
        region = aws.get_region().name
        tags = create_tags(environment, name, component=args.container_name)

        self.log_group = aws.cloudwatch.LogGroup(
            f"{name}-logs",
            name=f"/ecs/{name}",
            retention_in_days=args.log_retention_days,
            tags=tags,
            opts=child_opts,
        )

        self.task_definition = aws.ecs.TaskDefinition(
            f"{name}-task",
            family=name,
            cpu=str(args.cpu),
            memory=str(args.memory),
            network_mode="awsvpc",
            requires_compatibilities=["FARGATE"],
            execution_role_arn=args.execution_role_arn,
            task_role_arn=args.task_role_arn,
            container_definitions=pulumi.Output.json_dumps([
                container_definition(
                    name=args.container_name,
                    image=args.image,
                    port=args.container_port,
                    log_group=self.log_group.name,
                    region=region,
                    environment=args.environment,
                    secrets=args.secrets,
                ),
            ]),
            tags=tags,
            opts=child_opts,
        )

        service_registries = None
        if args.namespace_id is not None:
            self.discovery_service = aws.servicediscovery.Service(
                f"{name}-discovery",
                name=args.container_name,
                dns_config=aws.servicediscovery.ServiceDnsConfigArgs(
                    namespace_id=args.namespace_id,
                    dns_records=[
                        aws.servicediscovery.ServiceDnsConfigDnsRecordArgs(
                            type="A",
                            ttl=10,
                        ),
                    ],
                    routing_policy="MULTIVALUE",
                ),
                health_check_custom_config=aws.servicediscovery.ServiceHealthCheckCustomConfigArgs(
                    failure_threshold=1,
                ),
                tags=tags,
                opts=child_opts,
            )
            service_registries = aws.ecs.ServiceServiceRegistriesArgs(
                registry_arn=self.discovery_service.arn,
            )

        load_balancers = None
        health_check_grace_period = None
        if args.target_group_arn is not None:
            load_balancers = [
                aws.ecs.ServiceLoadBalancerArgs(
                    target_group_arn=args.target_group_arn,
                    container_name=args.container_name,
                    container_port=args.container_port,
                ),
            ]
            health_check_grace_period = 60

        self.service = aws.ecs.Service(
            f"{name}-service",
            name=name,
            cluster=cluster_arn,
            task_definition=self.task_definition.arn,
            desired_count=args.desired_count,
            launch_type="FARGATE",
            deployment_minimum_healthy_percent=100,
            deployment_maximum_percent=200,
            network_configuration=aws.ecs.ServiceNetworkConfigurationArgs(
                subnets=args.subnet_ids,
                security_groups=[args.security_group_id],
                assign_public_ip=False,
            ),
            load_balancers=load_balancers,
            health_check_grace_period_seconds=health_check_grace_period,
            service_registries=service_registries,
            propagate_tags="SERVICE",
            tags=tags,
            opts=child_opts,
        )

        self.register_outputs({
            "service_name": self.service.name,
            "task_definition_arn": self.task_definition.arn,
            "log_group_name": self.log_group.name,
        })

    def get_outputs(self) -> FargateServiceOutputs:
        """Get Fargate service output values."""
        return FargateServiceOutputs(
            service_name=self.service.name,
            task_definition_arn=self.task_definition.arn,
            log_group_name=self.log_group.name,
        )
