"""
Pulumi program entry point for the web application infrastructure.

Instantiates all component resources in dependency order:
1. Configuration
2. VPC → Security Groups
3. ECR repositories, database
4. IAM roles (need the database secret)
5. ECS cluster, ALB
6. Fargate services: app (Cloud Map) and proxy (behind the ALB)
"""

import pulumi
import pulumi_aws as aws

from IAC.configs.constants import CONTAINERS, PORTS
from IAC.configs.environment import get_config
from IAC.utils.naming import ResourceNamer
from IAC.utils.outputs import write_outputs_to_env

# Networking
from IAC.components.networking.vpc import VpcComponent
from IAC.components.networking.security_groups import SecurityGroupsComponent

# Security
from IAC.components.security.iam_roles import IamRolesComponent

# Storage
from IAC.components.storage.ecr_repository import EcrRepositoryComponent
from IAC.components.storage.rds_postgres import RdsPostgresComponent

# Compute
from IAC.components.compute.alb import AlbComponent
from IAC.components.compute.ecs_cluster import EcsClusterComponent
from IAC.components.compute.fargate_service import (
    FargateServiceArgs,
    FargateServiceComponent,
)


def main() -> None:
    """Deploy the web application infrastructure."""
    config = get_config()
    namer = ResourceNamer(project="webapp", environment=config.environment)
    base_name = namer.prefix

    aws_region = aws.get_region().name

    # --- Layer 1: Networking Foundation ---
    vpc = VpcComponent(
        name=base_name,
        environment=config.environment,
    )
    vpc_outputs = vpc.get_outputs()

    security_groups = SecurityGroupsComponent(
        name=base_name,
        environment=config.environment,
        vpc_id=vpc_outputs.vpc_id,
    )
    sg_outputs = security_groups.get_outputs()

    # --- Layer 2: Registries and Database ---
    repositories = {
        container: EcrRepositoryComponent(
            name=namer.name(container),
            environment=config.environment,
            repository_name=namer.repository_name(container),
            force_delete=not config.is_production,
        ).get_outputs()
        for container in CONTAINERS.values()
    }

    database = RdsPostgresComponent(
        name=base_name,
        environment=config.environment,
        config=config,
        subnet_ids=vpc_outputs.data_subnet_ids,
        security_group_id=sg_outputs.database_sg_id,
    )
    db_outputs = database.get_outputs()

    # --- Layer 3: IAM Roles ---
    iam_roles = IamRolesComponent(
        name=base_name,
        environment=config.environment,
        parameter_path=namer.parameter_path(),
        log_group_prefix=f"/ecs/{base_name}",
        database_secret_arn=db_outputs.master_secret_arn,
    )
    iam_outputs = iam_roles.get_outputs()

    # --- Layer 4: Cluster and Load Balancer ---
    cluster = EcsClusterComponent(
        name=base_name,
        environment=config.environment,
        vpc_id=vpc_outputs.vpc_id,
        namespace_name=namer.namespace_name(),
    )
    cluster_outputs = cluster.get_outputs()

    alb = AlbComponent(
        name=base_name,
        environment=config.environment,
        vpc_id=vpc_outputs.vpc_id,
        subnet_ids=vpc_outputs.public_subnet_ids,
        security_group_id=sg_outputs.alb_sg_id,
        deletion_protection=config.enable_deletion_protection,
    )
    alb_outputs = alb.get_outputs()

    # --- Layer 5: Services ---
    app_service = FargateServiceComponent(
        name=namer.name(CONTAINERS["app"]),
        environment=config.environment,
        cluster_arn=cluster_outputs.cluster_arn,
        args=FargateServiceArgs(
            container_name=CONTAINERS["app"],
            image=pulumi.Output.concat(repositories["app"].repository_url, ":latest"),
            container_port=PORTS["app"],
            cpu=config.task_cpu,
            memory=config.task_memory,
            desired_count=config.desired_count,
            execution_role_arn=iam_outputs.execution_role_arn,
            task_role_arn=iam_outputs.app_task_role_arn,
            subnet_ids=vpc_outputs.app_subnet_ids,
            security_group_id=sg_outputs.app_sg_id,
            log_retention_days=config.log_retention_days,
            environment={
                "APP_ENV": config.environment,
                "APP_URL": config.app_url,
                "APP_VERSION": config.app_version,
                "POSTGRES_HOST": db_outputs.address,
                "POSTGRES_PORT": db_outputs.port.apply(str),
                "POSTGRES_DB": db_outputs.database_name,
            },
            secrets={
                "POSTGRES_USER": pulumi.Output.concat(db_outputs.master_secret_arn, ":username::"),
                "POSTGRES_PASSWORD": pulumi.Output.concat(db_outputs.master_secret_arn, ":password::"),
            },
            namespace_id=cluster_outputs.namespace_id,
        ),
    )

    proxy_service = FargateServiceComponent(
        name=namer.name(CONTAINERS["proxy"]),
        environment=config.environment,
        cluster_arn=cluster_outputs.cluster_arn,
        args=FargateServiceArgs(
            container_name=CONTAINERS["proxy"],
            image=pulumi.Output.concat(repositories["proxy"].repository_url, ":latest"),
            container_port=PORTS["http"],
            cpu=config.task_cpu,
            memory=config.task_memory,
            desired_count=config.desired_count,
            execution_role_arn=iam_outputs.execution_role_arn,
            task_role_arn=iam_outputs.proxy_task_role_arn,
            subnet_ids=vpc_outputs.app_subnet_ids,
            security_group_id=sg_outputs.proxy_sg_id,
            log_retention_days=config.log_retention_days,
            environment={
                "APP_SERVICE_HOST": f"{CONTAINERS['app']}.{namer.namespace_name()}",
                "APP_SERVICE_PORT": str(PORTS["app"]),
            },
            target_group_arn=alb_outputs.target_group_arn,
        ),
        opts=pulumi.ResourceOptions(depends_on=[alb]),
    )

    # --- Exports ---
    outputs = {
        "aws_region": aws_region,
        "vpc_id": vpc_outputs.vpc_id,
        "alb_dns_name": alb_outputs.alb_dns_name,
        "app_ecr_repository_url": repositories["app"].repository_url,
        "proxy_ecr_repository_url": repositories["proxy"].repository_url,
        "database_address": db_outputs.address,
        "database_secret_arn": db_outputs.master_secret_arn,
        "ecs_cluster_name": cluster_outputs.cluster_name,
        "app_service_name": app_service.get_outputs().service_name,
        "proxy_service_name": proxy_service.get_outputs().service_name,
    }

    # Write outputs to .env file for local tooling
    write_outputs_to_env(outputs, "infrastructure.env")

    # Export to Pulumi stack
    for key, value in outputs.items():
        pulumi.export(key, value)


# Execute
main()
