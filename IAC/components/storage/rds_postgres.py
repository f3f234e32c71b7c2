"""
PostgreSQL Component for the Relational Database.

Two flavours selected by EnvironmentConfig.database_engine:
- "postgres": a single RDS PostgreSQL instance (optionally Multi-AZ)
- "aurora-serverless": an Aurora PostgreSQL cluster with one
  Serverless v2 writer scaling between the configured min/max ACUs

Access Control - Who Can Connect:
1. App tasks (app_sg) → Port 5432
2. Anyone else → DENIED

Credentials: manage_master_user_password=True makes AWS generate the
password and keep it in Secrets Manager. The ECS task execution role
reads that secret and injects username/password into the app container.
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from IAC.configs.base import EnvironmentConfig
from IAC.configs.constants import DATABASE_DEFAULTS
from IAC.utils.tags import create_tags


@dataclass
class RdsOutputs:
    """Output values from RDS component."""
    address: pulumi.Output[str]
    port: pulumi.Output[int]
    database_name: pulumi.Output[str]
    master_secret_arn: pulumi.Output[str]


class RdsPostgresComponent(pulumi.ComponentResource):
    """
    PostgreSQL database for application persistence.

    Stores users and their personal access tokens.
    """

    def __init__(
        self,
        name: str,
        environment: str,
        config: EnvironmentConfig,
        subnet_ids: list[pulumi.Input[str]],
        security_group_id: pulumi.Input[str],
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:storage:RdsPostgres", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)
        self.db_name = DATABASE_DEFAULTS["name"]

        # DB Subnet Group
        self.subnet_group = aws.rds.SubnetGroup(
            f"{name}-subnet-group",
            subnet_ids=subnet_ids,
            tags=create_tags(environment, f"{name}-subnet-group"),
            opts=child_opts,
        )

        common = dict(
            db_subnet_group_name=self.subnet_group.name,
            vpc_security_group_ids=[security_group_id],
            storage_encrypted=True,
            manage_master_user_password=True,
            deletion_protection=config.enable_deletion_protection,
            skip_final_snapshot=not config.is_production,
            final_snapshot_identifier=f"{name}-final-snapshot" if config.is_production else None,
            backup_retention_period=7 if config.is_production else 1,
        )

        if config.uses_aurora:
            self._create_aurora(name, environment, config, common, child_opts)
        else:
            self._create_instance(name, environment, config, common, child_opts)

        self.register_outputs({
            "address": self.address,
            "port": self.port,
            "database_name": self.db_name,
            "master_secret_arn": self.master_secret_arn,
        })

    def _create_instance(
        self,
        name: str,
        environment: str,
        config: EnvironmentConfig,
        common: dict,
        opts: pulumi.ResourceOptions,
    ) -> None:
        """Single RDS PostgreSQL instance."""
        self.parameter_group = aws.rds.ParameterGroup(
            f"{name}-params",
            family=f"postgres{DATABASE_DEFAULTS['postgres_version']}",
            parameters=[
                aws.rds.ParameterGroupParameterArgs(
                    name="log_min_duration_statement",
                    value="1000",  # Log queries > 1 second
                ),
            ],
            tags=create_tags(environment, f"{name}-params"),
            opts=opts,
        )

        self.instance = aws.rds.Instance(
            f"{name}-postgres",
            identifier=f"{name}-postgres",
            engine="postgres",
            engine_version=DATABASE_DEFAULTS["postgres_version"],
            instance_class=config.rds_instance_class,
            allocated_storage=config.rds_allocated_storage,
            storage_type="gp3",
            db_name=self.db_name,
            username=DATABASE_DEFAULTS["username"],
            parameter_group_name=self.parameter_group.name,
            multi_az=config.multi_az,
            backup_window="03:00-04:00",
            maintenance_window="Mon:04:00-Mon:05:00",
            tags=create_tags(environment, f"{name}-postgres"),
            opts=opts,
            **common,
        )

        self.address = self.instance.address
        self.port = self.instance.port
        self.master_secret_arn = self.instance.master_user_secrets.apply(
            lambda secrets: secrets[0].secret_arn if secrets else None
        )

    def _create_aurora(
        self,
        name: str,
        environment: str,
        config: EnvironmentConfig,
        common: dict,
        opts: pulumi.ResourceOptions,
    ) -> None:
        """Aurora PostgreSQL cluster with a Serverless v2 writer."""
        self.cluster = aws.rds.Cluster(
            f"{name}-aurora",
            cluster_identifier=f"{name}-aurora",
            engine="aurora-postgresql",
            engine_mode="provisioned",
            engine_version=DATABASE_DEFAULTS["aurora_version"],
            database_name=self.db_name,
            master_username=DATABASE_DEFAULTS["username"],
            serverlessv2_scaling_configuration=aws.rds.ClusterServerlessv2ScalingConfigurationArgs(
                min_capacity=config.aurora_min_capacity,
                max_capacity=config.aurora_max_capacity,
            ),
            preferred_backup_window="03:00-04:00",
            tags=create_tags(environment, f"{name}-aurora"),
            opts=opts,
            **common,
        )

        self.writer = aws.rds.ClusterInstance(
            f"{name}-aurora-writer",
            cluster_identifier=self.cluster.id,
            instance_class="db.serverless",
            engine=self.cluster.engine,
            engine_version=self.cluster.engine_version,
            db_subnet_group_name=self.subnet_group.name,
            tags=create_tags(environment, f"{name}-aurora-writer"),
            opts=opts,
        )

        self.address = self.cluster.endpoint
        self.port = self.cluster.port
        self.master_secret_arn = self.cluster.master_user_secrets.apply(
            lambda secrets: secrets[0].secret_arn if secrets else None
        )

    def get_outputs(self) -> RdsOutputs:
        """Get RDS output values."""
        return RdsOutputs(
            address=self.address,
            port=self.port,
            database_name=pulumi.Output.from_input(self.db_name),
            master_secret_arn=self.master_secret_arn,
        )
