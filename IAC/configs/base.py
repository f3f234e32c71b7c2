"""
Base configuration dataclass for environment settings.

Provides type-safe configuration structure loaded from Pulumi stack configs.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class EnvironmentConfig:
    """
    Environment-specific configuration for infrastructure deployment.

    Attributes:
        environment: Deployment environment (dev, staging, prod)
        domain: Public hostname of the application (APP_URL host)
        app_version: Version reported by the health endpoint
        task_cpu: Fargate task CPU units
        task_memory: Fargate task memory in MiB
        desired_count: Tasks per ECS service
        database_engine: "postgres" (RDS instance) or "aurora-serverless"
        rds_instance_class: RDS instance class for PostgreSQL
        rds_allocated_storage: RDS storage in GB
        aurora_min_capacity: Aurora Serverless v2 minimum ACUs
        aurora_max_capacity: Aurora Serverless v2 maximum ACUs
        log_retention_days: CloudWatch log retention for container logs
        enable_deletion_protection: Enable deletion protection for databases
        multi_az: Enable multi-AZ deployment for RDS
    """
    environment: str
    domain: str
    app_version: str
    task_cpu: int
    task_memory: int
    desired_count: int
    database_engine: str
    rds_instance_class: str
    rds_allocated_storage: int
    aurora_min_capacity: float
    aurora_max_capacity: float
    log_retention_days: int
    enable_deletion_protection: bool
    multi_az: bool

    @property
    def is_production(self) -> bool:
        """Check if this is a production environment."""
        return self.environment == "prod"

    @property
    def uses_aurora(self) -> bool:
        return self.database_engine == "aurora-serverless"

    @property
    def app_url(self) -> str:
        """Public application URL handed to the app container."""
        return f"http://{self.domain}"

    def get_tags(self) -> dict[str, str]:
        """Get environment-specific tags."""
        return {
            "Environment": self.environment,
        }
