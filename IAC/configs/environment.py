"""
Environment configuration loader.

Loads and validates configuration from Pulumi stack config files.
"""

import pulumi

from IAC.configs.base import EnvironmentConfig
from IAC.configs.constants import FARGATE_TASK_SIZES, RDS_INSTANCE_CLASSES

DATABASE_ENGINES = ("postgres", "aurora-serverless")


def validate_task_size(cpu: int, memory: int) -> None:
    """
    Check a CPU/memory pair against the Fargate size table.

    Raises:
        ValueError: If the combination is not a valid Fargate task size
    """
    allowed = FARGATE_TASK_SIZES.get(cpu)
    if allowed is None:
        raise ValueError(
            f"Invalid Fargate CPU {cpu}; expected one of {sorted(FARGATE_TASK_SIZES)}"
        )
    if memory not in allowed:
        raise ValueError(f"Invalid Fargate memory {memory} MiB for {cpu} CPU units")


def get_config() -> EnvironmentConfig:
    """
    Load environment configuration from Pulumi stack config.

    Returns:
        EnvironmentConfig: Validated configuration object

    Raises:
        pulumi.ConfigMissingError: If required config values are missing
        ValueError: If the task size or database engine is invalid
    """
    config = pulumi.Config()
    environment = config.require("environment")

    task_cpu = config.get_int("task_cpu") or 256
    task_memory = config.get_int("task_memory") or 512
    validate_task_size(task_cpu, task_memory)

    database_engine = config.get("database_engine") or "postgres"
    if database_engine not in DATABASE_ENGINES:
        raise ValueError(
            f"Invalid database_engine {database_engine!r}; expected one of {DATABASE_ENGINES}"
        )

    return EnvironmentConfig(
        environment=environment,
        domain=config.require("domain"),
        app_version=config.get("app_version") or "1.0.0",
        task_cpu=task_cpu,
        task_memory=task_memory,
        desired_count=config.get_int("desired_count") or 1,
        database_engine=database_engine,
        rds_instance_class=(
            config.get("rds_instance_class")
            or RDS_INSTANCE_CLASSES.get(environment, "db.t3.micro")
        ),
        rds_allocated_storage=config.get_int("rds_allocated_storage") or 20,
        aurora_min_capacity=config.get_float("aurora_min_capacity") or 0.5,
        aurora_max_capacity=config.get_float("aurora_max_capacity") or 2.0,
        log_retention_days=config.get_int("log_retention_days") or 14,
        enable_deletion_protection=config.get_bool("enable_deletion_protection") or False,
        multi_az=config.get_bool("multi_az") or False,
    )
