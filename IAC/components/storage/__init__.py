"""
Storage components.

Components:
- EcrRepositoryComponent: Private registry for one container image
- RdsPostgresComponent: RDS PostgreSQL instance or Aurora Serverless v2 cluster
"""

from IAC.components.storage.ecr_repository import EcrRepositoryComponent, EcrRepositoryOutputs
from IAC.components.storage.rds_postgres import RdsOutputs, RdsPostgresComponent

__all__ = [
    "EcrRepositoryComponent",
    "EcrRepositoryOutputs",
    "RdsPostgresComponent",
    "RdsOutputs",
]
