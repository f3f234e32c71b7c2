"""
Resource naming conventions for consistent AWS resource names.

Follows pattern: {project}-{environment}-{resource}
"""

from dataclasses import dataclass


@dataclass
class ResourceNamer:
    """
    Generates consistent resource names for AWS resources.

    Attributes:
        project: Project identifier
        environment: Deployment environment (dev, staging, prod)
    """
    project: str
    environment: str

    @property
    def prefix(self) -> str:
        """Shared prefix of every name, e.g. webapp-dev."""
        return f"{self.project}-{self.environment}"

    def name(self, resource: str) -> str:
        """
        Generate a resource name.

        Args:
            resource: Resource identifier (e.g., 'vpc', 'app-sg')

        Returns:
            Formatted resource name
        """
        return f"{self.prefix}-{resource}"

    def repository_name(self, container: str) -> str:
        """ECR repository name for a container image (lowercase only)."""
        return self.name(container).lower()

    def namespace_name(self) -> str:
        """
        Cloud Map private DNS namespace, e.g. webapp-dev.local.

        Services register as <service>.<namespace>.
        """
        return f"{self.prefix}.local"

    def parameter_path(self) -> str:
        """SSM parameter hierarchy readable by the app task role."""
        return f"/{self.project}/{self.environment}"

    def secret_name(self, name: str) -> str:
        """
        Generate a Secrets Manager secret name.

        Args:
            name: Secret identifier

        Returns:
            Secret name with environment prefix
        """
        return f"{self.project}/{self.environment}/{name}"
