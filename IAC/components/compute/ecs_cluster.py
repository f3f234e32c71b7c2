"""
ECS cluster component.

Creates:
- ECS cluster with Container Insights enabled
- Cloud Map private DNS namespace so services reach each other by name
  (the proxy resolves the app as app.<project>-<env>.local)
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from IAC.utils.tags import create_tags


@dataclass
class EcsClusterOutputs:
    """Output values from ECS cluster component."""
    cluster_arn: pulumi.Output[str]
    cluster_name: pulumi.Output[str]
    namespace_id: pulumi.Output[str]
    namespace_name: pulumi.Output[str]


class EcsClusterComponent(pulumi.ComponentResource):
    """ECS cluster plus service discovery namespace."""

    def __init__(
        self,
        name: str,
        environment: str,
        vpc_id: pulumi.Input[str],
        namespace_name: str,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:compute:EcsCluster", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        self.cluster = aws.ecs.Cluster(
            f"{name}-cluster",
            name=f"{name}-cluster",
            settings=[
                aws.ecs.ClusterSettingArgs(
                    name="containerInsights",
                    value="enabled",
                ),
            ],
            tags=create_tags(environment, f"{name}-cluster"),
            opts=child_opts,
        )

        self.namespace = aws.servicediscovery.PrivateDnsNamespace(
            f"{name}-namespace",
            name=namespace_name,
            vpc=vpc_id,
            description="Service discovery for ECS services",
            tags=create_tags(environment, namespace_name),
            opts=child_opts,
        )

        self.register_outputs({
            "cluster_arn": self.cluster.arn,
            "cluster_name": self.cluster.name,
            "namespace_id": self.namespace.id,
            "namespace_name": self.namespace.name,
        })

    def get_outputs(self) -> EcsClusterOutputs:
        """Get ECS cluster output values."""
        return EcsClusterOutputs(
            cluster_arn=self.cluster.arn,
            cluster_name=self.cluster.name,
            namespace_id=self.namespace.id,
            namespace_name=self.namespace.name,
        )
