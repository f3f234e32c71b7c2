"""
Security Groups Component for Network Access Control.

Architectural Steps & Flow:
1. Create "Shell" Security Groups (ALB, Proxy, App, Database) without
   inline rules so they can reference each other by ID.

2. Define Rules as a chain, each tier only reachable from the one in front:
   - ALB: HTTP 80 from the internet, egress to proxy tasks on 80.
   - Proxy (nginx): 80 from the ALB, egress anywhere (ECR pulls via NAT,
     app tasks on 8000).
   - App (FastAPI): 8000 from the proxy, egress anywhere.
   - Database: 5432 from the app only; egress limited to the VPC CIDR.

3. Security Groups are stateful: an allowed inbound request implies the
   outbound reply.
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from IAC.configs.constants import PORTS, VPC_CIDR
from IAC.utils.tags import create_tags


@dataclass
class SecurityGroupOutputs:
    """Output values from security groups component."""
    alb_sg_id: pulumi.Output[str]
    proxy_sg_id: pulumi.Output[str]
    app_sg_id: pulumi.Output[str]
    database_sg_id: pulumi.Output[str]


class SecurityGroupsComponent(pulumi.ComponentResource):
    """
    Security groups component for network access control.

    Implements least-privilege security group rules:
    - ALB accepts HTTP from anywhere and only talks to the proxy
    - Proxy accepts traffic only from the ALB
    - App accepts traffic only from the proxy
    - Database accepts connections only from the app
    """

    def __init__(
        self,
        name: str,
        environment: str,
        vpc_id: pulumi.Input[str],
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:networking:SecurityGroups", name, None, opts)
        self.environment = environment

        child_opts = pulumi.ResourceOptions(parent=self)

        self.alb_sg = aws.ec2.SecurityGroup(
            f"{name}-alb-sg",
            description="Security group for Application Load Balancer",
            vpc_id=vpc_id,
            tags=create_tags(environment, f"{name}-alb-sg"),
            opts=child_opts,
        )

        self.proxy_sg = aws.ec2.SecurityGroup(
            f"{name}-proxy-sg",
            description="Security group for nginx proxy tasks",
            vpc_id=vpc_id,
            tags=create_tags(environment, f"{name}-proxy-sg", component="proxy"),
            opts=child_opts,
        )

        self.app_sg = aws.ec2.SecurityGroup(
            f"{name}-app-sg",
            description="Security group for FastAPI app tasks",
            vpc_id=vpc_id,
            tags=create_tags(environment, f"{name}-app-sg", component="app"),
            opts=child_opts,
        )

        self.database_sg = aws.ec2.SecurityGroup(
            f"{name}-database-sg",
            description="Security group for PostgreSQL",
            vpc_id=vpc_id,
            tags=create_tags(environment, f"{name}-database-sg"),
            opts=child_opts,
        )

        self._create_rules(name, child_opts)

        self.register_outputs({
            "alb_sg_id": self.alb_sg.id,
            "proxy_sg_id": self.proxy_sg.id,
            "app_sg_id": self.app_sg.id,
            "database_sg_id": self.database_sg.id,
        })

    def _create_rules(
        self,
        name: str,
        opts: pulumi.ResourceOptions,
    ) -> None:
        """Create security group rules."""
        # ALB: HTTP from the internet
        aws.vpc.SecurityGroupIngressRule(
            f"{name}-alb-ingress-http",
            security_group_id=self.alb_sg.id,
            ip_protocol="tcp",
            from_port=PORTS["http"],
            to_port=PORTS["http"],
            cidr_ipv4="0.0.0.0/0",
            description="HTTP from the internet",
            opts=opts,
        )

        aws.vpc.SecurityGroupEgressRule(
            f"{name}-alb-egress-proxy",
            security_group_id=self.alb_sg.id,
            ip_protocol="tcp",
            from_port=PORTS["http"],
            to_port=PORTS["http"],
            referenced_security_group_id=self.proxy_sg.id,
            description="To nginx proxy",
            opts=opts,
        )

        # Proxy: only from the ALB
        aws.vpc.SecurityGroupIngressRule(
            f"{name}-proxy-ingress-alb",
            security_group_id=self.proxy_sg.id,
            ip_protocol="tcp",
            from_port=PORTS["http"],
            to_port=PORTS["http"],
            referenced_security_group_id=self.alb_sg.id,
            description="HTTP from ALB",
            opts=opts,
        )

        aws.vpc.SecurityGroupEgressRule(
            f"{name}-proxy-egress-all",
            security_group_id=self.proxy_sg.id,
            ip_protocol="-1",
            cidr_ipv4="0.0.0.0/0",
            description="All outbound traffic",
            opts=opts,
        )

        # App: only from the proxy
        aws.vpc.SecurityGroupIngressRule(
            f"{name}-app-ingress-proxy",
            security_group_id=self.app_sg.id,
            ip_protocol="tcp",
            from_port=PORTS["app"],
            to_port=PORTS["app"],
            referenced_security_group_id=self.proxy_sg.id,
            description="FastAPI from nginx proxy",
            opts=opts,
        )

        aws.vpc.SecurityGroupEgressRule(
            f"{name}-app-egress-all",
            security_group_id=self.app_sg.id,
            ip_protocol="-1",
            cidr_ipv4="0.0.0.0/0",
            description="All outbound traffic",
            opts=opts,
        )

        # Database: PostgreSQL from the app only
        aws.vpc.SecurityGroupIngressRule(
            f"{name}-database-ingress-app",
            security_group_id=self.database_sg.id,
            ip_protocol="tcp",
            from_port=PORTS["postgres"],
            to_port=PORTS["postgres"],
            referenced_security_group_id=self.app_sg.id,
            description="PostgreSQL from app",
            opts=opts,
        )

        aws.vpc.SecurityGroupEgressRule(
            f"{name}-database-egress-vpc",
            security_group_id=self.database_sg.id,
            ip_protocol="-1",
            cidr_ipv4=VPC_CIDR,
            description="Replies inside the VPC only",
            opts=opts,
        )

    def get_outputs(self) -> SecurityGroupOutputs:
        """Get security group output values."""
        return SecurityGroupOutputs(
            alb_sg_id=self.alb_sg.id,
            proxy_sg_id=self.proxy_sg.id,
            app_sg_id=self.app_sg.id,
            database_sg_id=self.database_sg.id,
        )
