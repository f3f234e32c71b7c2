"""
VPC Component Resource for Network Infrastructure.

Steps & Architecture:
1. VPC (10.0.0.0/16) spanning two availability zones.
2. Internet Gateway (IGW): the public subnets' route to the internet.
3. Subnets (one per AZ in each tier):
   - Public (10.0.0.0/24, 10.0.1.0/24): ALB and the NAT gateway.
   - App (10.0.10.0/24, 10.0.11.0/24): ECS Fargate tasks.
   - Data (10.0.20.0/24, 10.0.21.0/24): Database, no internet route.
4. NAT Gateway: a single gateway in the first public subnet gives the app
   tier outbound access (ECR pulls, CloudWatch Logs, SSM).
5. Route Tables:
   - Public RT: 0.0.0.0/0 -> IGW.
   - App RT: 0.0.0.0/0 -> NAT gateway.
   - Data RT: implicit "local" route only.
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from IAC.configs.constants import AZ_COUNT, SUBNET_CIDRS, VPC_CIDR
from IAC.utils.tags import create_tags

SUBNET_TIERS = ("public", "app", "data")


@dataclass
class VpcOutputs:
    """Output values from VPC component."""
    vpc_id: pulumi.Output[str]
    vpc_cidr: str
    public_subnet_ids: list[pulumi.Output[str]]
    app_subnet_ids: list[pulumi.Output[str]]
    data_subnet_ids: list[pulumi.Output[str]]
    nat_gateway_id: pulumi.Output[str]


class VpcComponent(pulumi.ComponentResource):
    """
    VPC component with three subnet tiers and one NAT gateway.

    Public subnets host the load balancer, app subnets host the Fargate
    tasks (egress via NAT), data subnets host the database.
    """

    def __init__(
        self,
        name: str,
        environment: str,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:networking:Vpc", name, None, opts)
        self.environment = environment

        child_opts = pulumi.ResourceOptions(parent=self)

        azs = aws.get_availability_zones(state="available").names[:AZ_COUNT]
        suffixes = ["a", "b"][: len(azs)]

        # Create VPC
        self.vpc = aws.ec2.Vpc(
            f"{name}-vpc",
            cidr_block=VPC_CIDR,
            enable_dns_hostnames=True,
            enable_dns_support=True,
            tags=create_tags(environment, f"{name}-vpc"),
            opts=child_opts,
        )

        self.igw = aws.ec2.InternetGateway(
            f"{name}-igw",
            vpc_id=self.vpc.id,
            tags=create_tags(environment, f"{name}-igw"),
            opts=child_opts,
        )

        self.subnets: dict[str, list[aws.ec2.Subnet]] = {tier: [] for tier in SUBNET_TIERS}
        for tier in SUBNET_TIERS:
            for suffix, az in zip(suffixes, azs):
                subnet_name = f"{name}-{tier}-subnet-{suffix}"
                self.subnets[tier].append(
                    aws.ec2.Subnet(
                        subnet_name,
                        vpc_id=self.vpc.id,
                        cidr_block=SUBNET_CIDRS[f"{tier}_{suffix}"],
                        availability_zone=az,
                        map_public_ip_on_launch=tier == "public",
                        tags=create_tags(environment, subnet_name, Tier=tier),
                        opts=child_opts,
                    )
                )

        # Single NAT gateway in the first public subnet
        self.nat_eip = aws.ec2.Eip(
            f"{name}-nat-eip",
            domain="vpc",
            tags=create_tags(environment, f"{name}-nat-eip"),
            opts=child_opts,
        )
        self.nat_gateway = aws.ec2.NatGateway(
            f"{name}-nat",
            allocation_id=self.nat_eip.id,
            subnet_id=self.subnets["public"][0].id,
            tags=create_tags(environment, f"{name}-nat"),
            opts=pulumi.ResourceOptions(parent=self, depends_on=[self.igw]),
        )

        self._create_route_tables(name, child_opts)

        self.register_outputs({
            "vpc_id": self.vpc.id,
            "public_subnet_ids": [s.id for s in self.subnets["public"]],
            "app_subnet_ids": [s.id for s in self.subnets["app"]],
            "data_subnet_ids": [s.id for s in self.subnets["data"]],
            "nat_gateway_id": self.nat_gateway.id,
        })

    def _create_route_tables(
        self,
        name: str,
        opts: pulumi.ResourceOptions,
    ) -> None:
        """Create one route table per tier and associate its subnets."""
        routes = {
            "public": [
                aws.ec2.RouteTableRouteArgs(
                    cidr_block="0.0.0.0/0",
                    gateway_id=self.igw.id,
                ),
            ],
            "app": [
                aws.ec2.RouteTableRouteArgs(
                    cidr_block="0.0.0.0/0",
                    nat_gateway_id=self.nat_gateway.id,
                ),
            ],
            "data": [],
        }

        self.route_tables: dict[str, aws.ec2.RouteTable] = {}
        for tier in SUBNET_TIERS:
            route_table = aws.ec2.RouteTable(
                f"{name}-{tier}-rt",
                vpc_id=self.vpc.id,
                routes=routes[tier],
                tags=create_tags(self.environment, f"{name}-{tier}-rt"),
                opts=opts,
            )
            self.route_tables[tier] = route_table

            for index, subnet in enumerate(self.subnets[tier]):
                aws.ec2.RouteTableAssociation(
                    f"{name}-{tier}-rt-assoc-{index}",
                    subnet_id=subnet.id,
                    route_table_id=route_table.id,
                    opts=opts,
                )

    def get_outputs(self) -> VpcOutputs:
        """Get VPC output values."""
        return VpcOutputs(
            vpc_id=self.vpc.id,
            vpc_cidr=VPC_CIDR,
            public_subnet_ids=[s.id for s in self.subnets["public"]],
            app_subnet_ids=[s.id for s in self.subnets["app"]],
            data_subnet_ids=[s.id for s in self.subnets["data"]],
            nat_gateway_id=self.nat_gateway.id,
        )
