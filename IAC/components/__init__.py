"""
Pulumi component resources for the web application infrastructure.

Each submodule provides reusable ComponentResource classes:
- networking: VPC, subnets, NAT gateway, security groups
- compute: ECS cluster, ALB, Fargate services
- storage: ECR repositories, RDS PostgreSQL / Aurora
- security: IAM roles
"""
