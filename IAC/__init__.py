"""
Pulumi infrastructure-as-code for the web application.

This package defines AWS infrastructure including:
- VPC with public, application and data subnets across two AZs
- ECS Fargate cluster running the app and nginx proxy containers
- Internet-facing Application Load Balancer
- RDS PostgreSQL (or Aurora Serverless v2) for persistence
- ECR repositories for the container images
- IAM roles for task execution and per-container task permissions
"""
