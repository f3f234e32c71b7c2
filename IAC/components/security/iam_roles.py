"""
IAM roles component for the ECS services.

Creates:
- Task execution role: used by the ECS agent to pull images from ECR,
  write container logs and read the database secret it injects
- App task role: SSM parameters under /<project>/<env>/* and CloudWatch logs
- Proxy task role: CloudWatch logs only

The policy documents are built by plain functions so they can be checked
without a Pulumi engine.
"""

import json
from dataclasses import dataclass
from typing import Any

import pulumi
import pulumi_aws as aws

from IAC.utils.tags import create_tags

POLICY_VERSION = "2012-10-17"
ECS_TASKS_PRINCIPAL = "ecs-tasks.amazonaws.com"
TASK_EXECUTION_MANAGED_POLICY = (
    "arn:aws:iam::aws:policy/service-role/AmazonECSTaskExecutionRolePolicy"
)


def assume_role_policy(service: str) -> dict[str, Any]:
    """Trust policy letting an AWS service assume the role."""
    return {
        "Version": POLICY_VERSION,
        "Statement": [{
            "Effect": "Allow",
            "Principal": {"Service": service},
            "Action": "sts:AssumeRole",
        }],
    }


def logs_statement(region: str, account_id: str, log_group_prefix: str) -> dict[str, Any]:
    return {
        "Effect": "Allow",
        "Action": [
            "logs:CreateLogStream",
            "logs:PutLogEvents",
        ],
        "Resource": [
            f"arn:aws:logs:{region}:{account_id}:log-group:{log_group_prefix}*",
        ],
    }


def execution_secrets_policy(secret_arns: list[str]) -> dict[str, Any]:
    """Allow the execution role to read the secrets injected into containers."""
    return {
        "Version": POLICY_VERSION,
        "Statement": [{
            "Effect": "Allow",
            "Action": ["secretsmanager:GetSecretValue"],
            "Resource": secret_arns,
        }],
    }


def app_task_policy(
    region: str,
    account_id: str,
    parameter_path: str,
    log_group_prefix: str,
) -> dict[str, Any]:
    """
    Permissions of the app container.

    Args:
        region: AWS region
        account_id: AWS account ID
        parameter_path: SSM hierarchy, e.g. /webapp/prod
        log_group_prefix: CloudWatch log group name prefix
    """
    return {
        "Version": POLICY_VERSION,
        "Statement": [
            {
                "Effect": "Allow",
                "Action": [
                    "ssm:GetParameter",
                    "ssm:GetParameters",
                    "ssm:GetParametersByPath",
                ],
                "Resource": [
                    f"arn:aws:ssm:{region}:{account_id}:parameter{parameter_path}/*",
                ],
            },
            logs_statement(region, account_id, log_group_prefix),
        ],
    }


def proxy_task_policy(region: str, account_id: str, log_group_prefix: str) -> dict[str, Any]:
    """Permissions of the nginx container (logs only)."""
    return {
        "Version": POLICY_VERSION,
        "Statement": [logs_statement(region, account_id, log_group_prefix)],
    }


@dataclass
class IamRoleOutputs:
    """Output values from IAM roles component."""
    execution_role_arn: pulumi.Output[str]
    app_task_role_arn: pulumi.Output[str]
    proxy_task_role_arn: pulumi.Output[str]


class IamRolesComponent(pulumi.ComponentResource):
    """
    IAM roles for the ECS task definitions.

    Follows least-privilege principle with specific resource permissions.
    """

    def __init__(
        self,
        name: str,
        environment: str,
        parameter_path: str,
        log_group_prefix: str,
        database_secret_arn: pulumi.Input[str],
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:security:IamRoles", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        account_id = aws.get_caller_identity().account_id
        region = aws.get_region().name
        ecs_assume_policy = json.dumps(assume_role_policy(ECS_TASKS_PRINCIPAL))

        # Task execution role (ECS agent)
        self.execution_role = aws.iam.Role(
            f"{name}-execution-role",
            assume_role_policy=ecs_assume_policy,
            tags=create_tags(environment, f"{name}-execution-role"),
            opts=child_opts,
        )

        aws.iam.RolePolicyAttachment(
            f"{name}-execution-managed",
            role=self.execution_role.name,
            policy_arn=TASK_EXECUTION_MANAGED_POLICY,
            opts=child_opts,
        )

        aws.iam.RolePolicy(
            f"{name}-execution-secrets",
            role=self.execution_role.id,
            policy=pulumi.Output.from_input(database_secret_arn).apply(
                lambda arn: json.dumps(execution_secrets_policy([arn]))
            ),
            opts=child_opts,
        )

        # App task role
        self.app_task_role = aws.iam.Role(
            f"{name}-app-task-role",
            assume_role_policy=ecs_assume_policy,
            tags=create_tags(environment, f"{name}-app-task-role", component="app"),
            opts=child_opts,
        )

        aws.iam.RolePolicy(
            f"{name}-app-task-policy",
            role=self.app_task_role.id,
            policy=json.dumps(
                app_task_policy(region, account_id, parameter_path, log_group_prefix)
            ),
            opts=child_opts,
        )

        # Proxy task role
        self.proxy_task_role = aws.iam.Role(
            f"{name}-proxy-task-role",
            assume_role_policy=ecs_assume_policy,
            tags=create_tags(environment, f"{name}-proxy-task-role", component="proxy"),
            opts=child_opts,
        )

        aws.iam.RolePolicy(
            f"{name}-proxy-task-policy",
            role=self.proxy_task_role.id,
            policy=json.dumps(proxy_task_policy(region, account_id, log_group_prefix)),
            opts=child_opts,
        )

        self.register_outputs({
            "execution_role_arn": self.execution_role.arn,
            "app_task_role_arn": self.app_task_role.arn,
            "proxy_task_role_arn": self.proxy_task_role.arn,
        })

    def get_outputs(self) -> IamRoleOutputs:
        """Get IAM role output values."""
        return IamRoleOutputs(
            execution_role_arn=self.execution_role.arn,
            app_task_role_arn=self.app_task_role.arn,
            proxy_task_role_arn=self.proxy_task_role.arn,
        )
