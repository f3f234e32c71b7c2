"""
ECR Repository Component for Container Images.

One component per container image (app, proxy).

Integration Flow:
  1. CI builds the image: python -m backend.scripts.ecr_builder build
  2. The builder reads repository_url from the stack outputs and pushes
     <ECR_URL>:<git sha> and <ECR_URL>:latest
  3. The ECS task definition references <ECR_URL>:latest; a forced
     deployment makes the service pull the new image

Access Control - Who Can Pull:
1. ECS task execution role → IAM permissions (ecr:BatchGetImage, ...)
2. CI (via AWS credentials) → IAM permissions
3. Public Internet → DENIED (private repository)

Key Features:
- scan_on_push=True: Every image is scanned for CVEs on upload.
- Lifecycle Policy: Auto-delete old images, keep only the last N.
- Encryption: Images encrypted at rest (AES256).
- force_delete outside prod so stacks can be torn down with images inside.
"""

import json
from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from IAC.configs.constants import ECR_DEFAULTS
from IAC.utils.tags import create_tags


def lifecycle_policy(max_images: int) -> str:
    """Lifecycle policy document expiring all but the newest max_images."""
    return json.dumps({
        "rules": [{
            "rulePriority": 1,
            "description": f"Keep last {max_images} images",
            "selection": {
                "tagStatus": "any",
                "countType": "imageCountMoreThan",
                "countNumber": max_images,
            },
            "action": {
                "type": "expire",
            },
        }],
    })


@dataclass
class EcrRepositoryOutputs:
    """Output values from ECR repository component."""
    repository_url: pulumi.Output[str]
    repository_arn: pulumi.Output[str]
    repository_name: pulumi.Output[str]


class EcrRepositoryComponent(pulumi.ComponentResource):
    """
    Private ECR repository for one container image.

    Enables image scanning and lifecycle management.
    """

    def __init__(
        self,
        name: str,
        environment: str,
        repository_name: str,
        max_images: int = ECR_DEFAULTS["max_images"],
        force_delete: bool = False,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:storage:EcrRepository", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        self.repository = aws.ecr.Repository(
            f"{name}-repo",
            name=repository_name,
            image_scanning_configuration=aws.ecr.RepositoryImageScanningConfigurationArgs(
                scan_on_push=True,
            ),
            image_tag_mutability="MUTABLE",  # "latest" is re-pushed on every deploy
            encryption_configurations=[
                aws.ecr.RepositoryEncryptionConfigurationArgs(
                    encryption_type="AES256",
                ),
            ],
            force_delete=force_delete,
            tags=create_tags(environment, repository_name),
            opts=child_opts,
        )

        aws.ecr.LifecyclePolicy(
            f"{name}-lifecycle",
            repository=self.repository.name,
            policy=lifecycle_policy(max_images),
            opts=child_opts,
        )

        self.register_outputs({
            "repository_url": self.repository.repository_url,
            "repository_arn": self.repository.arn,
            "repository_name": self.repository.name,
        })

    def get_outputs(self) -> EcrRepositoryOutputs:
        """Get ECR repository output values."""
        return EcrRepositoryOutputs(
            repository_url=self.repository.repository_url,
            repository_arn=self.repository.arn,
            repository_name=self.repository.name,
        )
