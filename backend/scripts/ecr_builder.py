"""
ECR image builder and ECS deploy utility.

Usage:
    python -m backend.scripts.ecr_builder build --environment dev
    python -m backend.scripts.ecr_builder push --environment dev --tag 1a2b3c4
    python -m backend.scripts.ecr_builder build-and-push --environment prod
    python -m backend.scripts.ecr_builder deploy --environment prod

Purpose:
- Build the app and proxy Docker images locally
- Read ECR repository URLs and ECS names from Pulumi stack outputs
- Authenticate Docker with AWS ECR
- Push both images to their repositories
- Force a new ECS deployment and wait for the services to stabilise

Dependencies: boto3, docker, pulumi CLI
System role: CI/CD helper for container deployments
"""

import base64
import json
import logging
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)

COMMANDS = ("build", "push", "build-and-push", "deploy")


@dataclass(frozen=True)
class ImageSpec:
    """One container image of the application."""

    name: str
    dockerfile: str
    output_key: str
    service_output_key: str


IMAGES: tuple[ImageSpec, ...] = (
    ImageSpec(
        name="app",
        dockerfile="docker/app/Dockerfile",
        output_key="app_ecr_repository_url",
        service_output_key="app_service_name",
    ),
    ImageSpec(
        name="proxy",
        dockerfile="docker/nginx/Dockerfile",
        output_key="proxy_ecr_repository_url",
        service_output_key="proxy_service_name",
    ),
)


def parse_registry(ecr_url: str) -> tuple[str, str, str]:
    """
    Split an ECR repository URL into account, region and registry host.

    Args:
        ecr_url: e.g. 123456789012.dkr.ecr.eu-west-1.amazonaws.com/webapp-dev-app

    Raises:
        ValueError: URL is not an ECR repository URL
    """
    registry = ecr_url.split("/", 1)[0]
    parts = registry.split(".")
    if len(parts) < 6 or parts[1:3] != ["dkr", "ecr"]:
        raise ValueError(f"Invalid ECR URL format: {ecr_url}")
    return parts[0], parts[3], registry


def decode_authorization_token(token: str) -> tuple[str, str]:
    """Decode an ECR authorization token into (username, password)."""
    username, _, password = base64.b64decode(token).decode("utf-8").partition(":")
    return username, password


def parse_args(argv: list[str]) -> tuple[str, str, str]:
    """
    Parse COMMAND --environment ENV [--tag TAG].

    Raises:
        ValueError: Missing command, unknown command or missing environment
    """
    if not argv:
        raise ValueError("COMMAND is required")

    command = argv[0]
    if command not in COMMANDS:
        raise ValueError(f"Unknown command: {command}")

    def flag_value(flag: str) -> Optional[str]:
        if flag in argv:
            idx = argv.index(flag)
            if idx + 1 < len(argv):
                return argv[idx + 1]
        return None

    environment = flag_value("--environment")
    if not environment:
        raise ValueError("--environment flag is required")

    return command, environment, flag_value("--tag") or "latest"


class ECRBuilder:
    """Build and push the application images to ECR and roll out ECS."""

    def __init__(self, environment: str, tag: str = "latest"):
        """
        Initialize builder.

        Args:
            environment: Deployment environment, also the Pulumi stack name
            tag: Image tag pushed next to "latest"
        """
        self.environment = environment
        self.tag = tag

        # Paths - use project root as Docker build context
        self.project_root = Path(__file__).parent.parent.parent
        self.iac_dir = self.project_root / "IAC"

        self._outputs: Optional[dict] = None

    def local_image(self, image: ImageSpec) -> str:
        return f"webapp-{image.name}:{self.tag}"

    def build_image(self, image: ImageSpec) -> bool:
        """
        Build one Docker image locally.

        Returns:
            bool: True if successful, False otherwise
        """
        dockerfile = self.project_root / image.dockerfile
        if not dockerfile.exists():
            logger.error(f"Dockerfile not found: {dockerfile}")
            return False

        try:
            logger.info(f"Building image: {self.local_image(image)}")
            subprocess.run(
                [
                    "docker",
                    "build",
                    "--provenance=false",
                    "--platform=linux/amd64",
                    "-t",
                    self.local_image(image),
                    "-f",
                    str(dockerfile),
                    str(self.project_root),
                ],
                check=True,
                capture_output=True,
                text=True,
            )
            logger.info(f"Image built: {self.local_image(image)}")
            return True

        except subprocess.CalledProcessError as e:
            logger.error(f"Build failed: {e.stderr}")
            return False
        except FileNotFoundError:
            logger.error("Docker not found. Install Docker and try again.")
            return False

    def build_images(self) -> bool:
        return all(self.build_image(image) for image in IMAGES)

    def get_stack_outputs(self) -> Optional[dict]:
        """
        Get outputs of the environment's Pulumi stack.

        Returns:
            dict: Stack outputs or None if they could not be read
        """
        if self._outputs is not None:
            return self._outputs

        try:
            logger.info(f"Retrieving outputs of Pulumi stack '{self.environment}'")
            result = subprocess.run(
                ["pulumi", "stack", "output", "-s", self.environment, "--json"],
                check=True,
                capture_output=True,
                text=True,
                cwd=str(self.iac_dir),
            )
            self._outputs = json.loads(result.stdout)
            return self._outputs

        except subprocess.CalledProcessError as e:
            logger.error(f"Failed to retrieve Pulumi outputs: {e.stderr}")
            return None
        except json.JSONDecodeError:
            logger.error("Failed to parse Pulumi outputs")
            return None
        except FileNotFoundError:
            logger.error("Pulumi CLI not found. Install Pulumi and try again.")
            return None

    def get_ecr_repository_url(self, image: ImageSpec) -> Optional[str]:
        outputs = self.get_stack_outputs()
        if outputs is None:
            return None

        ecr_url = outputs.get(image.output_key)
        if not ecr_url:
            logger.error(
                f"'{image.output_key}' not found in Pulumi outputs. "
                "Ensure IAC is deployed."
            )
            return None
        return ecr_url

    def authenticate_with_ecr(self, ecr_url: str) -> bool:
        """
        Authenticate Docker with AWS ECR.

        Args:
            ecr_url: ECR repository URL

        Returns:
            bool: True if successful
        """
        try:
            _, region, registry = parse_registry(ecr_url)
        except ValueError as e:
            logger.error(str(e))
            return False

        try:
            logger.info(f"Authenticating with ECR registry {registry}")
            ecr = boto3.client("ecr", region_name=region)
            auth = ecr.get_authorization_token()["authorizationData"][0]
            username, password = decode_authorization_token(auth["authorizationToken"])

            subprocess.run(
                ["docker", "login", "--username", username, "--password-stdin", registry],
                input=password,
                capture_output=True,
                text=True,
                check=True,
            )
            logger.info("ECR authentication successful")
            return True

        except (BotoCoreError, ClientError) as e:
            logger.error(f"Could not get ECR authorization token: {e}")
            return False
        except subprocess.CalledProcessError as e:
            logger.error(f"Authentication failed: {e.stderr}")
            return False

    def push_image(self, image: ImageSpec, ecr_url: str) -> str:
        """
        Tag and push one image as both TAG and latest.

        Returns:
            str: Full image URI (with tag) or empty string if failed
        """
        tags = [self.tag] if self.tag == "latest" else [self.tag, "latest"]
        try:
            for tag in tags:
                remote = f"{ecr_url}:{tag}"
                logger.info(f"Pushing {remote}")
                subprocess.run(
                    ["docker", "tag", self.local_image(image), remote],
                    check=True,
                    capture_output=True,
                )
                subprocess.run(
                    ["docker", "push", remote],
                    check=True,
                    capture_output=True,
                )
        except subprocess.CalledProcessError as e:
            logger.error(f"Push failed: {e.stderr}")
            return ""

        image_uri = f"{ecr_url}:{self.tag}"
        logger.info(f"Image URI: {image_uri}")
        return image_uri

    def push_images(self) -> Optional[dict[str, str]]:
        """
        Push every image to its repository.

        Returns:
            dict: Image name to pushed URI, or None on the first failure
        """
        pushed: dict[str, str] = {}
        for image in IMAGES:
            ecr_url = self.get_ecr_repository_url(image)
            if not ecr_url or not self.authenticate_with_ecr(ecr_url):
                return None
            image_uri = self.push_image(image, ecr_url)
            if not image_uri:
                return None
            pushed[image.name] = image_uri
        return pushed

    def build_and_push(self) -> Optional[dict[str, str]]:
        """
        Build and push all images in one operation.

        Returns:
            dict: Image name to pushed URI, or None if anything failed
        """
        if not self.build_images():
            return None
        return self.push_images()

    def deploy(self, wait: bool = True) -> bool:
        """
        Force a new deployment of every ECS service.

        Args:
            wait: Block until the services are stable

        Returns:
            bool: True if the rollout was started (and stabilised when waiting)
        """
        outputs = self.get_stack_outputs()
        if outputs is None:
            return False

        cluster = outputs.get("ecs_cluster_name")
        services = [outputs.get(image.service_output_key) for image in IMAGES]
        if not cluster or not all(services):
            logger.error("ECS cluster/service names not found in Pulumi outputs")
            return False

        region = outputs.get("aws_region")
        try:
            ecs = boto3.client("ecs", region_name=region)
            for service in services:
                logger.info(f"Forcing new deployment of {service}")
                ecs.update_service(
                    cluster=cluster,
                    service=service,
                    forceNewDeployment=True,
                )
            if wait:
                logger.info("Waiting for services to become stable...")
                ecs.get_waiter("services_stable").wait(cluster=cluster, services=services)
            logger.info("Deployment complete")
            return True

        except (BotoCoreError, ClientError) as e:
            logger.error(f"Deployment failed: {e}")
            return False


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entry point."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    try:
        command, environment, tag = parse_args(sys.argv[1:] if argv is None else argv)
    except ValueError as e:
        logger.error(str(e))
        print(
            "Usage: python -m backend.scripts.ecr_builder COMMAND "
            "--environment ENV [--tag TAG]"
        )
        print(f"Commands: {', '.join(COMMANDS)}")
        return 1

    builder = ECRBuilder(environment, tag=tag)

    if command == "build":
        success = builder.build_images()
    elif command == "push":
        success = builder.push_images() is not None
    elif command == "build-and-push":
        success = builder.build_and_push() is not None
    else:
        success = builder.deploy()

    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
