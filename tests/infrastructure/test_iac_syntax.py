"""
Test suite for IAC infrastructure syntax and structure validation.

Validates:
1. All Python modules have valid syntax
2. All imports can be resolved correctly
3. Component classes expose get_outputs() and output dataclasses
4. Configuration and utility modules behave as documented
"""

import ast
from dataclasses import FrozenInstanceError, is_dataclass
from pathlib import Path

import pytest

IAC_DIR = Path(__file__).parent.parent.parent / "IAC"


def make_config(**overrides):
    from IAC.configs.base import EnvironmentConfig

    values = {
        "environment": "dev",
        "domain": "dev.example.com",
        "app_version": "1.0.0",
        "task_cpu": 256,
        "task_memory": 512,
        "desired_count": 1,
        "database_engine": "postgres",
        "rds_instance_class": "db.t3.micro",
        "rds_allocated_storage": 20,
        "aurora_min_capacity": 0.5,
        "aurora_max_capacity": 2.0,
        "log_retention_days": 14,
        "enable_deletion_protection": False,
        "multi_az": False,
    }
    values.update(overrides)
    return EnvironmentConfig(**values)


class TestIacSyntaxValidation:
    """Validate Python syntax in all IAC modules."""

    def test_all_iac_files_have_valid_syntax(self, python_files_in_iac):
        """All Python files in IAC directory should parse without syntax errors."""
        errors = []

        for py_file in python_files_in_iac:
            try:
                ast.parse(py_file.read_text())
            except SyntaxError as e:
                errors.append(f"{py_file}: {e.msg} (line {e.lineno})")

        assert not errors, "Syntax errors found:\n" + "\n".join(errors)

    def test_pulumi_project_files_exist(self, iac_project_root):
        """Project and stack files should sit next to __main__.py."""
        for name in ("Pulumi.yaml", "Pulumi.dev.yaml", "Pulumi.prod.yaml"):
            assert (iac_project_root / name).exists(), name


class TestIacImports:
    """Validate that all IAC imports are correctly structured."""

    def test_all_components_importable(self):
        """All component classes should be importable without errors."""
        from IAC.components.compute.alb import AlbComponent
        from IAC.components.compute.ecs_cluster import EcsClusterComponent
        from IAC.components.compute.fargate_service import FargateServiceComponent
        from IAC.components.networking.security_groups import SecurityGroupsComponent
        from IAC.components.networking.vpc import VpcComponent
        from IAC.components.security.iam_roles import IamRolesComponent
        from IAC.components.storage.ecr_repository import EcrRepositoryComponent
        from IAC.components.storage.rds_postgres import RdsPostgresComponent

        assert all(
            isinstance(cls, type)
            for cls in [
                VpcComponent,
                SecurityGroupsComponent,
                IamRolesComponent,
                EcrRepositoryComponent,
                RdsPostgresComponent,
                EcsClusterComponent,
                AlbComponent,
                FargateServiceComponent,
            ]
        )

    def test_main_entry_point_has_main_function(self):
        """Main entry point should define a documented main()."""
        # Importing __main__.py would run main() and need a stack
        tree = ast.parse((IAC_DIR / "__main__.py").read_text())

        main_func = next(
            (
                node
                for node in ast.walk(tree)
                if isinstance(node, ast.FunctionDef) and node.name == "main"
            ),
            None,
        )

        assert main_func is not None, "main() function not found in __main__.py"
        assert ast.get_docstring(main_func) is not None

    def test_main_exports_deploy_outputs(self):
        """Stack outputs read by the deploy script must be exported."""
        from backend.scripts.ecr_builder import IMAGES

        source = (IAC_DIR / "__main__.py").read_text()
        # Exports are the keys of the outputs dict passed to pulumi.export
        exported = {
            key.value
            for node in ast.walk(ast.parse(source))
            if isinstance(node, ast.Dict)
            for key in node.keys
            if isinstance(key, ast.Constant)
        }

        required = {"aws_region", "ecs_cluster_name"}
        for image in IMAGES:
            required.update({image.output_key, image.service_output_key})
        assert required.issubset(exported)


class TestIacComponentStructure:
    """Validate component class structure and inheritance."""

    @pytest.mark.parametrize(
        ("module", "component", "outputs"),
        [
            ("IAC.components.networking.vpc", "VpcComponent", "VpcOutputs"),
            (
                "IAC.components.networking.security_groups",
                "SecurityGroupsComponent",
                "SecurityGroupOutputs",
            ),
            ("IAC.components.security.iam_roles", "IamRolesComponent", "IamRoleOutputs"),
            (
                "IAC.components.storage.ecr_repository",
                "EcrRepositoryComponent",
                "EcrRepositoryOutputs",
            ),
            ("IAC.components.storage.rds_postgres", "RdsPostgresComponent", "RdsOutputs"),
            ("IAC.components.compute.ecs_cluster", "EcsClusterComponent", "EcsClusterOutputs"),
            ("IAC.components.compute.alb", "AlbComponent", "AlbOutputs"),
            (
                "IAC.components.compute.fargate_service",
                "FargateServiceComponent",
                "FargateServiceOutputs",
            ),
        ],
    )
    def test_component_is_component_resource(self, module, component, outputs):
        """Every component is a ComponentResource with dataclass outputs."""
        import importlib

        import pulumi

        mod = importlib.import_module(module)
        component_cls = getattr(mod, component)

        assert issubclass(component_cls, pulumi.ComponentResource)
        assert hasattr(component_cls, "get_outputs")
        assert is_dataclass(getattr(mod, outputs))


class TestIacConfiguration:
    """Validate configuration loading and structure."""

    def test_environment_config_is_frozen_dataclass(self):
        config = make_config()

        assert is_dataclass(config)
        with pytest.raises(FrozenInstanceError):
            config.environment = "prod"

    def test_environment_config_properties(self):
        config = make_config()
        prod = make_config(environment="prod", database_engine="aurora-serverless")

        assert config.is_production is False
        assert config.uses_aurora is False
        assert config.app_url == "http://dev.example.com"
        assert config.get_tags() == {"Environment": "dev"}
        assert prod.is_production is True
        assert prod.uses_aurora is True

    def test_subnet_tiers(self):
        """Two subnets per tier, all inside the VPC range."""
        import ipaddress

        from IAC.configs.constants import AZ_COUNT, SUBNET_CIDRS, VPC_CIDR

        vpc = ipaddress.ip_network(VPC_CIDR)
        assert {"public_a", "public_b", "app_a", "app_b", "data_a", "data_b"} == set(
            SUBNET_CIDRS
        )
        assert AZ_COUNT == 2
        for cidr in SUBNET_CIDRS.values():
            assert ipaddress.ip_network(cidr).subnet_of(vpc)

    def test_health_check_path_matches_app(self):
        from backend.main import HEALTH_CHECK_PATHS
        from IAC.configs.constants import HEALTH_CHECK_PATH

        assert HEALTH_CHECK_PATH in HEALTH_CHECK_PATHS

    @pytest.mark.parametrize(("cpu", "memory"), [(256, 512), (512, 4096), (1024, 8192)])
    def test_validate_task_size_accepts_fargate_sizes(self, cpu, memory):
        from IAC.configs.environment import validate_task_size

        validate_task_size(cpu, memory)

    @pytest.mark.parametrize(("cpu", "memory"), [(256, 4096), (300, 512), (4096, 4096)])
    def test_validate_task_size_rejects_invalid_sizes(self, cpu, memory):
        from IAC.configs.environment import validate_task_size

        with pytest.raises(ValueError):
            validate_task_size(cpu, memory)


class TestIacUtilities:
    """Validate utility functions."""

    def test_resource_naming(self):
        from IAC.utils.naming import ResourceNamer

        namer = ResourceNamer(project="webapp", environment="dev")

        assert namer.prefix == "webapp-dev"
        assert namer.name("vpc") == "webapp-dev-vpc"
        assert namer.repository_name("App") == "webapp-dev-app"
        assert namer.namespace_name() == "webapp-dev.local"
        assert namer.parameter_path() == "/webapp/dev"
        assert namer.secret_name("db") == "webapp/dev/db"

    def test_create_tags_function(self):
        from IAC.utils.tags import create_tags

        tags = create_tags("dev", "webapp-dev-app", component="app", Owner="ops")

        assert tags["Environment"] == "dev"
        assert tags["Name"] == "webapp-dev-app"
        assert tags["Component"] == "app"
        assert tags["Owner"] == "ops"
        assert tags["Project"] == "webapp"

    def test_create_tags_without_component(self):
        from IAC.utils.tags import create_tags

        assert "Component" not in create_tags("dev", "webapp-dev-vpc")

    def test_merge_tags_function(self):
        from IAC.utils.tags import merge_tags

        merged = merge_tags({"Tag1": "value1", "Shared": "original"}, {"Shared": "updated"})

        assert merged == {"Tag1": "value1", "Shared": "updated"}

    def test_format_env_lines(self):
        from IAC.utils.outputs import format_env_lines

        content = format_env_lines({"vpc_id": "vpc-1", "alb_dns_name": "lb", "empty": None})

        assert content == "ALB_DNS_NAME=lb\nVPC_ID=vpc-1\n"


class TestIacDependencies:
    """Validate external dependencies are available."""

    def test_pulumi_importable(self):
        import pulumi

        assert pulumi is not None

    def test_pulumi_aws_importable(self):
        import pulumi_aws

        assert pulumi_aws is not None
