"""Pytest configuration and shared fixtures."""

import pytest
from unittest.mock import MagicMock

from infra_verify.clients.aws_client import AWSClient
from infra_verify.clients.terraform_outputs import TerraformOutputs
from infra_verify.config import Settings
from infra_verify.models import (
    ClusterStatus,
    ObservedCluster,
    ObservedIdentity,
    ObservedSecurityGroup,
    ObservedSecurityGroupRule,
    ObservedService,
)


# =============================================================================
# Environment and Configuration Fixtures
# =============================================================================

@pytest.fixture
def aws_credentials(monkeypatch):
    """Fake AWS credentials so moto and the environment source resolve."""
    test_vars = {
        "AWS_ACCESS_KEY_ID": "testing",
        "AWS_SECRET_ACCESS_KEY": "testing",
        "AWS_SECURITY_TOKEN": "testing",
        "AWS_SESSION_TOKEN": "testing",
        "AWS_DEFAULT_REGION": "us-east-1",
    }
    for key, value in test_vars.items():
        monkeypatch.setenv(key, value)
    return test_vars


@pytest.fixture
def verify_settings():
    """Settings independent of any .env file in the working directory."""
    return Settings(
        _env_file=None,
        aws_region="us-east-1",
        aws_partition="aws",
        identity_message_substring="Hello",
    )


# =============================================================================
# AWS Mocks
# =============================================================================

@pytest.fixture
def mock_aws_client():
    """Create a mock AWS client returning observed-state models."""
    return MagicMock(spec=AWSClient)


# =============================================================================
# Terraform Output Fixtures
# =============================================================================

@pytest.fixture
def identity_outputs():
    return TerraformOutputs({
        "account_id": "123456789012",
        "caller_arn": "arn:aws:iam::123456789012:user/deployer",
        "message": "Hello, World!",
    })


@pytest.fixture
def cluster_outputs():
    return TerraformOutputs({
        "ecs_cluster_name": {"value": "prod-cluster", "type": "string", "sensitive": False},
        "ecs_cluster_arn": {
            "value": "arn:aws:ecs:us-east-1:111122223333:cluster/prod-cluster",
            "type": "string",
            "sensitive": False,
        },
        "ecs_cluster_tags": {
            "value": {"Environment": "production", "Team": "platform"},
            "type": ["map", "string"],
            "sensitive": False,
        },
    })


@pytest.fixture
def service_outputs():
    return TerraformOutputs({
        "ecs_service_name": "web",
        "ecs_service_cluster": "prod-cluster",
        "ecs_service_desired_count": "3",
        "ecs_service_task_definition": "arn:aws:ecs:us-east-1:111122223333:task-definition/web:7",
        "ecs_service_launch_type": "FARGATE",
    })


@pytest.fixture
def ingress_outputs():
    return TerraformOutputs({
        "security_group_ingress_rule_id": "sgr-0123456789abcdef0",
        "security_group_id": "sg-0123456789abcdef0",
        "security_group_rule_effective_source": "cidr_ipv4:10.0.0.0/16",
    })


# =============================================================================
# Observed State Fixtures
# =============================================================================

@pytest.fixture
def observed_identity():
    return ObservedIdentity(
        account_id="123456789012",
        arn="arn:aws:iam::123456789012:user/deployer",
    )


@pytest.fixture
def observed_cluster():
    return ObservedCluster(
        name="prod-cluster",
        arn="arn:aws:ecs:us-east-1:111122223333:cluster/prod-cluster",
        status=ClusterStatus.ACTIVE,
        settings={"containerInsights": "enabled"},
        tags={"Environment": "production", "Team": "platform", "ManagedBy": "terraform"},
    )


@pytest.fixture
def observed_service():
    return ObservedService(
        name="web",
        arn="arn:aws:ecs:us-east-1:111122223333:service/prod-cluster/web",
        cluster_arn="arn:aws:ecs:us-east-1:111122223333:cluster/prod-cluster",
        desired_count=3,
        task_definition="arn:aws:ecs:us-east-1:111122223333:task-definition/web:7",
        launch_type="FARGATE",
    )


@pytest.fixture
def observed_security_group():
    return ObservedSecurityGroup(
        group_id="sg-0123456789abcdef0",
        group_name="web",
        ingress_permission_count=1,
        egress_permission_count=1,
    )


@pytest.fixture
def observed_ingress_rule():
    return ObservedSecurityGroupRule(
        rule_id="sgr-0123456789abcdef0",
        group_id="sg-0123456789abcdef0",
        is_egress=False,
        ip_protocol="tcp",
        from_port=443,
        to_port=443,
        cidr_ipv4="10.0.0.0/16",
    )


# =============================================================================
# Pytest Hooks
# =============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line(
        "markers", "integration: marks tests that run against a real deployment"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow running"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "property: marks tests as property-based tests"
    )


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "property" in str(item.fspath):
            item.add_marker(pytest.mark.property)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
