"""
Fixtures for verifying a real deployment.

These tests only run when Terraform outputs are available, either from a
saved file (TERRAFORM_OUTPUTS_FILE) or a working directory (TERRAFORM_DIR).
AWS credentials are resolved from the configured credential sources.
"""

import pytest

from infra_verify.clients.aws_client import AWSClient
from infra_verify.config import get_settings


@pytest.fixture(scope="session")
def deployment_settings():
    settings = get_settings()
    if not (settings.outputs_file or settings.terraform_dir):
        pytest.skip("Set TERRAFORM_OUTPUTS_FILE or TERRAFORM_DIR to verify a deployment")
    return settings


@pytest.fixture(scope="session")
def deployment_outputs(deployment_settings):
    return deployment_settings.load_outputs()


@pytest.fixture(scope="session")
def deployment_client(deployment_settings):
    return AWSClient(deployment_settings.to_aws_config())
