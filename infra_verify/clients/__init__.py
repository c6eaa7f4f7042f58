"""AWS and Terraform client module."""

from .aws_client import AWSClient, AWSAPIError
from .credentials import AWSConfig, CredentialSource, build_session
from .terraform_outputs import TerraformOutputs

__all__ = [
    "AWSClient",
    "AWSAPIError",
    "AWSConfig",
    "CredentialSource",
    "build_session",
    "TerraformOutputs",
]
