"""Verify deployed AWS infrastructure against Terraform outputs."""

from .clients import AWSAPIError, AWSClient, AWSConfig, CredentialSource, TerraformOutputs
from .config import Settings, get_settings
from .exceptions import (
    CardinalityError,
    CredentialsResolutionError,
    OutputParseError,
    TerraformOutputError,
    VerificationAborted,
    VerificationError,
)
from .models import CheckResult, VerificationReport
from .verifiers import (
    VERIFIERS,
    ClusterVerifier,
    IdentityVerifier,
    IngressRuleVerifier,
    ServiceVerifier,
)

__version__ = "0.1.0"

__all__ = [
    "AWSAPIError",
    "AWSClient",
    "AWSConfig",
    "CredentialSource",
    "TerraformOutputs",
    "Settings",
    "get_settings",
    "CardinalityError",
    "CredentialsResolutionError",
    "OutputParseError",
    "TerraformOutputError",
    "VerificationAborted",
    "VerificationError",
    "CheckResult",
    "VerificationReport",
    "VERIFIERS",
    "ClusterVerifier",
    "IdentityVerifier",
    "IngressRuleVerifier",
    "ServiceVerifier",
]
