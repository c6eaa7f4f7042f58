"""Data models for infrastructure verification."""

from .enums import ClusterStatus, LaunchType, SourceCategory
from .expected import (
    ExpectedCluster,
    ExpectedIdentity,
    ExpectedIngressRule,
    ExpectedService,
)
from .observed import (
    ObservedCluster,
    ObservedIdentity,
    ObservedSecurityGroup,
    ObservedSecurityGroupRule,
    ObservedService,
)
from .results import CheckResult, VerificationReport

__all__ = [
    "ClusterStatus",
    "LaunchType",
    "SourceCategory",
    "ExpectedCluster",
    "ExpectedIdentity",
    "ExpectedIngressRule",
    "ExpectedService",
    "ObservedCluster",
    "ObservedIdentity",
    "ObservedSecurityGroup",
    "ObservedSecurityGroupRule",
    "ObservedService",
    "CheckResult",
    "VerificationReport",
]
