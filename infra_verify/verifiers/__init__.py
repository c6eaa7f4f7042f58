"""Resource verifiers."""

from .base import CheckContext, Verifier
from .cluster import ClusterVerifier
from .identity import IdentityVerifier
from .ingress_rule import IngressRuleVerifier
from .service import ServiceVerifier

# CLI names, in default run order
VERIFIERS: dict[str, type[Verifier]] = {
    "identity": IdentityVerifier,
    "cluster": ClusterVerifier,
    "service": ServiceVerifier,
    "ingress-rule": IngressRuleVerifier,
}

__all__ = [
    "CheckContext",
    "Verifier",
    "ClusterVerifier",
    "IdentityVerifier",
    "IngressRuleVerifier",
    "ServiceVerifier",
    "VERIFIERS",
]
