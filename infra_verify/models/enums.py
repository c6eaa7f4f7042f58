"""Enumerations for provider states and rule source categories."""

from enum import Enum


class ClusterStatus(str, Enum):
    """Lifecycle states reported by ECS for a cluster."""

    ACTIVE = "ACTIVE"
    PROVISIONING = "PROVISIONING"
    DEPROVISIONING = "DEPROVISIONING"
    FAILED = "FAILED"
    INACTIVE = "INACTIVE"


class LaunchType(str, Enum):
    """ECS launch types."""

    EC2 = "EC2"
    FARGATE = "FARGATE"
    EXTERNAL = "EXTERNAL"


class SourceCategory(str, Enum):
    """Kinds of traffic source a security group rule can carry."""

    CIDR_IPV4 = "cidr_ipv4"
    CIDR_IPV6 = "cidr_ipv6"
    PREFIX_LIST = "prefix_list"
    SECURITY_GROUP = "security_group"

    @property
    def prefix(self) -> str:
        """Descriptor prefix, e.g. ``cidr_ipv4:``."""
        return f"{self.value}:"
