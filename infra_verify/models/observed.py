# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Observed-state models built from AWS describe responses."""

from pydantic import BaseModel, ConfigDict, Field

from .enums import ClusterStatus, LaunchType, SourceCategory


class ObservedIdentity(BaseModel):
    """Result of sts:GetCallerIdentity."""

    model_config = ConfigDict(frozen=True)

    account_id: str = Field(..., description="Account owning the calling credentials")
    arn: str = Field(..., description="ARN of the calling principal")


class ObservedCluster(BaseModel):
    """Subset of an ECS cluster description relevant to verification."""

    model_config = ConfigDict(frozen=True)

    name: str
    arn: str
    status: ClusterStatus | str = Field(..., description="Cluster status; unrecognised values are kept verbatim")
    settings: dict[str, str] = Field(
        default_factory=dict, description="Cluster settings keyed by setting name"
    )
    tags: dict[str, str] = Field(default_factory=dict)


class ObservedService(BaseModel):
    """Subset of an ECS service description relevant to verification."""

    model_config = ConfigDict(frozen=True)

    name: str
    arn: str = ""
    cluster_arn: str = ""
    desired_count: int = 0
    task_definition: str = ""
    launch_type: LaunchType | str = Field(
        "",
        description="Launch type; empty for capacity provider strategies, unknown values kept verbatim",
    )


class ObservedSecurityGroup(BaseModel):
    """Subset of an EC2 security group description."""

    model_config = ConfigDict(frozen=True)

    group_id: str
    group_name: str = ""
    ingress_permission_count: int = 0
    egress_permission_count: int = 0


class ObservedSecurityGroupRule(BaseModel):
    """A single security group rule as returned by DescribeSecurityGroupRules."""

    model_config = ConfigDict(frozen=True)

    rule_id: str
    group_id: str = ""
    is_egress: bool = False
    ip_protocol: str = ""
    from_port: int | None = None
    to_port: int | None = None
    cidr_ipv4: str | None = None
    cidr_ipv6: str | None = None
    prefix_list_id: str | None = None
    referenced_group_id: str | None = None

    @property
    def sources(self) -> dict[SourceCategory, str]:
        """Source fields that are set, keyed by category."""
        candidates = {
            SourceCategory.CIDR_IPV4: self.cidr_ipv4,
            SourceCategory.CIDR_IPV6: self.cidr_ipv6,
            SourceCategory.PREFIX_LIST: self.prefix_list_id,
            SourceCategory.SECURITY_GROUP: self.referenced_group_id,
        }
        return {category: value for category, value in candidates.items() if value}
