# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""AWS client wrapper for read-only describe calls."""

import logging
from enum import Enum
from typing import Any, Callable

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..exceptions import VerificationAborted
from ..models.enums import ClusterStatus, LaunchType
from ..models.observed import (
    ObservedCluster,
    ObservedIdentity,
    ObservedSecurityGroup,
    ObservedSecurityGroupRule,
    ObservedService,
)
from ..utils.tag_utils import extract_settings, extract_tags
from .credentials import AWSConfig, build_session

logger = logging.getLogger(__name__)


def _as_enum(enum_cls: type[Enum], value: str) -> Enum | str:
    """Convert a provider value to its enum, keeping unknown values verbatim."""
    try:
        return enum_cls(value)
    except ValueError:
        return value


class AWSAPIError(VerificationAborted):
    """Raised when AWS API calls fail."""
    pass


class AWSClient:
    """
    Wrapper around boto3 clients for the services under verification.

    Credentials come from an explicit ``AWSConfig``. Every call is attempted
    exactly once and SDK failures are raised as ``AWSAPIError``.
    """

    def __init__(self, config: AWSConfig | None = None, session: boto3.Session | None = None):
        """
        Initialize AWS clients.

        Args:
            config: Explicit AWS configuration (region, credentials, timeouts)
            session: Pre-built boto3 session; resolved from config when omitted
        """
        self.config = config or AWSConfig()
        self.region = self.config.region

        session = session or build_session(self.config)
        boto_config = self.config.botocore_config()

        self.sts = session.client("sts", config=boto_config)
        self.ecs = session.client("ecs", config=boto_config)
        self.ec2 = session.client("ec2", config=boto_config)

    def _call(self, operation: str, func: Callable[..., Any], **kwargs) -> Any:
        """
        Call an AWS API once, translating SDK errors.

        Args:
            operation: Operation name for logs and errors (e.g. "ecs:DescribeClusters")
            func: Boto3 client method to call
            **kwargs: Keyword arguments for the method

        Returns:
            Response from AWS API

        Raises:
            AWSAPIError: If the API call fails
        """
        logger.debug(f"Calling {operation} with {kwargs}")
        try:
            return func(**kwargs)
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "")
            raise AWSAPIError(f"AWS API error in {operation}: {error_code} - {str(e)}") from e
        except BotoCoreError as e:
            raise AWSAPIError(f"Boto3 error in {operation}: {str(e)}") from e

    def get_caller_identity(self) -> ObservedIdentity:
        """Return the identity of the credentials in use."""
        response = self._call("sts:GetCallerIdentity", self.sts.get_caller_identity)
        return ObservedIdentity(
            account_id=response.get("Account", ""),
            arn=response.get("Arn", ""),
        )

    def describe_clusters(self, names: list[str]) -> list[ObservedCluster]:
        """
        Describe ECS clusters by name or ARN, including settings and tags.

        Clusters ECS cannot find are reported under ``failures`` and are
        simply absent from the result.
        """
        response = self._call(
            "ecs:DescribeClusters",
            self.ecs.describe_clusters,
            clusters=names,
            include=["SETTINGS", "TAGS"],
        )

        for failure in response.get("failures", []):
            logger.info(f"ECS reported {failure.get('reason')} for {failure.get('arn')}")

        clusters = []
        for cluster in response.get("clusters", []):
            clusters.append(ObservedCluster(
                name=cluster.get("clusterName", ""),
                arn=cluster.get("clusterArn", ""),
                status=_as_enum(ClusterStatus, cluster.get("status", "")),
                settings=extract_settings(cluster.get("settings")),
                tags=extract_tags(cluster.get("tags")),
            ))
        return clusters

    def describe_services(self, cluster: str, names: list[str]) -> list[ObservedService]:
        """Describe ECS services by name within a cluster."""
        response = self._call(
            "ecs:DescribeServices",
            self.ecs.describe_services,
            cluster=cluster,
            services=names,
        )

        for failure in response.get("failures", []):
            logger.info(f"ECS reported {failure.get('reason')} for {failure.get('arn')}")

        return [
            ObservedService(
                name=service.get("serviceName", ""),
                arn=service.get("serviceArn", ""),
                cluster_arn=service.get("clusterArn", ""),
                desired_count=service.get("desiredCount", 0),
                task_definition=service.get("taskDefinition", ""),
                launch_type=_as_enum(LaunchType, service.get("launchType", "")),
            )
            for service in response.get("services", [])
        ]

    def describe_security_groups(self, group_ids: list[str]) -> list[ObservedSecurityGroup]:
        """Describe EC2 security groups by ID."""
        response = self._call(
            "ec2:DescribeSecurityGroups",
            self.ec2.describe_security_groups,
            GroupIds=group_ids,
        )

        return [
            ObservedSecurityGroup(
                group_id=group.get("GroupId", ""),
                group_name=group.get("GroupName", ""),
                ingress_permission_count=len(group.get("IpPermissions", [])),
                egress_permission_count=len(group.get("IpPermissionsEgress", [])),
            )
            for group in response.get("SecurityGroups", [])
        ]

    def describe_security_group_rules(self, group_id: str) -> list[ObservedSecurityGroupRule]:
        """Describe every rule (ingress and egress) attached to a security group."""
        paginator = self.ec2.get_paginator("describe_security_group_rules")
        pages = self._call(
            "ec2:DescribeSecurityGroupRules",
            lambda **kwargs: list(paginator.paginate(**kwargs)),
            Filters=[{"Name": "group-id", "Values": [group_id]}],
        )

        rules = []
        for page in pages:
            for rule in page.get("SecurityGroupRules", []):
                referenced = rule.get("ReferencedGroupInfo") or {}
                rules.append(ObservedSecurityGroupRule(
                    rule_id=rule.get("SecurityGroupRuleId", ""),
                    group_id=rule.get("GroupId", ""),
                    is_egress=rule.get("IsEgress", False),
                    ip_protocol=rule.get("IpProtocol", ""),
                    from_port=rule.get("FromPort"),
                    to_port=rule.get("ToPort"),
                    cidr_ipv4=rule.get("CidrIpv4"),
                    cidr_ipv6=rule.get("CidrIpv6"),
                    prefix_list_id=rule.get("PrefixListId"),
                    referenced_group_id=referenced.get("GroupId"),
                ))
        return rules
