# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Shared ARN and account ID helpers."""

import re


ACCOUNT_ID_PATTERN = re.compile(r"[0-9]{12}")


def arn_prefix(partition: str = "aws") -> str:
    """
    Return the ARN prefix for a partition.

    Args:
        partition: AWS partition (aws, aws-cn, aws-us-gov)

    Returns:
        Prefix string, e.g. "arn:aws:"
    """
    return f"arn:{partition}:"


def extract_resource_id(arn: str) -> str:
    """
    Extract the trailing resource identifier from an ARN or a plain name.

    Handles the formats seen in ECS and EC2:
    - arn:aws:ecs:us-east-1:123456789012:cluster/prod-cluster
    - arn:aws:ecs:us-east-1:123456789012:service/prod-cluster/web
    - arn:aws:ecs:us-east-1:123456789012:task-definition/web:3
    - prod-cluster

    Example:
        >>> extract_resource_id("arn:aws:ecs:us-east-1:123456789012:cluster/prod-cluster")
        'prod-cluster'
    """
    if not arn.startswith("arn:"):
        return arn

    resource = ":".join(arn.split(":")[5:])
    if "/" in resource:
        return resource.split("/")[-1]
    return resource
