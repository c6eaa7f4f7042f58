# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Expected-state models built from Terraform outputs."""

from pydantic import BaseModel, ConfigDict, Field


class ExpectedIdentity(BaseModel):
    """Caller identity values reported by Terraform."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "account_id": "123456789012",
                "caller_arn": "arn:aws:iam::123456789012:user/deployer",
                "message": "Hello, World!",
            }
        },
    )

    account_id: str = Field("", description="AWS account ID of the deploying credentials")
    caller_arn: str = Field("", description="ARN of the deploying principal")
    message: str = Field("", description="Greeting text emitted by the module")


class ExpectedCluster(BaseModel):
    """ECS cluster values reported by Terraform."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "name": "prod-cluster",
                "arn": "arn:aws:ecs:us-east-1:111122223333:cluster/prod-cluster",
                "tags": {"Environment": "production"},
                "container_insights": "enabled",
            }
        },
    )

    name: str = Field("", description="Cluster name")
    arn: str = Field("", description="Full cluster ARN")
    tags: dict[str, str] = Field(
        default_factory=dict, description="Tags that must be present on the cluster"
    )
    container_insights: str = Field(
        "enabled", description="Expected containerInsights setting value, when the setting is present"
    )


class ExpectedService(BaseModel):
    """ECS service values reported by Terraform."""

    model_config = ConfigDict(frozen=True)

    name: str = Field("", description="Service name")
    cluster: str = Field("", description="Cluster name or ARN the service runs in")
    desired_count: int = Field(0, description="Desired number of running tasks")
    task_definition: str = Field("", description="Task definition ARN")
    launch_type: str = Field(
        "", description="Expected launch type; empty means the launch type is not checked"
    )


class ExpectedIngressRule(BaseModel):
    """Security group ingress rule values reported by Terraform."""

    model_config = ConfigDict(frozen=True)

    rule_id: str = Field("", description="Security group rule ID (sgr-...)")
    security_group_id: str = Field("", description="Security group ID (sg-...)")
    effective_source: str = Field(
        "", description="Source descriptor, e.g. 'cidr_ipv4:10.0.0.0/16'"
    )
