# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Verifier for ECS services."""

import logging

from ..models.expected import ExpectedService
from ..models.observed import ObservedService
from ..utils.arn_utils import extract_resource_id
from .base import CheckContext, SubCheck, Verifier

logger = logging.getLogger(__name__)

OUTPUT_SERVICE_NAME = "ecs_service_name"
OUTPUT_SERVICE_CLUSTER = "ecs_service_cluster"
OUTPUT_DESIRED_COUNT = "ecs_service_desired_count"
OUTPUT_TASK_DEFINITION = "ecs_service_task_definition"
OUTPUT_LAUNCH_TYPE = "ecs_service_launch_type"


class ServiceVerifier(Verifier):
    """
    Confirms an ECS service exists in its cluster with the expected settings.

    The cluster output may be a name or a full ARN, so it only has to be a
    substring of the cluster ARN ECS reports. An empty launch type output
    skips the launch type comparison.
    """

    name = "service"

    def load_expected(self) -> ExpectedService:
        return ExpectedService(
            name=self.outputs.get_string(OUTPUT_SERVICE_NAME),
            cluster=self.outputs.get_string(OUTPUT_SERVICE_CLUSTER),
            desired_count=self.outputs.get_int(OUTPUT_DESIRED_COUNT),
            task_definition=self.outputs.get_string(OUTPUT_TASK_DEFINITION),
            launch_type=self.outputs.get_string(OUTPUT_LAUNCH_TYPE),
        )

    def fetch_observed(self, expected: ExpectedService) -> ObservedService:
        logger.debug(
            f"Describing service {expected.name} in cluster {extract_resource_id(expected.cluster)}"
        )
        services = self.aws_client.describe_services(expected.cluster, [expected.name])
        return self.require_one(services, "ECS service", expected.name)

    def sub_checks(self) -> list[tuple[str, SubCheck]]:
        return [
            ("service_exists", self.check_exists),
            ("service_configuration", self.check_configuration),
        ]

    def check_exists(
        self, check: CheckContext, expected: ExpectedService, observed: ObservedService
    ) -> None:
        check.equal(expected.name, observed.name, "Service name")
        check.contains(observed.cluster_arn, expected.cluster, "Cluster ARN")
        check.not_empty(observed.arn, "Service ARN")

    def check_configuration(
        self, check: CheckContext, expected: ExpectedService, observed: ObservedService
    ) -> None:
        check.equal(expected.desired_count, observed.desired_count, "Desired count")
        check.equal(expected.task_definition, observed.task_definition, "Task definition")

        if expected.launch_type:
            check.equal(expected.launch_type, observed.launch_type, "Launch type")

        check.not_empty(observed.arn, "Service ARN")
        check.not_empty(observed.cluster_arn, "Cluster ARN")
