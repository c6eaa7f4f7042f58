# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Verifier for ECS clusters."""

from ..models.enums import ClusterStatus
from ..models.expected import ExpectedCluster
from ..models.observed import ObservedCluster
from ..utils.tag_utils import find_tag_mismatches
from .base import CheckContext, SubCheck, Verifier

OUTPUT_CLUSTER_NAME = "ecs_cluster_name"
OUTPUT_CLUSTER_ARN = "ecs_cluster_arn"
OUTPUT_CLUSTER_TAGS = "ecs_cluster_tags"

CONTAINER_INSIGHTS_SETTING = "containerInsights"


class ClusterVerifier(Verifier):
    """
    Confirms an ECS cluster exists, is active and carries the expected tags.

    The containerInsights setting is only compared when the live cluster
    reports it. Extra live tags are ignored.
    """

    name = "cluster"

    def load_expected(self) -> ExpectedCluster:
        return ExpectedCluster(
            name=self.outputs.get_string(OUTPUT_CLUSTER_NAME),
            arn=self.outputs.get_string(OUTPUT_CLUSTER_ARN),
            tags=self.outputs.get_map(OUTPUT_CLUSTER_TAGS),
        )

    def fetch_observed(self, expected: ExpectedCluster) -> ObservedCluster:
        clusters = self.aws_client.describe_clusters([expected.name])
        return self.require_one(clusters, "ECS cluster", expected.name)

    def sub_checks(self) -> list[tuple[str, SubCheck]]:
        return [
            ("cluster_exists", self.check_exists),
            ("cluster_configuration", self.check_configuration),
            ("cluster_tags", self.check_tags),
        ]

    def check_exists(
        self, check: CheckContext, expected: ExpectedCluster, observed: ObservedCluster
    ) -> None:
        check.equal(expected.name, observed.name, "Cluster name")
        check.equal(expected.arn, observed.arn, "Cluster ARN")

    def check_configuration(
        self, check: CheckContext, expected: ExpectedCluster, observed: ObservedCluster
    ) -> None:
        check.equal(ClusterStatus.ACTIVE, observed.status, "Cluster status")

        if CONTAINER_INSIGHTS_SETTING in observed.settings:
            check.equal(
                expected.container_insights,
                observed.settings[CONTAINER_INSIGHTS_SETTING],
                "containerInsights setting",
            )

    def check_tags(
        self, check: CheckContext, expected: ExpectedCluster, observed: ObservedCluster
    ) -> None:
        for mismatch in find_tag_mismatches(expected.tags, observed.tags):
            check.fail(mismatch.describe())
