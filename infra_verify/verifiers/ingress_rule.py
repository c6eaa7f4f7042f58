# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Verifier for VPC security group ingress rules."""

from typing import NamedTuple

from ..models.enums import SourceCategory
from ..models.expected import ExpectedIngressRule
from ..models.observed import ObservedSecurityGroup, ObservedSecurityGroupRule
from .base import CheckContext, SubCheck, Verifier

OUTPUT_RULE_ID = "security_group_ingress_rule_id"
OUTPUT_SECURITY_GROUP_ID = "security_group_id"
OUTPUT_EFFECTIVE_SOURCE = "security_group_rule_effective_source"

SOURCE_PREFIXES = [category.prefix for category in SourceCategory]


class IngressObservation(NamedTuple):
    """The security group and every rule attached to it."""

    group: ObservedSecurityGroup
    rules: list[ObservedSecurityGroupRule]

    def find_rule(self, rule_id: str) -> ObservedSecurityGroupRule | None:
        for rule in self.rules:
            if rule.rule_id == rule_id:
                return rule
        return None


class IngressRuleVerifier(Verifier):
    """
    Confirms a security group ingress rule exists and is well formed.

    A rule needs at least one source (IPv4 range, IPv6 range, prefix list or
    referenced security group). When the rule cannot be found, only the
    rule_properties sub-check fails; the effective source format check
    depends on the Terraform output alone and still runs.
    """

    name = "ingress_rule"

    def load_expected(self) -> ExpectedIngressRule:
        return ExpectedIngressRule(
            rule_id=self.outputs.get_string(OUTPUT_RULE_ID),
            security_group_id=self.outputs.get_string(OUTPUT_SECURITY_GROUP_ID),
            effective_source=self.outputs.get_string(OUTPUT_EFFECTIVE_SOURCE),
        )

    def fetch_observed(self, expected: ExpectedIngressRule) -> IngressObservation:
        groups = self.aws_client.describe_security_groups([expected.security_group_id])
        group = self.require_one(groups, "security group", expected.security_group_id)
        rules = self.aws_client.describe_security_group_rules(group.group_id)
        return IngressObservation(group=group, rules=rules)

    def sub_checks(self) -> list[tuple[str, SubCheck]]:
        return [
            ("rule_exists", self.check_exists),
            ("rule_properties", self.check_properties),
            ("effective_source_format", self.check_effective_source_format),
        ]

    def check_exists(
        self, check: CheckContext, expected: ExpectedIngressRule, observed: IngressObservation
    ) -> None:
        check.is_true(
            observed.group.ingress_permission_count > 0,
            f"Security group {observed.group.group_id} has no ingress permissions",
        )

    def check_properties(
        self, check: CheckContext, expected: ExpectedIngressRule, observed: IngressObservation
    ) -> None:
        rule = observed.find_rule(expected.rule_id)
        if rule is None:
            check.fail_now(
                f"Rule {expected.rule_id!r} not found among {len(observed.rules)} rules "
                f"of {observed.group.group_id}"
            )

        check.is_true(not rule.is_egress, f"Rule {rule.rule_id} is an egress rule, expected ingress")
        check.not_empty(rule.ip_protocol, "IP protocol")
        check.is_true(
            bool(rule.sources),
            f"Rule {rule.rule_id} has no source (IPv4 range, IPv6 range, prefix list or security group)",
        )

    def check_effective_source_format(
        self, check: CheckContext, expected: ExpectedIngressRule, observed: IngressObservation
    ) -> None:
        if not check.not_empty(expected.effective_source, "Effective source"):
            return
        check.starts_with(expected.effective_source, SOURCE_PREFIXES, "Effective source")
