# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Verifier for the identity of the credentials running the tests."""

import logging

from ..models.expected import ExpectedIdentity
from ..models.observed import ObservedIdentity
from ..utils.arn_utils import ACCOUNT_ID_PATTERN, arn_prefix
from .base import CheckContext, SubCheck, Verifier

logger = logging.getLogger(__name__)

OUTPUT_ACCOUNT_ID = "account_id"
OUTPUT_CALLER_ARN = "caller_arn"
OUTPUT_MESSAGE = "message"


class IdentityVerifier(Verifier):
    """
    Confirms the caller identity matches what Terraform recorded.

    Sub-checks:
    - account_id: matches the output and is a 12-digit account number
    - caller_arn: matches the output and starts with the partition's ARN prefix
    - message: the message output is non-empty and contains the designated substring
    """

    name = "identity"

    def load_expected(self) -> ExpectedIdentity:
        return ExpectedIdentity(
            account_id=self.outputs.get_string(OUTPUT_ACCOUNT_ID),
            caller_arn=self.outputs.get_string(OUTPUT_CALLER_ARN),
            message=self.outputs.get_string(OUTPUT_MESSAGE),
        )

    def fetch_observed(self, expected: ExpectedIdentity) -> ObservedIdentity:
        identity = self.aws_client.get_caller_identity()
        logger.debug(f"Caller identity: account={identity.account_id} arn={identity.arn}")
        return identity

    def sub_checks(self) -> list[tuple[str, SubCheck]]:
        return [
            ("account_id", self.check_account_id),
            ("caller_arn", self.check_caller_arn),
            ("message", self.check_message),
        ]

    def check_account_id(
        self, check: CheckContext, expected: ExpectedIdentity, observed: ObservedIdentity
    ) -> None:
        check.equal(expected.account_id, observed.account_id, "Account ID")
        check.matches(ACCOUNT_ID_PATTERN, observed.account_id, "Account ID format")

    def check_caller_arn(
        self, check: CheckContext, expected: ExpectedIdentity, observed: ObservedIdentity
    ) -> None:
        check.equal(expected.caller_arn, observed.arn, "Caller ARN")
        check.starts_with(observed.arn, [arn_prefix(self.settings.aws_partition)], "Caller ARN format")

    def check_message(
        self, check: CheckContext, expected: ExpectedIdentity, observed: ObservedIdentity
    ) -> None:
        if not check.not_empty(expected.message, "Message output"):
            return
        check.contains(expected.message, self.settings.identity_message_substring, "Message output")
