# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""
Shared verification procedure.

Every verifier follows the same steps:

1. Read expected values from Terraform outputs
2. Describe the live resource (fatal on API errors or when the describe call
   does not return exactly one resource)
3. Run independent, named sub-checks
4. Return a report whose outcome is the conjunction of the sub-checks

A sub-check records every failed assertion on its ``CheckContext`` and keeps
going, so a single run reports as many discrepancies as possible.
"""

import logging
import re
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable, Iterable, NoReturn, Sequence, TypeVar

from pydantic import BaseModel

from ..clients.aws_client import AWSClient
from ..clients.terraform_outputs import TerraformOutputs
from ..config import Settings, get_settings
from ..exceptions import CardinalityError
from ..models.results import CheckResult, VerificationReport

logger = logging.getLogger(__name__)

T = TypeVar("T")

SubCheck = Callable[["CheckContext", Any, Any], None]


class CheckAborted(Exception):
    """Ends the current sub-check; sibling sub-checks still run."""
    pass


def _render(value: Any) -> str:
    if isinstance(value, Enum):
        value = value.value
    return repr(value)


class CheckContext:
    """Soft-assertion recorder for a single named sub-check."""

    def __init__(self, name: str):
        self.name = name
        self.failures: list[str] = []

    @property
    def passed(self) -> bool:
        return not self.failures

    def fail(self, message: str) -> None:
        """Record a failed assertion and continue."""
        logger.debug(f"[{self.name}] {message}")
        self.failures.append(message)

    def fail_now(self, message: str) -> NoReturn:
        """Record a failed assertion and stop this sub-check."""
        self.fail(message)
        raise CheckAborted(message)

    def is_true(self, condition: bool, message: str) -> bool:
        if not condition:
            self.fail(message)
        return bool(condition)

    def equal(self, expected: Any, observed: Any, what: str) -> bool:
        if expected == observed:
            return True
        self.fail(f"{what}: expected {_render(expected)}, observed {_render(observed)}")
        return False

    def contains(self, container: str, member: str, what: str) -> bool:
        if member in container:
            return True
        self.fail(f"{what}: expected {_render(container)} to contain {_render(member)}")
        return False

    def not_empty(self, value: Any, what: str) -> bool:
        if value:
            return True
        self.fail(f"{what}: expected a non-empty value, observed {_render(value)}")
        return False

    def matches(self, pattern: re.Pattern, value: str, what: str) -> bool:
        if pattern.fullmatch(value or ""):
            return True
        self.fail(f"{what}: {_render(value)} does not match {pattern.pattern}")
        return False

    def starts_with(self, value: str, prefixes: Sequence[str], what: str) -> bool:
        if value.startswith(tuple(prefixes)):
            return True
        expected = ", ".join(prefixes)
        self.fail(f"{what}: {_render(value)} does not start with any of: {expected}")
        return False

    def result(self) -> CheckResult:
        return CheckResult(name=self.name, passed=self.passed, failures=list(self.failures))


class Verifier(ABC):
    """Base class for resource verifiers."""

    name = "verifier"

    def __init__(
        self,
        aws_client: AWSClient,
        outputs: TerraformOutputs,
        settings: Settings | None = None,
    ):
        """
        Args:
            aws_client: Client used for describe calls
            outputs: Terraform outputs for the deployment under test
            settings: Verification settings (loaded from the environment when omitted)
        """
        self.aws_client = aws_client
        self.outputs = outputs
        self.settings = settings or get_settings()

    @abstractmethod
    def load_expected(self) -> BaseModel:
        """Build the expected-state model from Terraform outputs."""

    @abstractmethod
    def fetch_observed(self, expected: BaseModel) -> Any:
        """Describe the live resource(s) once."""

    @abstractmethod
    def sub_checks(self) -> list[tuple[str, SubCheck]]:
        """Named sub-checks, in reporting order."""

    def verify(self) -> VerificationReport:
        """
        Run the verifier.

        Returns:
            Report with one result per sub-check

        Raises:
            VerificationAborted: On API errors, cardinality violations or
                malformed required outputs
        """
        logger.info(f"Running {self.name} verifier (outputs from {self.outputs.source})")

        expected = self.load_expected()
        observed = self.fetch_observed(expected)

        results = [
            self._run_check(check_name, check, expected, observed)
            for check_name, check in self.sub_checks()
        ]
        report = VerificationReport(verifier=self.name, checks=results)

        failed = len(report.failed_checks)
        logger.info(f"{self.name} verifier finished: {len(results) - failed} passed, {failed} failed")
        return report

    def _run_check(self, name: str, check: SubCheck, expected: Any, observed: Any) -> CheckResult:
        context = CheckContext(name)
        try:
            check(context, expected, observed)
        except CheckAborted:
            logger.debug(f"Sub-check {name} stopped early")

        result = context.result()
        if not result.passed:
            logger.warning(f"{self.name}/{name} failed: {'; '.join(result.failures)}")
        return result

    @staticmethod
    def require_one(items: Iterable[T], resource_type: str, identifier: str) -> T:
        """
        Return the only item, or abort the verifier.

        Raises:
            CardinalityError: If there are zero or several items
        """
        items = list(items)
        if len(items) != 1:
            raise CardinalityError(resource_type, identifier, len(items))
        return items[0]
