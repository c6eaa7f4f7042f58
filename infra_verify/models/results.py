# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Check and verification result models."""

from datetime import datetime, UTC

from pydantic import BaseModel, ConfigDict, Field


class CheckResult(BaseModel):
    """Outcome of one named sub-check."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "cluster_configuration",
                "passed": False,
                "failures": ["Cluster status: expected 'ACTIVE', observed 'INACTIVE'"],
            }
        }
    )

    name: str = Field(..., description="Name of the sub-check")
    passed: bool = Field(..., description="Whether every assertion in the sub-check held")
    failures: list[str] = Field(
        default_factory=list, description="One message per failed assertion"
    )


class VerificationReport(BaseModel):
    """Outcome of one verifier run: the conjunction of its sub-checks."""

    verifier: str = Field(..., description="Name of the verifier that produced the report")
    checks: list[CheckResult] = Field(default_factory=list)
    checked_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="When the verifier ran",
    )

    @property
    def passed(self) -> bool:
        return all(check.passed for check in self.checks)

    @property
    def failed_checks(self) -> list[CheckResult]:
        return [check for check in self.checks if not check.passed]

    def get_check(self, name: str) -> CheckResult:
        """
        Look up a sub-check result by name.

        Raises:
            KeyError: If the verifier produced no sub-check with that name
        """
        for check in self.checks:
            if check.name == name:
                return check
        raise KeyError(name)

    def summary(self) -> str:
        """Render a human-readable, multi-line report."""
        status = "PASS" if self.passed else "FAIL"
        lines = [f"{status} {self.verifier} ({len(self.checks)} checks)"]
        for check in self.checks:
            lines.append(f"  {'PASS' if check.passed else 'FAIL'} {check.name}")
            for failure in check.failures:
                lines.append(f"      - {failure}")
        return "\n".join(lines)
