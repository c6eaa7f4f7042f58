# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Exception hierarchy for infrastructure verification.

Two severities exist. Anything deriving from ``VerificationAborted`` is fatal
for the verifier that raised it: no further sub-check can say anything useful
without the missing data. Field mismatches are never raised; they are recorded
on a ``CheckContext`` so sibling sub-checks still run.
"""


class VerificationError(Exception):
    """Base class for all verification errors."""
    pass


class VerificationAborted(VerificationError):
    """Raised when a verifier cannot continue."""
    pass


class CardinalityError(VerificationAborted):
    """Raised when a describe call does not return exactly one resource."""

    def __init__(self, resource_type: str, identifier: str, count: int):
        self.resource_type = resource_type
        self.identifier = identifier
        self.count = count
        super().__init__(
            f"Expected exactly one {resource_type} matching '{identifier}', found {count}"
        )


class OutputParseError(VerificationAborted):
    """Raised when a required Terraform output cannot be parsed."""

    def __init__(self, key: str, value: object, reason: str):
        self.key = key
        self.value = value
        super().__init__(f"Invalid value for output '{key}': {value!r} ({reason})")


class TerraformOutputError(VerificationAborted):
    """Raised when Terraform outputs cannot be read at all."""
    pass


class CredentialsResolutionError(VerificationAborted):
    """Raised when no configured credential source yields credentials."""
    pass
