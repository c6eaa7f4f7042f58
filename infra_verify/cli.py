# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""
Command-line entry point.

Usage:
    infra-verify                                # run every verifier
    infra-verify cluster service                # run selected verifiers
    infra-verify --outputs-file outputs.json    # read saved terraform outputs
    infra-verify --terraform-dir examples/complete --region eu-west-1

Exit status is 0 when every sub-check passed, 1 when any sub-check failed
and 2 when any verifier aborted.
"""

import argparse
import logging
import sys

from pydantic import ValidationError

from .clients.aws_client import AWSClient
from .config import Settings, get_settings
from .exceptions import VerificationAborted
from .verifiers import VERIFIERS

logger = logging.getLogger(__name__)

EXIT_PASSED = 0
EXIT_FAILED = 1
EXIT_ABORTED = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="infra-verify",
        description="Verify deployed AWS infrastructure against Terraform outputs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "verifiers",
        nargs="*",
        metavar="VERIFIER",
        help=f"Verifiers to run ({', '.join(VERIFIERS)}); default: all",
    )
    parser.add_argument(
        "--outputs-file",
        help="Saved `terraform output -json` file (overrides TERRAFORM_OUTPUTS_FILE)",
    )
    parser.add_argument(
        "--terraform-dir",
        help="Terraform working directory (overrides TERRAFORM_DIR)",
    )
    parser.add_argument("--region", help="AWS region (overrides AWS_REGION)")
    parser.add_argument("--profile", help="AWS profile (overrides AWS_PROFILE)")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (overrides LOG_LEVEL)",
    )
    return parser


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Return settings with command-line values taking precedence."""
    overrides = {
        "outputs_file": args.outputs_file,
        "terraform_dir": args.terraform_dir,
        "aws_region": args.region,
        "aws_profile": args.profile,
        "log_level": args.log_level,
    }
    return settings.model_copy(
        update={key: value for key, value in overrides.items() if value is not None}
    )


def run(settings: Settings, names: list[str]) -> int:
    """
    Run the named verifiers and print their reports.

    Returns:
        Process exit status
    """
    outputs = settings.load_outputs()
    aws_client = AWSClient(settings.to_aws_config())

    exit_code = EXIT_PASSED
    for name in names:
        verifier = VERIFIERS[name](aws_client, outputs, settings)
        try:
            report = verifier.verify()
        except VerificationAborted as e:
            logger.error(f"{name} verifier aborted: {e}")
            print(f"ABORTED {verifier.name}: {e}")
            exit_code = EXIT_ABORTED
            continue

        print(report.summary())
        if not report.passed and exit_code == EXIT_PASSED:
            exit_code = EXIT_FAILED

    return exit_code


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the command-line interface."""
    parser = build_parser()
    args = parser.parse_args(argv)

    unknown = [name for name in args.verifiers if name not in VERIFIERS]
    if unknown:
        parser.error(f"unknown verifier(s): {', '.join(unknown)}")

    try:
        settings = apply_overrides(get_settings(), args)
    except ValidationError as e:
        print(f"ABORTED: invalid configuration: {e}")
        return EXIT_ABORTED

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    try:
        return run(settings, args.verifiers or list(VERIFIERS))
    except VerificationAborted as e:
        logger.error(f"Verification could not start: {e}")
        print(f"ABORTED: {e}")
        return EXIT_ABORTED


if __name__ == "__main__":
    sys.exit(main())
