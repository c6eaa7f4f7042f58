"""
Allow running the verifiers as a Python module.

Usage:
    python -m infra_verify

This is equivalent to running:
    infra-verify
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
