# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""
Access to Terraform outputs for the deployment under test.

Outputs are read either by running ``terraform output -json`` in a working
directory or from a file holding a saved copy of that JSON (or a flat
JSON/YAML mapping of output names to values).

Missing outputs read as empty values rather than errors. Only outputs that
must parse as numbers raise, via ``OutputParseError``.
"""

import json
import logging
import os
import re
import subprocess
from pathlib import Path
from typing import Any, Mapping

import yaml

from ..exceptions import OutputParseError, TerraformOutputError

logger = logging.getLogger(__name__)

INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def is_enveloped(values: Mapping[str, Any]) -> bool:
    """
    Whether a whole document uses the `terraform output -json` envelope.

    The decision is made once per document: every entry must be a mapping
    holding both "value" and "type". A flat document whose map outputs happen
    to use those keys is left alone.
    """
    return bool(values) and all(
        isinstance(entry, dict) and "value" in entry and "type" in entry
        for entry in values.values()
    )


def _render(value: Any) -> str:
    """Render a scalar the way Terraform prints it."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, sort_keys=True)
    return str(value)


class TerraformOutputs:
    """Read-only view over the outputs recorded for one deployment."""

    def __init__(
        self,
        values: Mapping[str, Any] | None = None,
        source: str = "memory",
        enveloped: bool | None = None,
    ):
        """
        Args:
            values: Output values, optionally wrapped in Terraform's JSON envelope
            source: Where the values came from, for log and error messages
            enveloped: Whether every entry is wrapped in the envelope; detected
                from the whole document when omitted
        """
        values = dict(values or {})
        if enveloped is None:
            enveloped = is_enveloped(values)
        if enveloped:
            values = {
                key: entry.get("value") if isinstance(entry, dict) else entry
                for key, entry in values.items()
            }
        self._values = values
        self.source = source

    @classmethod
    def from_terraform(
        cls,
        working_dir: str | Path,
        binary: str = "terraform",
        environ: Mapping[str, str] | None = None,
    ) -> "TerraformOutputs":
        """
        Run ``terraform output -json`` and parse its result.

        Args:
            working_dir: Directory holding the Terraform configuration and state
            binary: Terraform executable to run
            environ: Environment for the subprocess (default: os.environ)

        Raises:
            TerraformOutputError: If Terraform is missing, fails, or prints invalid JSON
        """
        env = dict(os.environ if environ is None else environ)
        env.setdefault("TF_IN_AUTOMATION", "1")

        logger.info(f"Reading Terraform outputs from {working_dir}")
        try:
            result = subprocess.run(
                [binary, "output", "-json"],
                cwd=str(working_dir),
                check=False,
                capture_output=True,
                text=True,
                env=env,
            )
        except FileNotFoundError as e:
            raise TerraformOutputError(f"Terraform executable not found: {binary}") from e

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise TerraformOutputError(
                f"terraform output failed in {working_dir} (exit {result.returncode}): {stderr}"
            )

        try:
            data = json.loads(result.stdout or "{}")
        except json.JSONDecodeError as e:
            raise TerraformOutputError(f"terraform output returned invalid JSON: {e}") from e

        return cls._from_data(data, source=str(working_dir), enveloped=True)

    @classmethod
    def from_file(cls, path: str | Path) -> "TerraformOutputs":
        """
        Load outputs saved to a JSON or YAML file.

        Raises:
            TerraformOutputError: If the file is missing or cannot be parsed
        """
        path = Path(path)
        if not path.is_file():
            raise TerraformOutputError(f"Terraform outputs file not found: {path}")

        text = path.read_text(encoding="utf-8")
        try:
            if path.suffix.lower() in (".yaml", ".yml"):
                data = yaml.safe_load(text)
            else:
                data = json.loads(text)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise TerraformOutputError(f"Failed to parse Terraform outputs file {path}: {e}") from e

        logger.info(f"Loaded Terraform outputs from {path}")
        return cls._from_data(data, source=str(path))

    @classmethod
    def _from_data(
        cls, data: Any, source: str, enveloped: bool | None = None
    ) -> "TerraformOutputs":
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise TerraformOutputError(
                f"Terraform outputs from {source} must be a mapping, got {type(data).__name__}"
            )
        return cls(data, source=source, enveloped=enveloped)

    def __contains__(self, key: str) -> bool:
        return key in self._values

    def keys(self) -> list[str]:
        return sorted(self._values)

    def get_string(self, key: str) -> str:
        """Return an output as a string; missing or null outputs read as ""."""
        return _render(self._values.get(key))

    def get_map(self, key: str) -> dict[str, str]:
        """
        Return a map output with values rendered as strings.

        Missing or null outputs read as an empty map.

        Raises:
            OutputParseError: If the output exists but is not a map
        """
        value = self._values.get(key)
        if value is None or value == "":
            return {}
        if not isinstance(value, dict):
            raise OutputParseError(key, value, "expected a map")
        return {str(k): _render(v) for k, v in value.items()}

    def get_int(self, key: str) -> int:
        """
        Return an output parsed as an integer.

        Missing or empty outputs read as 0.

        Raises:
            OutputParseError: If the output is not an integer
        """
        raw = self.get_string(key)
        if raw == "":
            return 0
        if not INTEGER_PATTERN.fullmatch(raw):
            raise OutputParseError(key, raw, "expected an integer")
        return int(raw)
