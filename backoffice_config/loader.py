"""
Configuration Loader (``backoffice_config.loader``).

Responsibility
--------------
Loads payroll policy YAML files and parses them into the typed
``PayrollPolicy`` dataclass.  Runtime callers go through
``backoffice_config.get_payroll_policy()``.

Invariants enforced
-------------------
* Parse errors raise ``ValueError`` with descriptive messages; unknown keys
  are rejected rather than ignored.
* ``compute_checksum`` produces a deterministic SHA-256 hash for policy
  identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Top-level document that is not a mapping  -> ``ValueError``.
* Invalid or unknown policy values  -> ``ValueError``.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from backoffice_modules.payroll.config import PayrollPolicy


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ValueError: if the document is not a mapping.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(
            f"{path}: expected a mapping at top level, got {type(data).__name__}"
        )
    return data


def parse_payroll_policy(data: dict[str, Any]) -> PayrollPolicy:
    """Parse a ``PayrollPolicy`` from a dict (a ``payroll`` section is unwrapped)."""
    if "payroll" in data and isinstance(data["payroll"], dict):
        data = data["payroll"]
    return PayrollPolicy.from_dict(data)


def compute_checksum(policy: PayrollPolicy) -> str:
    """
    SHA-256 of the policy's canonical JSON serialization.

    Identical policies always produce identical checksums.
    """
    canonical = json.dumps(policy.to_dict(), sort_keys=True)
    return hashlib.sha256(canonical.encode()).hexdigest()
