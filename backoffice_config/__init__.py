"""
backoffice_config -- public entrypoint for payroll policy configuration.

Responsibility:
    ``get_payroll_policy()`` is the way to obtain the payroll policy at
    runtime.  It reads an explicit path, else the file named by the
    ``BACKOFFICE_PAYROLL_POLICY`` environment variable, else the packaged
    ``defaults/payroll_policy.yaml``.

Failure modes:
    - ``FileNotFoundError`` -- the selected policy file does not exist.
    - ``yaml.YAMLError`` -- the file is not valid YAML.
    - ``ValueError`` -- unknown keys or invalid values.

Audit relevance:
    Every successful load emits a ``payroll_policy_loaded`` log entry with
    the source path and the policy checksum, tying each payroll preparation
    to the exact policy version that governed it.
"""

from __future__ import annotations

import os
from pathlib import Path

from backoffice_config.loader import compute_checksum, load_yaml_file, parse_payroll_policy
from backoffice_kernel.logging_config import get_logger
from backoffice_modules.payroll.config import PayrollPolicy

logger = get_logger("config")

POLICY_PATH_ENV = "BACKOFFICE_PAYROLL_POLICY"

_DEFAULT_POLICY_PATH = Path(__file__).parent / "defaults" / "payroll_policy.yaml"


def get_payroll_policy(path: Path | str | None = None) -> PayrollPolicy:
    """Load the active payroll policy."""
    if path is None:
        path = os.environ.get(POLICY_PATH_ENV) or _DEFAULT_POLICY_PATH
    path = Path(path)

    policy = parse_payroll_policy(load_yaml_file(path))
    logger.info(
        "payroll_policy_loaded",
        extra={"path": str(path), "checksum": compute_checksum(policy)},
    )
    return policy


__all__ = [
    "POLICY_PATH_ENV",
    "compute_checksum",
    "get_payroll_policy",
    "load_yaml_file",
    "parse_payroll_policy",
]
