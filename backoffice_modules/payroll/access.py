"""
Role-based capability checks at the payroll service boundary.

Responsibility:
    Decide whether an actor (user ID + role from the user profile) may
    perform a payroll operation.  The aggregation engine knows nothing of
    roles; the service calls ``require_capability`` before touching data.

Roles mirror the user profile table: ``admin``, ``manager``, ``employee``.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from backoffice_kernel.exceptions import CapabilityDeniedError, UnknownRoleError
from backoffice_kernel.logging_config import get_logger

logger = get_logger("modules.payroll.access")

ROLE_ADMIN = "admin"
ROLE_MANAGER = "manager"
ROLE_EMPLOYEE = "employee"

PAYROLL_PREPARE = "payroll.prepare"
PAYROLL_VIEW_OWN = "payroll.view_own"
ROLES_MANAGE = "roles.manage"

CAPABILITY_TAXONOMY = frozenset({PAYROLL_PREPARE, PAYROLL_VIEW_OWN, ROLES_MANAGE})

ROLE_CAPABILITIES: dict[str, frozenset[str]] = {
    ROLE_ADMIN: frozenset({PAYROLL_PREPARE, PAYROLL_VIEW_OWN, ROLES_MANAGE}),
    ROLE_MANAGER: frozenset({PAYROLL_PREPARE, PAYROLL_VIEW_OWN}),
    ROLE_EMPLOYEE: frozenset({PAYROLL_VIEW_OWN}),
}


@dataclass(frozen=True)
class Actor:
    """The authenticated user performing an operation."""
    user_id: UUID
    role: str

    def __post_init__(self):
        if self.role not in ROLE_CAPABILITIES:
            raise UnknownRoleError(self.role)


def check_capability(role: str, capability: str) -> tuple[bool, str]:
    """Check whether a role grants a capability.

    Returns:
        (allowed, reason). reason is empty when allowed, or a short
        message when denied.
    """
    if capability not in CAPABILITY_TAXONOMY:
        return False, f"unknown capability '{capability}'"
    granted = ROLE_CAPABILITIES.get(role)
    if granted is None:
        return False, f"unknown role '{role}'"
    if capability not in granted:
        return False, f"role '{role}' lacks '{capability}'"
    return True, ""


def require_capability(actor: Actor, capability: str) -> None:
    """Raise ``CapabilityDeniedError`` unless the actor's role grants ``capability``."""
    allowed, reason = check_capability(actor.role, capability)
    if not allowed:
        logger.warning(
            "capability_denied",
            extra={
                "actor_id": str(actor.user_id),
                "role": actor.role,
                "capability": capability,
                "reason": reason,
            },
        )
        raise CapabilityDeniedError(str(actor.user_id), actor.role, capability, reason)
