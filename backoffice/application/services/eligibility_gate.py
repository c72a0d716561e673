"""Eligibility and cooldown gate for new applications.

Pure functions: the submit use case reads the history inside its locked
transaction and hands it here.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from backoffice.application.dtos.template import ApplicationTemplateResult
from backoffice.domain.cooldown import cooldown_for, cooldown_until
from backoffice.domain.entities import ApplicationEntity
from backoffice.domain.enums import ApplicationStatus, Department, EligibilityReason, Role
from backoffice.domain.exceptions import EligibilityException
from backoffice.domain.role_hierarchy import LOWEST_ROLE, parse_role

__all__ = [
    "ENTRY_DEPARTMENTS",
    "can_submit",
    "check_submission",
    "cooldown_for",
    "cooldown_until",
    "filter_available_templates",
    "prior_denial_count",
]

# Departments open to the lowest tier.
ENTRY_DEPARTMENTS: frozenset[Department] = frozenset({Department.CIV, Department.BSFR})


def can_submit(role: Role | str | None, department: Department) -> bool:
    """Return whether a user with role may apply to department at all."""
    parsed = parse_role(role)
    if parsed is None:
        return False
    if parsed == LOWEST_ROLE:
        return department in ENTRY_DEPARTMENTS
    return True


def _latest_denied(history: Iterable[ApplicationEntity]) -> ApplicationEntity | None:
    denied = [a for a in history if a.status == ApplicationStatus.DENIED]
    if not denied:
        return None
    return max(denied, key=lambda a: a.created_at)


def check_submission(
    role: Role | str | None,
    department: Department,
    history: Iterable[ApplicationEntity],
    now: datetime,
) -> None:
    """Raise EligibilityException unless a new application may be created now.

    history is every application the user has made to department. Only the
    most recent denial is consulted for the cooldown.
    """
    department = Department(department)
    if not can_submit(role, department):
        raise EligibilityException(
            EligibilityReason.INELIGIBLE_ROLE.value,
            f"Your role cannot apply to {department.value}",
            department=department.value,
        )

    history = list(history)
    if any(a.status == ApplicationStatus.PENDING for a in history):
        raise EligibilityException(
            EligibilityReason.PENDING_APPLICATION_EXISTS.value,
            f"You already have a pending application for {department.value}",
            department=department.value,
        )

    latest = _latest_denied(history)
    if latest is not None and latest.is_cooling_down(now):
        expiry = latest.cooldown_until
        raise EligibilityException(
            EligibilityReason.COOLDOWN_ACTIVE.value,
            f"You cannot reapply to {department.value} until {expiry.isoformat()}",
            department=department.value,
            cooldown_until=expiry,
        )


def prior_denial_count(history: Iterable[ApplicationEntity]) -> int:
    """Return the highest denial_count on any earlier application (0 if none)."""
    return max((a.denial_count for a in history), default=0)


def filter_available_templates(
    role: Role | str | None,
    templates: Iterable[ApplicationTemplateResult],
) -> list[ApplicationTemplateResult]:
    """Return the active templates a user with role may apply to."""
    return [t for t in templates if t.active and can_submit(role, t.department)]
