"""Domain enumerations for the back office.

Enums represent fixed sets of domain values. Role member order is the
authority order (highest first); see backoffice.domain.role_hierarchy.
"""

from enum import Enum


class _ValuesMixin:
    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings (e.g. for validation)."""
        return [member.value for member in cls]  # type: ignore[attr-defined]


class Role(_ValuesMixin, str, Enum):
    """Internal role, declared highest authority first."""

    WEBMASTER = "WEBMASTER"
    HEAD_ADMIN = "HEAD_ADMIN"
    SENIOR_ADMIN = "SENIOR_ADMIN"
    SPECIAL_ADVISOR = "SPECIAL_ADVISOR"
    ADMIN = "ADMIN"
    JUNIOR_ADMIN = "JUNIOR_ADMIN"
    SENIOR_STAFF = "SENIOR_STAFF"
    STAFF = "STAFF"
    STAFF_IN_TRAINING = "STAFF_IN_TRAINING"
    MEMBER = "MEMBER"
    APPLICANT = "APPLICANT"


class Department(_ValuesMixin, str, Enum):
    """Community departments. N_A is the placeholder for users without one."""

    N_A = "N_A"
    CIV = "CIV"
    BSFR = "BSFR"
    BSO = "BSO"
    MPD = "MPD"
    FHP = "FHP"
    FWC = "FWC"
    NSCG = "NSCG"
    COMMS = "COMMS"
    RNR = "RNR"
    LEADERSHIP = "LEADERSHIP"
    DEV = "DEV"


class ApplicationStatus(_ValuesMixin, str, Enum):
    """Application lifecycle status."""

    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    DENIED = "DENIED"
    COMPLETED = "COMPLETED"


class InterviewStatus(_ValuesMixin, str, Enum):
    """Interview sub-state of an ACCEPTED application."""

    AWAITING_INTERVIEW = "AWAITING_INTERVIEW"
    INTERVIEW_FAILED = "INTERVIEW_FAILED"
    INTERVIEW_COMPLETED = "INTERVIEW_COMPLETED"


class ReviewAction(_ValuesMixin, str, Enum):
    """Reviewer decision on a PENDING application."""

    ACCEPT = "accept"
    DENY = "deny"


class InterviewResult(_ValuesMixin, str, Enum):
    """Outcome of an interview."""

    COMPLETED = "completed"
    FAILED = "failed"


class EligibilityReason(_ValuesMixin, str, Enum):
    """Why a submission was rejected (EligibilityException.details['reason'])."""

    INELIGIBLE_ROLE = "INELIGIBLE_ROLE"
    PENDING_APPLICATION_EXISTS = "PENDING_APPLICATION_EXISTS"
    COOLDOWN_ACTIVE = "COOLDOWN_ACTIVE"
    TEMPLATE_INACTIVE = "TEMPLATE_INACTIVE"
