"""Application domain entity and its lifecycle.

PENDING -> ACCEPTED | DENIED via review. ACCEPTED walks the interview
sub-state: AWAITING_INTERVIEW -> INTERVIEW_COMPLETED (status COMPLETED) or
INTERVIEW_FAILED. A first failure allows one more attempt after a 7-day
cooldown; a second failure denies the application. DENIED and COMPLETED
are terminal; reapplying creates a new record.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from backoffice.domain.cooldown import INTERVIEW_RETRY_COOLDOWN, cooldown_until
from backoffice.domain.enums import (
    ApplicationStatus,
    Department,
    InterviewResult,
    InterviewStatus,
    ReviewAction,
)
from backoffice.domain.exceptions import StateTransitionException, ValidationException
from backoffice.domain.value_objects import ApplicationResponse


@dataclass(frozen=True)
class ApplicationNote:
    """Reviewer note. Immutable once written; id is None until persisted."""

    author_id: int
    content: str
    created_at: datetime
    id: int | None = None


@dataclass
class ApplicationEntity:
    """Domain entity for an application (SRP: lifecycle rules separate from persistence)."""

    id: int | None
    user_id: int
    template_id: int
    department: Department
    status: ApplicationStatus
    created_at: datetime
    interview_status: InterviewStatus | None = None
    denial_count: int = 0
    last_denied_at: datetime | None = None
    cooldown_until: datetime | None = None
    interview_failed_at: datetime | None = None
    interview_completed_at: datetime | None = None
    reviewer_id: int | None = None
    responses: list[ApplicationResponse] = field(default_factory=list)
    notes: list[ApplicationNote] = field(default_factory=list)

    @classmethod
    def submit(
        cls,
        user_id: int,
        template_id: int,
        department: Department,
        responses: list[ApplicationResponse],
        now: datetime,
        prior_denial_count: int = 0,
    ) -> ApplicationEntity:
        """Create a new PENDING application.

        prior_denial_count carries the user's denials for this department so
        the cooldown ladder keeps escalating across reapplications.
        """
        if prior_denial_count < 0:
            raise ValidationException(
                "prior_denial_count must not be negative", field="denial_count"
            )
        return cls(
            id=None,
            user_id=user_id,
            template_id=template_id,
            department=department,
            status=ApplicationStatus.PENDING,
            created_at=now,
            denial_count=prior_denial_count,
            responses=list(responses),
        )

    # -- queries -----------------------------------------------------------

    @property
    def is_terminal(self) -> bool:
        return self.status in (ApplicationStatus.DENIED, ApplicationStatus.COMPLETED)

    def is_cooling_down(self, now: datetime) -> bool:
        """Return True while cooldown_until is still in the future."""
        return self.cooldown_until is not None and self.cooldown_until > now

    def can_record_interview(self, now: datetime) -> bool:
        """Return whether an interview result may be recorded at now."""
        if self.status != ApplicationStatus.ACCEPTED:
            return False
        if self.interview_status == InterviewStatus.AWAITING_INTERVIEW:
            return True
        return (
            self.interview_status == InterviewStatus.INTERVIEW_FAILED
            and not self.is_cooling_down(now)
        )

    # -- transitions -------------------------------------------------------

    def review(
        self,
        action: ReviewAction,
        reviewer_id: int,
        now: datetime,
        note: str | None = None,
    ) -> None:
        """Accept or deny a PENDING application.

        Deny increments denial_count and sets cooldown_until from the ladder
        using the new count. Accept moves the interview sub-state to
        AWAITING_INTERVIEW.

        Raises:
            StateTransitionException: If the application is not PENDING.
        """
        action = ReviewAction(action)
        if self.status != ApplicationStatus.PENDING:
            raise self._invalid(f"review:{action.value}", "Only pending applications can be reviewed")
        self.reviewer_id = reviewer_id
        if action == ReviewAction.DENY:
            self.status = ApplicationStatus.DENIED
            self.interview_status = None
            self.denial_count += 1
            self.last_denied_at = now
            self.cooldown_until = cooldown_until(self.denial_count, now)
        else:
            self.status = ApplicationStatus.ACCEPTED
            self.interview_status = InterviewStatus.AWAITING_INTERVIEW
        self._add_note(reviewer_id, note, now)

    def record_interview(
        self,
        result: InterviewResult,
        author_id: int,
        now: datetime,
        note: str | None = None,
    ) -> None:
        """Apply an interview outcome.

        A second failure denies the application without touching the denial
        ladder: cooldown_until and denial_count keep their values.

        Raises:
            StateTransitionException: If no interview may be recorded now.
        """
        result = InterviewResult(result)
        if not self.can_record_interview(now):
            if (
                self.status == ApplicationStatus.ACCEPTED
                and self.interview_status == InterviewStatus.INTERVIEW_FAILED
            ):
                message = (
                    "Second interview is not available until "
                    f"{self.cooldown_until.isoformat() if self.cooldown_until else 'later'}"
                )
            else:
                message = "This application is not awaiting an interview"
            raise self._invalid(f"interview:{result.value}", message)

        if result == InterviewResult.COMPLETED:
            self.status = ApplicationStatus.COMPLETED
            self.interview_status = InterviewStatus.INTERVIEW_COMPLETED
            self.interview_completed_at = now
        elif self.interview_failed_at is None:
            self.interview_status = InterviewStatus.INTERVIEW_FAILED
            self.interview_failed_at = now
            self.cooldown_until = now + INTERVIEW_RETRY_COOLDOWN
        else:
            self.status = ApplicationStatus.DENIED
            self.interview_status = None
        self._add_note(author_id, note, now)

    # -- helpers -----------------------------------------------------------

    def _add_note(self, author_id: int, content: str | None, now: datetime) -> None:
        if content is None or not content.strip():
            return
        self.notes.append(
            ApplicationNote(author_id=author_id, content=content.strip(), created_at=now)
        )

    def _invalid(self, attempted: str, message: str) -> StateTransitionException:
        return StateTransitionException(
            message,
            status=self.status.value,
            interview_status=self.interview_status.value if self.interview_status else None,
            attempted=attempted,
        )

    @property
    def new_notes(self) -> list[ApplicationNote]:
        """Notes appended in this unit of work (not yet persisted)."""
        return [n for n in self.notes if n.id is None]
