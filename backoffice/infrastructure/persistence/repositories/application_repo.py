"""Application repository: lifecycle rows, responses and append-only notes.

All methods run in the caller's transaction. lock_applicant_department takes a
PostgreSQL transaction-scoped advisory lock, released on commit or rollback.
"""

from __future__ import annotations

from sqlalchemy import select, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.domain.entities import ApplicationEntity, ApplicationNote
from backoffice.domain.enums import (
    ApplicationStatus,
    Department,
    EligibilityReason,
    InterviewStatus,
)
from backoffice.domain.exceptions import EligibilityException, ResourceNotFoundException
from backoffice.domain.value_objects import ApplicationResponse
from backoffice.infrastructure.persistence.models.application import (
    Application,
    ApplicationNote as ApplicationNoteModel,
    ApplicationResponse as ApplicationResponseModel,
)
from backoffice.infrastructure.persistence.repositories.base import BaseRepository
from backoffice.shared.utils import ensure_utc

# hashtext() folds the department into the second int4 of the lock key.
_LOCK_SQL = text("SELECT pg_advisory_xact_lock(:user_id, hashtext(:department))")


def _to_entity(
    a: Application,
    responses: list[ApplicationResponseModel],
    notes: list[ApplicationNoteModel],
) -> ApplicationEntity:
    """Map ORM rows to the domain entity; timestamps normalized to UTC."""
    return ApplicationEntity(
        id=a.id,
        user_id=a.user_id,
        template_id=a.template_id,
        department=Department(a.department),
        status=ApplicationStatus(a.status),
        created_at=ensure_utc(a.created_at),
        interview_status=InterviewStatus(a.interview_status) if a.interview_status else None,
        denial_count=a.denial_count,
        last_denied_at=ensure_utc(a.last_denied_at),
        cooldown_until=ensure_utc(a.cooldown_until),
        interview_failed_at=ensure_utc(a.interview_failed_at),
        interview_completed_at=ensure_utc(a.interview_completed_at),
        reviewer_id=a.reviewer_id,
        responses=[
            ApplicationResponse(question_id=r.question_id, response=r.response)
            for r in responses
        ],
        notes=[
            ApplicationNote(
                id=n.id,
                author_id=n.author_id,
                content=n.content,
                created_at=ensure_utc(n.created_at),
            )
            for n in notes
        ],
    )


class ApplicationRepository(BaseRepository[Application]):
    """Application store on application, application_response, application_note."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Application)

    async def lock_applicant_department(self, user_id: int, department: Department) -> None:
        await self.db.execute(
            _LOCK_SQL, {"user_id": user_id, "department": Department(department).value}
        )

    async def get_by_id(
        self, application_id: int, *, for_update: bool = False
    ) -> ApplicationEntity | None:
        stmt = select(Application).where(Application.id == application_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.db.execute(stmt)
        row = result.scalar_one_or_none()
        if row is None:
            return None
        return await self._load(row)

    async def get_for_user_and_department(
        self, user_id: int, department: Department
    ) -> list[ApplicationEntity]:
        result = await self.db.execute(
            select(Application)
            .where(
                Application.user_id == user_id,
                Application.department == Department(department).value,
            )
            .order_by(Application.created_at.desc(), Application.id.desc())
        )
        # History checks only need lifecycle fields.
        return [_to_entity(a, [], []) for a in result.scalars().all()]

    async def create_application(self, application: ApplicationEntity) -> ApplicationEntity:
        """Insert the application and its responses.

        Raises:
            EligibilityException: If the pending-uniqueness index rejects the row.
        """
        row = Application(
            user_id=application.user_id,
            template_id=application.template_id,
            department=application.department.value,
            status=application.status.value,
            interview_status=None,
            denial_count=application.denial_count,
            created_at=application.created_at,
        )
        try:
            row = await self.create(row)
        except IntegrityError as e:
            raise EligibilityException(
                EligibilityReason.PENDING_APPLICATION_EXISTS.value,
                f"You already have a pending application for {application.department.value}",
                department=application.department.value,
            ) from e
        for r in application.responses:
            self.db.add(
                ApplicationResponseModel(
                    application_id=row.id, question_id=r.question_id, response=r.response
                )
            )
        await self.db.flush()
        return await self._load(row)

    async def save_application(self, application: ApplicationEntity) -> ApplicationEntity:
        if application.id is None:
            raise ValueError("Cannot save an application without an id")
        row = await super().get_by_id(application.id)
        if row is None:
            raise ResourceNotFoundException("application", application.id)
        row.status = application.status.value
        row.interview_status = (
            application.interview_status.value if application.interview_status else None
        )
        row.denial_count = application.denial_count
        row.last_denied_at = application.last_denied_at
        row.cooldown_until = application.cooldown_until
        row.interview_failed_at = application.interview_failed_at
        row.interview_completed_at = application.interview_completed_at
        row.reviewer_id = application.reviewer_id
        for note in application.new_notes:
            self.db.add(
                ApplicationNoteModel(
                    application_id=row.id,
                    author_id=note.author_id,
                    content=note.content,
                    created_at=note.created_at,
                )
            )
        row = await self.update(row)
        return await self._load(row)

    async def _load(self, row: Application) -> ApplicationEntity:
        responses = await self.db.execute(
            select(ApplicationResponseModel)
            .where(ApplicationResponseModel.application_id == row.id)
            .order_by(ApplicationResponseModel.question_id)
        )
        notes = await self.db.execute(
            select(ApplicationNoteModel)
            .where(ApplicationNoteModel.application_id == row.id)
            .order_by(ApplicationNoteModel.created_at, ApplicationNoteModel.id)
        )
        return _to_entity(row, list(responses.scalars().all()), list(notes.scalars().all()))
