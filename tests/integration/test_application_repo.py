"""Repository integration tests. Require Postgres; session is rolled back after each test."""

from datetime import timedelta

import pytest
from sqlalchemy.exc import IntegrityError

from backoffice.domain.entities import ApplicationEntity
from backoffice.domain.enums import ApplicationStatus, Department, ReviewAction, Role
from backoffice.domain.exceptions import EligibilityException, ValidationException
from backoffice.domain.value_objects import ApplicationResponse
from backoffice.infrastructure.persistence.models import (
    ApplicationTemplate,
    ReviewBoard,
    ReviewBoardMember,
    User,
)
from backoffice.infrastructure.persistence.repositories import (
    ApplicationRepository,
    ReviewBoardRepository,
    UserRepository,
)

from support import NOW


async def _seed(db_session, external_id: str | None = None) -> tuple[User, ApplicationTemplate]:
    user = User(name="Repo Test", role=Role.MEMBER.value, external_id=external_id)
    template = ApplicationTemplate(name="BSO application", department=Department.BSO.value)
    db_session.add_all([user, template])
    await db_session.flush()
    return user, template


def _new_application(user: User, template: ApplicationTemplate) -> ApplicationEntity:
    return ApplicationEntity.submit(
        user_id=user.id,
        template_id=template.id,
        department=Department.BSO,
        responses=[ApplicationResponse(question_id=1, response="Because")],
        now=NOW,
    )


@pytest.mark.requires_db
async def test_create_and_load_application(db_session) -> None:
    user, template = await _seed(db_session)
    repo = ApplicationRepository(db_session)
    await repo.lock_applicant_department(user.id, Department.BSO)

    created = await repo.create_application(_new_application(user, template))
    assert created.id
    assert created.status == ApplicationStatus.PENDING
    assert created.responses == [ApplicationResponse(question_id=1, response="Because")]

    found = await repo.get_by_id(created.id, for_update=True)
    assert found is not None
    assert found.created_at == NOW
    assert found.created_at.tzinfo is not None


@pytest.mark.requires_db
async def test_save_application_appends_notes(db_session) -> None:
    user, template = await _seed(db_session)
    repo = ApplicationRepository(db_session)
    application = await repo.create_application(_new_application(user, template))

    application.review(ReviewAction.DENY, reviewer_id=user.id, now=NOW, note="Incomplete")
    saved = await repo.save_application(application)

    assert saved.status == ApplicationStatus.DENIED
    assert saved.denial_count == 1
    assert saved.cooldown_until == NOW + timedelta(hours=24)
    assert [n.content for n in saved.notes] == ["Incomplete"]
    assert saved.notes[0].id is not None

    history = await repo.get_for_user_and_department(user.id, Department.BSO)
    assert [a.id for a in history] == [saved.id]


@pytest.mark.requires_db
async def test_pending_uniqueness_enforced_by_index(db_session) -> None:
    user, template = await _seed(db_session)
    repo = ApplicationRepository(db_session)
    await repo.create_application(_new_application(user, template))
    with pytest.raises(EligibilityException) as exc_info:
        await repo.create_application(_new_application(user, template))
    assert exc_info.value.reason == "PENDING_APPLICATION_EXISTS"
    assert isinstance(exc_info.value.__cause__, IntegrityError)


@pytest.mark.requires_db
async def test_review_board_membership(db_session) -> None:
    user, template = await _seed(db_session)
    board = ReviewBoard(name="BSO board", template_id=template.id)
    db_session.add(board)
    await db_session.flush()
    db_session.add(ReviewBoardMember(review_board_id=board.id, user_id=user.id))
    await db_session.flush()

    repo = ReviewBoardRepository(db_session)
    assert await repo.is_member(user.id, template.id)
    assert not await repo.is_member(user.id, template.id + 1000)


@pytest.mark.requires_db
async def test_user_sync_listing_excludes_roles(db_session) -> None:
    user, _ = await _seed(db_session, external_id="repo-test-d1")
    repo = UserRepository(db_session)

    syncable = await repo.list_syncable([Role.WEBMASTER])
    assert user.id in {u.id for u in syncable}
    excluded = await repo.list_syncable([Role.MEMBER])
    assert user.id not in {u.id for u in excluded}

    found = await repo.get_by_external_id("repo-test-d1")
    assert found is not None
    assert found.role == Role.MEMBER


@pytest.mark.requires_db
async def test_user_update_persists_department(db_session) -> None:
    user, _ = await _seed(db_session)
    repo = UserRepository(db_session)
    entity = await repo.get_by_id(user.id)
    entity.department = Department.FHP
    saved = await repo.update_user(entity)
    assert saved.department == Department.FHP


@pytest.mark.requires_db
async def test_duplicate_external_identity_keeps_cause(db_session) -> None:
    await _seed(db_session, external_id="repo-test-taken")
    other, _ = await _seed(db_session)
    repo = UserRepository(db_session)
    entity = await repo.get_by_id(other.id)
    entity.external_id = "repo-test-taken"
    with pytest.raises(ValidationException) as exc_info:
        await repo.update_user(entity)
    assert exc_info.value.details == {"field": "external_id"}
    assert isinstance(exc_info.value.__cause__, IntegrityError)
