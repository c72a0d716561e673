"""In-memory fakes and factories shared by the test suite.

Repositories return copies of stored entities so tests observe only what
was explicitly saved, as with a real database.
"""

import copy
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import UTC, datetime

from backoffice.application.dtos.community import MemberRolesLookup
from backoffice.application.dtos.template import ApplicationTemplateResult
from backoffice.domain.entities import ApplicationEntity, UserEntity
from backoffice.domain.enums import ApplicationStatus, Department, Role
from backoffice.domain.exceptions import EligibilityException

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


class FixedClock:
    """Callable clock; tests move it forward with advance()."""

    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta) -> None:
        self.now = self.now + delta


class InMemoryUserRepository:
    """IUserRepository over a dict; returns copies like a real store would."""

    def __init__(self, users: Iterable[UserEntity] = ()) -> None:
        self.users: dict[int, UserEntity] = {u.id: replace(u) for u in users}
        self.update_calls = 0

    def add(self, user: UserEntity) -> UserEntity:
        self.users[user.id] = replace(user)
        return user

    async def get_by_id(self, user_id: int) -> UserEntity | None:
        user = self.users.get(user_id)
        return replace(user) if user else None

    async def get_by_external_id(self, external_id: str) -> UserEntity | None:
        for user in self.users.values():
            if user.external_id == external_id:
                return replace(user)
        return None

    async def update_user(self, user: UserEntity) -> UserEntity:
        self.update_calls += 1
        self.users[user.id] = replace(user)
        return replace(user)

    async def delete_user(self, user_id: int) -> bool:
        return self.users.pop(user_id, None) is not None

    async def list_syncable(self, excluded_roles: Iterable[Role]) -> list[UserEntity]:
        excluded = set(excluded_roles)
        return [
            replace(u)
            for u in sorted(self.users.values(), key=lambda u: u.id)
            if u.external_id and u.role not in excluded
        ]


class InMemoryApplicationRepository:
    """IApplicationRepository over a dict; enforces one PENDING per (user, department)."""

    def __init__(self) -> None:
        self.applications: dict[int, ApplicationEntity] = {}
        self.locks: list[tuple[int, Department]] = []
        self.for_update_reads: list[int] = []
        self._next_id = 1
        self._next_note_id = 1

    def seed(self, application: ApplicationEntity) -> ApplicationEntity:
        if application.id is None:
            application.id = self._next_id
        self._next_id = max(self._next_id, application.id + 1)
        self.applications[application.id] = copy.deepcopy(application)
        return application

    async def lock_applicant_department(self, user_id: int, department: Department) -> None:
        self.locks.append((user_id, department))

    async def get_by_id(self, application_id: int, *, for_update: bool = False):
        if for_update:
            self.for_update_reads.append(application_id)
        app = self.applications.get(application_id)
        return copy.deepcopy(app) if app else None

    async def get_for_user_and_department(self, user_id: int, department: Department):
        found = [
            copy.deepcopy(a)
            for a in self.applications.values()
            if a.user_id == user_id and a.department == department
        ]
        return sorted(found, key=lambda a: (a.created_at, a.id), reverse=True)

    async def create_application(self, application: ApplicationEntity) -> ApplicationEntity:
        for existing in self.applications.values():
            if (
                existing.user_id == application.user_id
                and existing.department == application.department
                and existing.status == ApplicationStatus.PENDING
            ):
                raise EligibilityException(
                    "PENDING_APPLICATION_EXISTS", "duplicate pending application"
                )
        stored = copy.deepcopy(application)
        stored.id = self._next_id
        self._next_id += 1
        self.applications[stored.id] = stored
        return copy.deepcopy(stored)

    async def save_application(self, application: ApplicationEntity) -> ApplicationEntity:
        stored = copy.deepcopy(application)
        notes = []
        for note in stored.notes:
            if note.id is None:
                note = replace(note, id=self._next_note_id)
                self._next_note_id += 1
            notes.append(note)
        stored.notes = notes
        self.applications[stored.id] = stored
        return copy.deepcopy(stored)


class InMemoryTemplateRepository:
    def __init__(self, templates: Iterable[ApplicationTemplateResult] = ()) -> None:
        self.templates = {t.id: t for t in templates}

    async def get_by_id(self, template_id: int) -> ApplicationTemplateResult | None:
        return self.templates.get(template_id)

    async def list_active(self) -> list[ApplicationTemplateResult]:
        return sorted((t for t in self.templates.values() if t.active), key=lambda t: t.name)


class InMemoryReviewBoardRepository:
    def __init__(self, members: Iterable[tuple[int, int]] = ()) -> None:
        self.members = set(members)

    async def is_member(self, user_id: int, template_id: int) -> bool:
        return (user_id, template_id) in self.members


class ScriptedCommunityClient:
    """ICommunityPlatformClient returning queued results in order."""

    def __init__(self, *results: MemberRolesLookup) -> None:
        self.results = list(results)
        self.calls: list[str] = []

    async def fetch_group_roles(self, external_id: str) -> MemberRolesLookup:
        self.calls.append(external_id)
        if len(self.results) == 1:
            return self.results[0]
        return self.results.pop(0)


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def make_user(
    user_id: int = 1,
    role: Role = Role.MEMBER,
    department: Department = Department.N_A,
    **kwargs,
) -> UserEntity:
    return UserEntity(id=user_id, name=f"user{user_id}", role=role, department=department, **kwargs)


def make_template(
    template_id: int = 1,
    department: Department = Department.CIV,
    active: bool = True,
) -> ApplicationTemplateResult:
    return ApplicationTemplateResult(
        id=template_id,
        name=f"{department.value} application",
        description=None,
        department=department,
        active=active,
    )


def user_store_for(repo: InMemoryUserRepository):
    """UserStoreScope over one in-memory repository; counts opened scopes."""

    @asynccontextmanager
    async def scope() -> AsyncIterator[InMemoryUserRepository]:
        scope.opened += 1
        yield repo

    scope.opened = 0
    return scope


