"""Application API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from backoffice.domain.enums import (
    ApplicationStatus,
    Department,
    InterviewResult,
    InterviewStatus,
    ReviewAction,
)


class SubmitApplicationRequest(BaseModel):
    """Request body for submitting an application."""

    template_id: int = Field(..., ge=1)
    # question id -> answer text
    responses: dict[int, str] = Field(default_factory=dict, max_length=200)


class ReviewApplicationRequest(BaseModel):
    action: ReviewAction
    note: str | None = Field(default=None, max_length=5000)


class RecordInterviewRequest(BaseModel):
    result: InterviewResult
    note: str | None = Field(default=None, max_length=5000)


class AnswerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    question_id: int
    response: str


class NoteResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int | None
    author_id: int | None
    content: str
    created_at: datetime


class ApplicationResponse(BaseModel):
    """Application detail response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    template_id: int
    department: Department
    status: ApplicationStatus
    interview_status: InterviewStatus | None
    denial_count: int
    last_denied_at: datetime | None
    cooldown_until: datetime | None
    interview_failed_at: datetime | None
    interview_completed_at: datetime | None
    reviewer_id: int | None
    created_at: datetime
    responses: list[AnswerResponse]
    notes: list[NoteResponse]


class ApplicationTemplateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None
    department: Department
    active: bool
