"""Applications API: available templates, submit, review, record interview."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from backoffice.api.v1.dependencies import (
    CurrentActor,
    get_list_available_templates_use_case,
    get_record_interview_use_case,
    get_review_application_use_case,
    get_submit_application_use_case,
)
from backoffice.application.use_cases.applications import (
    ListAvailableTemplatesUseCase,
    RecordInterviewUseCase,
    ReviewApplicationUseCase,
    SubmitApplicationUseCase,
)
from backoffice.core.limiter import limit_writes
from backoffice.schemas.application import (
    ApplicationResponse,
    ApplicationTemplateResponse,
    RecordInterviewRequest,
    ReviewApplicationRequest,
    SubmitApplicationRequest,
)

router = APIRouter()


@router.get("/templates", response_model=list[ApplicationTemplateResponse])
async def list_available_templates(
    actor: CurrentActor,
    use_case: Annotated[
        ListAvailableTemplatesUseCase, Depends(get_list_available_templates_use_case)
    ],
):
    """Active templates the current user may apply to."""
    return await use_case.execute(actor.user_id)


@router.post("", response_model=ApplicationResponse, status_code=201)
@limit_writes
async def submit_application(
    request: Request,
    body: SubmitApplicationRequest,
    actor: CurrentActor,
    use_case: Annotated[SubmitApplicationUseCase, Depends(get_submit_application_use_case)],
):
    """Submit an application as the current user."""
    return await use_case.execute(actor.user_id, body.template_id, body.responses)


@router.post("/{application_id}/review", response_model=ApplicationResponse)
@limit_writes
async def review_application(
    request: Request,
    application_id: int,
    body: ReviewApplicationRequest,
    actor: CurrentActor,
    use_case: Annotated[ReviewApplicationUseCase, Depends(get_review_application_use_case)],
):
    """Accept or deny a pending application."""
    return await use_case.execute(application_id, actor, body.action, note=body.note)


@router.post("/{application_id}/interview", response_model=ApplicationResponse)
@limit_writes
async def record_interview(
    request: Request,
    application_id: int,
    body: RecordInterviewRequest,
    actor: CurrentActor,
    use_case: Annotated[RecordInterviewUseCase, Depends(get_record_interview_use_case)],
):
    """Record an interview outcome on an accepted application."""
    return await use_case.execute(application_id, actor, body.result, note=body.note)
