"""Application lifecycle use cases."""

from backoffice.application.use_cases.applications.list_available_templates import (
    ListAvailableTemplatesUseCase,
)
from backoffice.application.use_cases.applications.record_interview import (
    RecordInterviewUseCase,
)
from backoffice.application.use_cases.applications.review_application import (
    ReviewApplicationUseCase,
)
from backoffice.application.use_cases.applications.submit_application import (
    SubmitApplicationUseCase,
)

__all__ = [
    "ListAvailableTemplatesUseCase",
    "RecordInterviewUseCase",
    "ReviewApplicationUseCase",
    "SubmitApplicationUseCase",
]
