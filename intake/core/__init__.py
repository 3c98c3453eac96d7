# Core module - states, models, errors and settings
from .states import SubmissionState
from .errors import (
    IntakeError,
    PayloadTooLargeError,
    ValidationError,
    ConfigurationError,
    RemoteApiError,
    UnexpectedError,
)
from .models import (
    MAX_ATTACHMENT_BYTES,
    Attachment,
    ClaimSubmission,
    RemoteCallResult,
    SubmissionEvent,
    SubmissionRun,
)

__all__ = [
    "SubmissionState",
    "IntakeError",
    "PayloadTooLargeError",
    "ValidationError",
    "ConfigurationError",
    "RemoteApiError",
    "UnexpectedError",
    "MAX_ATTACHMENT_BYTES",
    "Attachment",
    "ClaimSubmission",
    "RemoteCallResult",
    "SubmissionEvent",
    "SubmissionRun",
]
