# Submission module - validation and orchestration
from .validator import (
    EntryPoint,
    SubmissionValidator,
    GENERIC_ENTRY_POINT,
    CLAIM_SCOPED_ENTRY_POINT,
)
from .handler import SubmissionHandler

__all__ = [
    "EntryPoint",
    "SubmissionValidator",
    "GENERIC_ENTRY_POINT",
    "CLAIM_SCOPED_ENTRY_POINT",
    "SubmissionHandler",
]
