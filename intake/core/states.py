"""
Submission State Definitions

Defines all possible states for a single claim review submission.
"""
from enum import Enum


class SubmissionState(str, Enum):
    """
    Enum representing the possible states of a submission run.

    Success Flow: RECEIVED -> VALIDATING -> UPDATING_METADATA -> UPLOADING_ATTACHMENTS -> SUCCEEDED
    Any step after RECEIVED may end in FAILED.
    """
    RECEIVED = "RECEIVED"
    VALIDATING = "VALIDATING"
    UPDATING_METADATA = "UPDATING_METADATA"
    UPLOADING_ATTACHMENTS = "UPLOADING_ATTACHMENTS"  # Re-entered once per attachment
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
