"""
Submission Pydantic Models

Defines the data models for engineer review submissions and their processing.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import uuid4

from fastapi import status
from pydantic import BaseModel, Field

from .errors import IntakeError
from .states import SubmissionState

MAX_ATTACHMENT_BYTES = 4 * 1024 * 1024


class Attachment(BaseModel):
    """A single photo, held in memory as base64 for the duration of a request."""
    filename: str = Field(..., description="Original file name")
    mime_type: str = Field(default="", description="MIME type reported by the browser")
    size_bytes: Optional[int] = Field(default=None, ge=0, description="Size declared by the client")
    content_base64: str = Field(default="", description="Base64 encoded file content")

    def to_upload_body(self) -> Dict[str, str]:
        """Body of the platform's create-attachment call."""
        return {
            "filename": self.filename,
            "mime_type": self.mime_type,
            "data_base64": self.content_base64,
        }


class ClaimSubmission(BaseModel):
    """A validated submission, ready to be forwarded to the platform."""
    claim_id: str = Field(..., min_length=1, description="Claim identifier on the platform")
    blocks: Dict[str, str] = Field(..., description="Claim block keys and the text to set on them")
    attachments: List[Attachment] = Field(default_factory=list, description="Photos in upload order")


class RemoteCallResult(BaseModel):
    """Outcome of one successful call to the platform."""
    ok: bool = True
    status_code: int
    body: Dict[str, Any] = Field(default_factory=dict)


class SubmissionEvent(BaseModel):
    """Entry in the run's event log, one per remote call."""
    action: str = Field(..., description="update_claim_blocks or upload_attachment")
    target: str = Field(..., description="Claim id or attachment file name")
    timestamp: datetime = Field(default_factory=datetime.now)
    detail: str = Field(default="", description="Outcome of the call")


class SubmissionRun(BaseModel):
    """
    Submission Run Model

    Tracks one request through the submission state machine. Lives only
    for the duration of the request.
    """
    id: str = Field(default_factory=lambda: str(uuid4()), description="Request-scoped run identifier")
    entry_point: str = Field(..., description="Name of the route that received the submission")
    claim_id: Optional[str] = Field(default=None, description="Claim identifier once validated")
    current_state: SubmissionState = Field(default=SubmissionState.RECEIVED)
    state_history: List[SubmissionState] = Field(default_factory=list)
    attachment_count: int = Field(default=0, description="Number of attachments to upload")
    uploaded_count: int = Field(default=0, description="Number of attachments uploaded so far")
    events: List[SubmissionEvent] = Field(default_factory=list)
    success_message: Optional[str] = None
    error: Optional[IntakeError] = Field(default=None, exclude=True)

    class Config:
        arbitrary_types_allowed = True

    def record_state_change(self, new_state: SubmissionState) -> None:
        """Record a state transition in history."""
        self.state_history.append(self.current_state)
        self.current_state = new_state

    def add_event(self, action: str, target: str, detail: str = "") -> None:
        """Add an entry to the event log."""
        self.events.append(SubmissionEvent(action=action, target=target, detail=detail))

    @property
    def status_code(self) -> int:
        if self.current_state == SubmissionState.SUCCEEDED:
            return status.HTTP_200_OK
        if self.error is not None:
            return self.error.status_code
        return status.HTTP_500_INTERNAL_SERVER_ERROR

    def response_body(self) -> Dict[str, Any]:
        """JSON body reported back to the form."""
        if self.current_state == SubmissionState.SUCCEEDED:
            return {"message": self.success_message}
        if self.error is not None:
            return self.error.to_dict()
        return {"error": f"Submission ended in state {self.current_state.value}"}
