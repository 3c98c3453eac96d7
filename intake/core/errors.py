"""Error types for the claim review intake service."""

from typing import Any, Dict, Optional

from fastapi import status


class IntakeError(Exception):
    """
    Base exception for all intake errors.

    Every error knows the HTTP status it maps to and how to render itself
    as the JSON body returned to the form.

    Attributes:
        message: Human-readable error message
        reason: Short machine-readable kind
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    reason: str = "intake_error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the error to the JSON response body."""
        return {"error": self.message, "reason": self.reason}


class ValidationError(IntakeError):
    """A submission was rejected before any remote call was made."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(
        self,
        field: str,
        reason: str,
        message: str,
        filename: Optional[str] = None
    ):
        super().__init__(message)
        self.field = field
        self.reason = reason
        self.filename = filename

    def to_dict(self) -> Dict[str, Any]:
        body = {"error": self.message, "field": self.field, "reason": self.reason}
        if self.filename is not None:
            body["filename"] = self.filename
        return body


class ConfigurationError(IntakeError):
    """Required configuration is missing. Raised at startup, never per request."""

    reason = "configuration_error"


class RemoteApiError(IntakeError):
    """The insurance platform answered with a non-success status."""

    reason = "remote_api_error"

    def __init__(self, remote_status: int, body: str):
        super().__init__(f"Root API error ({remote_status}): {body}")
        self.remote_status = remote_status
        self.body = body

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body["remote_status"] = self.remote_status
        return body


class UnexpectedError(IntakeError):
    """Anything else that went wrong while handling a submission."""

    reason = "unexpected_error"

    def __init__(self, message: str = "Unexpected server error in submit-claim API."):
        super().__init__(message)


class PayloadTooLargeError(IntakeError):
    """The request body is larger than the configured ceiling."""

    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    reason = "body_too_large"

    def __init__(self, message: str = "Request body too large."):
        super().__init__(message)
