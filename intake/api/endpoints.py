"""
FastAPI Endpoints for Claim Review Submission

Receives engineer reviews from the intake form and forwards them to the
insurance platform.
"""
import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from intake.core.errors import PayloadTooLargeError, ValidationError
from intake.submission.handler import SubmissionHandler
from intake.submission.validator import CLAIM_SCOPED_ENTRY_POINT, GENERIC_ENTRY_POINT

logger = logging.getLogger(__name__)

# Initialize router
router = APIRouter(tags=["submissions"])


def get_submission_handler(request: Request) -> SubmissionHandler:
    """Handler built once at startup by the application lifespan."""
    return request.app.state.submission_handler


async def read_json_body(request: Request) -> Any:
    """
    Decode the request body. An empty body counts as an empty object.

    The body is read chunk by chunk and counted against the configured
    ceiling, whether or not the client sent a Content-Length.

    Raises:
        PayloadTooLargeError: If the body exceeds the ceiling
        ValidationError: If the body is not valid JSON
    """
    limit = request.app.state.max_body_bytes
    chunks = []
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > limit:
            logger.warning(f"Rejected {request.url.path}: streamed body over {limit} bytes")
            raise PayloadTooLargeError()
        chunks.append(chunk)

    raw = b"".join(chunks)
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except ValueError:
        raise ValidationError("body", "invalid_json", "Request body must be valid JSON.")


@router.post("/submit-claim")
async def submit_claim(
    request: Request,
    handler: SubmissionHandler = Depends(get_submission_handler)
) -> JSONResponse:
    """
    Submit a claim update with up to 4 images.

    Body: claimId, description, email, optional reference and images.
    """
    payload = await read_json_body(request)
    run = await handler.handle(payload, GENERIC_ENTRY_POINT)
    return JSONResponse(status_code=run.status_code, content=run.response_body())


@router.post("/submit-claim/{claim_number}")
async def submit_engineer_review(
    claim_number: str,
    request: Request,
    handler: SubmissionHandler = Depends(get_submission_handler)
) -> JSONResponse:
    """
    Submit an engineer review for a claim with up to 5 images.

    The claim number comes from the URL. Body: engineer_review_of_damages,
    engineer_suggested_work and optional images. The review is written to the
    claim blocks first, then each image is uploaded as an attachment in order.
    """
    payload = await read_json_body(request)
    run = await handler.handle(payload, CLAIM_SCOPED_ENTRY_POINT, claim_number=claim_number)
    return JSONResponse(status_code=run.status_code, content=run.response_body())
