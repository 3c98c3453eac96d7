"""
Submission Validator

Checks a raw JSON payload against the rules of the route that received it
and turns it into a ClaimSubmission. Nothing here talks to the platform.
"""
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from intake.core.errors import ValidationError
from intake.core.models import MAX_ATTACHMENT_BYTES, Attachment, ClaimSubmission

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntryPoint:
    """Describes one inbound route and how its payload is shaped."""
    name: str
    claim_id_field: str
    claim_id_in_path: bool
    required_fields: Tuple[str, ...]
    optional_fields: Tuple[str, ...]
    max_attachments: int
    missing_claim_id_message: str
    missing_fields_message: str
    success_message: str
    images_field: str = "images"


GENERIC_ENTRY_POINT = EntryPoint(
    name="submit-claim",
    claim_id_field="claimId",
    claim_id_in_path=False,
    required_fields=("description", "email"),
    optional_fields=("reference",),
    max_attachments=4,
    missing_claim_id_message="claimId, description and email are required.",
    missing_fields_message="claimId, description and email are required.",
    success_message="Claim blocks updated and attachments uploaded.",
)

CLAIM_SCOPED_ENTRY_POINT = EntryPoint(
    name="submit-claim/{claim_number}",
    claim_id_field="claim_number",
    claim_id_in_path=True,
    required_fields=("engineer_review_of_damages", "engineer_suggested_work"),
    optional_fields=(),
    max_attachments=5,
    missing_claim_id_message="Claim number is required in the URL.",
    missing_fields_message="engineer_review_of_damages and engineer_suggested_work are required.",
    success_message="Claim blocks updated and attachments uploaded successfully.",
)


def _text(value: Any) -> str:
    """
    Return a stripped string for scalar values, empty string for anything else.

    Numeric zero counts as empty, like any other falsy value.
    """
    if isinstance(value, bool) or value is None:
        return ""
    if isinstance(value, (int, float)):
        return str(value) if value else ""
    if isinstance(value, str):
        return value.strip()
    return ""


def _declared_size(value: Any) -> Optional[float]:
    """
    Parse the client-declared size of an attachment.

    Returns None when no usable size was declared; a zero, negative or NaN
    size counts as not declared. Infinite and fractional sizes are kept so
    they are compared as declared.
    """
    if isinstance(value, bool) or value is None:
        return None
    try:
        size = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(size) or size <= 0:
        return None
    return size


class SubmissionValidator:
    """
    Validates submissions for one entry point.

    Checks run in a fixed order and the first failure wins.
    """

    MAX_ATTACHMENT_BYTES = MAX_ATTACHMENT_BYTES

    def __init__(self, entry_point: EntryPoint):
        self.entry_point = entry_point

    def validate(self, payload: Any, claim_number: Optional[str] = None) -> ClaimSubmission:
        """
        Validate a raw payload.

        Args:
            payload: Decoded JSON body of the request
            claim_number: Claim identifier taken from the URL, if the route has one

        Returns:
            ClaimSubmission ready to be forwarded

        Raises:
            ValidationError: On the first rule the payload breaks
        """
        entry = self.entry_point
        body: Dict[str, Any] = payload if isinstance(payload, dict) else {}

        # 1. Claim identifier
        raw_claim_id = claim_number if entry.claim_id_in_path else body.get(entry.claim_id_field)
        claim_id = _text(raw_claim_id)
        if not claim_id:
            raise ValidationError(entry.claim_id_field, "missing", entry.missing_claim_id_message)

        # 2. Required text fields
        blocks: Dict[str, str] = {}
        for field in entry.required_fields:
            value = _text(body.get(field))
            if not value:
                raise ValidationError(field, "missing", entry.missing_fields_message)
            blocks[field] = value

        for field in entry.optional_fields:
            value = _text(body.get(field))
            if value:
                blocks[field] = value

        attachments = self._validate_images(body.get(entry.images_field))

        return ClaimSubmission(claim_id=claim_id, blocks=blocks, attachments=attachments)

    def _validate_images(self, images: Any) -> List[Attachment]:
        entry = self.entry_point
        if images is None:
            return []

        # 3. Must be an array
        if not isinstance(images, list):
            raise ValidationError(entry.images_field, "not_an_array", "images must be an array.")

        # 4. Count
        if len(images) > entry.max_attachments:
            raise ValidationError(
                entry.images_field,
                "too_many",
                f"You can upload a maximum of {entry.max_attachments} images."
            )

        # 5. Shape and declared size of each image
        attachments = []
        for image in images:
            if not isinstance(image, dict):
                raise ValidationError(
                    entry.images_field, "not_an_object", "Each image must be an object."
                )

            filename = image.get("name") if isinstance(image.get("name"), str) else ""
            size = _declared_size(image.get("size"))
            if size is not None and size > self.MAX_ATTACHMENT_BYTES:
                raise ValidationError(
                    entry.images_field,
                    "too_large",
                    f'Image "{filename}" is larger than 4MB.',
                    filename=filename
                )

            attachments.append(Attachment(
                filename=filename,
                mime_type=_text(image.get("type")),
                size_bytes=math.ceil(size) if size is not None else None,
                content_base64=image.get("data") if isinstance(image.get("data"), str) else ""
            ))

        return attachments
