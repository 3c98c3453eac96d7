"""
Intake form helpers

Encoding and submission logic used by the Streamlit review form. Files stay
in memory; they are base64 encoded and posted to the intake API as JSON.
"""
import base64
from typing import List, Optional, Sequence, Tuple
from urllib.parse import quote

import requests

from intake.core.models import MAX_ATTACHMENT_BYTES

MAX_FILES = 5


def encode_image(name: str, mime_type: str, content: bytes) -> dict:
    """Build the image object the API expects from an uploaded file."""
    return {
        "name": name,
        "type": mime_type,
        "size": len(content),
        "data": base64.b64encode(content).decode("utf-8"),
    }


def check_files(files: Sequence[Tuple[str, int]], max_files: int = MAX_FILES) -> Optional[str]:
    """
    Check (name, size) pairs against the form limits.

    Returns:
        An error message for the first problem found, or None
    """
    if len(files) > max_files:
        return f"You can upload a maximum of {max_files} images."

    for name, size in files:
        if size > MAX_ATTACHMENT_BYTES:
            return f'File "{name}" is larger than 4MB. Please choose smaller images.'

    return None


def submit_review(
    api_url: str,
    claim_number: str,
    review_of_damages: str,
    suggested_work: str,
    images: List[dict],
    timeout: float = 120
) -> Tuple[bool, str]:
    """
    Post an engineer review to the intake API.

    Returns:
        (success, message) where message is the API's confirmation or error text
    """
    try:
        response = requests.post(
            f"{api_url.rstrip('/')}/submit-claim/{quote(claim_number, safe='')}",
            json={
                "engineer_review_of_damages": review_of_damages,
                "engineer_suggested_work": suggested_work,
                "images": images,
            },
            timeout=timeout
        )
    except requests.exceptions.RequestException as e:
        return False, f"Failed to reach the intake service: {str(e)}"

    try:
        data = response.json()
    except ValueError:
        data = {}

    if not response.ok:
        return False, data.get("error") or "Something went wrong submitting the claim."

    return True, data.get("message") or "Claim blocks updated and attachments uploaded successfully."
