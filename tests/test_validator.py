"""Tests for SubmissionValidator."""
import pytest

from intake.core.errors import ValidationError
from intake.core.models import MAX_ATTACHMENT_BYTES
from intake.submission.validator import (
    CLAIM_SCOPED_ENTRY_POINT,
    GENERIC_ENTRY_POINT,
    SubmissionValidator,
)
from tests.fakes import make_image


def review(**overrides):
    body = {
        "engineer_review_of_damages": "Water damage to kitchen ceiling",
        "engineer_suggested_work": "Replace plasterboard and repaint",
        "images": [],
    }
    body.update(overrides)
    return body


@pytest.fixture
def scoped():
    return SubmissionValidator(CLAIM_SCOPED_ENTRY_POINT)


@pytest.fixture
def generic():
    return SubmissionValidator(GENERIC_ENTRY_POINT)


def test_valid_review_builds_submission(scoped):
    submission = scoped.validate(
        review(images=[make_image("a.jpg", size=1000, data="AAAA")]),
        claim_number="C1"
    )

    assert submission.claim_id == "C1"
    assert submission.blocks == {
        "engineer_review_of_damages": "Water damage to kitchen ceiling",
        "engineer_suggested_work": "Replace plasterboard and repaint",
    }
    assert len(submission.attachments) == 1
    attachment = submission.attachments[0]
    assert attachment.filename == "a.jpg"
    assert attachment.mime_type == "image/jpeg"
    assert attachment.size_bytes == 1000
    assert attachment.to_upload_body() == {
        "filename": "a.jpg",
        "mime_type": "image/jpeg",
        "data_base64": "AAAA",
    }


def test_missing_images_field_means_no_attachments(scoped):
    body = review()
    del body["images"]

    assert scoped.validate(body, claim_number="C1").attachments == []


def test_null_images_means_no_attachments(scoped):
    assert scoped.validate(review(images=None), claim_number="C1").attachments == []


@pytest.mark.parametrize("claim_number", [None, "", "   "])
def test_claim_number_required(scoped, claim_number):
    with pytest.raises(ValidationError) as exc_info:
        scoped.validate(review(), claim_number=claim_number)

    assert exc_info.value.field == "claim_number"
    assert exc_info.value.reason == "missing"
    assert exc_info.value.message == "Claim number is required in the URL."


@pytest.mark.parametrize("field", ["engineer_review_of_damages", "engineer_suggested_work"])
@pytest.mark.parametrize("value", [None, "", "  \n", [], {}])
def test_required_text_fields(scoped, field, value):
    with pytest.raises(ValidationError) as exc_info:
        scoped.validate(review(**{field: value}), claim_number="C1")

    assert exc_info.value.field == field
    assert exc_info.value.reason == "missing"


def test_claim_id_checked_before_text_fields(scoped):
    with pytest.raises(ValidationError) as exc_info:
        scoped.validate({}, claim_number=None)

    assert exc_info.value.field == "claim_number"


def test_non_object_payload_is_treated_as_empty(scoped):
    with pytest.raises(ValidationError) as exc_info:
        scoped.validate(["not", "an", "object"], claim_number="C1")

    assert exc_info.value.field == "engineer_review_of_damages"


@pytest.mark.parametrize("images", ["a.jpg", {"name": "a.jpg"}, 3])
def test_images_must_be_an_array(scoped, images):
    with pytest.raises(ValidationError) as exc_info:
        scoped.validate(review(images=images), claim_number="C1")

    assert (exc_info.value.field, exc_info.value.reason) == ("images", "not_an_array")


def test_text_fields_checked_before_images(scoped):
    with pytest.raises(ValidationError) as exc_info:
        scoped.validate(review(engineer_suggested_work="", images="oops"), claim_number="C1")

    assert exc_info.value.field == "engineer_suggested_work"


def test_scoped_entry_point_allows_five_images(scoped):
    images = [make_image(f"{i}.jpg") for i in range(5)]

    submission = scoped.validate(review(images=images), claim_number="C1")

    assert [a.filename for a in submission.attachments] == [f"{i}.jpg" for i in range(5)]


def test_scoped_entry_point_rejects_six_images(scoped):
    images = [make_image(f"{i}.jpg") for i in range(6)]

    with pytest.raises(ValidationError) as exc_info:
        scoped.validate(review(images=images), claim_number="C1")

    assert (exc_info.value.field, exc_info.value.reason) == ("images", "too_many")
    assert exc_info.value.message == "You can upload a maximum of 5 images."


def test_generic_entry_point_rejects_five_images(generic):
    body = {
        "claimId": "C1",
        "description": "Storm damage",
        "email": "engineer@example.com",
        "images": [make_image(f"{i}.jpg") for i in range(5)],
    }

    with pytest.raises(ValidationError) as exc_info:
        generic.validate(body)

    assert exc_info.value.reason == "too_many"
    assert exc_info.value.message == "You can upload a maximum of 4 images."


def test_count_checked_before_size(scoped):
    images = [make_image("huge.jpg", size=MAX_ATTACHMENT_BYTES + 1)] * 6

    with pytest.raises(ValidationError) as exc_info:
        scoped.validate(review(images=images), claim_number="C1")

    assert exc_info.value.reason == "too_many"


def test_image_over_4mb_rejected(scoped):
    images = [
        make_image("ok.jpg"),
        make_image("big.jpg", size=MAX_ATTACHMENT_BYTES + 1),
        make_image("after.jpg"),
    ]

    with pytest.raises(ValidationError) as exc_info:
        scoped.validate(review(images=images), claim_number="C1")

    error = exc_info.value
    assert (error.field, error.reason, error.filename) == ("images", "too_large", "big.jpg")
    assert error.message == 'Image "big.jpg" is larger than 4MB.'
    assert error.to_dict()["filename"] == "big.jpg"


def test_image_of_exactly_4mb_accepted(scoped):
    images = [make_image("edge.jpg", size=MAX_ATTACHMENT_BYTES)]

    submission = scoped.validate(review(images=images), claim_number="C1")

    assert submission.attachments[0].size_bytes == MAX_ATTACHMENT_BYTES


@pytest.mark.parametrize("size", [None, 0, "unknown"])
def test_undeclared_size_is_not_checked(scoped, size):
    # The declared size is trusted; payload length is never measured
    image = make_image("a.jpg", data="A" * 100)
    image["size"] = size

    submission = scoped.validate(review(images=[image]), claim_number="C1")

    assert submission.attachments[0].size_bytes is None


def test_numeric_string_size_is_checked(scoped):
    image = make_image("a.jpg")
    image["size"] = str(MAX_ATTACHMENT_BYTES + 1)

    with pytest.raises(ValidationError) as exc_info:
        scoped.validate(review(images=[image]), claim_number="C1")

    assert exc_info.value.reason == "too_large"


@pytest.mark.parametrize("size", [
    float("inf"),
    "Infinity",
    "1e400",
    MAX_ATTACHMENT_BYTES + 0.5,
    str(MAX_ATTACHMENT_BYTES + 0.5),
])
def test_unbounded_or_fractional_size_over_4mb_rejected(scoped, size):
    image = make_image("huge.jpg")
    image["size"] = size

    with pytest.raises(ValidationError) as exc_info:
        scoped.validate(review(images=[image]), claim_number="C1")

    assert (exc_info.value.reason, exc_info.value.filename) == ("too_large", "huge.jpg")


@pytest.mark.parametrize("size", [-5, float("nan"), "NaN"])
def test_negative_or_nan_size_is_not_declared(scoped, size):
    image = make_image("a.jpg")
    image["size"] = size

    submission = scoped.validate(review(images=[image]), claim_number="C1")

    assert submission.attachments[0].size_bytes is None


def test_fractional_size_under_4mb_rounds_up(scoped):
    image = make_image("a.jpg")
    image["size"] = 1000.2

    submission = scoped.validate(review(images=[image]), claim_number="C1")

    assert submission.attachments[0].size_bytes == 1001


def test_filename_forwarded_unchanged(scoped):
    image = make_image("  site photo.jpg ")

    submission = scoped.validate(review(images=[image]), claim_number="C1")

    assert submission.attachments[0].filename == "  site photo.jpg "


def test_oversized_image_error_uses_raw_filename(scoped):
    image = make_image(" big.jpg", size=MAX_ATTACHMENT_BYTES + 1)

    with pytest.raises(ValidationError) as exc_info:
        scoped.validate(review(images=[image]), claim_number="C1")

    assert exc_info.value.filename == " big.jpg"
    assert exc_info.value.message == 'Image " big.jpg" is larger than 4MB.'


@pytest.mark.parametrize("value", [0, 0.0])
def test_numeric_zero_text_field_is_missing(scoped, value):
    with pytest.raises(ValidationError) as exc_info:
        scoped.validate(review(engineer_suggested_work=value), claim_number="C1")

    assert (exc_info.value.field, exc_info.value.reason) == ("engineer_suggested_work", "missing")


def test_numeric_zero_claim_id_is_missing(generic):
    with pytest.raises(ValidationError) as exc_info:
        generic.validate({"claimId": 0, "description": "Storm", "email": "e@example.com"})

    assert (exc_info.value.field, exc_info.value.reason) == ("claimId", "missing")


def test_non_zero_numeric_claim_id_is_accepted(generic):
    submission = generic.validate({"claimId": 42, "description": "Storm", "email": "e@example.com"})

    assert submission.claim_id == "42"


def test_image_entries_must_be_objects(scoped):
    with pytest.raises(ValidationError) as exc_info:
        scoped.validate(review(images=[make_image("a.jpg"), "b.jpg"]), claim_number="C1")

    assert (exc_info.value.field, exc_info.value.reason) == ("images", "not_an_object")


def test_generic_entry_point_builds_blocks(generic):
    body = {
        "claimId": "C9",
        "description": "Storm damage to roof",
        "email": "engineer@example.com",
        "reference": "REF-1",
    }

    submission = generic.validate(body)

    assert submission.claim_id == "C9"
    assert submission.blocks == {
        "description": "Storm damage to roof",
        "email": "engineer@example.com",
        "reference": "REF-1",
    }


def test_generic_entry_point_omits_blank_reference(generic):
    body = {"claimId": "C9", "description": "Storm", "email": "e@example.com", "reference": ""}

    assert "reference" not in generic.validate(body).blocks


@pytest.mark.parametrize("missing", ["claimId", "description", "email"])
def test_generic_entry_point_required_fields(generic, missing):
    body = {"claimId": "C9", "description": "Storm", "email": "e@example.com"}
    del body[missing]

    with pytest.raises(ValidationError) as exc_info:
        generic.validate(body)

    assert exc_info.value.field == missing
    assert exc_info.value.message == "claimId, description and email are required."


def test_generic_entry_point_ignores_path_claim_number(generic):
    with pytest.raises(ValidationError) as exc_info:
        generic.validate({"description": "Storm", "email": "e@example.com"}, claim_number="C1")

    assert exc_info.value.field == "claimId"
