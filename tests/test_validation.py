import pytest

from jobtrack.errors import ValidationError
from jobtrack.validation import (
    validate_job_create,
    validate_job_description,
    validate_job_update,
)


def test_valid_create_payload_is_trimmed(job_fields):
    fields = validate_job_create({**job_fields, "job_title": "  Frontend Engineer  "})
    assert fields["job_title"] == "Frontend Engineer"
    assert fields["status"] == "Applied"


def test_blank_description_is_dropped(job_fields):
    fields = validate_job_create({**job_fields, "job_description": "   "})
    assert "job_description" not in fields


def test_missing_title_is_reported(job_fields):
    with pytest.raises(ValidationError) as exc:
        validate_job_create({**job_fields, "job_title": "   "})
    assert exc.value.messages == ["jobTitle required"]


def test_link_required_versus_invalid(job_fields):
    with pytest.raises(ValidationError) as exc:
        validate_job_create({**job_fields, "application_link": ""})
    assert exc.value.messages == ["applicationLink required"]

    with pytest.raises(ValidationError) as exc:
        validate_job_create({**job_fields, "application_link": "not-a-url"})
    assert "valid URL" in exc.value.messages[0]


def test_all_violations_reported_together():
    with pytest.raises(ValidationError) as exc:
        validate_job_create({"status": "Pending"})

    messages = exc.value.messages
    assert len(messages) == 4
    assert "jobTitle required" in messages
    assert "companyName required" in messages
    assert "applicationLink required" in messages
    assert messages[-1] == "status must be one of: Applied, Interviewing, Rejected, Offer"


def test_update_checks_only_present_fields():
    assert validate_job_update({"status": "Offer"}) == {"status": "Offer"}

    with pytest.raises(ValidationError):
        validate_job_update({"application_link": "ftp://example.com"})


def test_update_empty_description_clears_it():
    assert validate_job_update({"job_description": ""}) == {"job_description": None}


def test_description_boundary():
    with pytest.raises(ValidationError, match="at least 50 characters"):
        validate_job_description("too short!")
    with pytest.raises(ValidationError, match="must be a string"):
        validate_job_description(None)

    text = "x" * 50
    assert validate_job_description(text) == text
