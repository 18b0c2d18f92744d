"""
JobTrack - Field validation for job payloads.

Pure functions, no state. Each check is independent and every violation is
collected before raising, so a caller sees all bad fields at once.
"""
import re
from typing import Any, Dict, List, Optional

from .errors import ValidationError
from .schemas import JOB_STATUSES

URL_PATTERN = re.compile(r'^https?://.+')
MIN_DESCRIPTION_LENGTH = 50

REQUIRED_TEXT_FIELDS = {
    "job_title": "jobTitle",
    "company_name": "companyName",
}


def _check_text(value: Any, label: str) -> Optional[str]:
    if not isinstance(value, str) or not value.strip():
        return f"{label} required"
    return None


def _check_link(value: Any) -> Optional[str]:
    if not isinstance(value, str) or not value.strip():
        return "applicationLink required"
    if not URL_PATTERN.match(value.strip()):
        return "applicationLink must be a valid URL starting with http:// or https://"
    return None


def _check_status(value: Any) -> Optional[str]:
    if value not in JOB_STATUSES:
        return f"status must be one of: {', '.join(JOB_STATUSES)}"
    return None


def _normalize(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Trim string fields; an empty description means no description."""
    cleaned = {}
    for key, value in payload.items():
        if isinstance(value, str) and key != "status":
            value = value.strip()
        cleaned[key] = value
    if "job_description" in cleaned and not cleaned["job_description"]:
        cleaned["job_description"] = None
    return cleaned


def _collect(payload: Dict[str, Any], keys) -> List[str]:
    errors = []
    for key in keys:
        value = payload.get(key)
        if key in REQUIRED_TEXT_FIELDS:
            error = _check_text(value, REQUIRED_TEXT_FIELDS[key])
        elif key == "application_link":
            error = _check_link(value)
        elif key == "status":
            error = _check_status(value)
        else:
            error = None
        if error:
            errors.append(error)
    return errors


def validate_job_create(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate a create payload (snake_case keys).

    Returns:
        Normalized fields ready for JobStore.create

    Raises:
        ValidationError: listing every violated field
    """
    errors = _collect(payload, ["job_title", "company_name", "application_link", "status"])
    if errors:
        raise ValidationError(errors)

    fields = _normalize({
        key: payload.get(key)
        for key in ("job_title", "company_name", "application_link", "status", "job_description")
    })
    if fields["job_description"] is None:
        fields.pop("job_description")
    return fields


def validate_job_update(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Validate only the fields present in a partial update."""
    errors = _collect(payload, [k for k in payload if k != "job_description"])
    if errors:
        raise ValidationError(errors)
    return _normalize(payload)


def validate_job_description(text: Any) -> str:
    """Caller-facing check run before any analysis logic."""
    if not text or not isinstance(text, str):
        raise ValidationError("Job description is required and must be a string")
    if len(text.strip()) < MIN_DESCRIPTION_LENGTH:
        raise ValidationError(
            f"Job description must be at least {MIN_DESCRIPTION_LENGTH} characters long"
        )
    return text
