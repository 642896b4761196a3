"""
Required-field validation for request bodies.

Errors use the field-level shape the frontend already renders:
    {"param": "website", "msg": "Website is required", "location": "body", "value": ""}
"""

from collections.abc import Mapping
from typing import Any

from core.errors import ValidationFailed

PROFILE_RULES = {
    "website": "Website is required",
    "status": "Status is required",
    "skills": "Skills is required",
}

EXPERIENCE_RULES = {
    "title": "Title is required",
    "company": "Company is required",
    "description": "Description is required",
}

EDUCATION_RULES = {
    "school": "School is required",
    "degree": "Degree is required",
    "fieldofstudy": "Field of study is required",
}


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def require_fields(payload: Mapping[str, Any], rules: Mapping[str, str]) -> list[dict]:
    """Return one error per rule whose field is missing or blank, in rule order."""
    return [
        {
            "param": field_name,
            "msg": message,
            "location": "body",
            "value": payload.get(field_name) or "",
        }
        for field_name, message in rules.items()
        if _is_blank(payload.get(field_name))
    ]


def ensure_valid(payload: Mapping[str, Any], rules: Mapping[str, str]) -> None:
    """
    Raise ValidationFailed when any required field is missing or blank.

    Raises:
        ValidationFailed: carrying the full list of field errors
    """
    errors = require_fields(payload, rules)
    if errors:
        raise ValidationFailed(errors)
