"""
Pydantic schemas for request and response validation.

Request models keep every field optional so that "not supplied" stays
representable; required fields are enforced by backend.app.validation and
reported in the 400 error shape clients expect.
"""

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class MessageResponse(BaseModel):
    msg: str


# =============================================================================
# Requests
# =============================================================================


class ProfileUpsertRequest(BaseModel):
    """Create-or-update body; skills is a comma-separated string."""

    website: str | None = None
    status: str | None = None
    skills: str | None = None
    youtube: str | None = None
    instagram: str | None = None
    facebook: str | None = None
    twitter: str | None = None
    linkedin: str | None = None


class ExperienceCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str | None = None
    company: str | None = None
    location: str | None = None
    # Older clients send the description under "experience"
    description: str | None = Field(
        default=None, validation_alias=AliasChoices("description", "experience")
    )
    from_date: str | None = Field(default=None, validation_alias=AliasChoices("from", "from_date"))
    to_date: str | None = Field(default=None, validation_alias=AliasChoices("to", "to_date"))
    current: bool = False

    def to_record(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "company": self.company,
            "location": self.location,
            "description": self.description,
            "from": self.from_date,
            "to": self.to_date,
            "current": self.current,
        }


class EducationCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    school: str | None = None
    degree: str | None = None
    fieldofstudy: str | None = Field(
        default=None, validation_alias=AliasChoices("fieldofstudy", "field_of_study")
    )
    description: str | None = None
    from_date: str | None = Field(default=None, validation_alias=AliasChoices("from", "from_date"))
    to_date: str | None = Field(default=None, validation_alias=AliasChoices("to", "to_date"))
    current: bool = False

    def to_record(self) -> dict[str, Any]:
        return {
            "school": self.school,
            "degree": self.degree,
            "fieldofstudy": self.fieldofstudy,
            "description": self.description,
            "from": self.from_date,
            "to": self.to_date,
            "current": self.current,
        }


# =============================================================================
# Responses
# =============================================================================


class OwnerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    avatar_url: str | None = None


class ExperienceResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str | None = None
    company: str | None = None
    location: str | None = None
    description: str | None = None
    from_date: str | None = Field(default=None, alias="from")
    to_date: str | None = Field(default=None, alias="to")
    current: bool = False


class EducationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    school: str | None = None
    degree: str | None = None
    fieldofstudy: str | None = None
    description: str | None = None
    from_date: str | None = Field(default=None, alias="from")
    to_date: str | None = Field(default=None, alias="to")
    current: bool = False


class ProfileResponse(BaseModel):
    id: int
    user: OwnerResponse
    website: str | None = None
    status: str | None = None
    skills: list[str] = Field(default_factory=list)
    social: dict[str, str] = Field(default_factory=dict)
    experience: list[ExperienceResponse] = Field(default_factory=list)
    education: list[EducationResponse] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ValidationErrorItem(BaseModel):
    param: str
    msg: str
    location: str = "body"
    value: Any = None


class ValidationErrorResponse(BaseModel):
    errors: list[ValidationErrorItem]
