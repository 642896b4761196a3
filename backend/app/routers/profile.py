"""
Profile endpoints.

Handlers stay thin: authentication comes from get_current_user, everything
else is delegated to services.profile_service. Domain errors are mapped to
responses in error_handlers.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.db import get_db
from core.models import Profile, User

from ..auth.dependencies import get_current_user
from ..schemas import (
    EducationCreateRequest,
    EducationResponse,
    ExperienceCreateRequest,
    ExperienceResponse,
    MessageResponse,
    OwnerResponse,
    ProfileResponse,
    ProfileUpsertRequest,
    ValidationErrorResponse,
)
from ..services import profile_service

router = APIRouter(prefix="/profile", tags=["profile"])

_bad_request = {
    400: {"model": ValidationErrorResponse, "description": "Invalid body, or no such profile or record"}
}


def _profile_to_response(profile: Profile) -> ProfileResponse:
    """Convert a Profile (with its owner) to the response model."""
    return ProfileResponse(
        id=profile.id,
        user=OwnerResponse.model_validate(profile.user),
        website=profile.website,
        status=profile.status,
        skills=profile.skills or [],
        social=profile.social or {},
        experience=[ExperienceResponse.model_validate(r) for r in profile.experience or []],
        education=[EducationResponse.model_validate(r) for r in profile.education or []],
        created_at=profile.created_at,
        updated_at=profile.updated_at,
    )


@router.get("/me", response_model=ProfileResponse, responses=_bad_request)
def get_my_profile(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Get the authenticated user's profile."""
    return _profile_to_response(profile_service.get_my_profile(db, current_user))


@router.post("", response_model=ProfileResponse, responses=_bad_request)
def upsert_profile(
    payload: ProfileUpsertRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Create or update the authenticated user's profile.

    Only supplied fields change; social links are merged per platform.
    """
    return _profile_to_response(profile_service.upsert_profile(db, current_user, payload))


@router.get("", response_model=list[ProfileResponse])
def list_profiles(db: Session = Depends(get_db)):
    """Get all profiles."""
    return [_profile_to_response(p) for p in profile_service.list_profiles(db)]


@router.get("/user/{user_id}", response_model=ProfileResponse, responses=_bad_request)
def get_profile_by_user(user_id: str, db: Session = Depends(get_db)):
    """Get a profile by its owner's user id."""
    return _profile_to_response(profile_service.get_profile_by_user_ref(db, user_id))


@router.delete("", response_model=MessageResponse)
def delete_account(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete the authenticated user's profile and account."""
    return profile_service.delete_account(db, current_user)


@router.put("/experience", response_model=ProfileResponse, responses=_bad_request)
def add_experience(
    payload: ExperienceCreateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Add an experience entry to the front of the profile's list."""
    return _profile_to_response(profile_service.add_experience(db, current_user, payload))


@router.delete("/experience/{exp_id}", response_model=ProfileResponse, responses=_bad_request)
def delete_experience(
    exp_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Remove an experience entry by id."""
    return _profile_to_response(profile_service.remove_experience(db, current_user, exp_id))


@router.put("/education", response_model=ProfileResponse, responses=_bad_request)
def add_education(
    payload: EducationCreateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Add an education entry to the front of the profile's list."""
    return _profile_to_response(profile_service.add_education(db, current_user, payload))


@router.delete("/education/{edu_id}", response_model=ProfileResponse, responses=_bad_request)
def delete_education(
    edu_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Remove an education entry by id."""
    return _profile_to_response(profile_service.remove_education(db, current_user, edu_id))
