"""
Profile service: the boundary between HTTP handlers and the profile store.

Validates bodies, turns them into store calls, owns commit and the
per-owner lock around every mutation, and converts persistence faults into
StoreFailure. Holds no state of its own.
"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import ContextManager, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.config import get_settings
from core.errors import InvalidReference, ProfileNotFound, StoreFailure
from core.logging import LogContext, get_logger
from core.models import Profile, User
from core.profile import ProfileUpdate, owner_locks, unlocked
from core.repositories import ProfileRepository

from ..schemas import EducationCreateRequest, ExperienceCreateRequest, ProfileUpsertRequest
from ..validation import EDUCATION_RULES, EXPERIENCE_RULES, PROFILE_RULES, ensure_valid

logger = get_logger("profile.service")

T = TypeVar("T")


def _mutation_lock(owner_id: int) -> ContextManager[None]:
    if get_settings().serialize_profile_mutations:
        return owner_locks.hold(owner_id)
    return unlocked(owner_id)


@contextmanager
def _store_call(db: Session, operation: str) -> Iterator[None]:
    """Roll back and raise StoreFailure on any persistence error."""
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(
            "store_failure",
            operation=operation,
            error=str(exc),
            error_type=type(exc).__name__,
            exc_info=True,
        )
        raise StoreFailure(operation) from exc


def _mutate(
    db: Session,
    owner_id: int,
    operation: str,
    change: Callable[[ProfileRepository], T],
) -> T:
    """Run one read-modify-write against the owner's profile and commit it."""
    with LogContext(owner_id=owner_id, operation=operation):
        with _mutation_lock(owner_id), _store_call(db, operation):
            result = change(ProfileRepository(db))
            db.commit()
        return result


# =============================================================================
# Reads
# =============================================================================


def get_my_profile(db: Session, user: User) -> Profile:
    """Profile of the authenticated user."""
    with _store_call(db, "get_my_profile"):
        return ProfileRepository(db).get_by_owner(user.id)


def list_profiles(db: Session) -> list[Profile]:
    """All profiles with their owners."""
    with _store_call(db, "list_profiles"):
        return ProfileRepository(db).list_all()


def get_profile_by_user_ref(db: Session, raw_user_id: str) -> Profile:
    """Profile for a user id taken from the URL."""
    try:
        with _store_call(db, "get_profile_by_user_ref"):
            return ProfileRepository(db).get_by_owner_ref(raw_user_id)
    except InvalidReference:
        logger.info("profile_lookup_invalid_reference", raw_user_id=raw_user_id[:64])
        raise
    except ProfileNotFound:
        logger.info("profile_lookup_not_found", raw_user_id=raw_user_id[:64])
        raise


# =============================================================================
# Mutations
# =============================================================================


def upsert_profile(db: Session, user: User, payload: ProfileUpsertRequest) -> Profile:
    """Create the user's profile, or merge the supplied fields into it."""
    ensure_valid(payload.model_dump(), PROFILE_RULES)
    update = ProfileUpdate.from_mapping(payload.model_dump(exclude_unset=True))
    return _mutate(db, user.id, "upsert_profile", lambda repo: repo.upsert(user.id, update))


def delete_account(db: Session, user: User) -> dict:
    """
    Delete the user's profile and the user.

    A user without a profile is still deleted. Posts are not removed here.
    """
    owner_id = user.id

    def _delete(repo: ProfileRepository) -> bool:
        try:
            return repo.delete_account(owner_id)
        except ProfileNotFound:
            logger.info("account_deleted_without_profile", owner_id=owner_id)
            return False

    _mutate(db, owner_id, "delete_account", _delete)
    return {"msg": "User deleted"}


def add_experience(db: Session, user: User, payload: ExperienceCreateRequest) -> Profile:
    """Prepend an experience record to the user's profile."""
    ensure_valid(payload.model_dump(), EXPERIENCE_RULES)
    record = payload.to_record()
    return _mutate(
        db, user.id, "add_experience", lambda repo: repo.append_experience(user.id, record)
    )


def remove_experience(db: Session, user: User, experience_id: str) -> Profile:
    return _mutate(
        db,
        user.id,
        "remove_experience",
        lambda repo: repo.remove_experience(user.id, experience_id),
    )


def add_education(db: Session, user: User, payload: EducationCreateRequest) -> Profile:
    """Prepend an education record to the user's profile."""
    ensure_valid(payload.model_dump(), EDUCATION_RULES)
    record = payload.to_record()
    return _mutate(
        db, user.id, "add_education", lambda repo: repo.append_education(user.id, record)
    )


def remove_education(db: Session, user: User, education_id: str) -> Profile:
    return _mutate(
        db,
        user.id,
        "remove_education",
        lambda repo: repo.remove_education(user.id, education_id),
    )
