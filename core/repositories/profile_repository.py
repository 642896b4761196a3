"""Profile repository: the single authority over profile aggregates."""

import re
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.orm import joinedload

from core.errors import InvalidReference, ProfileNotFound
from core.logging import get_logger
from core.models import Profile
from core.profile import ledger
from core.profile.fields import ProfileUpdate

from .base import BaseRepository
from .user_repository import UserRepository

logger = get_logger("repository.profile")

_OWNER_REF = re.compile(r"\d+")
_MAX_OWNER_ID = 2**63 - 1

EXPERIENCE = "experience"
EDUCATION = "education"


def parse_owner_ref(raw_id: str) -> int:
    """
    Parse an externally supplied owner id.

    Raises:
        InvalidReference: raw_id is not a positive integer in range
    """
    candidate = (raw_id or "").strip()
    if not _OWNER_REF.fullmatch(candidate):
        raise InvalidReference(raw_id)
    owner_id = int(candidate)
    if owner_id < 1 or owner_id > _MAX_OWNER_ID:
        raise InvalidReference(raw_id)
    return owner_id


class ProfileRepository(BaseRepository[Profile]):
    """
    Repository for Profile aggregates.

    Every mutation is load, modify, flush. Committing, and holding the
    owner's lock across the whole sequence, is the caller's job.
    """

    model = Profile

    def _find(self, owner_id: int, with_owner: bool = False) -> Profile | None:
        query = self.session.query(Profile)
        if with_owner:
            query = query.options(joinedload(Profile.user))
        return query.filter(Profile.user_id == owner_id).first()

    def _require(self, owner_id: int) -> Profile:
        profile = self._find(owner_id)
        if profile is None:
            raise ProfileNotFound(owner_id)
        return profile

    def _touch(self, profile: Profile) -> None:
        profile.updated_at = datetime.now(timezone.utc)
        self.session.flush()

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_by_owner(self, owner_id: int) -> Profile:
        """Get the owner's profile with the owner's name and avatar loaded."""
        profile = self._find(owner_id, with_owner=True)
        if profile is None:
            raise ProfileNotFound(owner_id)
        return profile

    def get_by_owner_ref(self, raw_id: str) -> Profile:
        """Like get_by_owner, for an unparsed external identifier."""
        return self.get_by_owner(parse_owner_ref(raw_id))

    def list_all(self) -> list[Profile]:
        """Get every profile with its owner loaded, in store order."""
        return self.session.query(Profile).options(joinedload(Profile.user)).all()

    # -------------------------------------------------------------------------
    # Upsert / delete
    # -------------------------------------------------------------------------

    def upsert(self, owner_id: int, update: ProfileUpdate) -> Profile:
        """
        Create or partially update the owner's profile.

        Only supplied fields are written. Social platforms are merged key by
        key into the existing mapping. Ledgers are never touched.
        """
        profile = self._find(owner_id)

        if profile:
            for name, value in update.fields.items():
                setattr(profile, name, value)
            if update.social:
                profile.social = update.merged_social(profile.social)
            self._touch(profile)
            logger.info(
                "profile_updated",
                owner_id=owner_id,
                fields=sorted(update.fields),
                social=sorted(update.social),
            )
            return profile

        profile = Profile(
            user_id=owner_id,
            social=update.merged_social(None),
            experience=[],
            education=[],
            **{"skills": [], **update.fields},
        )
        self.session.add(profile)
        self.session.flush()
        logger.info("profile_created", owner_id=owner_id, fields=sorted(update.fields))
        return profile

    def delete_account(self, owner_id: int) -> bool:
        """
        Delete the owner's profile, then the owner's user row.

        The user row is removed whether or not a profile existed. Authored
        content (posts) is not touched.

        Raises:
            ProfileNotFound: there was no profile; the user row is still deleted
        """
        profile = self._find(owner_id)
        if profile is not None:
            self.session.delete(profile)
            self.session.flush()
            logger.info("profile_deleted", owner_id=owner_id)

        UserRepository(self.session).delete(owner_id)

        if profile is None:
            raise ProfileNotFound(owner_id)
        return True

    # -------------------------------------------------------------------------
    # Ledgers
    # -------------------------------------------------------------------------

    def _append(self, owner_id: int, kind: str, record: Mapping[str, Any]) -> Profile:
        profile = self._require(owner_id)
        records, stored = ledger.append(getattr(profile, kind), record)
        setattr(profile, kind, records)
        self._touch(profile)
        logger.info(f"{kind}_added", owner_id=owner_id, record_id=stored["id"])
        return profile

    def _remove(self, owner_id: int, kind: str, record_id: str) -> Profile:
        profile = self._require(owner_id)
        records, _ = ledger.remove_by_id(getattr(profile, kind), record_id, kind=kind)
        setattr(profile, kind, records)
        self._touch(profile)
        logger.info(f"{kind}_removed", owner_id=owner_id, record_id=record_id)
        return profile

    def append_experience(self, owner_id: int, experience: Mapping[str, Any]) -> Profile:
        """Add an experience record at the front of the owner's ledger."""
        return self._append(owner_id, EXPERIENCE, experience)

    def append_education(self, owner_id: int, education: Mapping[str, Any]) -> Profile:
        """Add an education record at the front of the owner's ledger."""
        return self._append(owner_id, EDUCATION, education)

    def remove_experience(self, owner_id: int, experience_id: str) -> Profile:
        """Remove one experience record; raises RecordNotFound for unknown ids."""
        return self._remove(owner_id, EXPERIENCE, experience_id)

    def remove_education(self, owner_id: int, education_id: str) -> Profile:
        """Remove one education record; raises RecordNotFound for unknown ids."""
        return self._remove(owner_id, EDUCATION, education_id)
