"""
Repository pattern implementations for data access.

Usage:
    from core.repositories import ProfileRepository
    from core.db import db

    with db.session() as session:
        profile = ProfileRepository(session).get_by_owner(owner_id)
"""

from .base import BaseRepository
from .profile_repository import ProfileRepository, parse_owner_ref
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "ProfileRepository",
    "UserRepository",
    "parse_owner_ref",
]
