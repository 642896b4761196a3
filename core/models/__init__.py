"""
SQLAlchemy models for the profile service.

Usage:
    from core.models import User, Profile
"""

from .base import Base
from .profile import Profile
from .user import User

__all__ = [
    "Base",
    "User",
    "Profile",
]
