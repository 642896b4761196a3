# Profile domain: update value type, sub-record ledgers, per-owner locks

from . import ledger
from .fields import PROFILE_FIELDS, SOCIAL_PLATFORMS, ProfileUpdate, split_skills
from .locks import OwnerLockRegistry, owner_locks, unlocked

__all__ = [
    "ledger",
    "PROFILE_FIELDS",
    "SOCIAL_PLATFORMS",
    "ProfileUpdate",
    "split_skills",
    "OwnerLockRegistry",
    "owner_locks",
    "unlocked",
]
