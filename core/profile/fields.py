"""
Profile update value type.

A ProfileUpdate carries only the fields a caller actually supplied, so the
store can merge it over an existing profile without resetting anything else.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

SOCIAL_PLATFORMS = ("youtube", "instagram", "facebook", "twitter", "linkedin")

# Top-level profile columns settable through an upsert
PROFILE_FIELDS = ("website", "status", "skills")


def split_skills(raw: str) -> list[str]:
    """
    Split a comma-separated skills string.

    Each piece is stripped and order is kept. Pieces that are empty after
    stripping are kept too, so "a,,b" gives ["a", "", "b"].
    """
    return [skill.strip() for skill in raw.split(",")]


def _is_present(value: Any) -> bool:
    return value is not None and value != ""


@dataclass(frozen=True)
class ProfileUpdate:
    """
    Partial profile update.

    Attributes:
        fields: Present top-level fields (website, status, skills as a list)
        social: Present social platform URLs
    """

    fields: Mapping[str, Any] = field(default_factory=dict)
    social: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))
        object.__setattr__(self, "social", MappingProxyType(dict(self.social)))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ProfileUpdate":
        """
        Build an update from a request mapping.

        A key counts as supplied when it exists with a value other than None
        or "". Unknown keys are ignored.
        """
        fields: dict[str, Any] = {}
        for name in PROFILE_FIELDS:
            value = data.get(name)
            if not _is_present(value):
                continue
            fields[name] = split_skills(value) if name == "skills" else value

        social = {
            platform: data[platform]
            for platform in SOCIAL_PLATFORMS
            if _is_present(data.get(platform))
        }
        return cls(fields=fields, social=social)

    @property
    def is_empty(self) -> bool:
        return not self.fields and not self.social

    def merged_social(self, existing: Mapping[str, str] | None) -> dict[str, str]:
        """Return the existing social mapping with the supplied platforms overlaid."""
        merged = dict(existing or {})
        merged.update(self.social)
        return merged


__all__ = ["SOCIAL_PLATFORMS", "PROFILE_FIELDS", "ProfileUpdate", "split_skills"]
