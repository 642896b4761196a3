"""
Tests for the ProfileUpdate value type and skills parsing.
"""

import pytest

from core.profile.fields import SOCIAL_PLATFORMS, ProfileUpdate, split_skills


class TestSplitSkills:
    def test_splits_and_trims(self):
        assert split_skills("a, b ,c") == ["a", "b", "c"]

    def test_preserves_order(self):
        assert split_skills("rust,go,python") == ["rust", "go", "python"]

    def test_single_skill(self):
        assert split_skills("  python  ") == ["python"]

    def test_keeps_empty_pieces(self):
        """Empty pieces are mirrored rather than silently dropped."""
        assert split_skills("a,,b, ") == ["a", "", "b", ""]


class TestProfileUpdateFromMapping:
    def test_only_supplied_fields_are_present(self):
        update = ProfileUpdate.from_mapping({"website": "a.com"})

        assert dict(update.fields) == {"website": "a.com"}
        assert dict(update.social) == {}

    def test_skills_are_split(self):
        update = ProfileUpdate.from_mapping({"skills": "go, rust"})

        assert update.fields["skills"] == ["go", "rust"]

    def test_none_and_empty_strings_count_as_absent(self):
        update = ProfileUpdate.from_mapping(
            {"website": None, "status": "", "twitter": "", "youtube": None}
        )

        assert update.is_empty

    def test_social_platforms_collected(self):
        data = {platform: f"https://{platform}.com/me" for platform in SOCIAL_PLATFORMS}

        update = ProfileUpdate.from_mapping(data)

        assert dict(update.social) == data
        assert dict(update.fields) == {}

    def test_unknown_keys_ignored(self):
        update = ProfileUpdate.from_mapping({"github": "me", "bio": "hi", "status": "Dev"})

        assert dict(update.fields) == {"status": "Dev"}
        assert dict(update.social) == {}

    def test_update_is_read_only(self):
        update = ProfileUpdate.from_mapping({"website": "a.com"})

        with pytest.raises(TypeError):
            update.fields["website"] = "b.com"  # type: ignore[index]


class TestMergedSocial:
    def test_overlays_supplied_platforms(self):
        update = ProfileUpdate.from_mapping({"twitter": "https://twitter.com/new"})

        merged = update.merged_social(
            {"youtube": "https://youtube.com/old", "twitter": "https://twitter.com/old"}
        )

        assert merged == {
            "youtube": "https://youtube.com/old",
            "twitter": "https://twitter.com/new",
        }

    def test_no_existing_mapping(self):
        update = ProfileUpdate.from_mapping({"linkedin": "https://linkedin.com/in/me"})

        assert update.merged_social(None) == {"linkedin": "https://linkedin.com/in/me"}

    def test_does_not_mutate_existing(self):
        existing = {"youtube": "https://youtube.com/old"}
        update = ProfileUpdate.from_mapping({"twitter": "https://twitter.com/me"})

        update.merged_social(existing)

        assert existing == {"youtube": "https://youtube.com/old"}
