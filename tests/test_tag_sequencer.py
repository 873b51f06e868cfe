"""Tests for computing the next unique tag of a pattern."""

from datetime import date

import pytest

from gentag.exceptions import ExhaustedRetriesError
from gentag.models import BumpKind
from gentag.pattern_matching import compile_pattern
from gentag.tag_sequencer import (
    bump_tag,
    compare_tags,
    latest_matching_tag,
    next_tag,
    select_latest,
)

SEMVER = "v${major}.${minor}.${patch}"
TODAY = date(2024, 5, 6)


class TestNextTagSemantic:
    """Semantic patterns."""

    def test_patch_bump_of_latest(self):
        assert next_tag({"v1.0.0", "v1.0.1"}, SEMVER, BumpKind.PATCH) == "v1.0.2"

    def test_minor_and_major_bumps(self):
        tags = {"v1.0.0", "v1.2.3"}
        assert next_tag(tags, SEMVER, "minor") == "v1.3.0"
        assert next_tag(tags, SEMVER, "major") == "v2.0.0"

    def test_latest_is_ranked_numerically(self):
        # Lexicographically v1.9.0 > v1.10.0
        assert next_tag({"v1.9.0", "v1.10.0"}, SEMVER, "minor") == "v1.11.0"

    def test_tags_outside_the_pattern_are_ignored(self):
        tags = {"v1.0.0", "other-9.9.9", "v2.0.0-rc.1", "nightly"}
        assert next_tag(tags, SEMVER, "patch") == "v1.0.1"

    def test_custom_prefix_pattern(self):
        tags = {"release-3.1.4", "v9.0.0"}
        assert next_tag(tags, "release-${major}.${minor}.${patch}", "patch") == "release-3.1.5"

    def test_sub_patch_pattern(self):
        pattern = "v${major}.${minor}.${patch}.${subPatch}"
        assert next_tag({"v1.2.3.4"}, pattern, "patch") == "v1.2.4.0"

    def test_prerelease_collision_advances_the_counter(self):
        tags = {"v1.2.3", "v1.2.4-alpha.0"}
        assert next_tag(tags, SEMVER, BumpKind.PRERELEASE) == "v1.2.4-alpha.1"

    def test_prerelease_collisions_keep_advancing(self):
        tags = {"v1.2.3", "v1.2.4-alpha.0", "v1.2.4-alpha.1"}
        assert next_tag(tags, SEMVER, "prerelease") == "v1.2.4-alpha.2"

    def test_custom_prerelease_id(self):
        assert next_tag({"v1.2.3"}, SEMVER, "prerelease", prerelease_id="rc") == "v1.2.4-rc.0"

    def test_result_is_never_an_existing_tag(self):
        tags = {"v1.0.0", "v1.0.0-alpha.0", "v1.0.1-alpha.0", "v1.0.1-alpha.1"}
        result = next_tag(tags, SEMVER, "prerelease")
        assert result not in tags
        assert result == "v1.0.1-alpha.2"


class TestNextTagInitial:
    """Behaviour when no existing tag matches the pattern."""

    def test_empty_repository_returns_initial_tag(self):
        assert next_tag(set(), SEMVER, "patch", "v0.1.0") == "v0.1.0"

    def test_initial_tag_is_not_bumped(self):
        assert next_tag(set(), SEMVER, "major", "v0.1.0") == "v0.1.0"

    def test_initial_tag_rendered_through_pattern(self):
        pattern = "release-${major}.${minor}.${patch}"
        assert next_tag({"v5.0.0"}, pattern, "patch", "v0.1.0") == "release-0.1.0"

    def test_unrecognised_initial_tag_used_verbatim(self):
        assert next_tag(set(), SEMVER, "patch", "first-release") == "first-release"

    def test_existing_initial_tag_is_advanced(self):
        assert next_tag({"first"}, SEMVER, "patch", "first") == "v0.1.1"

    def test_date_pattern_starts_today(self):
        assert next_tag(set(), "v${YYYYMMDD}", "patch", "v0.1.0", today=TODAY) == "v20240506"

    def test_ordinal_pattern_starts_at_one(self):
        assert next_tag(set(), "build-${n}", "patch", "v0.1.0") == "build-1"

    def test_ordinal_initial_tag_is_kept(self):
        assert next_tag(set(), "build-${n}", "patch", "build-5") == "build-5"


class TestNextTagDateAndOrdinal:
    """Date and ordinal patterns."""

    def test_date_moves_to_today(self):
        assert next_tag({"v20240101"}, "v${YYYYMMDD}", today=TODAY) == "v20240506"

    def test_same_day_date_tag_exhausts_retries(self):
        with pytest.raises(ExhaustedRetriesError) as exc_info:
            next_tag({"v20240506"}, "v${YYYYMMDD}", today=TODAY)

        assert exc_info.value.attempts == 100
        assert exc_info.value.pattern == "v${YYYYMMDD}"
        assert exc_info.value.last_candidate == "v20240506"

    def test_max_attempts_is_configurable(self):
        with pytest.raises(ExhaustedRetriesError) as exc_info:
            next_tag({"v20240506"}, "v${YYYYMMDD}", today=TODAY, max_attempts=3)
        assert exc_info.value.attempts == 3

    def test_same_day_serial_increments(self):
        pattern = "v${YYYYMMDD}.${n}"
        assert next_tag({"v20240506.1"}, pattern, today=TODAY) == "v20240506.2"

    def test_serial_restarts_on_a_new_day(self):
        pattern = "v${YYYYMMDD}.${n}"
        assert next_tag({"v20240505.7"}, pattern, today=TODAY) == "v20240506.1"

    def test_first_serial_of_the_day(self):
        assert next_tag(set(), "v${YYYYMMDD}.${n}", today=TODAY) == "v20240506.1"

    def test_ordinal_increment(self):
        tags = {"build-1", "build-2", "build-10"}
        assert next_tag(tags, "build-${n}") == "build-11"

    def test_ordinal_ignores_bump_kind(self):
        assert next_tag({"build-4"}, "build-${n}", "major") == "build-5"


class TestNextTagLiteral:
    """Patterns without version placeholders."""

    def test_first_literal_tag_is_the_pattern_itself(self):
        assert next_tag(set(), "stable", "patch", "v0.1.0") == "stable"

    def test_first_timestamp_tag_follows_the_pattern(self, monkeypatch):
        monkeypatch.setattr("gentag.tag_sequencer.time.time", lambda: 1700000000.5)

        result = next_tag(set(), "build-${timestamp}", "patch", "v0.1.0")

        assert result == "build-1700000000500"
        assert compile_pattern("build-${timestamp}").match(result)

    def test_literal_pattern_without_timestamp_exhausts(self):
        with pytest.raises(ExhaustedRetriesError):
            next_tag({"release"}, "release", "patch", "release", max_attempts=5)

    def test_timestamp_fallback(self, monkeypatch):
        monkeypatch.setattr("gentag.tag_sequencer.time.time", lambda: 1700000000.5)
        tags = {"build-1600000000000"}
        assert next_tag(tags, "build-${timestamp}") == "build-1700000000500"


class TestLatestSelection:
    """Ranking of tags by recency."""

    def test_empty_collection(self):
        assert select_latest([]) is None

    def test_semantic_tags_compare_numerically(self):
        assert select_latest(["v1.2.0", "v1.10.0", "v1.9.9"]) == "v1.10.0"

    def test_release_is_newer_than_its_prerelease(self):
        assert select_latest(["v1.0.0-rc.1", "v1.0.0"]) == "v1.0.0"

    def test_date_tags(self):
        assert select_latest(["v20231231", "v20240101"]) == "v20240101"

    def test_unrecognised_tags_compare_as_strings(self):
        assert select_latest(["abc", "abd", "ab"]) == "abd"

    def test_mixed_schemes_compare_as_strings(self):
        assert select_latest(["v1.0.0", "v20240101"]) == "v20240101"

    def test_compare_tags(self):
        assert compare_tags("v1.10.0", "v1.9.0") > 0
        assert compare_tags("v1.9.0", "v1.10.0") < 0
        assert compare_tags("v1.0.0", "v1.0.0") == 0

    def test_latest_matching_tag(self):
        tags = {"v1.0.0", "v1.1.0", "app-7.0.0"}
        assert latest_matching_tag(tags, SEMVER) == "v1.1.0"
        assert latest_matching_tag(tags, "release-${n}") is None


class TestBumpTag:
    """Incrementing a single tag in its detected scheme."""

    def test_semantic(self):
        assert bump_tag("v1.2.3") == "v1.2.4"
        assert bump_tag("v1.2.3", "minor") == "v1.3.0"
        assert bump_tag("v1.2.3", BumpKind.MAJOR) == "v2.0.0"

    def test_prerelease(self):
        assert bump_tag("v1.2.3", "prerelease") == "v1.2.4-alpha.0"
        assert bump_tag("v1.2.4-alpha.0", "prerelease") == "v1.2.4-alpha.1"

    def test_prefix_replacement(self):
        assert bump_tag("v1.2.3", prefix="release-") == "release-1.2.4"

    def test_date(self):
        assert bump_tag("v20200101", today=TODAY) == "v20240506"

    def test_ordinal(self):
        assert bump_tag("build7") == "build8"

    def test_unrecognised_tag(self):
        assert bump_tag("latest") is None
