"""Tests for building tag plans from configuration and repository state."""

from datetime import date
from unittest.mock import Mock

import pytest

from gentag.environment import TagEnvironmentConfig
from gentag.exceptions import ConfigError, TagNotFoundError, UnknownEnvironmentError
from gentag.io_layer import IOLayer
from gentag.models import BumpKind, TagDetails
from gentag.plan_builder import prepare_create_plan, prepare_list_plan, prepare_remove_plan


@pytest.fixture
def config():
    return TagEnvironmentConfig.from_sources(
        {"tagPattern": {"test": "test-v${major}.${minor}.${patch}", "nightly": "nightly-${YYYYMMDD}"}}
    )


@pytest.fixture
def io_layer():
    """IOLayer double over a repository on main with a few tags."""
    layer = Mock(spec=IOLayer)
    layer.dry_run = False
    layer.current_branch.return_value = "main"
    layer.list_tags.return_value = {"v1.0.0", "v1.2.3", "test-v0.4.0"}
    return layer


class TestCreatePlan:
    """prepare_create_plan."""

    def test_branch_policy_decides_bump(self, config, io_layer):
        plan = prepare_create_plan(config, io_layer, "default")

        assert plan.bump_kind == BumpKind.MINOR
        assert plan.branch == "main"
        assert plan.latest_tag == "v1.2.3"
        assert plan.new_tag == "v1.3.0"
        assert plan.pattern == "v${major}.${minor}.${patch}"

    def test_explicit_bump_kind(self, config, io_layer):
        plan = prepare_create_plan(config, io_layer, "default", "major")
        assert plan.bump_kind == BumpKind.MAJOR
        assert plan.new_tag == "v2.0.0"

    def test_release_branch_wildcard(self, config, io_layer):
        io_layer.current_branch.return_value = "release/1.2"
        plan = prepare_create_plan(config, io_layer, "default")
        assert plan.new_tag == "v1.2.4"

    def test_develop_makes_prerelease(self, config, io_layer):
        io_layer.current_branch.return_value = "develop"
        plan = prepare_create_plan(config, io_layer, "default")
        assert plan.new_tag == "v1.2.4-alpha.0"

    def test_detached_head_defaults_to_patch(self, config, io_layer):
        io_layer.current_branch.return_value = None
        plan = prepare_create_plan(config, io_layer, "default")
        assert plan.bump_kind == BumpKind.PATCH
        assert plan.new_tag == "v1.2.4"

    def test_other_environment(self, config, io_layer):
        plan = prepare_create_plan(config, io_layer, "test", BumpKind.PATCH)
        assert plan.latest_tag == "test-v0.4.0"
        assert plan.new_tag == "test-v0.4.1"

    def test_date_environment(self, config, io_layer):
        plan = prepare_create_plan(config, io_layer, "nightly", today=date(2024, 5, 6))
        assert plan.latest_tag is None
        assert plan.new_tag == "nightly-20240506"

    def test_pattern_override(self, config, io_layer):
        plan = prepare_create_plan(config, io_layer, "default", "patch", pattern="build-${n}")
        assert plan.pattern == "build-${n}"
        assert plan.new_tag == "build-1"

    def test_unknown_environment(self, config, io_layer):
        with pytest.raises(UnknownEnvironmentError):
            prepare_create_plan(config, io_layer, "prod")

    def test_push_defaults_to_auto_push(self, config, io_layer):
        assert prepare_create_plan(config, io_layer, "default").push is True
        assert prepare_create_plan(config, io_layer, "default", push=False).push is False

        quiet = TagEnvironmentConfig.from_sources({"autoPush": False, "remote": "upstream"})
        plan = prepare_create_plan(quiet, io_layer, "default")
        assert plan.push is False
        assert plan.remote == "upstream"

    def test_message_and_dry_run_are_carried(self, config, io_layer):
        io_layer.dry_run = True
        plan = prepare_create_plan(config, io_layer, "default", message="Release")
        assert plan.message == "Release"
        assert plan.dry_run is True

    def test_no_writes(self, config, io_layer):
        prepare_create_plan(config, io_layer, "default")
        io_layer.create_tag.assert_not_called()
        io_layer.push_tag.assert_not_called()


class TestListPlan:
    """prepare_list_plan."""

    @pytest.fixture
    def tags(self):
        return [
            TagDetails("v1.2.0", "2024-03-01 10:00:00 +0000", "Third"),
            TagDetails("test-v0.1.0", "2024-02-01 10:00:00 +0000", "Second"),
            TagDetails("v1.1.0", "2024-01-01 10:00:00 +0000", "First"),
        ]

    def test_all_tags(self, io_layer, tags):
        io_layer.list_tag_details.return_value = tags
        plan = prepare_list_plan(io_layer)
        assert plan.tags == tags
        assert plan.total == 3

    def test_limit(self, io_layer, tags):
        io_layer.list_tag_details.return_value = tags
        plan = prepare_list_plan(io_layer, number=2)
        assert [tag.name for tag in plan.tags] == ["v1.2.0", "test-v0.1.0"]
        assert plan.total == 3

    def test_zero_limit_shows_all(self, io_layer, tags):
        io_layer.list_tag_details.return_value = tags
        assert len(prepare_list_plan(io_layer, number=0).tags) == 3

    def test_regex_filter(self, io_layer, tags):
        io_layer.list_tag_details.return_value = tags
        plan = prepare_list_plan(io_layer, pattern=r"^v\d", verbose=True)
        assert [tag.name for tag in plan.tags] == ["v1.2.0", "v1.1.0"]
        assert plan.total == 2
        assert plan.verbose is True

    def test_invalid_regex(self, io_layer, tags):
        io_layer.list_tag_details.return_value = tags
        with pytest.raises(ConfigError, match="Invalid pattern"):
            prepare_list_plan(io_layer, pattern="v[")


class TestRemovePlan:
    """prepare_remove_plan."""

    def test_named_tag(self, config, io_layer):
        io_layer.tag_exists.return_value = True
        plan = prepare_remove_plan(config, io_layer, "v1.0.0")
        assert plan.tag_name == "v1.0.0"
        assert plan.remote == "origin"
        assert plan.delete_remote is True

    def test_missing_tag(self, config, io_layer):
        io_layer.tag_exists.return_value = False
        with pytest.raises(TagNotFoundError, match="v9.9.9"):
            prepare_remove_plan(config, io_layer, "v9.9.9")

    def test_defaults_to_latest_created(self, config, io_layer):
        io_layer.latest_created_tag.return_value = "v1.2.3"
        plan = prepare_remove_plan(config, io_layer, local_only=True)
        assert plan.tag_name == "v1.2.3"
        assert plan.delete_remote is False

    def test_no_tags(self, config, io_layer):
        io_layer.latest_created_tag.return_value = None
        with pytest.raises(TagNotFoundError):
            prepare_remove_plan(config, io_layer)
