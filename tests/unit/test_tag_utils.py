"""Unit tests for tag and setting helpers."""

from infra_verify.utils.tag_utils import (
    TagMismatch,
    extract_settings,
    extract_tags,
    find_tag_mismatches,
)


class TestExtractTags:
    """Tests for extract_tags."""

    def test_ec2_format(self):
        tags = extract_tags([{"Key": "Name", "Value": "web"}, {"Key": "Env", "Value": "prod"}])
        assert tags == {"Name": "web", "Env": "prod"}

    def test_ecs_format(self):
        assert extract_tags([{"key": "Team", "value": "platform"}]) == {"Team": "platform"}

    def test_empty_key_dropped(self):
        assert extract_tags([{"Key": "", "Value": "x"}]) == {}

    def test_none(self):
        assert extract_tags(None) == {}


class TestExtractSettings:
    """Tests for extract_settings."""

    def test_settings(self):
        settings = extract_settings([{"name": "containerInsights", "value": "enabled"}])
        assert settings == {"containerInsights": "enabled"}

    def test_missing_value(self):
        assert extract_settings([{"name": "containerInsights"}]) == {"containerInsights": ""}

    def test_empty(self):
        assert extract_settings([]) == {}


class TestFindTagMismatches:
    """Tests for subset containment."""

    def test_extra_live_tags_ignored(self):
        expected = {"Environment": "production"}
        observed = {"Environment": "production", "ManagedBy": "terraform"}
        assert find_tag_mismatches(expected, observed) == []

    def test_missing_tag(self):
        mismatches = find_tag_mismatches({"Team": "platform"}, {})
        assert mismatches == [TagMismatch(key="Team", expected="platform", observed=None)]
        assert "observed no such tag" in mismatches[0].describe()

    def test_wrong_value(self):
        mismatches = find_tag_mismatches({"Environment": "production"}, {"Environment": "staging"})
        assert mismatches[0].observed == "staging"
        assert mismatches[0].describe() == (
            "Tag 'Environment': expected 'production', observed 'staging'"
        )

    def test_values_compared_exactly(self):
        mismatches = find_tag_mismatches({"Environment": "production"}, {"Environment": "Production"})
        assert len(mismatches) == 1

    def test_empty_expected(self):
        assert find_tag_mismatches({}, {"Anything": "goes"}) == []
