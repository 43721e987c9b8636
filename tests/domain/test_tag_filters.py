"""Tests for the tag filter builder."""

from jumphost.domain.services.tag_filters import build_tag_filters, tag_filter
from jumphost.domain.value_objects.filter import Filter
from jumphost.domain.value_objects.tag import Tag


TAGS = (Tag("red-hat-managed", "true"), Tag("Name", "red-hat-sre-jumphost"))


class TestBuildTagFilters:
    def test_tags_plus_extra_filters(self):
        filters = build_tag_filters(
            TAGS,
            Filter.of("group-name", "red-hat-sre-jumphost"),
            Filter.of("vpc-id", "vpc-123"),
        )

        assert len(filters) == 4
        assert [f.to_aws() for f in filters] == [
            {"Name": "tag:red-hat-managed", "Values": ["true"]},
            {"Name": "tag:Name", "Values": ["red-hat-sre-jumphost"]},
            {"Name": "group-name", "Values": ["red-hat-sre-jumphost"]},
            {"Name": "vpc-id", "Values": ["vpc-123"]},
        ]

    def test_tags_only(self):
        assert build_tag_filters(TAGS) == [tag_filter(t) for t in TAGS]

    def test_empty(self):
        assert build_tag_filters(()) == []

    def test_deterministic(self):
        assert build_tag_filters(TAGS) == build_tag_filters(list(TAGS))
