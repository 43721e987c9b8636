"""
Tag Filter Builder

Turns the session's tag set into discovery predicates. Ad hoc predicates
(group name, VPC id) are appended after the tag predicates.
"""

from typing import Iterable

from jumphost.domain.value_objects.filter import Filter
from jumphost.domain.value_objects.tag import Tag


def tag_filter(tag: Tag) -> Filter:
    return Filter.of(f"tag:{tag.key}", tag.value)


def build_tag_filters(tags: Iterable[Tag], *extra: Filter) -> list[Filter]:
    """Return one `tag:<key>` filter per tag followed by the extra filters."""
    return [tag_filter(t) for t in tags] + list(extra)
