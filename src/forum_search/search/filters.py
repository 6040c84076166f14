"""
Filter composition for search requests.

Mandatory filters narrow the document set before facets are counted.
Post filters only narrow the displayed rows.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..models import FieldFilter, SearchRequest

TOPIC_AUTHOR_FIELD = "topic_author"
AUTHOR_FIELD = "author"
SECTION_FIELD = "section"
GROUP_FIELD = "group"


@dataclass(frozen=True)
class ComposedFilters:
    """Mandatory and post filter sets for one request."""

    mandatory: list[FieldFilter] = field(default_factory=list)
    post: list[FieldFilter] = field(default_factory=list)


def compose_filters(request: SearchRequest) -> ComposedFilters:
    """Split the request's restrictions into mandatory and post filters."""
    mandatory: list[FieldFilter] = []

    range_filter = request.range.filter_clause()
    if range_filter is not None:
        mandatory.append(range_filter)

    interval_filter = request.interval.filter_clause()
    if interval_filter is not None:
        mandatory.append(interval_filter)

    if request.user is not None:
        column = TOPIC_AUTHOR_FIELD if request.user.topic_author else AUTHOR_FIELD
        mandatory.append(FieldFilter(field=column, operator="eq", value=request.user.nick))

    post: list[FieldFilter] = []
    if request.section is not None:
        post.append(section_filter(request.section))
    if request.group is not None:
        post.append(FieldFilter(field=GROUP_FIELD, operator="eq", value=request.group))

    return ComposedFilters(mandatory=mandatory, post=post)


def section_filter(section: str) -> FieldFilter:
    return FieldFilter(field=SECTION_FIELD, operator="eq", value=section)


def and_filters(filters: list[FieldFilter]) -> dict[str, Any] | None:
    """Combine filters with logical AND; a single filter is returned unwrapped."""
    if not filters:
        return None
    if len(filters) == 1:
        return filters[0].to_query()
    return {"bool": {"filter": [flt.to_query() for flt in filters]}}


def filtered_query(clause: dict[str, Any], filters: list[FieldFilter]) -> dict[str, Any]:
    """Restrict a scoring clause by non-scoring filters."""
    if not filters:
        return clause
    return {
        "bool": {
            "must": clause,
            "filter": [flt.to_query() for flt in filters],
        }
    }
