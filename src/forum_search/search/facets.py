"""
Facet aggregations for faceted navigation.
"""

from __future__ import annotations

from typing import Any

from ..models import SearchRequest
from .filters import GROUP_FIELD, SECTION_FIELD, section_filter

SECTIONS_FACET = "sections"
GROUPS_FACET = "groups"
FACET_SIZE = 50


def plan_facets(request: SearchRequest) -> dict[str, Any]:
    """Declare the sections and groups aggregations.

    Aggregations run over the query's document set, so post filters never
    affect them. The groups facet is scoped to the requested section, if any.
    """
    groups = _terms(GROUP_FIELD)
    if request.section is not None:
        groups = {
            "filter": section_filter(request.section).to_query(),
            "aggs": {GROUPS_FACET: groups},
        }

    return {
        SECTIONS_FACET: _terms(SECTION_FIELD),
        GROUPS_FACET: groups,
    }


def _terms(field: str) -> dict[str, Any]:
    return {"terms": {"field": field, "size": FACET_SIZE}}
