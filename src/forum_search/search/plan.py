"""
Assembly of a complete query plan from a search request.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ..models import SearchRequest
from .boost import boost
from .facets import plan_facets
from .filters import and_filters, compose_filters, filtered_query
from .highlight import plan_highlight
from .query import QueryTranslator

logger = logging.getLogger(__name__)

SEARCH_ROWS = 50


@dataclass(frozen=True)
class QueryPlan:
    """Everything the index needs for one search. Built per request, used once."""

    query: dict[str, Any]
    post_filter: dict[str, Any] | None
    aggregations: dict[str, Any]
    highlight: dict[str, Any]
    sort: list[dict[str, Any]]
    offset: int
    size: int = SEARCH_ROWS


def build_query_plan(request: SearchRequest, translator: QueryTranslator) -> QueryPlan:
    """Translate, filter, then boost; attach post filters, facets and highlight."""
    clause = translator.translate(request.query_text)
    filters = compose_filters(request)

    root_query = boost(filtered_query(clause.to_query(), filters.mandatory))

    logger.debug(
        "Planned search: clause=%s mandatory=%d post=%d",
        type(clause).__name__,
        len(filters.mandatory),
        len(filters.post),
    )

    return QueryPlan(
        query=root_query,
        post_filter=and_filters(filters.post),
        aggregations=plan_facets(request),
        highlight=plan_highlight(),
        sort=request.order.sort_clause(),
        offset=request.offset,
    )
