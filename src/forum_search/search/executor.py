"""
Execution of query plans against the text index.
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor, Future
from dataclasses import dataclass
from typing import Any

from ..index import MESSAGES_INDEX, MESSAGES_TYPE, SearchIndexClient
from .facets import GROUPS_FACET, SECTIONS_FACET
from .plan import QueryPlan

logger = logging.getLogger(__name__)

RESULT_FIELDS = [
    "title",
    "topic_title",
    "author",
    "postdate",
    "topic_id",
    "section",
    "message",
    "group",
    "is_comment",
    "tag",
]


@dataclass(frozen=True)
class SearchHit:
    """One result row with its stored fields and highlighted fragments."""

    doc_id: str
    score: float | None
    fields: dict[str, Any]
    highlights: dict[str, list[str]]


@dataclass(frozen=True)
class FacetBucket:
    """Document count for one value of a faceted field."""

    name: str
    value: str
    count: int


@dataclass(frozen=True)
class SearchResult:
    """Rows, total hit count and facet buckets of one search."""

    total: int
    hits: list[SearchHit]
    facets: dict[str, list[FacetBucket]]


class SearchExecutor:
    """Send a query plan to the index in a single call."""

    def __init__(
        self,
        client: SearchIndexClient,
        *,
        index: str = MESSAGES_INDEX,
        doc_type: str = MESSAGES_TYPE,
    ) -> None:
        self.client = client
        self.index = index
        self.doc_type = doc_type

    def execute(self, plan: QueryPlan) -> SearchResult:
        response = self.client.search(
            index=self.index,
            doc_type=self.doc_type,
            query=plan.query,
            post_filter=plan.post_filter,
            aggregations=plan.aggregations,
            sort=plan.sort,
            highlight=plan.highlight,
            fields=list(RESULT_FIELDS),
            offset=plan.offset,
            size=plan.size,
        )
        result = _to_result(response)
        logger.debug(
            "Search returned %d of %d hits (offset %d)",
            len(result.hits),
            result.total,
            plan.offset,
        )
        return result

    def execute_async(self, plan: QueryPlan, executor: Executor) -> Future[SearchResult]:
        """Run ``execute`` on *executor*; the caller waits on or chains the future."""
        return executor.submit(self.execute, plan)


def _to_result(response: dict[str, Any]) -> SearchResult:
    hits_section = response.get("hits", {})
    hits = [
        SearchHit(
            doc_id=str(raw["_id"]),
            score=raw.get("_score"),
            fields=dict(raw.get("_source", {})),
            highlights={
                field: list(fragments)
                for field, fragments in raw.get("highlight", {}).items()
            },
        )
        for raw in hits_section.get("hits", [])
    ]

    aggregations = response.get("aggregations", {})
    facets = {
        name: _facet_buckets(name, aggregations.get(name, {}))
        for name in (SECTIONS_FACET, GROUPS_FACET)
    }

    return SearchResult(total=_total_hits(hits_section), hits=hits, facets=facets)


def _total_hits(hits_section: dict[str, Any]) -> int:
    total = hits_section.get("total", 0)
    if isinstance(total, dict):
        return int(total.get("value", 0))
    return int(total)


def _facet_buckets(name: str, aggregation: dict[str, Any]) -> list[FacetBucket]:
    # A section-scoped facet nests its terms result under its own name.
    if "buckets" not in aggregation and name in aggregation:
        aggregation = aggregation[name]
    return [
        FacetBucket(name=name, value=str(bucket["key"]), count=int(bucket["doc_count"]))
        for bucket in aggregation.get("buckets", [])
    ]
