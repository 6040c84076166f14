"""
Elasticsearch-backed index client.

Elasticsearch 7+ has no mapping types, so ``doc_type`` names the single kind
of document kept in the index and is not sent on the wire.
"""

from __future__ import annotations

import logging
from typing import Any

from elasticsearch import ApiError, Elasticsearch, TransportError

from .base import SearchServiceError

logger = logging.getLogger(__name__)


class ElasticsearchIndexClient:
    """Thin adapter from ``SearchIndexClient`` calls to the Elasticsearch API."""

    def __init__(self, client: Elasticsearch) -> None:
        self._client = client

    @classmethod
    def from_url(cls, url: str, *, request_timeout: float) -> ElasticsearchIndexClient:
        return cls(Elasticsearch(url, request_timeout=request_timeout))

    def validate_query(
        self,
        *,
        index: str,
        doc_type: str,
        query: dict[str, Any],
    ) -> bool:
        try:
            response = self._client.indices.validate_query(index=index, query=query)
        except (ApiError, TransportError) as exc:
            logger.error("Query validation against %s/%s failed: %s", index, doc_type, exc)
            raise SearchServiceError(f"Query validation failed: {exc}") from exc
        return bool(response.body.get("valid", False))

    def search(
        self,
        *,
        index: str,
        doc_type: str,
        query: dict[str, Any],
        post_filter: dict[str, Any] | None,
        aggregations: dict[str, Any],
        sort: list[dict[str, Any]],
        highlight: dict[str, Any],
        fields: list[str],
        offset: int,
        size: int,
    ) -> dict[str, Any]:
        try:
            response = self._client.search(
                index=index,
                query=query,
                post_filter=post_filter,
                aggs=aggregations,
                sort=sort,
                highlight=highlight,
                source=fields,
                from_=offset,
                size=size,
            )
        except (ApiError, TransportError) as exc:
            logger.error("Search against %s/%s failed: %s", index, doc_type, exc)
            raise SearchServiceError(f"Search failed: {exc}") from exc
        return dict(response.body)

    def close(self) -> None:
        """Close the underlying Elasticsearch transport."""
        self._client.close()
