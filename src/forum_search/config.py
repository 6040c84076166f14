"""
Configuration helpers for the Elasticsearch connection.
"""

from __future__ import annotations

import os

from .index import ElasticsearchIndexClient

DEFAULT_ES_URL = "http://localhost:9200"
DEFAULT_REQUEST_TIMEOUT = 10.0
ENV_ES_URL = "FORUM_SEARCH_ES_URL"
ENV_REQUEST_TIMEOUT = "FORUM_SEARCH_ES_TIMEOUT"


def resolve_es_url(override_url: str | None = None) -> str:
    """
    Resolve the Elasticsearch URL from CLI override, env var, or default.

    Precedence:
    1) explicit override_url
    2) FORUM_SEARCH_ES_URL
    3) default URL
    """
    return override_url or os.getenv(ENV_ES_URL) or DEFAULT_ES_URL


def resolve_request_timeout(override_timeout: float | None = None) -> float:
    """Resolve the per-request timeout in seconds, same precedence as the URL."""
    if override_timeout is not None:
        return override_timeout
    raw_timeout = os.getenv(ENV_REQUEST_TIMEOUT)
    if raw_timeout:
        try:
            return float(raw_timeout)
        except ValueError as exc:
            raise ValueError(
                f"{ENV_REQUEST_TIMEOUT} must be a number of seconds, got {raw_timeout!r}"
            ) from exc
    return DEFAULT_REQUEST_TIMEOUT


def create_index_client(
    es_url: str | None = None,
    timeout: float | None = None,
) -> ElasticsearchIndexClient:
    return ElasticsearchIndexClient.from_url(
        resolve_es_url(es_url),
        request_timeout=resolve_request_timeout(timeout),
    )
