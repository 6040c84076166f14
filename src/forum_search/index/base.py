"""
Index client interface used by the search core.
"""

from __future__ import annotations

from typing import Any, Protocol

MESSAGES_INDEX = "messages"
MESSAGES_TYPE = "message"

# Catch-all field the messages mapping fills via copy_to from every text field.
COMBINED_FIELD = "all_text"


class SearchServiceError(RuntimeError):
    """Raised when the text index cannot be reached or rejects a call."""


class SearchIndexClient(Protocol):
    """Protocol for the two index operations a search needs."""

    def validate_query(
        self,
        *,
        index: str,
        doc_type: str,
        query: dict[str, Any],
    ) -> bool:
        """Return True if the index accepts the query syntax. Read-only."""

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
        """Run a search and return the raw response body."""
