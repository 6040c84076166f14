"""
Free-text query translation with syntax validation.

The candidate ``query_string`` query is checked by the index first; when the
index rejects its syntax the raw text is searched as a phrase instead.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

from ..index import COMBINED_FIELD, MESSAGES_INDEX, MESSAGES_TYPE, SearchIndexClient

logger = logging.getLogger(__name__)

MINIMUM_SHOULD_MATCH = "50%"

_ESCAPE_RE = re.compile(r"([\[\]\\/])")


def escape_query_text(text: str) -> str:
    """Backslash-escape square brackets, backslashes and slashes."""
    return _ESCAPE_RE.sub(r"\\\1", text)


@dataclass(frozen=True)
class AcceptedQuery:
    """Lenient query over all indexed fields, accepted by validation."""

    text: str

    def to_query(self) -> dict[str, Any]:
        return {
            "query_string": {
                "query": self.text,
                "lenient": True,
                "minimum_should_match": MINIMUM_SHOULD_MATCH,
            }
        }


@dataclass(frozen=True)
class PhraseFallback:
    """Exact-phrase match on the catch-all field, used for invalid syntax."""

    text: str

    def to_query(self) -> dict[str, Any]:
        return {
            "multi_match": {
                "query": self.text,
                "fields": [COMBINED_FIELD],
                "type": "phrase",
                "lenient": True,
            }
        }


PrimaryClause = AcceptedQuery | PhraseFallback


class QueryTranslator:
    """Turn raw user text into the primary clause of a search."""

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

    def translate(self, raw_text: str) -> PrimaryClause:
        candidate = AcceptedQuery(text=escape_query_text(raw_text))
        valid = self.client.validate_query(
            index=self.index,
            doc_type=self.doc_type,
            query=candidate.to_query(),
        )
        if valid:
            return candidate

        logger.info("Invalid query '%s', converting to phrase", raw_text)
        return PhraseFallback(text=raw_text)
