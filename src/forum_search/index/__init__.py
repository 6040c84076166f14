"""Text index clients for forum search."""

from .base import (
    COMBINED_FIELD,
    MESSAGES_INDEX,
    MESSAGES_TYPE,
    SearchIndexClient,
    SearchServiceError,
)
from .elastic import ElasticsearchIndexClient

__all__ = [
    "COMBINED_FIELD",
    "MESSAGES_INDEX",
    "MESSAGES_TYPE",
    "SearchIndexClient",
    "SearchServiceError",
    "ElasticsearchIndexClient",
]
