"""
forum-search - full-text search over forum topics and comments.

Translates a structured search request into an Elasticsearch query with
syntax validation and phrase fallback, relevance boosting, mandatory and
post filters, section/group facets and highlighting, then executes it.

Example usage:
    >>> from forum_search import SearchRequest, SearchService
    >>> from forum_search.config import create_index_client
    >>> service = SearchService(create_index_client())
    >>> result = service.search(SearchRequest(query_text="kernel panic"))
"""

from .index import SearchIndexClient, SearchServiceError
from .models import SearchInterval, SearchOrder, SearchRange, SearchRequest, UserFilter
from .search import SearchResult, SearchService

__all__ = [
    # Index
    "SearchIndexClient",
    "SearchServiceError",
    # Models
    "SearchInterval",
    "SearchOrder",
    "SearchRange",
    "SearchRequest",
    "UserFilter",
    # Search
    "SearchResult",
    "SearchService",
]
