"""Search query construction and execution."""

from .boost import boost
from .executor import FacetBucket, SearchExecutor, SearchHit, SearchResult
from .facets import plan_facets
from .filters import ComposedFilters, and_filters, compose_filters
from .highlight import plan_highlight
from .plan import SEARCH_ROWS, QueryPlan, build_query_plan
from .query import AcceptedQuery, PhraseFallback, QueryTranslator, escape_query_text
from .service import SearchService

__all__ = [
    "boost",
    "FacetBucket",
    "SearchExecutor",
    "SearchHit",
    "SearchResult",
    "plan_facets",
    "ComposedFilters",
    "and_filters",
    "compose_filters",
    "plan_highlight",
    "SEARCH_ROWS",
    "QueryPlan",
    "build_query_plan",
    "AcceptedQuery",
    "PhraseFallback",
    "QueryTranslator",
    "escape_query_text",
    "SearchService",
]
