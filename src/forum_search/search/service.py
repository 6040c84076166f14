"""
Entry point of the search core: request in, result out.
"""

from __future__ import annotations

from ..index import MESSAGES_INDEX, MESSAGES_TYPE, SearchIndexClient
from ..models import SearchRequest
from .executor import SearchExecutor, SearchResult
from .plan import build_query_plan
from .query import QueryTranslator


class SearchService:
    """Validate, plan and execute one search per call. Holds no request state."""

    def __init__(
        self,
        client: SearchIndexClient,
        *,
        index: str = MESSAGES_INDEX,
        doc_type: str = MESSAGES_TYPE,
    ) -> None:
        self.translator = QueryTranslator(client, index=index, doc_type=doc_type)
        self.executor = SearchExecutor(client, index=index, doc_type=doc_type)

    def search(self, request: SearchRequest) -> SearchResult:
        plan = build_query_plan(request, self.translator)
        return self.executor.execute(plan)
