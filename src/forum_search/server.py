"""
FastAPI server for forum search.

Builds a ``SearchRequest`` from query parameters and returns rows,
highlighted fragments and facet counts as JSON.
"""

import asyncio
from collections.abc import Iterator
from typing import Any

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .config import create_index_client
from .index import SearchIndexClient, SearchServiceError
from .models import SearchInterval, SearchOrder, SearchRange, SearchRequest, UserFilter
from .search import SearchResult, SearchService

app = FastAPI(title="forum-search", description="Full-text search over forum messages")


def get_index_client() -> Iterator[SearchIndexClient]:
    """Yield an index client for one request and close it afterwards."""
    client = create_index_client()
    try:
        yield client
    finally:
        client.close()


def _result_payload(request: SearchRequest, result: SearchResult) -> dict[str, Any]:
    return {
        "query": request.query_text,
        "offset": request.offset,
        "total": result.total,
        "hits": [
            {
                "id": hit.doc_id,
                "score": hit.score,
                "fields": hit.fields,
                "highlights": hit.highlights,
            }
            for hit in result.hits
        ],
        "facets": {
            name: [{"value": bucket.value, "count": bucket.count} for bucket in buckets]
            for name, buckets in result.facets.items()
        },
    }


@app.get("/api/search")
async def search_messages(
    q: str,
    offset: int = 0,
    range: SearchRange = SearchRange.ALL,
    interval: SearchInterval = SearchInterval.ALL,
    order: SearchOrder = SearchOrder.RELEVANCE,
    user: str | None = None,
    usertopic: bool = False,
    section: str | None = None,
    group: str | None = None,
    client: SearchIndexClient = Depends(get_index_client),
):
    """Search forum messages and return ranked, highlighted hits with facets."""
    try:
        request = SearchRequest(
            query_text=q,
            offset=offset,
            range=range,
            interval=interval,
            order=order,
            user=(
                UserFilter(nick=user, topic_author=usertopic)
                if user and user.strip()
                else None
            ),
            section=section,
            group=group,
        )
    except ValidationError as exc:
        return JSONResponse(
            {
                "error": "Invalid search request",
                "details": exc.errors(include_url=False, include_context=False),
            },
            status_code=422,
        )

    try:
        result = await asyncio.to_thread(SearchService(client).search, request)
    except SearchServiceError as exc:
        return JSONResponse({"error": str(exc)}, status_code=503)

    return _result_payload(request, result)


@app.get("/api/search/options")
async def search_options():
    """List the accepted range, interval and order values with their labels."""
    return {
        "range": [{"value": item.value, "label": item.label} for item in SearchRange],
        "interval": [{"value": item.value, "label": item.label} for item in SearchInterval],
        "order": [{"value": item.value, "label": item.label} for item in SearchOrder],
    }


def run_server(host: str = "127.0.0.1", port: int = 8000):
    """Run the FastAPI server."""
    import uvicorn

    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run_server()
