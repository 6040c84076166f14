from __future__ import annotations

import copy
from typing import Any

import pytest


SAMPLE_RESPONSE: dict[str, Any] = {
    "hits": {
        "total": {"value": 2, "relation": "eq"},
        "hits": [
            {
                "_id": "101",
                "_score": 6.2,
                "_source": {
                    "title": "Kernel panic on boot",
                    "author": "alice",
                    "section": "forum",
                    "group": "general",
                    "is_comment": False,
                    "message": "After upgrading the kernel the machine panics on boot.",
                },
                "highlight": {
                    "title": [
                        "<em class=search-hl>Kernel</em> <em class=search-hl>panic</em> on boot"
                    ],
                    "message": [
                        "After upgrading the <em class=search-hl>kernel</em> the machine panics"
                    ],
                },
            },
            {
                "_id": "102",
                "_score": 1.5,
                "_source": {
                    "topic_title": "Kernel panic on boot",
                    "author": "bob",
                    "section": "forum",
                    "group": "general",
                    "is_comment": True,
                    "message": "Try booting the previous kernel.",
                },
            },
        ],
    },
    "aggregations": {
        "sections": {
            "buckets": [
                {"key": "forum", "doc_count": 10},
                {"key": "talks", "doc_count": 3},
            ]
        },
        "groups": {
            "buckets": [
                {"key": "general", "doc_count": 7},
                {"key": "desktop", "doc_count": 3},
            ]
        },
    },
}


class FakeIndexClient:
    """Records calls and answers with canned validity and search responses."""

    def __init__(
        self,
        *,
        valid: bool = True,
        response: dict[str, Any] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.valid = valid
        self.response = copy.deepcopy(SAMPLE_RESPONSE) if response is None else response
        self.error = error
        self.validate_calls: list[dict[str, Any]] = []
        self.search_calls: list[dict[str, Any]] = []
        self.closed = False

    def validate_query(self, *, index: str, doc_type: str, query: dict[str, Any]) -> bool:
        self.validate_calls.append({"index": index, "doc_type": doc_type, "query": query})
        if self.error is not None:
            raise self.error
        return self.valid

    def search(self, **kwargs: Any) -> dict[str, Any]:
        self.search_calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def make_index_client():
    """Return a factory for fake index clients."""
    return FakeIndexClient


@pytest.fixture()
def index_client() -> FakeIndexClient:
    return FakeIndexClient()


@pytest.fixture()
def rejecting_index_client() -> FakeIndexClient:
    """Client whose validate operation rejects every query."""
    return FakeIndexClient(valid=False)
