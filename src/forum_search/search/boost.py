"""
Relevance adjustments applied to the root query.
"""

from __future__ import annotations

from typing import Any

from ..models import DATE_FIELD, IS_COMMENT_FIELD, FieldFilter

TOPIC_BOOST = 3
RECENT_BOOST = 2
RECENT_LOWER_BOUND = "now/d-3y"


def boost(query: dict[str, Any]) -> dict[str, Any]:
    """Multiply scores of topics by 3 and of recent messages by 2."""
    topic_filter = FieldFilter(field=IS_COMMENT_FIELD, operator="eq", value=False)
    recent_filter = FieldFilter(field=DATE_FIELD, operator="gte", value=RECENT_LOWER_BOUND)

    return {
        "function_score": {
            "query": query,
            "functions": [
                {"filter": topic_filter.to_query(), "weight": TOPIC_BOOST},
                {"filter": recent_filter.to_query(), "weight": RECENT_BOOST},
            ],
            "score_mode": "multiply",
            "boost_mode": "multiply",
        }
    }
