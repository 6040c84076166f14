from __future__ import annotations

from typing import Any

MESSAGE_FRAGMENT = 250
HIGHLIGHT_PRE_TAG = "<em class=search-hl>"
HIGHLIGHT_POST_TAG = "</em>"


def plan_highlight() -> dict[str, Any]:
    """Titles are highlighted whole; the message yields one 250-char fragment."""
    return {
        "encoder": "html",
        "pre_tags": [HIGHLIGHT_PRE_TAG],
        "post_tags": [HIGHLIGHT_POST_TAG],
        "fields": {
            "title": {"number_of_fragments": 0},
            "topic_title": {"number_of_fragments": 0},
            "message": {
                "number_of_fragments": 1,
                "fragment_size": MESSAGE_FRAGMENT,
                "no_match_size": MESSAGE_FRAGMENT,
            },
        },
    }
