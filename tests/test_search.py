"""Tests for filter composition, boosting, facets, highlight and plan assembly."""

from __future__ import annotations

import pytest

from forum_search.models import (
    FieldFilter,
    SearchInterval,
    SearchOrder,
    SearchRange,
    SearchRequest,
    UserFilter,
)
from forum_search.search import (
    AcceptedQuery,
    PhraseFallback,
    QueryTranslator,
    and_filters,
    boost,
    build_query_plan,
    compose_filters,
    plan_facets,
    plan_highlight,
)


def _is_comment_filters(filters: list[FieldFilter]) -> list[FieldFilter]:
    return [flt for flt in filters if flt.field == "is_comment"]


def test_range_all_adds_no_is_comment_filter() -> None:
    for interval in SearchInterval:
        request = SearchRequest(query_text="x", range=SearchRange.ALL, interval=interval)
        assert _is_comment_filters(compose_filters(request).mandatory) == []


@pytest.mark.parametrize(
    ("search_range", "expected"),
    [(SearchRange.TOPICS, False), (SearchRange.COMMENTS, True)],
)
def test_range_adds_is_comment_equality_filter(
    search_range: SearchRange, expected: bool
) -> None:
    filters = compose_filters(SearchRequest(query_text="x", range=search_range))

    assert filters.mandatory == [FieldFilter(field="is_comment", operator="eq", value=expected)]


@pytest.mark.parametrize("interval", [i for i in SearchInterval if i is not SearchInterval.ALL])
def test_interval_adds_lower_bound_only_date_filter(interval: SearchInterval) -> None:
    filters = compose_filters(SearchRequest(query_text="x", interval=interval))

    assert [flt.to_query() for flt in filters.mandatory] == [
        {"range": {"postdate": {"gte": interval.lower_bound}}}
    ]


def test_user_filter_uses_author_field() -> None:
    request = SearchRequest(query_text="x", user=UserFilter(nick="bob"))

    assert compose_filters(request).mandatory == [
        FieldFilter(field="author", operator="eq", value="bob")
    ]


def test_post_filters_single_filter_is_used_directly() -> None:
    filters = compose_filters(SearchRequest(query_text="x", group="desktop"))

    assert filters.mandatory == []
    assert and_filters(filters.post) == {"term": {"group": "desktop"}}


def test_post_filters_combine_with_and() -> None:
    filters = compose_filters(SearchRequest(query_text="x", section="forum", group="desktop"))

    assert and_filters(filters.post) == {
        "bool": {"filter": [{"term": {"section": "forum"}}, {"term": {"group": "desktop"}}]}
    }


def test_and_filters_empty_is_none() -> None:
    assert and_filters([]) is None


def test_boost_multiplies_topic_and_recency_factors() -> None:
    clause = {"match_all": {}}

    boosted = boost(clause)["function_score"]

    assert boosted["query"] == clause
    assert boosted["functions"] == [
        {"filter": {"term": {"is_comment": False}}, "weight": 3},
        {"filter": {"range": {"postdate": {"gte": "now/d-3y"}}}, "weight": 2},
    ]
    assert boosted["score_mode"] == "multiply"
    assert boosted["boost_mode"] == "multiply"


def test_sections_facet_is_never_scoped() -> None:
    for section, group in [(None, None), ("talks", None), ("talks", "desktop"), (None, "desktop")]:
        facets = plan_facets(SearchRequest(query_text="x", section=section, group=group))
        assert facets["sections"] == {"terms": {"field": "section", "size": 50}}


def test_groups_facet_scoped_to_requested_section() -> None:
    facets = plan_facets(SearchRequest(query_text="x", section="talks", group="desktop"))

    assert facets["groups"] == {
        "filter": {"term": {"section": "talks"}},
        "aggs": {"groups": {"terms": {"field": "group", "size": 50}}},
    }


def test_groups_facet_unscoped_without_section() -> None:
    facets = plan_facets(SearchRequest(query_text="x", group="desktop"))

    assert facets["groups"] == {"terms": {"field": "group", "size": 50}}


def test_highlight_declarations() -> None:
    highlight = plan_highlight()

    assert highlight["encoder"] == "html"
    assert highlight["pre_tags"] == ["<em class=search-hl>"]
    assert highlight["post_tags"] == ["</em>"]
    assert highlight["fields"]["title"] == {"number_of_fragments": 0}
    assert highlight["fields"]["topic_title"] == {"number_of_fragments": 0}
    assert highlight["fields"]["message"] == {
        "number_of_fragments": 1,
        "fragment_size": 250,
        "no_match_size": 250,
    }


def test_boost_wraps_filtered_query(index_client) -> None:
    request = SearchRequest(query_text="x", range=SearchRange.TOPICS)

    plan = build_query_plan(request, QueryTranslator(index_client))

    inner = plan.query["function_score"]["query"]
    assert inner == {
        "bool": {
            "must": AcceptedQuery(text="x").to_query(),
            "filter": [{"term": {"is_comment": False}}],
        }
    }


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------


def test_scenario_plain_relevance_search(index_client) -> None:
    request = SearchRequest(query_text="kernel panic")

    plan = build_query_plan(request, QueryTranslator(index_client))

    assert compose_filters(request).mandatory == []
    assert plan.query == boost(AcceptedQuery(text="kernel panic").to_query())
    assert plan.post_filter is None
    assert plan.sort == [{"_score": {"order": "desc"}}]
    assert plan.offset == 0
    assert plan.size == 50


def test_scenario_topics_within_last_year() -> None:
    request = SearchRequest(
        query_text="x", range=SearchRange.TOPICS, interval=SearchInterval.YEAR
    )

    assert [flt.to_query() for flt in compose_filters(request).mandatory] == [
        {"term": {"is_comment": False}},
        {"range": {"postdate": {"gte": "now/d-1y"}}},
    ]


def test_scenario_topics_started_by_user() -> None:
    request = SearchRequest(query_text="x", user=UserFilter(nick="alice", topic_author=True))

    assert compose_filters(request).mandatory == [
        FieldFilter(field="topic_author", operator="eq", value="alice")
    ]


def test_scenario_section_selected(index_client) -> None:
    request = SearchRequest(query_text="x", section="talks")

    plan = build_query_plan(request, QueryTranslator(index_client))

    assert plan.post_filter == {"term": {"section": "talks"}}
    assert plan.aggregations["groups"]["filter"] == {"term": {"section": "talks"}}
    assert "filter" not in plan.aggregations["sections"]


def test_scenario_oldest_first(index_client) -> None:
    request = SearchRequest(query_text="x", order=SearchOrder.DATE_OLD_TO_NEW)

    plan = build_query_plan(request, QueryTranslator(index_client))

    assert plan.sort == [{"postdate": {"order": "asc"}}]


def test_scenario_invalid_syntax_falls_back_to_phrase(rejecting_index_client) -> None:
    request = SearchRequest(query_text="a[b")

    plan = build_query_plan(request, QueryTranslator(rejecting_index_client))

    assert plan.query == boost(PhraseFallback(text="a[b").to_query())
    assert plan.query["function_score"]["query"]["multi_match"]["query"] == "a[b"


def test_plan_keeps_offset(index_client) -> None:
    plan = build_query_plan(
        SearchRequest(query_text="x", offset=100), QueryTranslator(index_client)
    )

    assert plan.offset == 100
