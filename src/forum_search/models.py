from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

IS_COMMENT_FIELD = "is_comment"
DATE_FIELD = "postdate"
SCORE_FIELD = "_score"

FilterOperator = Literal["eq", "gte"]


@dataclass(frozen=True)
class FieldFilter:
    """Normalized filter condition on a single indexed field."""

    field: str
    operator: FilterOperator
    value: str | bool

    def to_query(self) -> dict[str, Any]:
        if self.operator == "gte":
            return {"range": {self.field: {"gte": self.value}}}
        return {"term": {self.field: self.value}}


class SearchRange(str, Enum):
    """Which kind of messages to search: topics, comments or both."""

    def __new__(cls, value: str, is_comment: bool | None, label: str) -> SearchRange:
        member = str.__new__(cls, value)
        member._value_ = value
        member.is_comment = is_comment
        member.label = label
        return member

    ALL = ("all", None, "topics and comments")
    TOPICS = ("topics", False, "topics only")
    COMMENTS = ("comments", True, "comments only")

    def filter_clause(self) -> FieldFilter | None:
        if self.is_comment is None:
            return None
        return FieldFilter(field=IS_COMMENT_FIELD, operator="eq", value=self.is_comment)


class SearchInterval(str, Enum):
    """How far back in time to search, as a date-math lower bound."""

    def __new__(cls, value: str, lower_bound: str | None, label: str) -> SearchInterval:
        member = str.__new__(cls, value)
        member._value_ = value
        member.lower_bound = lower_bound
        member.label = label
        return member

    MONTH = ("month", "now/h-1M", "month")
    THREE_MONTH = ("three_month", "now/d-3M", "three months")
    YEAR = ("year", "now/d-1y", "year")
    THREE_YEAR = ("three_year", "now/w-3y", "three years")
    ALL = ("all", None, "all time")

    def filter_clause(self) -> FieldFilter | None:
        if self.lower_bound is None:
            return None
        return FieldFilter(field=DATE_FIELD, operator="gte", value=self.lower_bound)


class SearchOrder(str, Enum):
    """Result ordering: relevance, or post date in either direction."""

    def __new__(cls, value: str, column: str, direction: str, label: str) -> SearchOrder:
        member = str.__new__(cls, value)
        member._value_ = value
        member.column = column
        member.direction = direction
        member.label = label
        return member

    RELEVANCE = ("relevance", SCORE_FIELD, "desc", "by relevance")
    DATE = ("date", DATE_FIELD, "desc", "by date: newest first")
    DATE_OLD_TO_NEW = ("date_old_to_new", DATE_FIELD, "asc", "by date: oldest first")

    def sort_clause(self) -> list[dict[str, dict[str, str]]]:
        return [{self.column: {"order": self.direction}}]


class UserFilter(BaseModel):
    """Restrict results to messages written by a user"""

    model_config = ConfigDict(frozen=True)

    nick: str = Field(min_length=1, description="Nickname of the user")
    topic_author: bool = Field(
        default=False,
        description="Match topics started by the user instead of messages written by them",
    )

    @field_validator("nick", mode="before")
    @classmethod
    def _strip_nick(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value


class SearchRequest(BaseModel):
    """What the user asked for. Built by the request-handling layer, never mutated."""

    model_config = ConfigDict(frozen=True)

    query_text: str = Field(description="Free-text query, may contain index syntax")
    offset: int = Field(default=0, ge=0, description="Pagination start")
    range: SearchRange = Field(default=SearchRange.ALL)
    interval: SearchInterval = Field(default=SearchInterval.ALL)
    order: SearchOrder = Field(default=SearchOrder.RELEVANCE)
    user: UserFilter | None = Field(default=None)
    section: str | None = Field(default=None)
    group: str | None = Field(default=None)

    @field_validator("section", "group", mode="before")
    @classmethod
    def _blank_as_missing(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value
