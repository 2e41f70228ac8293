"""Domain schemas and enums."""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

ELASTICSEARCH_PROVIDER_NAME = "ElasticSearch"

_INDEX_DATE_TEMPLATE = re.compile(r"YYYY(?P<sep>[.\-_]?)MM(?P=sep)dd")


class QueryType(str, Enum):
    """Translation path for a log query."""

    RawJson = "RawJson"
    Field = "Field"


class FilterCondition(str, Enum):
    """Combinator applied across field filters."""

    And = "And"
    Or = "Or"
    Not = "Not"


class WildcardMode(int, Enum):
    """Per-filter match strategy."""

    Exact = 0
    Substring = 1


@dataclass(frozen=True)
class FieldFilter:
    field: str
    value: Any


@dataclass(frozen=True)
class ElasticSearchQuery:
    """Backend-agnostic description of what to search for.

    Enum-typed attributes also accept raw values (``"Or"``, ``1``) as they
    arrive from rule definitions; they are coerced during translation.
    """

    query_type: QueryType | str
    index: str = ""
    raw_json: str = ""
    query_filter: tuple[FieldFilter, ...] = ()
    filter_condition: FilterCondition | str = FilterCondition.And
    query_wildcard: WildcardMode | int = WildcardMode.Exact

    def index_name(self, now: datetime | None = None) -> str:
        """Resolve a ``YYYY.MM.dd`` date template in the index name.

        Only a contiguous ``YYYY<sep>MM<sep>dd`` group is substituted, so
        plain names containing ``dd`` or ``MM`` are left untouched.
        """

        if not self.index:
            return "_all"
        moment = now or datetime.now(timezone.utc)
        return _INDEX_DATE_TEMPLATE.sub(
            lambda match: moment.strftime(f"%Y{match.group('sep')}%m{match.group('sep')}%d"),
            self.index,
        )


@dataclass(frozen=True)
class LogQueryOptions:
    elastic_search: ElasticSearchQuery
    start_at: str | datetime
    end_at: str | datetime
    size: int | None = None


class Logs(BaseModel):
    """One normalized result batch."""

    provider_name: str
    metric: dict[str, str] = Field(default_factory=dict)
    message: list[dict[str, Any]] = Field(default_factory=list)


class HTTPConfig(BaseModel):
    url: str
    timeout: float | None = None

    @field_validator("url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.strip().rstrip("/")


class AuthConfig(BaseModel):
    user: str = ""
    password: str = Field(default="", repr=False)


class DataSourceConfig(BaseModel):
    """Connection settings for one log data source."""

    id: str = ""
    name: str = ""
    type: str = ELASTICSEARCH_PROVIDER_NAME
    http: HTTPConfig
    auth: AuthConfig = Field(default_factory=AuthConfig)
    labels: dict[str, Any] = Field(default_factory=dict)
    verify_ssl: bool | None = None
