"""Translate backend-agnostic log queries into Elasticsearch query DSL."""

import base64
from datetime import datetime, timezone
from enum import Enum
from typing import Any, TypeVar

from dateutil.parser import isoparse

from logsource.domain.models import (
    ElasticSearchQuery,
    FieldFilter,
    FilterCondition,
    LogQueryOptions,
    QueryType,
    WildcardMode,
)
from logsource.errors import (
    EmptyQueryError,
    InvalidTimeRangeError,
    QueryValidationError,
    UndefinedFilterConditionError,
    UndefinedQueryTypeError,
    UndefinedWildcardModeError,
)

TIMESTAMP_FIELD = "@timestamp"

E = TypeVar("E", bound=Enum)


def _coerce(enum_cls: type[E], value: Any, error_cls: type[QueryValidationError]) -> E:
    if isinstance(value, enum_cls):
        return value
    # bool is an int subclass and never a valid enum value here.
    if isinstance(value, bool):
        raise error_cls(value)
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise error_cls(value) from exc


def _render_bound(value: str | datetime) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def _parse_bound(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, str):
        try:
            moment = isoparse(value)
        except ValueError:
            return None
    else:
        return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def time_range_clause(start_at: str | datetime, end_at: str | datetime) -> dict[str, Any]:
    """Inclusive ``@timestamp`` range; rejects ISO-8601 bounds that are out of order.

    Bounds in date-math form (``now-5m``) are passed through unchecked.
    """

    start, end = _parse_bound(start_at), _parse_bound(end_at)
    if start is not None and end is not None and start > end:
        raise InvalidTimeRangeError(str(start_at), str(end_at))
    return {"range": {TIMESTAMP_FIELD: {"gte": _render_bound(start_at), "lte": _render_bound(end_at)}}}


def _pattern_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def field_clause(query_filter: FieldFilter, wildcard: WildcardMode) -> dict[str, Any]:
    if wildcard is WildcardMode.Exact:
        return {"match": {query_filter.field: query_filter.value}}
    if wildcard is WildcardMode.Substring:
        return {"wildcard": {query_filter.field: f"*{_pattern_value(query_filter.value)}*"}}
    raise UndefinedWildcardModeError(wildcard)


def combine(clauses: list[dict[str, Any]], condition: FilterCondition) -> dict[str, Any]:
    """Bool-query fragment applying the combinator to the per-field clauses."""

    if condition is FilterCondition.Or:
        return {"should": clauses, "minimum_should_match": 1}
    if condition is FilterCondition.And:
        return {"must": clauses}
    if condition is FilterCondition.Not:
        return {"must_not": clauses}
    raise UndefinedFilterConditionError(condition)


def raw_query(raw_json: str) -> dict[str, Any]:
    """Wrap raw query text unmodified; Elasticsearch parses it server-side."""

    if not raw_json or not raw_json.strip():
        raise EmptyQueryError()
    encoded = base64.b64encode(raw_json.encode("utf-8")).decode("ascii")
    return {"wrapper": {"query": encoded}}


def field_query(es_query: ElasticSearchQuery, start_at: str | datetime, end_at: str | datetime) -> dict[str, Any]:
    bool_query: dict[str, Any] = {}
    if es_query.query_filter:
        wildcard = _coerce(WildcardMode, es_query.query_wildcard, UndefinedWildcardModeError)
        clauses = [field_clause(item, wildcard) for item in es_query.query_filter]
        condition = _coerce(FilterCondition, es_query.filter_condition, UndefinedFilterConditionError)
        bool_query.update(combine(clauses, condition))

    # The time bound is conjoined outside the Or/And/Not group.
    bool_query.setdefault("must", []).append(time_range_clause(start_at, end_at))
    return {"bool": bool_query}


def translate(es_query: ElasticSearchQuery, start_at: str | datetime, end_at: str | datetime) -> dict[str, Any]:
    """Build the Elasticsearch query clause for a log query."""

    query_type = _coerce(QueryType, es_query.query_type, UndefinedQueryTypeError)
    if query_type is QueryType.RawJson:
        return raw_query(es_query.raw_json)
    return field_query(es_query, start_at, end_at)


def build_search_body(options: LogQueryOptions) -> dict[str, Any]:
    """Build a complete ``_search`` request body."""

    body: dict[str, Any] = {"query": translate(options.elastic_search, options.start_at, options.end_at)}
    if options.size is not None:
        body["size"] = options.size
    return body
