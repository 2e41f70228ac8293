"""Search result normalization."""

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from logsource.domain.models import ELASTICSEARCH_PROVIDER_NAME, Logs
from logsource.errors import MalformedResultError

Summarizer = Callable[[Sequence[Mapping[str, Any]]], dict[str, str]]


def extract_hits(body: Any) -> list[Any]:
    """Return ``hits.hits`` from a ``_search`` response body."""

    if not isinstance(body, dict):
        raise MalformedResultError("search response is not a JSON object")
    hits = body.get("hits")
    if not isinstance(hits, dict) or "hits" not in hits:
        raise MalformedResultError("search response has no hits envelope")
    return hits["hits"]


def normalize_hits(raw_hits: Any) -> list[dict[str, Any]]:
    """Keep each hit's source document, dropping score, id and index metadata."""

    if not isinstance(raw_hits, list):
        raise MalformedResultError(f"hits must be a list, got {type(raw_hits).__name__}")

    documents: list[dict[str, Any]] = []
    for position, hit in enumerate(raw_hits):
        if not isinstance(hit, dict):
            raise MalformedResultError(f"hit {position} is not an object")
        source = hit.get("_source")
        if not isinstance(source, dict):
            raise MalformedResultError(f"hit {position} has no _source document")
        documents.append(source)
    return documents


def build_logs(documents: list[dict[str, Any]], summarize: Summarizer, provider_name: str = ELASTICSEARCH_PROVIDER_NAME) -> Logs:
    """Aggregate a whole result set into a single batch."""

    return Logs(provider_name=provider_name, metric=summarize(documents), message=documents)
