"""Elasticsearch logs provider."""

import copy
from functools import partial
from typing import Any

import httpx
import structlog

from logsource.adapters.health import check_health
from logsource.adapters.interfaces import LogsProvider
from logsource.config import Settings, get_settings
from logsource.domain.models import ELASTICSEARCH_PROVIDER_NAME, DataSourceConfig, LogQueryOptions, Logs
from logsource.errors import BackendQueryError, MalformedResultError, ProviderConfigurationError, TransportError
from logsource.services.labels import common_key_value_pairs
from logsource.services.normalization import Summarizer, build_logs, extract_hits, normalize_hits
from logsource.services.translation import build_search_body

logger = structlog.get_logger()


def _error_reason(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text[:500]
    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict):
        return str(error.get("reason") or error.get("type") or error)
    if error:
        return str(error)
    return response.text[:500]


class ElasticSearchProvider(LogsProvider):
    """Run log queries against an Elasticsearch cluster over its REST API."""

    provider_name = ELASTICSEARCH_PROVIDER_NAME

    def __init__(
        self,
        datasource: DataSourceConfig,
        *,
        client: httpx.Client | None = None,
        summarize: Summarizer | None = None,
        settings: Settings | None = None,
    ) -> None:
        settings = settings or get_settings()
        if not datasource.http.url:
            raise ProviderConfigurationError(f"data source {datasource.name or datasource.id!r} has no http url")

        self.name = datasource.name
        self.url = datasource.http.url
        self.username = datasource.auth.user
        self._password = datasource.auth.password
        self.verify = settings.default_verify_ssl if datasource.verify_ssl is None else datasource.verify_ssl
        self.timeout = datasource.http.timeout or settings.default_query_timeout_seconds
        self._external_labels = copy.deepcopy(datasource.labels)
        self._summarize = summarize or partial(common_key_value_pairs, exclude=tuple(settings.metric_excluded_fields))
        self._owns_client = client is None
        self._client = client or httpx.Client(
            base_url=self.url,
            auth=(self.username, self._password) if self.username else None,
            verify=self.verify,
            timeout=self.timeout,
        )

    def query(self, options: LogQueryOptions, *, timeout: float | None = None) -> tuple[list[Logs], int]:
        es_query = options.elastic_search
        body = build_search_body(options)
        index = es_query.index_name()
        logger.info("es_log_query", datasource=self.name, index=index, query_type=getattr(es_query.query_type, "value", es_query.query_type))

        try:
            response = self._client.post(
                f"/{index}/_search",
                json=body,
                timeout=timeout if timeout is not None else self.timeout,
            )
        except httpx.TransportError as exc:
            logger.warning("es_log_query_unreachable", datasource=self.name, index=index, error=str(exc))
            raise TransportError(f"failed to query Elasticsearch index {index}: {exc}") from exc

        if response.status_code >= 400:
            reason = _error_reason(response)
            logger.warning("es_log_query_rejected", datasource=self.name, index=index, status_code=response.status_code, reason=reason)
            raise BackendQueryError(response.status_code, reason)

        try:
            payload = response.json()
        except ValueError as exc:
            raise MalformedResultError("search response is not valid JSON") from exc

        documents = normalize_hits(extract_hits(payload))
        logger.debug("es_log_query_done", datasource=self.name, index=index, hits=len(documents))
        return [build_logs(documents, self._summarize, self.provider_name)], len(documents)

    def check(self) -> bool:
        return check_health(self.url, username=self.username, password=self._password, verify=self.verify)

    def get_external_labels(self) -> dict[str, Any]:
        return copy.deepcopy(self._external_labels)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()
