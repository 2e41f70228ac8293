"""Logs provider construction."""

from collections.abc import Callable, Mapping
from types import MappingProxyType

from logsource.adapters.elasticsearch import ElasticSearchProvider
from logsource.adapters.interfaces import LogsProvider
from logsource.config import Settings
from logsource.domain.models import ELASTICSEARCH_PROVIDER_NAME, DataSourceConfig
from logsource.errors import UnsupportedProviderError

ProviderFactory = Callable[..., LogsProvider]

PROVIDERS: Mapping[str, ProviderFactory] = MappingProxyType(
    {
        ELASTICSEARCH_PROVIDER_NAME: ElasticSearchProvider,
    }
)


def new_logs_provider(datasource: DataSourceConfig, settings: Settings | None = None) -> LogsProvider:
    """Factory for the provider matching the data-source kind."""

    factory = PROVIDERS.get(datasource.type)
    if factory is None:
        raise UnsupportedProviderError(f"unsupported data source type={datasource.type}")
    return factory(datasource, settings=settings)
