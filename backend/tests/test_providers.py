import pytest

from logsource.adapters.elasticsearch import ElasticSearchProvider
from logsource.domain.models import DataSourceConfig, HTTPConfig
from logsource.errors import UnsupportedProviderError
from logsource.services.providers import PROVIDERS, new_logs_provider


def test_new_logs_provider_elasticsearch(datasource) -> None:
    provider = new_logs_provider(datasource)
    try:
        assert isinstance(provider, ElasticSearchProvider)
    finally:
        provider.close()


def test_new_logs_provider_rejects_unknown_kind() -> None:
    datasource = DataSourceConfig(type="Loki", http=HTTPConfig(url="http://loki:3100"))

    with pytest.raises(UnsupportedProviderError, match="Loki"):
        new_logs_provider(datasource)


def test_provider_map_is_read_only() -> None:
    with pytest.raises(TypeError):
        PROVIDERS["Other"] = ElasticSearchProvider  # type: ignore[index]
