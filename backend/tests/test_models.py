from dataclasses import FrozenInstanceError
from datetime import datetime, timezone

import pytest

from logsource.domain.models import DataSourceConfig, ElasticSearchQuery, FieldFilter, HTTPConfig, Logs, QueryType


def test_index_name_resolves_date_placeholders() -> None:
    es_query = ElasticSearchQuery(query_type=QueryType.Field, index="nginx-YYYY.MM.dd")

    assert es_query.index_name(datetime(2024, 1, 2, 8, 30, tzinfo=timezone.utc)) == "nginx-2024.01.02"


def test_index_name_without_placeholders_is_unchanged() -> None:
    es_query = ElasticSearchQuery(query_type=QueryType.Field, index="app-logs-*")

    assert es_query.index_name() == "app-logs-*"


def test_empty_index_targets_all_indices() -> None:
    assert ElasticSearchQuery(query_type=QueryType.Field).index_name() == "_all"


def test_query_model_is_immutable() -> None:
    es_query = ElasticSearchQuery(query_type=QueryType.Field, query_filter=(FieldFilter(field="level", value="error"),))

    with pytest.raises(FrozenInstanceError):
        es_query.raw_json = "{}"  # type: ignore[misc]


def test_datasource_defaults() -> None:
    datasource = DataSourceConfig(http=HTTPConfig(url=" http://es:9200/ "))

    assert datasource.type == "ElasticSearch"
    assert datasource.http.url == "http://es:9200"
    assert datasource.auth.user == ""
    assert datasource.labels == {}
    assert "changeme" not in repr(DataSourceConfig(http=HTTPConfig(url="http://es:9200"), auth={"user": "u", "password": "changeme"}))


def test_logs_batch_defaults() -> None:
    batch = Logs(provider_name="ElasticSearch")

    assert batch.metric == {}
    assert batch.message == []


@pytest.mark.parametrize("index", ["address-logs", "middleware-*", "hidden", "COMM-audit"])
def test_index_name_leaves_plain_names_untouched(index) -> None:
    es_query = ElasticSearchQuery(query_type=QueryType.Field, index=index)

    assert es_query.index_name(datetime(2024, 1, 2, tzinfo=timezone.utc)) == index


@pytest.mark.parametrize(
    ("template", "expected"),
    [
        ("middleware-YYYY.MM.dd", "middleware-2024.01.02"),
        ("app-YYYY-MM-dd", "app-2024-01-02"),
        ("app-YYYYMMdd", "app-20240102"),
    ],
)
def test_index_name_resolves_template_separators(template, expected) -> None:
    es_query = ElasticSearchQuery(query_type=QueryType.Field, index=template)

    assert es_query.index_name(datetime(2024, 1, 2, tzinfo=timezone.utc)) == expected
