import json
import os
from pathlib import Path

import pytest

os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ.setdefault("DEFAULT_QUERY_TIMEOUT_SECONDS", "5")

from logsource.config import get_settings  # noqa: E402
from logsource.domain.models import AuthConfig, DataSourceConfig, HTTPConfig  # noqa: E402

ES_URL = "http://es.test:9200"
FIXTURES = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def datasource() -> DataSourceConfig:
    return DataSourceConfig(
        id="ds-1",
        name="prod-logs",
        http=HTTPConfig(url=f"{ES_URL}/"),
        auth=AuthConfig(user="elastic", password="changeme"),
        labels={"cluster": "prod", "team": {"name": "payments"}},
    )


@pytest.fixture
def search_response() -> dict:
    return json.loads((FIXTURES / "es_search_response.json").read_text(encoding="utf-8"))
