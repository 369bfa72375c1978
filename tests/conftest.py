from pathlib import Path
import sys

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from autosuggest.client import MalformedResponseError, TransportError
from autosuggest.config import load_settings


class FakeSearchClient:
    """Stands in for SearchClient, replaying canned engine responses."""

    def __init__(self, search_response=None, mapping=None, error=None, index="orszagos_cimlista"):
        self.index = index
        self.search_calls = []
        self.mapping_calls = 0
        self._search_response = search_response if search_response is not None else {}
        self._mapping = mapping if mapping is not None else {}
        self._error = error

    def search(self, query):
        self.search_calls.append(query)
        if self._error is not None:
            raise self._error
        return self._search_response

    def get_mapping(self):
        self.mapping_calls += 1
        if self._error is not None:
            raise self._error
        return self._mapping


def buckets_response(*keys, field="telepules"):
    return {
        "took": 3,
        "aggregations": {
            f"unique_{field}": {
                "doc_count_error_upper_bound": 0,
                "buckets": [{"key": key, "doc_count": 1} for key in keys],
            }
        },
    }


def keyword_mapping(index="orszagos_cimlista", field="telepules"):
    return {
        index: {
            "mappings": {
                "properties": {
                    field: {"type": "text", "fields": {"keyword": {"type": "keyword"}}}
                }
            }
        }
    }


@pytest.fixture
def settings():
    return load_settings({
        "OPENSEARCH_HOST": "localhost",
        "OPENSEARCH_PORT": "9200",
        "OPENSEARCH_USER": "admin",
        "OPENSEARCH_PASSWORD": "secret",
    })


@pytest.fixture
def transport_error():
    return TransportError("OpenSearch replied 503: unavailable", status_code=503)


@pytest.fixture
def malformed_error():
    return MalformedResponseError("Could not decode OpenSearch response")
