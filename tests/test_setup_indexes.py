from pathlib import Path
import sys

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import scripts.setup_indexes as setup_indexes
from autosuggest.client import IndexCreation, TransportError


class FakeIndexClient:
    def __init__(self, outcome):
        self.index = "orszagos_cimlista"
        self.calls = []
        self.closed = False
        self._outcome = outcome

    def create_index(self, settings, mappings):
        self.calls.append({"settings": settings, "mappings": mappings})
        return self._outcome

    def close(self):
        self.closed = True


def test_create_index_reports_added(capsys):
    client = FakeIndexClient(IndexCreation(created=True, status_code=200, body="{}"))

    assert setup_indexes.create_index(client, "telepules") is True

    assert "ADDED" in capsys.readouterr().out
    mappings = client.calls[0]["mappings"]
    assert mappings["properties"]["telepules"]["fields"]["keyword"] == {"type": "keyword"}


def test_create_index_skips_existing_index(capsys):
    body = '{"error":{"type":"resource_already_exists_exception"},"status":400}'
    client = FakeIndexClient(IndexCreation(created=False, status_code=400, body=body))

    assert setup_indexes.create_index(client, "telepules") is True
    assert "SKIPPED" in capsys.readouterr().out


def test_create_index_reports_failure(capsys):
    client = FakeIndexClient(IndexCreation(created=False, status_code=401, body="Unauthorized"))

    assert setup_indexes.create_index(client, "telepules") is False
    assert "ERROR" in capsys.readouterr().out


def test_main_exits_on_missing_configuration(monkeypatch, capsys):
    for key in ("OPENSEARCH_HOST", "OPENSEARCH_PORT", "OPENSEARCH_USER", "OPENSEARCH_PASSWORD"):
        monkeypatch.delenv(key, raising=False)

    with pytest.raises(SystemExit) as excinfo:
        setup_indexes.main()

    assert excinfo.value.code == 1
    assert "OPENSEARCH_HOST" in capsys.readouterr().out


def test_main_creates_index_and_closes_client(monkeypatch, settings):
    client = FakeIndexClient(IndexCreation(created=True, status_code=201, body="{}"))
    monkeypatch.setattr(setup_indexes, "load_settings", lambda: settings)
    monkeypatch.setattr(setup_indexes.SearchClient, "from_settings", classmethod(lambda cls, s: client))

    setup_indexes.main()

    assert client.closed is True
    assert len(client.calls) == 1


class UnreachableIndexClient(FakeIndexClient):
    def create_index(self, settings, mappings):
        raise TransportError("PUT http://localhost:9200/orszagos_cimlista failed: refused")


def test_create_index_reports_unreachable_engine(capsys):
    client = UnreachableIndexClient(None)

    assert setup_indexes.create_index(client, "telepules") is False
    assert "ERROR: could not reach OpenSearch" in capsys.readouterr().out


def test_main_exits_when_engine_unreachable(monkeypatch, settings):
    client = UnreachableIndexClient(None)
    monkeypatch.setattr(setup_indexes, "load_settings", lambda: settings)
    monkeypatch.setattr(setup_indexes.SearchClient, "from_settings", classmethod(lambda cls, s: client))

    with pytest.raises(SystemExit) as excinfo:
        setup_indexes.main()

    assert excinfo.value.code == 1
    assert client.closed is True


def test_main_exits_on_invalid_configuration(monkeypatch, capsys):
    monkeypatch.setenv("OPENSEARCH_HOST", "localhost")
    monkeypatch.setenv("OPENSEARCH_PORT", "not-a-port")
    monkeypatch.setenv("OPENSEARCH_USER", "admin")
    monkeypatch.setenv("OPENSEARCH_PASSWORD", "secret")

    with pytest.raises(SystemExit) as excinfo:
        setup_indexes.main()

    assert excinfo.value.code == 1
    assert "OPENSEARCH_PORT" in capsys.readouterr().out
