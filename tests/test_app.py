"""
Tests for application assembly: settings, redirect documents and the
order in which handlers are consulted.
"""

import logging

import pytest
from starlette.testclient import TestClient

from urlshort.core.exceptions import RedirectConfigError
from urlshort.core.setting import DEFAULT_PATHS_TO_URLS, Settings
from urlshort.main import create_app, load_redirect_document


@pytest.fixture
def yaml_file(tmp_path, redirect_yaml):
    path = tmp_path / "redirects.yaml"
    path.write_bytes(redirect_yaml)
    return path


class TestSettings:
    """Environment-driven settings."""

    def test_defaults(self):
        """Without overrides only the built-in mapping is configured."""
        app_settings = Settings()

        assert app_settings.PATHS_TO_URLS == DEFAULT_PATHS_TO_URLS
        assert app_settings.REDIRECTS_YAML_FILE is None
        assert app_settings.STRICT_REDIRECT_CONFIG is False

    def test_paths_from_environment(self, monkeypatch):
        """PATHS_TO_URLS is read as a JSON object."""
        monkeypatch.setenv("PATHS_TO_URLS", '{"/a": "https://a.example"}')

        assert Settings().PATHS_TO_URLS == {"/a": "https://a.example"}


class TestCreateApp:
    """Composition of the served application."""

    def test_map_redirects_are_served(self, database):
        """Configured mapping paths redirect."""
        client = TestClient(create_app(Settings(
            PATHS_TO_URLS={"/urlshort-go": "https://github.com/gophercises/urlshort"}
        )))

        response = client.get("/urlshort-go", follow_redirects=False)

        assert response.status_code == 301
        assert response.headers["location"] == "https://github.com/gophercises/urlshort"

    def test_unclaimed_path_reaches_fastapi(self, database):
        """Paths no handler claims are served by the FastAPI application."""
        client = TestClient(create_app(Settings(PATHS_TO_URLS={})))

        assert client.get("/health").json() == {"status": "healthy"}
        assert client.get("/unknown", follow_redirects=False).status_code == 404

    def test_yaml_is_consulted_before_map(self, database, yaml_file):
        """A YAML entry shadows the same path in the mapping."""
        client = TestClient(create_app(Settings(
            PATHS_TO_URLS={"/dup": "https://map.example", "/only-map": "https://map.example"},
            REDIRECTS_YAML_FILE=yaml_file,
        )))

        assert client.get("/dup", follow_redirects=False).headers["location"] == "https://a.example"
        assert client.get("/only-map", follow_redirects=False).headers["location"] == "https://map.example"
        assert client.get("/some-path", follow_redirects=False).status_code == 301

    def test_json_document_is_loaded(self, database, tmp_path):
        """A configured JSON document is served."""
        json_file = tmp_path / "redirects.json"
        json_file.write_text('[{"path": "/j", "url": "https://j.example"}]')

        client = TestClient(create_app(Settings(REDIRECTS_JSON_FILE=json_file)))

        assert client.get("/j", follow_redirects=False).headers["location"] == "https://j.example"

    def test_database_redirects_sit_behind_configured_ones(self, database):
        """Stored redirects only apply to paths the mapping does not claim."""
        client = TestClient(create_app(Settings(PATHS_TO_URLS={"/x": "https://map.example"})))
        client.post("/redirects", json={"path": "/x", "url": "https://db.example"})
        client.post("/redirects", json={"path": "/y", "url": "https://db.example"})

        assert client.get("/x", follow_redirects=False).headers["location"] == "https://map.example"
        assert client.get("/y", follow_redirects=False).headers["location"] == "https://db.example"


class TestRequestLogging:
    """One log line per request, naming the layer that answered."""

    def test_log_names_answering_layer(self, database, yaml_file, caplog):
        """yaml, map, database and app answers are told apart."""
        with caplog.at_level(logging.INFO, logger="urlshort"):
            client = TestClient(create_app(Settings(
                PATHS_TO_URLS={"/m": "https://map.example"},
                REDIRECTS_YAML_FILE=yaml_file,
            )))
            client.post("/redirects", json={"path": "/stored", "url": "https://db.example"})
            client.get("/some-path", follow_redirects=False)
            client.get("/m", follow_redirects=False)
            client.get("/stored", follow_redirects=False)
            client.get("/health")

        messages = [record.getMessage() for record in caplog.records]
        assert any("GET /some-path 301" in m and m.endswith("yaml IP:testclient") for m in messages)
        assert any("GET /m 301" in m and m.endswith("map IP:testclient") for m in messages)
        assert any("GET /stored 301" in m and m.endswith("database IP:testclient") for m in messages)
        assert any("GET /health 200" in m and m.endswith("app IP:testclient") for m in messages)

    def test_process_time_header(self, database):
        """Every response, redirects included, carries X-Process-Time."""
        client = TestClient(create_app(Settings(PATHS_TO_URLS={"/m": "https://map.example"})))

        assert "x-process-time" in client.get("/health").headers
        assert "x-process-time" in client.get("/m", follow_redirects=False).headers


class TestBrokenRedirectDocuments:
    """Startup behavior for documents that do not fully decode."""

    def test_invalid_yaml_is_served_degraded(self, database, tmp_path, caplog):
        """By default the error is logged and the app still serves."""
        bad = tmp_path / "bad.yaml"
        bad.write_bytes(b"- path: /a\n  url: [unclosed\n")

        with caplog.at_level(logging.WARNING, logger="urlshort"):
            app = create_app(Settings(PATHS_TO_URLS={}, REDIRECTS_YAML_FILE=bad))

        assert "bad.yaml" in caplog.text
        assert TestClient(app).get("/health").status_code == 200

    def test_strict_config_aborts(self, tmp_path):
        """STRICT_REDIRECT_CONFIG turns a decode error into a startup failure."""
        bad = tmp_path / "bad.yaml"
        bad.write_bytes(b"- path: /a\n  url: [unclosed\n")

        with pytest.raises(RedirectConfigError):
            create_app(Settings(REDIRECTS_YAML_FILE=bad, STRICT_REDIRECT_CONFIG=True))

    def test_strict_config_accepts_scalar_values(self, database, tmp_path):
        """Empty and non-string scalars are not decode errors, even when strict."""
        doc = tmp_path / "scalars.yaml"
        doc.write_bytes(b"- path: /empty\n  url:\n- path: /t\n  url: true\n")

        client = TestClient(create_app(Settings(REDIRECTS_YAML_FILE=doc, STRICT_REDIRECT_CONFIG=True)))

        assert client.get("/t", follow_redirects=False).headers["location"] == "true"

    def test_missing_document_raises(self, tmp_path):
        """A configured file that does not exist is reported."""
        with pytest.raises(FileNotFoundError):
            load_redirect_document(tmp_path / "absent.yaml")
