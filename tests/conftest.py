"""Configuration for pytest fixtures used in ai-cli-apps tests."""

from __future__ import annotations

import threading
import time
from collections.abc import Generator
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Callable

import pytest

from ai_cli_apps.config import AppConfig
from ai_cli_apps.models import BootstrapScript, ToolDescriptor


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """An empty home directory with the XDG variables unset."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for var in ("XDG_CONFIG_HOME", "XDG_DATA_HOME", "XDG_CACHE_HOME"):
        monkeypatch.delenv(var, raising=False)
    return home


@pytest.fixture
def make_descriptor() -> Callable[..., ToolDescriptor]:
    """Build a ToolDescriptor for a fictional ``testtool``, overriding any field."""

    def _make(**overrides) -> ToolDescriptor:
        fields = {
            "name": "Test Tool",
            "binary_name": "testtool",
            "install_strategy": BootstrapScript("https://example.com/install.sh"),
            "check_command": ("testtool", "--version"),
        }
        fields.update(overrides)
        return ToolDescriptor(**fields)

    return _make


class _Handler(BaseHTTPRequestHandler):
    def do_GET(self) -> None:  # noqa: N802
        status, body, delay = self.server.routes.get(self.path, (404, '{"error": "Not found"}', 0.0))
        if delay:
            time.sleep(delay)
        data = body.encode()
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(data)))
        self.end_headers()
        self.wfile.write(data)

    def log_message(self, format: str, *args) -> None:  # noqa: A002
        pass


class MockServer(ThreadingHTTPServer):
    """Local HTTP server answering GET requests from a ``routes`` table.

    ``routes[path] = (status, body, delay_seconds)``; unknown paths get a 404.
    """

    daemon_threads = True

    def __init__(self) -> None:
        super().__init__(("127.0.0.1", 0), _Handler)
        self.routes: dict[str, tuple[int, str, float]] = {}

    @property
    def url(self) -> str:
        return f"http://127.0.0.1:{self.server_port}"

    def add(self, path: str, body: str, status: int = 200, delay: float = 0.0) -> None:
        self.routes[path] = (status, body, delay)


@pytest.fixture
def mock_server(monkeypatch: pytest.MonkeyPatch) -> Generator[MockServer, None, None]:
    for var in ("HTTP_PROXY", "http_proxy", "HTTPS_PROXY", "https_proxy", "ALL_PROXY", "all_proxy"):
        monkeypatch.delenv(var, raising=False)
    server = MockServer()
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server
    server.shutdown()
    server.server_close()


@pytest.fixture
def app_config(mock_server: MockServer) -> AppConfig:
    """Configuration pointing every remote channel at the mock server."""
    return AppConfig(
        npm_registry=mock_server.url,
        github_api=mock_server.url,
        timeout=5.0,
        refresh_brew=False,
    )
