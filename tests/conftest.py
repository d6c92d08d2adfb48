from __future__ import annotations

import io

import pytest
import requests
from click.testing import CliRunner


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


def _build_response(
    body: bytes = b"",
    status_code: int = 200,
    headers: dict[str, str] | None = None,
    encoding: str | None = None,
    url: str = "http://example.com/page.html",
) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response.raw = io.BytesIO(body)
    response.headers.update(headers or {})
    response.encoding = encoding
    response.url = url
    return response


@pytest.fixture()
def make_response():
    """Builds `requests.Response` objects backed by an in-memory body."""
    return _build_response


class FakeSession:
    """Stands in for `requests.Session`, replaying one outcome per call."""

    def __init__(self, outcome: requests.Response | Exception):
        self.outcome = outcome
        self.calls: list[tuple[str, dict]] = []
        self.closed = False

    def get(self, url: str, **kwargs):
        self.calls.append((url, kwargs))
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome

    def close(self):
        self.closed = True


@pytest.fixture()
def fake_session(monkeypatch):
    """Installs a `FakeSession` for every session built by the fetcher."""

    def _install(outcome: requests.Response | Exception) -> FakeSession:
        session = FakeSession(outcome)
        monkeypatch.setattr("html_analyzer.fetcher.build_session", lambda config: session)
        return session

    return _install
