from __future__ import annotations

import pytest

from codeplex_discussions.http_client import HttpClient, HttpConfig
from pages import FakeSession

SETTINGS_ENV_VARS = (
    "CODEPLEX_FORUMS",
    "PAGE_SIZE",
    "OUTPUT_FOLDER",
    "LOG_FILE_NAME",
    "HTTP_MAX_RETRIES",
    "HTTP_RETRY_DELAY_SEC",
    "HTTP_TIMEOUT_SEC",
    "HTTP_USER_AGENT",
)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def make_http():
    def _make(routes: dict, max_retries: int = 10) -> tuple[HttpClient, FakeSession]:
        session = FakeSession(routes)
        http = HttpClient(
            HttpConfig(max_retries=max_retries, retry_delay_sec=0.0, user_agent="test"),
            session=session,  # type: ignore[arg-type]
        )
        return http, session

    return _make
