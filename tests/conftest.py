"""Shared fixtures for the project crawler test suite."""

from typing import Dict, Optional
from unittest.mock import MagicMock

import pytest
from requests.structures import CaseInsensitiveDict

from project_crawler.logging import close_logging

CRAWLER_ENV_VARS = (
    "GITHUB_ROOT_URL", "GITHUB_API_URL", "GITHUB_TOKEN", "GITHUB_USERNAME",
    "GITHUB_PASSWORD", "CRAWLER_REPOSITORY", "GITHUB_TIMEOUT", "GITHUB_MAX_RETRIES",
    "CRAWLER_EXCLUDE", "CRAWLER_PROJECTS", "LOG_LEVEL", "LOG_FILE", "LOG_FORMAT",
)


def _make_resp(status: int = 200, text: str = "[]", headers: Optional[Dict[str, str]] = None,
               content: Optional[bytes] = None):
    resp = MagicMock()
    resp.status_code = status
    resp.ok = status < 400
    resp.headers = CaseInsensitiveDict(headers or {})
    resp.text = text
    resp.content = text.encode("utf-8") if content is None else content
    return resp


@pytest.fixture
def make_resp():
    return _make_resp


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in CRAWLER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield
    close_logging()


@pytest.fixture
def no_sleep(monkeypatch):
    from project_crawler.repository import github_client
    sleeps = []
    monkeypatch.setattr(github_client.time, "sleep", sleeps.append)
    return sleeps
