"""
Shared fixtures for the Twitter stream client tests.

No test talks to the network: requests.get / requests.post are patched and
return MagicMock responses built by the fixtures below.
"""

import json
from unittest.mock import MagicMock

import pytest

from general.project_dataclasses import BearerToken, StreamSettings

TWITTER_ENV = ["TWITTER_APP_NAME", "TWITTER_API_KEY", "TWITTER_API_SECRET", "TWITTER_ACCESS_TOKEN",
               "TWITTER_MAX_WORKERS", "TWITTER_MAX_PENDING"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep a developer's .env or shell credentials out of the tests."""
    for name in TWITTER_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def token() -> BearerToken:
    return BearerToken("bearer", "test-token")


@pytest.fixture
def settings(tmp_path) -> StreamSettings:
    return StreamSettings(str(tmp_path), max_workers=2, max_pending=4)


@pytest.fixture
def make_response():
    def _make(content=b"", status_code=200, lines=None):
        response = MagicMock()
        response.status_code = status_code
        if isinstance(content, dict):
            content = json.dumps(content).encode("utf-8")
        response.content = content
        response.text = content.decode("utf-8", "replace")
        if lines is not None:
            response.iter_lines.return_value = iter(lines)
        return response

    return _make


@pytest.fixture
def tweet_line():
    def _line(tweet_id: str, text: str = "hello") -> bytes:
        return json.dumps({"data": {"id": tweet_id, "text": text}}).encode("utf-8")

    return _line
