"""Shared test fixtures for azkit tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from http import HTTPStatus
from unittest.mock import MagicMock, patch

import pytest
import requests
from requests.structures import CaseInsensitiveDict

ResponseFactory = Callable[..., requests.Response]


def build_response(
    status: int = 200,
    *,
    json_body: object | None = None,
    text: str | None = None,
    headers: dict[str, str] | None = None,
    url: str = "https://example.invalid/",
) -> requests.Response:
    """Build a real ``requests.Response`` without touching the network."""
    resp = requests.Response()
    resp.status_code = status
    resp.url = url
    resp.encoding = "utf-8"
    resp.reason = HTTPStatus(status).phrase
    merged = dict(headers or {})
    if json_body is not None:
        resp._content = json.dumps(json_body).encode()
        merged.setdefault("Content-Type", "application/json")
    elif text is not None:
        resp._content = text.encode()
    else:
        resp._content = b""
    resp.headers = CaseInsensitiveDict(merged)
    return resp


@pytest.fixture()
def make_response() -> ResponseFactory:
    return build_response


@pytest.fixture(autouse=True)
def _mock_credential():
    """Prevent real Azure credential calls in every test."""
    mock_token = MagicMock()
    mock_token.token = "fake-token"
    cred = MagicMock()
    cred.get_token.return_value = mock_token
    with patch("azkit._auth.get_credential", return_value=cred):
        yield cred


@pytest.fixture(autouse=True)
def _no_sleep():
    """Skip retry and polling back-off delays."""
    # _transport and polling share the time module, one patch covers both.
    with patch("azkit._transport.time.sleep") as sleep:
        yield sleep


@pytest.fixture()
def http():
    """Patch the single HTTP entry point used by every client."""
    with patch("azkit._transport.requests.request") as request:
        yield request
