"""HTTP transport with 429 / 5xx retry handling."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping

import requests

from azkit.exceptions import ServiceRequestError, raise_for_response
from azkit.settings import settings

logger = logging.getLogger(__name__)

RETRYABLE_STATUS = frozenset({408, 429, 500, 502, 503, 504})


def _retry_delay(resp: requests.Response, attempt: int) -> float:
    """Seconds to wait before the next attempt.

    Honours ``Retry-After`` (capped at ``settings.retry_after_cap``) and
    falls back to exponential back-off (1, 2, 4, ...).
    """
    retry_header = resp.headers.get("Retry-After")
    if retry_header:
        try:
            return float(min(int(retry_header), settings.retry_after_cap))
        except (TypeError, ValueError):
            pass
    return float(2**attempt)


def send(
    method: str,
    url: str,
    *,
    headers: Mapping[str, str] | None = None,
    params: Mapping[str, str] | None = None,
    data: bytes | None = None,
    json: object | None = None,
    expected: tuple[int, ...] | None = None,
    raise_on_error: bool = True,
) -> requests.Response:
    """Send one request, retrying throttled and transient failures.

    Non-retryable error statuses raise the matching
    :class:`~azkit.exceptions.HttpResponseError` unless *raise_on_error* is
    false.  When *expected* is given, any other success status also raises.
    """
    max_retries = settings.max_retries
    resp: requests.Response | None = None
    for attempt in range(max_retries):
        try:
            resp = requests.request(
                method,
                url,
                headers=dict(headers or {}),
                params=dict(params) if params else None,
                data=data,
                json=json,
                timeout=settings.request_timeout,
            )
        except (requests.ConnectionError, requests.Timeout) as exc:
            if attempt + 1 >= max_retries:
                raise ServiceRequestError(f"{method} {url} failed: {exc}") from exc
            wait_time = 2**attempt
            logger.warning(
                "%s %s failed (%s), retrying in %ss (attempt %s/%s)",
                method,
                url,
                type(exc).__name__,
                wait_time,
                attempt + 1,
                max_retries,
            )
            time.sleep(wait_time)
            continue
        except requests.RequestException as exc:
            raise ServiceRequestError(f"{method} {url} failed: {exc}") from exc

        if resp.status_code in RETRYABLE_STATUS and attempt + 1 < max_retries:
            retry_after = _retry_delay(resp, attempt)
            logger.warning(
                "%s %s returned %s, retrying in %ss (attempt %s/%s)",
                method,
                url,
                resp.status_code,
                retry_after,
                attempt + 1,
                max_retries,
            )
            time.sleep(retry_after)
            continue
        break

    if resp is None:
        raise ServiceRequestError(f"{method} {url} failed: no response")

    if raise_on_error:
        raise_for_response(resp)
        if expected is not None and resp.status_code not in expected:
            raise ServiceRequestError(
                f"{method} {url} returned unexpected status {resp.status_code}"
            )
    logger.debug("%s %s -> %s", method, url, resp.status_code)
    return resp
