"""Long-running operation polling.

An ARM or data-plane call that answers ``201``/``202`` with an
``Azure-AsyncOperation``, ``Operation-Location`` or ``Location`` header is
not done yet.  :class:`LROPoller` follows that header until the operation
reaches a terminal state, sleeping ``Retry-After`` seconds between polls.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from typing import Any, Generic, TypeVar

import requests

from azkit._transport import send
from azkit.exceptions import OperationFailedError
from azkit.settings import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

SUCCEEDED = "Succeeded"
FAILED = "Failed"
CANCELED = "Canceled"
IN_PROGRESS = "InProgress"

_TERMINAL = {"succeeded": SUCCEEDED, "failed": FAILED, "canceled": CANCELED, "cancelled": CANCELED}


def _normalize_status(raw: str | None) -> str:
    if not raw:
        return IN_PROGRESS
    return _TERMINAL.get(raw.lower(), raw)


def _json_or_none(resp: requests.Response) -> dict | None:
    if not resp.content:
        return None
    try:
        body = resp.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None


def _body_status(body: dict | None) -> str | None:
    if not body:
        return None
    status = body.get("status")
    if status is None:
        props = body.get("properties")
        if isinstance(props, dict):
            status = props.get("provisioningState")
    return status


class LROPoller(Generic[T]):
    """Poll a long-running operation to completion.

    *deserialize* turns the final JSON body into the caller's result type;
    without it :meth:`result` returns the raw dict (or ``None`` when the
    operation has no body, e.g. a delete).
    """

    def __init__(
        self,
        initial: requests.Response,
        *,
        method: str,
        resource_url: str,
        headers: Mapping[str, str],
        deserialize: Callable[[dict], T] | None = None,
        polling_interval: float | None = None,
    ) -> None:
        self._method = method.upper()
        self._resource_url = resource_url
        self._headers = dict(headers)
        self._deserialize = deserialize
        self._interval = settings.polling_interval if polling_interval is None else polling_interval

        self._async_url = initial.headers.get("Azure-AsyncOperation") or initial.headers.get(
            "Operation-Location"
        )
        self._location_url = initial.headers.get("Location")
        self._last = initial
        self._last_body = _json_or_none(initial)
        self._status = self._initial_status(initial)
        logger.debug("LRO %s %s started with status %s", self._method, resource_url, self._status)

    # -- status ---------------------------------------------------------------

    def _initial_status(self, resp: requests.Response) -> str:
        if resp.status_code == 204 or (
            self._method == "DELETE" and resp.status_code == 200 and not self._async_url
        ):
            return SUCCEEDED
        if self._async_url or resp.status_code == 202:
            return IN_PROGRESS
        # 200/201 without a polling header: the body is authoritative.
        raw = _body_status(self._last_body)
        return _normalize_status(raw) if raw else SUCCEEDED

    def status(self) -> str:
        return self._status

    def done(self) -> bool:
        return self._status in (SUCCEEDED, FAILED, CANCELED)

    @property
    def retry_after(self) -> float:
        header = self._last.headers.get("Retry-After")
        if header:
            try:
                return float(header)
            except (TypeError, ValueError):
                pass
        return self._interval

    # -- polling ----------------------------------------------------------------

    def _poll_url(self) -> str:
        return self._async_url or self._location_url or self._resource_url

    def poll(self) -> str:
        """Issue one status request and return the updated status."""
        if self.done():
            return self._status
        resp = send("GET", self._poll_url(), headers=self._headers)
        self._last = resp
        self._last_body = _json_or_none(resp)
        if self._async_url:
            self._status = _normalize_status(_body_status(self._last_body))
        elif self._location_url:
            self._status = IN_PROGRESS if resp.status_code == 202 else SUCCEEDED
        else:
            raw = _body_status(self._last_body)
            self._status = _normalize_status(raw) if raw else SUCCEEDED
        logger.debug("LRO %s %s polled: %s", self._method, self._resource_url, self._status)
        return self._status

    def wait(self, timeout: float | None = None) -> None:
        """Block until the operation is done.

        Raises ``TimeoutError`` if it is still running once *timeout* seconds
        have passed.  The last sleep is cut short so the operation is polled
        one final time at the deadline.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        while not self.done():
            delay = self.retry_after
            if deadline is not None:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise TimeoutError(
                        f"Operation {self._method} {self._resource_url} still "
                        f"{self._status} after {timeout}s"
                    )
                delay = min(delay, remaining)
            time.sleep(delay)
            self.poll()

    # -- result -----------------------------------------------------------------

    def result(self, timeout: float | None = None) -> T | dict | None:
        """Wait for completion and return the final resource.

        Raises :class:`~azkit.exceptions.OperationFailedError` when the
        operation ended Failed or Canceled.
        """
        self.wait(timeout)
        if self._status != SUCCEEDED:
            error = (self._last_body or {}).get("error")
            message = f"Operation {self._method} {self._resource_url} ended {self._status}"
            if isinstance(error, dict) and error.get("message"):
                message = f"{message}: {error['message']}"
            detail = error if isinstance(error, dict) else None
            raise OperationFailedError(message, self._status, detail)

        body = self._final_body()
        if body is None:
            return None
        return self._deserialize(body) if self._deserialize else body

    def _final_body(self) -> dict[str, Any] | None:
        if self._method == "DELETE":
            return None
        if self._method in ("PUT", "PATCH"):
            if self._async_url or self._location_url:
                return _json_or_none(send("GET", self._resource_url, headers=self._headers))
            return self._last_body
        # POST: a Location flow ends on the result itself, a status URL
        # flow carries the result inside the status body.
        return self._last_body
