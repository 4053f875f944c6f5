"""Exceptions raised by azkit clients."""

from __future__ import annotations

import json
import logging
from xml.etree import ElementTree as ET

import requests

logger = logging.getLogger(__name__)


class AzkitError(Exception):
    """Base class for every azkit error."""


class HttpResponseError(AzkitError):
    """A service answered with a non-success HTTP status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        error_code: str | None = None,
        response: requests.Response | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.response = response

    def __str__(self) -> str:
        parts = [self.message]
        if self.status_code is not None:
            parts.append(f"Status: {self.status_code}")
        if self.error_code:
            parts.append(f"ErrorCode: {self.error_code}")
        return " | ".join(parts)


class ClientAuthenticationError(HttpResponseError):
    """401 / 403."""


class ResourceNotFoundError(HttpResponseError):
    """404."""


class ResourceExistsError(HttpResponseError):
    """409: the resource (or blob) already exists or is in a conflicting state."""


class ResourceModifiedError(HttpResponseError):
    """412: a conditional request header did not match."""


class ServiceRequestError(AzkitError):
    """The request could not be completed, e.g. retries were exhausted."""


class OperationFailedError(AzkitError):
    """A long-running operation ended in a Failed or Canceled state."""

    def __init__(self, message: str, status: str, error: dict | None = None) -> None:
        super().__init__(message)
        self.status = status
        self.error = error or {}


_STATUS_MAP: dict[int, type[HttpResponseError]] = {
    401: ClientAuthenticationError,
    403: ClientAuthenticationError,
    404: ResourceNotFoundError,
    409: ResourceExistsError,
    412: ResourceModifiedError,
}


def _parse_error_body(resp: requests.Response) -> tuple[str | None, str | None]:
    """Return ``(code, message)`` from an ARM JSON or Storage XML error body."""
    text = (resp.text or "").lstrip("\ufeff").strip()
    if not text:
        return None, None
    if text.startswith("<"):
        try:
            root = ET.fromstring(text)
        except ET.ParseError:
            return None, text[:500]
        return root.findtext("Code"), root.findtext("Message")
    try:
        data = json.loads(text)
    except ValueError:
        return None, text[:500]
    if not isinstance(data, dict):
        return None, text[:500]
    err = data.get("error", data)
    if isinstance(err, dict):
        return err.get("code"), err.get("message")
    return None, str(err)


def raise_for_response(resp: requests.Response) -> None:
    """Raise the matching :class:`HttpResponseError` for a failed *resp*.

    Successful (< 400) responses are returned from silently.
    """
    if resp.status_code < 400:
        return
    code, message = _parse_error_body(resp)
    code = code or resp.headers.get("x-ms-error-code")
    if not message:
        message = f"Operation returned an invalid status '{resp.reason}'"
    exc_type = _STATUS_MAP.get(resp.status_code, HttpResponseError)
    logger.debug("HTTP %s (%s) from %s", resp.status_code, code, resp.url)
    raise exc_type(message, status_code=resp.status_code, error_code=code, response=resp)
