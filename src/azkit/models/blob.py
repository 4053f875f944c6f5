"""Blob Storage models.

Unlike the management models these travel mostly as HTTP headers; the
``to_headers`` helpers produce the ``x-ms-*`` / conditional header sets.
"""

from __future__ import annotations

import base64
from datetime import datetime, timezone
from email.utils import format_datetime, parsedate_to_datetime
from enum import StrEnum

from pydantic import field_validator

from azkit.models._base import ExpandableEnum, RestModel

ETAG_WILDCARD = "*"


def _http_date(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return format_datetime(value.astimezone(timezone.utc), usegmt=True)


class BlockListType(StrEnum):
    COMMITTED = "committed"
    UNCOMMITTED = "uncommitted"
    ALL = "all"


class AccessTier(ExpandableEnum):
    P4 = "P4"
    P10 = "P10"
    P30 = "P30"
    HOT = "Hot"
    COOL = "Cool"
    COLD = "Cold"
    ARCHIVE = "Archive"


class WriteMode(StrEnum):
    """How a write channel treats the existing blob.  Only OVERWRITE is supported."""

    OVERWRITE = "overwrite"
    APPEND = "append"


class BlobHttpHeaders(RestModel):
    cache_control: str | None = None
    content_type: str | None = None
    content_md5: bytes | None = None
    content_encoding: str | None = None
    content_language: str | None = None
    content_disposition: str | None = None

    def to_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        pairs = {
            "x-ms-blob-cache-control": self.cache_control,
            "x-ms-blob-content-type": self.content_type,
            "x-ms-blob-content-encoding": self.content_encoding,
            "x-ms-blob-content-language": self.content_language,
            "x-ms-blob-content-disposition": self.content_disposition,
        }
        for name, value in pairs.items():
            if value is not None:
                headers[name] = value
        if self.content_md5 is not None:
            headers["x-ms-blob-content-md5"] = base64.b64encode(self.content_md5).decode()
        return headers


class BlobRequestConditions(RestModel):
    """Conditions a request must satisfy for the service to act on it."""

    if_match: str | None = None
    if_none_match: str | None = None
    if_modified_since: datetime | None = None
    if_unmodified_since: datetime | None = None
    tags_conditions: str | None = None
    lease_id: str | None = None

    def to_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.if_match is not None:
            headers["If-Match"] = self.if_match
        if self.if_none_match is not None:
            headers["If-None-Match"] = self.if_none_match
        if self.if_modified_since is not None:
            headers["If-Modified-Since"] = _http_date(self.if_modified_since)
        if self.if_unmodified_since is not None:
            headers["If-Unmodified-Since"] = _http_date(self.if_unmodified_since)
        if self.tags_conditions is not None:
            headers["x-ms-if-tags"] = self.tags_conditions
        if self.lease_id is not None:
            headers["x-ms-lease-id"] = self.lease_id
        return headers


class BlockBlobItem(RestModel):
    """Properties of a block blob returned by Put Blob / Put Block List."""

    etag: str | None = None
    last_modified: datetime | None = None
    content_md5: bytes | None = None
    is_server_encrypted: bool | None = None
    encryption_key_sha256: str | None = None
    encryption_scope: str | None = None
    version_id: str | None = None

    @field_validator("last_modified", mode="before")
    @classmethod
    def _parse_http_date(cls, value: object) -> object:
        if isinstance(value, str) and "," in value:
            return parsedate_to_datetime(value)
        return value

    @classmethod
    def from_headers(cls, headers: dict[str, str] | object) -> BlockBlobItem:
        get = headers.get  # type: ignore[attr-defined]
        md5 = get("Content-MD5")
        encrypted = get("x-ms-request-server-encrypted")
        return cls(
            etag=get("ETag"),
            last_modified=get("Last-Modified"),
            content_md5=base64.b64decode(md5) if md5 else None,
            is_server_encrypted=None if encrypted is None else encrypted.lower() == "true",
            encryption_key_sha256=get("x-ms-encryption-key-sha256"),
            encryption_scope=get("x-ms-encryption-scope"),
            version_id=get("x-ms-version-id"),
        )


class Block(RestModel):
    name: str
    size: int


class BlockList(RestModel):
    committed_blocks: list[Block] = []
    uncommitted_blocks: list[Block] = []
