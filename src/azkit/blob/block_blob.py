"""Block blob client.

A block blob is written either in one Put Blob request or as a set of
staged blocks (Put Block) that become the blob's content when their IDs are
committed in order (Put Block List).  Uncommitted blocks are discarded by
the service after a week or on the next commit.
"""

from __future__ import annotations

import base64
import binascii
import logging
import uuid
from collections import deque
from collections.abc import Iterable, Mapping
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import BinaryIO
from urllib.parse import quote, urlencode, urlsplit

import requests

from azkit._auth import STORAGE_SCOPE, _get_headers
from azkit._transport import send
from azkit.blob._serialization import deserialize_block_list, make_block_id, serialize_block_list
from azkit.blob.channel import BlockBlobWriteChannel
from azkit.models.blob import (
    ETAG_WILDCARD,
    AccessTier,
    BlobHttpHeaders,
    BlobRequestConditions,
    BlockBlobItem,
    BlockList,
    BlockListType,
    WriteMode,
)
from azkit.settings import settings

logger = logging.getLogger(__name__)

MAX_UPLOAD_BLOB_BYTES = 5000 * 1024 * 1024
MAX_STAGE_BLOCK_BYTES = 4000 * 1024 * 1024
MAX_BLOCKS = 50_000


def _check_block_id(value: str) -> None:
    try:
        base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"Block ID {value!r} is not valid base64") from exc


def _metadata_headers(metadata: Mapping[str, str] | None) -> dict[str, str]:
    headers: dict[str, str] = {}
    for key, value in (metadata or {}).items():
        if key != key.strip() or value != value.strip():
            raise ValueError(
                f"Metadata {key!r} has leading or trailing whitespace; remove or encode it"
            )
        headers[f"x-ms-meta-{key}"] = value
    return headers


def _read_all(data: bytes | bytearray | BinaryIO) -> bytes:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    return data.read()


class BlockBlobClient:
    """Operate on one block blob.

    *blob_url* may carry a SAS query string, in which case no token is
    requested; otherwise an ``azure-identity`` credential (the default one
    unless *credential* is given) authorises each request.  Writes made with
    an *encryption_scope* are encrypted with that scope's key.
    """

    def __init__(
        self,
        blob_url: str,
        credential: object | None = None,
        *,
        encryption_scope: str | None = None,
    ) -> None:
        parts = urlsplit(blob_url)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError(f"Invalid blob URL: {blob_url!r}")
        segments = parts.path.lstrip("/").split("/", 1)
        if len(segments) != 2 or not segments[1]:
            raise ValueError(f"Blob URL must name a container and a blob: {blob_url!r}")
        self.url = blob_url
        self.account_url = f"{parts.scheme}://{parts.netloc}"
        self.container_name, self.blob_name = segments
        self._sas = "sig=" in parts.query
        self._credential = credential
        self.encryption_scope = encryption_scope

    @classmethod
    def from_parts(
        cls,
        account_url: str,
        container_name: str,
        blob_name: str,
        credential: object | None = None,
        *,
        encryption_scope: str | None = None,
    ) -> BlockBlobClient:
        url = f"{account_url.rstrip('/')}/{quote(container_name)}/{quote(blob_name)}"
        return cls(url, credential, encryption_scope=encryption_scope)

    def with_encryption_scope(self, encryption_scope: str) -> BlockBlobClient:
        """Return a client for the same blob whose writes use *encryption_scope*."""
        return type(self)(self.url, self._credential, encryption_scope=encryption_scope)

    def __repr__(self) -> str:
        return f"BlockBlobClient({self.account_url!r}, {self.container_name!r}, {self.blob_name!r})"

    # -- plumbing ---------------------------------------------------------------

    def _headers(self, extra: Mapping[str, str] | None = None) -> dict[str, str]:
        headers = {
            "x-ms-version": settings.storage_api_version,
            "x-ms-date": format_datetime(datetime.now(timezone.utc), usegmt=True),
        }
        if not self._sas:
            headers.update(_get_headers(STORAGE_SCOPE, credential=self._credential))
        if extra:
            headers.update(extra)
        return headers

    def _request(
        self,
        method: str,
        *,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
        data: bytes | None = None,
        expected: tuple[int, ...] = (200, 201),
    ) -> requests.Response:
        request_headers = self._headers(headers)
        # Only writes (PUT) carry the encryption scope.
        if method == "PUT" and self.encryption_scope:
            request_headers["x-ms-encryption-scope"] = self.encryption_scope
        return send(
            method,
            self.url,
            params=params,
            headers=request_headers,
            data=data,
            expected=expected,
        )

    @staticmethod
    def _write_headers(
        headers: BlobHttpHeaders | None,
        metadata: Mapping[str, str] | None,
        tags: Mapping[str, str] | None,
        tier: AccessTier | str | None,
        conditions: BlobRequestConditions | None,
        overwrite: bool,
    ) -> dict[str, str]:
        out: dict[str, str] = {}
        if headers is not None:
            out.update(headers.to_headers())
        out.update(_metadata_headers(metadata))
        if tags:
            out["x-ms-tags"] = urlencode(tags)
        if tier is not None:
            out["x-ms-access-tier"] = str(AccessTier.from_value(tier))
        if not overwrite and conditions is None:
            conditions = BlobRequestConditions(if_none_match=ETAG_WILDCARD)
        if conditions is not None:
            out.update(conditions.to_headers())
        return out

    # -- Put Blob ---------------------------------------------------------------

    def upload(
        self,
        data: bytes | BinaryIO,
        *,
        overwrite: bool = False,
        headers: BlobHttpHeaders | None = None,
        metadata: Mapping[str, str] | None = None,
        tags: Mapping[str, str] | None = None,
        tier: AccessTier | str | None = None,
        conditions: BlobRequestConditions | None = None,
    ) -> BlockBlobItem:
        """Create (or with *overwrite*, replace) the blob in a single request.

        Without *overwrite* or explicit *conditions* the request carries
        ``If-None-Match: *`` and an existing blob makes it fail with
        :class:`~azkit.exceptions.ResourceExistsError`.
        """
        body = _read_all(data)
        if len(body) > MAX_UPLOAD_BLOB_BYTES:
            raise ValueError(
                f"Data of {len(body)} bytes exceeds the {MAX_UPLOAD_BLOB_BYTES} byte Put Blob "
                "limit; use upload_chunked"
            )
        extra = self._write_headers(headers, metadata, tags, tier, conditions, overwrite)
        extra["x-ms-blob-type"] = "BlockBlob"
        logger.info("Uploading %s bytes to %s/%s", len(body), self.container_name, self.blob_name)
        resp = self._request("PUT", headers=extra, data=body, expected=(201,))
        return BlockBlobItem.from_headers(resp.headers)

    def upload_from_url(
        self,
        source_url: str,
        *,
        overwrite: bool = False,
        copy_source_properties: bool = True,
        source_content_md5: bytes | None = None,
        headers: BlobHttpHeaders | None = None,
        metadata: Mapping[str, str] | None = None,
        tags: Mapping[str, str] | None = None,
        tier: AccessTier | str | None = None,
        conditions: BlobRequestConditions | None = None,
    ) -> BlockBlobItem:
        """Create the blob from the content of *source_url* (Put Blob From URL).

        The service copies the whole source synchronously; it must be public
        or carry a SAS.  Overwrite rules are the same as for :meth:`upload`.
        """
        extra = self._write_headers(headers, metadata, tags, tier, conditions, overwrite)
        extra["x-ms-blob-type"] = "BlockBlob"
        extra["x-ms-copy-source"] = source_url
        if not copy_source_properties:
            extra["x-ms-copy-source-blob-properties"] = "false"
        if source_content_md5 is not None:
            extra["x-ms-source-content-md5"] = base64.b64encode(source_content_md5).decode()
        logger.info(
            "Copying %s into %s/%s",
            source_url.split("?", 1)[0],
            self.container_name,
            self.blob_name,
        )
        resp = self._request("PUT", headers=extra, data=b"", expected=(201,))
        return BlockBlobItem.from_headers(resp.headers)

    # -- Put Block / Put Block From URL -----------------------------------------

    def stage_block(
        self,
        block_id: str,
        data: bytes | BinaryIO,
        *,
        content_md5: bytes | None = None,
        lease_id: str | None = None,
    ) -> None:
        """Upload one uncommitted block identified by the base64 *block_id*."""
        _check_block_id(block_id)
        body = _read_all(data)
        if len(body) > MAX_STAGE_BLOCK_BYTES:
            raise ValueError(
                f"Block of {len(body)} bytes exceeds the {MAX_STAGE_BLOCK_BYTES} byte limit"
            )
        extra: dict[str, str] = {}
        if content_md5 is not None:
            extra["Content-MD5"] = base64.b64encode(content_md5).decode()
        if lease_id is not None:
            extra["x-ms-lease-id"] = lease_id
        logger.debug("Staging block %s (%s bytes)", block_id, len(body))
        self._request(
            "PUT",
            params={"comp": "block", "blockid": block_id},
            headers=extra,
            data=body,
            expected=(201,),
        )

    def stage_block_from_url(
        self,
        block_id: str,
        source_url: str,
        *,
        source_range: tuple[int, int | None] | None = None,
        source_content_md5: bytes | None = None,
        lease_id: str | None = None,
    ) -> None:
        """Stage a block whose content the service copies from *source_url*.

        The source must be public or carry a SAS.  *source_range* is an
        ``(offset, count)`` pair; a ``None`` count reads to the end.
        """
        _check_block_id(block_id)
        extra = {"x-ms-copy-source": source_url}
        if source_range is not None:
            offset, count = source_range
            end = "" if count is None else str(offset + count - 1)
            extra["x-ms-source-range"] = f"bytes={offset}-{end}"
        if source_content_md5 is not None:
            extra["x-ms-source-content-md5"] = base64.b64encode(source_content_md5).decode()
        if lease_id is not None:
            extra["x-ms-lease-id"] = lease_id
        self._request(
            "PUT",
            params={"comp": "block", "blockid": block_id},
            headers=extra,
            data=b"",
            expected=(201,),
        )

    # -- Get / Put Block List ---------------------------------------------------

    def list_blocks(
        self, list_type: BlockListType = BlockListType.ALL, *, lease_id: str | None = None
    ) -> BlockList:
        extra = {"x-ms-lease-id": lease_id} if lease_id else None
        resp = self._request(
            "GET",
            params={"comp": "blocklist", "blocklisttype": BlockListType(list_type).value},
            headers=extra,
            expected=(200,),
        )
        return deserialize_block_list(resp.content)

    def commit_block_list(
        self,
        block_ids: Iterable[str],
        *,
        overwrite: bool = False,
        headers: BlobHttpHeaders | None = None,
        metadata: Mapping[str, str] | None = None,
        tags: Mapping[str, str] | None = None,
        tier: AccessTier | str | None = None,
        conditions: BlobRequestConditions | None = None,
    ) -> BlockBlobItem:
        """Make the staged blocks *block_ids*, in that order, the blob's content.

        Blocks not listed are discarded.  Without *overwrite* or explicit
        *conditions* the request carries ``If-None-Match: *``.
        """
        ids = list(block_ids)
        if len(ids) > MAX_BLOCKS:
            raise ValueError(f"{len(ids)} blocks exceeds the {MAX_BLOCKS} block limit")
        for bid in ids:
            _check_block_id(bid)
        extra = self._write_headers(headers, metadata, tags, tier, conditions, overwrite)
        extra["Content-Type"] = "application/xml; charset=utf-8"
        logger.info(
            "Committing %s blocks to %s/%s", len(ids), self.container_name, self.blob_name
        )
        resp = self._request(
            "PUT",
            params={"comp": "blocklist"},
            headers=extra,
            data=serialize_block_list(ids),
            expected=(201,),
        )
        return BlockBlobItem.from_headers(resp.headers)

    # -- composite uploads ------------------------------------------------------

    def upload_chunked(
        self,
        stream: BinaryIO,
        *,
        block_size: int | None = None,
        max_concurrency: int | None = None,
        overwrite: bool = False,
        headers: BlobHttpHeaders | None = None,
        metadata: Mapping[str, str] | None = None,
        tags: Mapping[str, str] | None = None,
        tier: AccessTier | str | None = None,
        conditions: BlobRequestConditions | None = None,
    ) -> BlockBlobItem:
        """Upload *stream* as staged blocks and commit them in read order.

        A stream that fits in one block is sent with a single Put Blob.
        Up to *max_concurrency* blocks are in flight at once.
        """
        size = settings.block_size if block_size is None else block_size
        if size <= 0 or size > MAX_STAGE_BLOCK_BYTES:
            raise ValueError(f"block_size must be in (0, {MAX_STAGE_BLOCK_BYTES}]")
        workers = max_concurrency or settings.max_concurrency
        write_kwargs = {
            "overwrite": overwrite,
            "headers": headers,
            "metadata": metadata,
            "tags": tags,
            "tier": tier,
            "conditions": conditions,
        }

        first = stream.read(size)
        next_chunk = stream.read(size)
        if not next_chunk:
            return self.upload(first, **write_kwargs)  # type: ignore[arg-type]

        prefix = uuid.uuid4().hex
        ids: list[str] = []
        pending: deque[Future[None]] = deque()
        with ThreadPoolExecutor(max_workers=workers) as pool:
            chunk = first
            while chunk:
                if len(ids) >= MAX_BLOCKS:
                    raise ValueError(f"Stream needs more than {MAX_BLOCKS} blocks of {size} bytes")
                bid = make_block_id(len(ids), prefix=prefix)
                ids.append(bid)
                if len(pending) >= workers:
                    pending.popleft().result()
                pending.append(pool.submit(self.stage_block, bid, chunk))
                chunk, next_chunk = next_chunk, (stream.read(size) if next_chunk else b"")
            for fut in pending:
                fut.result()

        logger.info("Staged %s blocks for %s/%s", len(ids), self.container_name, self.blob_name)
        return self.commit_block_list(ids, **write_kwargs)  # type: ignore[arg-type]

    def open_write_channel(
        self,
        *,
        block_size: int | None = None,
        mode: WriteMode = WriteMode.OVERWRITE,
        headers: BlobHttpHeaders | None = None,
        metadata: Mapping[str, str] | None = None,
        tags: Mapping[str, str] | None = None,
        tier: AccessTier | str | None = None,
        conditions: BlobRequestConditions | None = None,
    ) -> BlockBlobWriteChannel:
        """Open a seekable, write-only channel that commits the blob on close."""
        if mode != WriteMode.OVERWRITE:
            raise ValueError(f"Unsupported write mode {mode!r}; only OVERWRITE is supported")
        return BlockBlobWriteChannel(
            self,
            settings.block_size if block_size is None else block_size,
            headers=headers,
            metadata=metadata,
            tags=tags,
            tier=tier,
            conditions=conditions,
        )

