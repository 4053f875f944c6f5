"""Seekable write-only channel over a block blob."""

from __future__ import annotations

import io
import logging
import os
import uuid
from collections.abc import Mapping
from typing import TYPE_CHECKING

from azkit.blob._serialization import make_block_id
from azkit.models.blob import AccessTier, BlobHttpHeaders, BlobRequestConditions, BlockBlobItem

if TYPE_CHECKING:
    from azkit.blob.block_blob import BlockBlobClient

logger = logging.getLogger(__name__)


class BlockBlobWriteChannel(io.RawIOBase):
    """Write a block blob through a file-like, seekable interface.

    Writes accumulate in a buffer of *block_size* bytes; every full buffer is
    staged as one block.  :meth:`close` stages the remainder and commits all
    blocks, replacing the blob.  Staged blocks can no longer change, so the
    position may only move within the unstaged buffer: seeking before the
    staged data or past the end of the written data raises ``ValueError``.

    Leaving a ``with`` block on an exception aborts the upload instead of
    committing it.
    """

    def __init__(
        self,
        client: BlockBlobClient,
        block_size: int,
        *,
        headers: BlobHttpHeaders | None = None,
        metadata: Mapping[str, str] | None = None,
        tags: Mapping[str, str] | None = None,
        tier: AccessTier | str | None = None,
        conditions: BlobRequestConditions | None = None,
    ) -> None:
        super().__init__()
        if block_size <= 0:
            raise ValueError("block_size must be positive")
        self._client = client
        self._block_size = block_size
        self._commit_kwargs = {
            "headers": headers,
            "metadata": metadata,
            "tags": tags,
            "tier": tier,
            "conditions": conditions,
        }
        self._prefix = uuid.uuid4().hex
        self._block_ids: list[str] = []
        self._staged = 0
        self._buffer = bytearray()
        self._cursor = 0
        self._aborted = False
        self.result: BlockBlobItem | None = None

    def readable(self) -> bool:
        return False

    def writable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    @property
    def block_ids(self) -> list[str]:
        return list(self._block_ids)

    def _end(self) -> int:
        return self._staged + len(self._buffer)

    def _stage(self, data: bytes) -> None:
        bid = make_block_id(len(self._block_ids), prefix=self._prefix)
        self._client.stage_block(bid, data)
        self._block_ids.append(bid)
        self._staged += len(data)

    def write(self, b: bytes | bytearray | memoryview) -> int:  # type: ignore[override]
        if self.closed:
            raise ValueError("write to closed channel")
        data = bytes(b)
        if not data:
            return 0
        self._buffer[self._cursor : self._cursor + len(data)] = data
        self._cursor += len(data)
        # The buffer only grows past a block by appending, so the cursor
        # sits at its end whenever a block is cut from the front.
        while len(self._buffer) >= self._block_size:
            self._stage(bytes(self._buffer[: self._block_size]))
            del self._buffer[: self._block_size]
            self._cursor -= self._block_size
        return len(data)

    def tell(self) -> int:
        if self.closed:
            raise ValueError("tell on closed channel")
        return self._staged + self._cursor

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        if self.closed:
            raise ValueError("seek on closed channel")
        if whence == os.SEEK_SET:
            target = offset
        elif whence == os.SEEK_CUR:
            target = self.tell() + offset
        elif whence == os.SEEK_END:
            target = self._end() + offset
        else:
            raise ValueError(f"invalid whence ({whence})")
        if target < self._staged:
            raise ValueError(
                f"cannot seek to {target}: data before {self._staged} is already staged"
            )
        if target > self._end():
            raise ValueError(f"cannot seek to {target}: past the end of written data")
        self._cursor = target - self._staged
        return target

    def flush(self) -> None:
        """Stage buffered data as a block, making it immutable."""
        if self.closed or self._aborted:
            return
        if self._buffer:
            self._stage(bytes(self._buffer))
            self._buffer.clear()
            self._cursor = 0

    def close(self) -> None:
        """Stage what is buffered and commit every block.  Idempotent."""
        if self.closed:
            return
        try:
            if not self._aborted:
                self.flush()
                self.result = self._client.commit_block_list(
                    self._block_ids, overwrite=True, **self._commit_kwargs
                )
                logger.debug(
                    "Committed %s blocks (%s bytes) via write channel",
                    len(self._block_ids),
                    self._staged,
                )
        except BaseException:
            self._aborted = True
            raise
        finally:
            super().close()

    def abort(self) -> None:
        """Close without committing; staged blocks are left to expire."""
        self._aborted = True
        self.close()

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        if exc_type is not None:
            self.abort()
        else:
            self.close()

    def __del__(self) -> None:
        # Never commit from a finalizer.
        if not self.closed:
            self.abort()
