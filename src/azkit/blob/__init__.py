"""Blob Storage block blob client."""

from azkit.blob._serialization import make_block_id  # noqa: F401
from azkit.blob.block_blob import (  # noqa: F401
    MAX_BLOCKS,
    MAX_STAGE_BLOCK_BYTES,
    MAX_UPLOAD_BLOB_BYTES,
    BlockBlobClient,
)
from azkit.blob.channel import BlockBlobWriteChannel  # noqa: F401
