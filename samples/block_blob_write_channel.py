"""Stream lines into a block blob through a seekable write channel.

Usage: python block_blob_write_channel.py BLOB_URL
"""

import logging
import sys

from azkit.blob import BlockBlobClient
from azkit.models.blob import BlobHttpHeaders


def main(blob_url: str) -> None:
    client = BlockBlobClient(blob_url)
    with client.open_write_channel(
        block_size=1024 * 1024,
        headers=BlobHttpHeaders(content_type="text/csv"),
        metadata={"source": "sample"},
    ) as channel:
        channel.write(b"id,value\n")
        for i in range(100_000):
            channel.write(f"{i},{i * i}\n".encode())
    print(f"Committed {len(channel.block_ids)} blocks, ETag {channel.result.etag}")

    blocks = client.list_blocks()
    print(f"{len(blocks.committed_blocks)} committed blocks")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main(sys.argv[1])
