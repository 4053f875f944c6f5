"""XML bodies of the Put Block List and Get Block List operations."""

from __future__ import annotations

import base64
from collections.abc import Iterable
from xml.etree import ElementTree as ET

from azkit.models.blob import Block, BlockList


def make_block_id(index: int, width: int = 6, prefix: str = "") -> str:
    """Return a base64 block ID for *index*.

    All IDs of one blob must encode to the same length, so the index is
    zero-padded to *width* digits.
    """
    raw = f"{prefix}{index:0{width}d}".encode()
    return base64.b64encode(raw).decode()


def serialize_block_list(block_ids: Iterable[str]) -> bytes:
    """Build a ``<BlockList>`` body committing *block_ids* as latest blocks."""
    root = ET.Element("BlockList")
    for bid in block_ids:
        ET.SubElement(root, "Latest").text = bid
    return ET.tostring(root, encoding="utf-8", xml_declaration=True)


def _blocks(parent: ET.Element | None) -> list[Block]:
    if parent is None:
        return []
    return [
        Block(name=el.findtext("Name") or "", size=int(el.findtext("Size") or 0))
        for el in parent.findall("Block")
    ]


def deserialize_block_list(body: bytes | str) -> BlockList:
    """Parse a Get Block List response body."""
    if isinstance(body, bytes):
        body = body.decode("utf-8-sig")
    root = ET.fromstring(body.lstrip("\ufeff"))
    return BlockList(
        committed_blocks=_blocks(root.find("CommittedBlocks")),
        uncommitted_blocks=_blocks(root.find("UncommittedBlocks")),
    )
