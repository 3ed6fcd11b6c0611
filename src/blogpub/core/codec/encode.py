"""Document -> structured form"""

from typing import Any

from loguru import logger

from blogpub.core.document import Document
from blogpub.core.models import AnyBlock, ImageBlock


def encode_block(block: AnyBlock) -> dict[str, Any]:
    """Serialize one block to {type, data[, id]}; opaque blocks come out exactly as they went in."""
    data = block.data if isinstance(block.data, dict) else block.data.model_dump(mode="json")
    entry: dict[str, Any] = {"type": str(block.type), "data": data}
    if block.id is not None:
        entry["id"] = block.id
    return entry


def encode(doc: Document, drop_unresolved: bool = False) -> dict[str, Any]:
    """Encode a Document to {"blocks": [...]} in reading order.

    Every block is kept, empty paragraphs included. With drop_unresolved,
    image blocks still waiting on an upload (no url) are left out; every
    persistence path passes it so unresolved images are never stored.
    """
    blocks = []
    for position, block in enumerate(doc.to_sequence()):
        if drop_unresolved and isinstance(block, ImageBlock) and not block.data.resolved:
            logger.warning("Dropping unresolved image block at position {} from saved content", position)
            continue
        blocks.append(encode_block(block))
    return {"blocks": blocks}
