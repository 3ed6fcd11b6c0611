"""Structured form (and legacy content shapes) -> Document"""

import json
from typing import Any

from loguru import logger
from pydantic import ValidationError

from blogpub.core.document import Document
from blogpub.core.models import BLOCK_ADAPTER, AnyBlock, BlockType, OpaqueBlock, RawBlock, RawData
from blogpub.errors import MalformedBlock


KNOWN_TYPES = frozenset(t.value for t in BlockType)

# Tags written by older editor builds
TYPE_ALIASES: dict[str, str] = {
    'header': BlockType.heading.value,
}


def decode_block(entry: Any, position: int) -> AnyBlock:
    """Decode one {type, data[, id]} entry. Unknown types become OpaqueBlocks.

    Raises MalformedBlock when the entry is not usable.
    """
    if not isinstance(entry, dict):
        raise MalformedBlock(position, f"expected an object, got {type(entry).__name__}")

    block_type = entry.get('type')
    if not isinstance(block_type, str) or not block_type:
        raise MalformedBlock(position, "missing block type")
    block_type = TYPE_ALIASES.get(block_type, block_type)

    data = entry.get('data')
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise MalformedBlock(position, f"data must be an object, got {type(data).__name__}")

    block_id = entry.get('id')
    if block_id is not None:
        block_id = str(block_id)

    if block_type not in KNOWN_TYPES:
        return OpaqueBlock(type=block_type, data=data, id=block_id)

    try:
        return BLOCK_ADAPTER.validate_python({'type': block_type, 'data': data, 'id': block_id})
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err['loc']) for err in e.errors())
        raise MalformedBlock(position, f"invalid {block_type} payload ({fields})") from e


def decode_blocks(entries: list) -> Document:
    """Decode entries in order, skipping (and logging) any that are malformed."""
    doc = Document()
    for position, entry in enumerate(entries):
        try:
            block = decode_block(entry, position)
        except MalformedBlock as e:
            logger.warning("Skipping block: {}", e)
            continue
        if isinstance(block, OpaqueBlock):
            logger.debug("Keeping unrecognized block type {!r} at position {} as opaque", block.type, position)
        doc.append_block(block)
    return doc


def _legacy_text(node: Any) -> str:
    """Concatenate text nodes of a legacy {type: 'doc', content: [...]} tree, depth first."""
    if isinstance(node, list):
        return ''.join(_legacy_text(n) for n in node)
    if not isinstance(node, dict):
        return ''
    if node.get('type') == 'text':
        return str(node.get('text') or '')
    return _legacy_text(node.get('content') or [])


def _from_html(markup: str) -> Document:
    """Legacy flat HTML body: carried as a single raw block."""
    if not markup.strip():
        return Document()
    return Document([RawBlock(data=RawData(html=markup))])


def decode(content: Any) -> Document:
    """Rebuild a Document from persisted content.

    Accepts the structured form ({"blocks": [...]}, or its JSON text), a bare
    block list, the legacy single-paragraph {"type": "doc"} payload, a legacy
    flat HTML string, or None. Individual bad blocks are skipped; a value with
    none of these shapes raises ValueError.
    """
    if content is None:
        return Document()

    if isinstance(content, bytes):
        content = content.decode('utf-8')

    if isinstance(content, str):
        text = content.strip()
        if not text.startswith('{'):
            return _from_html(content)
        try:
            content = json.loads(text)
        except json.JSONDecodeError:
            return _from_html(content)

    if isinstance(content, list):
        return decode_blocks(content)

    if not isinstance(content, dict):
        raise ValueError(f"Unrecognized content: {type(content).__name__}")

    if 'blocks' in content:
        blocks = content['blocks'] or []
        if not isinstance(blocks, list):
            raise ValueError(f"'blocks' must be a list, got {type(blocks).__name__}")
        return decode_blocks(blocks)

    if content.get('type') == 'doc':
        logger.debug("Decoding legacy single-paragraph content payload")
        return _from_html(_legacy_text(content.get('content') or []))

    raise ValueError("Unrecognized content: expected 'blocks' or a legacy 'doc' payload")
