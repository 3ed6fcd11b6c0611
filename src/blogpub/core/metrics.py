"""Derived text metrics: plain text, word count, reading time, excerpt, title inference"""

import math
from typing import Iterable, Union

from blogpub.core.document import Document
from blogpub.core.models import AnyBlock, ArticleMetrics, ListItem
from blogpub.core.utils.text import strip_tags
from blogpub.errors import EmptyContent


WORDS_PER_MINUTE = 225
EXCERPT_LENGTH = 160
ELLIPSIS = "…"
UNTITLED = "Untitled Article"


Blocks = Union[Document, Iterable[AnyBlock]]


def _items_text(items: list) -> list[str]:
    out = []
    for item in items:
        if isinstance(item, ListItem):
            out.append(item.content)
            out.extend(_items_text(item.items))
        else:
            out.append(item)
    return out


def _block_markup(block: AnyBlock) -> str:
    """Rich-text source of a block; types without reading text contribute ''."""
    if block.type in ("heading", "paragraph", "quote"):
        return block.data.text
    if block.type == "list":
        return " ".join(_items_text(block.data.items))
    if block.type == "code":
        return block.data.code
    return ""


def block_text(block: AnyBlock) -> str:
    """Visible text of a single block, tags stripped and trimmed."""
    return strip_tags(_block_markup(block)).strip()


def _blocks(doc: Blocks) -> Iterable[AnyBlock]:
    return doc.to_sequence() if isinstance(doc, Document) else doc


def blocks_to_text(doc: Blocks) -> str:
    """Visible text of heading, paragraph, list, quote and code blocks, joined by single spaces."""
    parts = (_block_markup(b) for b in _blocks(doc))
    return strip_tags(" ".join(p for p in parts if p)).strip()


def word_count(doc: Blocks) -> int:
    return len(blocks_to_text(doc).split())


def reading_time(doc: Blocks, words_per_minute: int = WORDS_PER_MINUTE) -> int:
    """Minutes to read, rounded up, never below 1."""
    return max(1, math.ceil(word_count(doc) / words_per_minute))


def excerpt(doc: Blocks, max_length: int = EXCERPT_LENGTH) -> str:
    """First max_length characters of the text, with ELLIPSIS appended only if anything was cut."""
    text = blocks_to_text(doc)
    if len(text) <= max_length:
        return text
    return text[:max_length].rstrip() + ELLIPSIS


def infer_title(doc: Blocks) -> str:
    """Text of the first heading block, or UNTITLED when there is none or it is blank."""
    for block in _blocks(doc):
        if block.type == "heading":
            return block_text(block) or UNTITLED
    return UNTITLED


def compute_metrics(doc: Blocks, words_per_minute: int = WORDS_PER_MINUTE) -> ArticleMetrics:
    blocks = list(_blocks(doc))
    return ArticleMetrics(word_count=word_count(blocks), reading_time=reading_time(blocks, words_per_minute))


def has_visible_text(doc: Blocks) -> bool:
    return any(block_text(b) for b in _blocks(doc))


def validate_for_publish(doc: Blocks) -> None:
    """Raise EmptyContent unless at least one block has non-whitespace visible text."""
    if not has_visible_text(doc):
        raise EmptyContent()


def validate_for_draft(doc: Blocks) -> None:
    """Drafts may be saved with any content, including none."""
