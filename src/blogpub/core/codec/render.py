"""Document -> read-only HTML for preview and publishing"""

from typing import Callable, Iterable, Optional, Union

from loguru import logger
from markdown_it.common.utils import escapeHtml

from blogpub.core.document import Document
from blogpub.core.models import (
    AnyBlock, BlockType, CodeBlock, DelimiterBlock, EmbedBlock, HeadingBlock,
    ImageBlock, ListBlock, ListItem, OpaqueBlock, ParagraphBlock, QuoteBlock, RawBlock,
)
from blogpub.errors import UnknownBlockType


def _heading(block: HeadingBlock) -> str:
    level = block.data.level
    return f"<h{level}>{block.data.text}</h{level}>"


def _paragraph(block: ParagraphBlock) -> str:
    return f"<p>{block.data.text}</p>"


def _list_items(items: list[Union[str, ListItem]], tag: str) -> str:
    parts = []
    for item in items:
        if isinstance(item, ListItem):
            nested = _list_items(item.items, tag) if item.items else ""
            parts.append(f"<li>{item.content}{nested}</li>")
        else:
            parts.append(f"<li>{item}</li>")
    return f"<{tag}>{''.join(parts)}</{tag}>"


def _list(block: ListBlock) -> str:
    return _list_items(block.data.items, "ol" if block.data.style == "ordered" else "ul")


def _quote(block: QuoteBlock) -> str:
    cite = f"<cite>{block.data.caption}</cite>" if block.data.caption else ""
    return f"<blockquote><p>{block.data.text}</p>{cite}</blockquote>"


def _code(block: CodeBlock) -> str:
    return f"<pre><code>{escapeHtml(block.data.code)}</code></pre>"


def _delimiter(block: DelimiterBlock) -> str:
    return "<hr>"


def _image(block: ImageBlock) -> Optional[str]:
    """No url means the upload never finished; emit nothing rather than a broken img."""
    if not block.data.resolved:
        return None
    alt = block.data.alt or block.data.caption or ""
    caption = f"<figcaption>{block.data.caption}</figcaption>" if block.data.caption else ""
    return f'<figure><img src="{escapeHtml(block.data.url)}" alt="{escapeHtml(alt)}">{caption}</figure>'


def _embed(block: EmbedBlock) -> str:
    caption = f'<p class="embed-caption">{block.data.caption}</p>' if block.data.caption else ""
    return f'<div class="embed">{block.data.embed}{caption}</div>'


def _raw(block: RawBlock) -> str:
    return block.data.html


RENDERERS: dict[BlockType, Callable[..., Optional[str]]] = {
    BlockType.heading:   _heading,
    BlockType.paragraph: _paragraph,
    BlockType.list:      _list,
    BlockType.quote:     _quote,
    BlockType.code:      _code,
    BlockType.delimiter: _delimiter,
    BlockType.image:     _image,
    BlockType.embed:     _embed,
    BlockType.raw:       _raw,
}


def render_block(block: AnyBlock) -> Optional[str]:
    """Markup for one block, or None when the block renders to nothing.

    Raises UnknownBlockType for opaque blocks.
    """
    if isinstance(block, OpaqueBlock):
        raise UnknownBlockType(block.type)
    return RENDERERS[BlockType(block.type)](block)


def render_with_warnings(doc: Union[Document, Iterable[AnyBlock]]) -> tuple[str, list[str]]:
    """Render blocks in reading order. Returns (html, warnings) for omitted blocks."""
    blocks = doc.to_sequence() if isinstance(doc, Document) else doc
    parts: list[str] = []
    warnings: list[str] = []
    for position, block in enumerate(blocks):
        try:
            markup = render_block(block)
        except UnknownBlockType as e:
            msg = f"Omitted block at position {position}: {e}"
            logger.warning(msg)
            warnings.append(msg)
            continue
        if markup is None:
            warnings.append(f"Omitted {block.type} block at position {position}: nothing to render")
            continue
        parts.append(markup)
    return "".join(parts), warnings


def render(doc: Union[Document, Iterable[AnyBlock]], post_render: Callable[[str], str] = None) -> str:
    """Render a Document to HTML. post_render, if given, may restyle the markup before it is returned."""
    markup, _ = render_with_warnings(doc)
    return post_render(markup) if post_render else markup
