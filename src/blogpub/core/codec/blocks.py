"""markdown-it token stream -> typed Blocks"""

from typing import Optional, Union

from markdown_it import MarkdownIt

from blogpub.core.models import (
    Block, CodeBlock, CodeData, DelimiterBlock, HeadingBlock, HeadingData, ImageBlock, ImageData,
    ListBlock, ListData, ListItem, ParagraphBlock, ParagraphData, QuoteBlock, QuoteData, RawBlock, RawData,
)


LIST_OPEN = ('bullet_list_open', 'ordered_list_open')


def _close_index(tokens: list, i: int) -> int:
    """Index of the token closing the container opened at tokens[i]."""
    close = tokens[i].type.replace('_open', '_close')
    level = tokens[i].level
    for j in range(i + 1, len(tokens)):
        if tokens[j].type == close and tokens[j].level == level:
            return j
    return len(tokens) - 1


def _inline(md: MarkdownIt, token) -> str:
    """Render an inline token's children back to inline HTML."""
    return md.renderer.renderInline(token.children or [], md.options, {})


def _heading_level(token) -> int:
    """Extract heading level (1-6) from a heading_open token tag."""
    if token.tag and token.tag[0] == 'h' and token.tag[1:].isdigit():
        return int(token.tag[1:])
    return 2


def _lone_image(inline) -> Optional[object]:
    """Return the image child if the inline token holds only an image, else None."""
    if not inline.children:
        return None
    non_ws = [c for c in inline.children if c.type not in ('softbreak', 'hardbreak')]
    if len(non_ws) == 1 and non_ws[0].type == 'image':
        return non_ws[0]
    return None


def _list_items(md: MarkdownIt, tokens: list, start: int, end: int) -> list[Union[str, ListItem]]:
    """Collect list items between a list open token (start) and its close (end)."""
    items: list[Union[str, ListItem]] = []
    j = start + 1
    while j < end:
        tok = tokens[j]
        if tok.type != 'list_item_open':
            j += 1
            continue
        item_end = _close_index(tokens, j)
        parts: list[str] = []
        children: list[Union[str, ListItem]] = []
        k = j + 1
        while k < item_end:
            inner = tokens[k]
            if inner.type in LIST_OPEN:
                sub_end = _close_index(tokens, k)
                children.extend(_list_items(md, tokens, k, sub_end))
                k = sub_end + 1
                continue
            if inner.type == 'inline':
                parts.append(_inline(md, inner))
            k += 1
        content = " ".join(parts)
        items.append(ListItem(content=content, items=children) if children else content)
        j = item_end + 1
    return items


def tokens_to_blocks(tokens: list, md: MarkdownIt) -> list[Block]:
    """Convert a top-level token stream to typed Blocks in source order."""
    blocks: list[Block] = []
    i = 0

    while i < len(tokens):
        tok = tokens[i]

        if tok.type == 'heading_open':
            blocks.append(HeadingBlock(data=HeadingData(
                level=_heading_level(tok), text=_inline(md, tokens[i + 1]),
            )))
            i = _close_index(tokens, i) + 1

        elif tok.type == 'paragraph_open':
            inline = tokens[i + 1]
            image = _lone_image(inline)
            if image is not None:
                blocks.append(ImageBlock(data=ImageData(
                    url=image.attrGet('src'), alt=image.content or None, caption=image.attrGet('title'),
                )))
            else:
                blocks.append(ParagraphBlock(data=ParagraphData(text=_inline(md, inline))))
            i = _close_index(tokens, i) + 1

        elif tok.type in LIST_OPEN:
            end = _close_index(tokens, i)
            style = 'ordered' if tok.type == 'ordered_list_open' else 'unordered'
            blocks.append(ListBlock(data=ListData(style=style, items=_list_items(md, tokens, i, end))))
            i = end + 1

        elif tok.type == 'blockquote_open':
            end = _close_index(tokens, i)
            lines = [_inline(md, t) for t in tokens[i + 1:end] if t.type == 'inline']
            blocks.append(QuoteBlock(data=QuoteData(text="<br>".join(lines))))
            i = end + 1

        elif tok.type in ('fence', 'code_block'):
            data = CodeData(code=tok.content.rstrip('\n'))
            if tok.info.strip():
                data = CodeData(code=data.code, language=tok.info.strip())
            blocks.append(CodeBlock(data=data))
            i += 1

        elif tok.type == 'hr':
            blocks.append(DelimiterBlock())
            i += 1

        elif tok.type == 'html_block':
            blocks.append(RawBlock(data=RawData(html=tok.content)))
            i += 1

        elif tok.type == 'table_open':
            end = _close_index(tokens, i)
            html = md.renderer.render(tokens[i:end + 1], md.options, {})
            blocks.append(RawBlock(data=RawData(html=html.strip())))
            i = end + 1

        else:
            i += 1

    return blocks
