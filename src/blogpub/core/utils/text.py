"""Inline markup helpers shared by metrics and editing"""

import html
import re


TAG_RE = re.compile(r'<[^>]*>')

INLINE_MARKS = frozenset({'b', 'i', 'u', 's', 'mark', 'code'})


def strip_tags(markup: str) -> str:
    """Remove inline tags and decode entities, leaving only visible text."""
    return html.unescape(TAG_RE.sub('', markup or ''))


def _balanced(markup: str, tag: str) -> bool:
    """True if every <tag> in markup closes after it opens and none stay open."""
    depth = 0
    for m in re.finditer(rf'<(/?){tag}(?:\s[^>]*)?>', markup):
        depth += -1 if m.group(1) else 1
        if depth < 0:
            return False
    return depth == 0


def toggle_wrap(markup: str, tag: str) -> str:
    """Unwrap markup if one <tag ...>...</tag> pair encloses all of it, else wrap it.

    "<b>x</b> and <b>y</b>" is two pairs, not one, so it gets wrapped.
    """
    m = re.fullmatch(rf'<{tag}(?:\s[^>]*)?>(.*)</{tag}>', markup, re.DOTALL)
    if m and _balanced(m.group(1), tag):
        return m.group(1)
    return f"<{tag}>{markup}</{tag}>"
