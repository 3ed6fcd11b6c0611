"""Markdown import: frontmatter extraction and markdown-it tokenization"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml
from markdown_it import MarkdownIt


FRONTMATTER_RE = re.compile(r'^---\s*\n(.*?)\n---\s*\n', re.DOTALL)


@dataclass
class ParsedMarkdown:
    """Parse result carrying markdown-it tokens and the parser that made them; not persisted."""
    path:        Optional[Path]
    markdown:    str             # body only (frontmatter stripped)
    frontmatter: dict[str, Any]
    tokens:      list            # markdown-it Token objects
    parser:      MarkdownIt      # needed to render inline children back to HTML


def make_parser(preset: str = 'gfm-like') -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def strip_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with YAML header removed."""
    m = FRONTMATTER_RE.match(text)
    if m:
        try:
            fm = yaml.safe_load(m.group(1)) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML frontmatter: {e}") from e
        if not isinstance(fm, dict):
            raise ValueError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
        return fm, text[m.end():]
    return {}, text


def parse_text(text: str, preset: str = 'gfm-like', path: Optional[Path] = None) -> ParsedMarkdown:
    frontmatter, body = strip_frontmatter(text)
    md = make_parser(preset)
    return ParsedMarkdown(path=path, markdown=body, frontmatter=frontmatter, tokens=md.parse(body), parser=md)


def parse_file(path: Path, preset: str = 'gfm-like') -> ParsedMarkdown:
    """Parse a single markdown file into a ParsedMarkdown with token stream."""
    return parse_text(path.read_text(encoding='utf-8'), preset, path)
