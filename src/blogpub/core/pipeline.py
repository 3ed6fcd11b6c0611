"""Editing-session operations: new body, draft save, publish, load, preview, image attach, markdown import"""

from pathlib import Path
from typing import Any, Iterable, Optional, Union

from loguru import logger

from blogpub.config import Settings
from blogpub.core.codec.blocks import tokens_to_blocks
from blogpub.core.codec.decode import decode
from blogpub.core.codec.encode import encode
from blogpub.core.codec.render import render
from blogpub.core.document import Document
from blogpub.core.metrics import excerpt, infer_title, reading_time, validate_for_draft, validate_for_publish
from blogpub.core.models import Article, ArticlePayload, ArticleStatus, ImageBlock
from blogpub.core.parse import parse_file
from blogpub.crud.repo import ArticleRepo
from blogpub.errors import UpstreamFailure


Tags = Union[str, Iterable[str], None]


def _parse_tags(tags: Tags) -> list[str]:
    """Accept a comma-separated string or any iterable of strings."""
    if tags is None:
        return []
    if isinstance(tags, str):
        tags = tags.split(',')
    return [t.strip() for t in tags if t and t.strip()]


def new_document() -> Document:
    return Document.new()


def build_payload(
    doc: Document,
    *,
    title: Optional[str] = None,
    author_name: Optional[str] = None,
    status: ArticleStatus = ArticleStatus.draft,
    excerpt_text: Optional[str] = None,
    tags: Tags = None,
    settings: Optional[Settings] = None,
    ) -> ArticlePayload:
    """Assemble what the persistence collaborator receives.

    Missing title, author and excerpt are derived from the content; reading
    time is always derived. Unresolved images are left out of the content.
    """
    settings = settings or Settings()
    snapshot = doc.to_sequence()
    return ArticlePayload(
        title=(title or "").strip() or infer_title(snapshot)[:255],
        author_name=(author_name or "").strip() or settings.default_author,
        content=encode(doc, drop_unresolved=True),
        status=status,
        excerpt=excerpt_text if excerpt_text else excerpt(snapshot, settings.excerpt_length),
        tags=_parse_tags(tags),
        reading_time=reading_time(snapshot, settings.words_per_minute),
    )


def _persist(repo: ArticleRepo, payload: ArticlePayload, article_id: Optional[int]) -> Article:
    try:
        article = repo.create(payload) if article_id is None else repo.update(article_id, payload)
    except UpstreamFailure as e:
        logger.error("Saving article {} failed: {}", article_id or "(new)", e)
        raise
    logger.info("Saved article {} as {}", article.id, payload.status.value)
    return article


def save_draft(
    repo: ArticleRepo,
    doc: Document,
    *,
    article_id: Optional[int] = None,
    settings: Optional[Settings] = None,
    **fields: Any,
    ) -> Article:
    """Save as a draft. Empty content is accepted. Raises UpstreamFailure if the save fails."""
    validate_for_draft(doc)
    payload = build_payload(doc, status=ArticleStatus.draft, settings=settings, **fields)
    return _persist(repo, payload, article_id)


def publish(
    repo: ArticleRepo,
    doc: Document,
    *,
    article_id: Optional[int] = None,
    settings: Optional[Settings] = None,
    **fields: Any,
    ) -> Article:
    """Publish the article.

    Raises EmptyContent (before anything is sent) when the body has no visible
    text, and UpstreamFailure when the save fails.
    """
    validate_for_publish(doc)
    payload = build_payload(doc, status=ArticleStatus.published, settings=settings, **fields)
    return _persist(repo, payload, article_id)


def load_article(article: Article) -> Document:
    """Editable Document for a stored article, including legacy HTML bodies."""
    return decode(article.content)


def preview(content: Any) -> str:
    """Read-only HTML for persisted content, without any editor involved."""
    return render(decode(content))


def attach_image(
    doc: Document,
    index: int,
    url: str,
    caption: Optional[str] = None,
    alt: Optional[str] = None,
    ) -> None:
    """Fill an image block with the URL returned by a media upload.

    Raises OutOfRange for a bad index and ValueError if the block is not an image.
    """
    block = doc[index]
    if not isinstance(block, ImageBlock):
        raise ValueError(f"Block {index} is a {block.type} block, not an image")
    patch: dict[str, Any] = {"url": url}
    if caption is not None:
        patch["caption"] = caption
    if alt is not None:
        patch["alt"] = alt
    doc.update_block_data(index, patch)


def import_markdown(path: Path, preset: str = 'gfm-like') -> tuple[dict[str, Any], Document]:
    """Read a markdown article into (fields, Document).

    fields carries title, author_name, excerpt_text and tags from the YAML
    frontmatter when present, ready to pass on to save_draft or publish.
    """
    parsed = parse_file(Path(path), preset)
    doc = Document(tokens_to_blocks(parsed.tokens, parsed.parser))
    fm = parsed.frontmatter
    fields: dict[str, Any] = {
        'title': fm.get('title'),
        'author_name': fm.get('author') or fm.get('author_name'),
        'excerpt_text': fm.get('excerpt') or fm.get('description'),
    }
    fields = {k: str(v) for k, v in fields.items() if v is not None}
    if fm.get('tags'):
        fields['tags'] = fm['tags'] if isinstance(fm['tags'], str) else [str(t) for t in fm['tags']]
    logger.debug("Imported {} ({} blocks)", path, len(doc))
    return fields, doc
