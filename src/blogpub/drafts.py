"""Local draft snapshots: structured content plus metrics, one JSON file per article"""

from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Union

from loguru import logger
from pydantic import BaseModel, Field, ValidationError

from blogpub.config import Settings
from blogpub.core.codec.decode import decode
from blogpub.core.codec.encode import encode
from blogpub.core.document import Document
from blogpub.core.metrics import WORDS_PER_MINUTE, compute_metrics
from blogpub.core.models import ArticleMetrics


NEW_ARTICLE_KEY = "new"


class LocalDraft(BaseModel):
    content: dict[str, Any]
    metrics: ArticleMetrics
    saved_at: datetime = Field(default_factory=datetime.now)


def draft_key(article_id: Optional[int]) -> str:
    return NEW_ARTICLE_KEY if article_id is None else str(article_id)


class DraftStore:
    """Keeps the latest unsaved body of each article on disk; content format matches persisted content."""

    def __init__(self, directory: Union[str, Path], words_per_minute: int = WORDS_PER_MINUTE):
        self.directory = Path(directory)
        self.words_per_minute = words_per_minute

    @classmethod
    def from_settings(cls, settings: Settings) -> "DraftStore":
        return cls(settings.drafts_dir, settings.words_per_minute)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def save(self, key: str, doc: Document) -> LocalDraft:
        self.directory.mkdir(parents=True, exist_ok=True)
        draft = LocalDraft(content=encode(doc), metrics=compute_metrics(doc, self.words_per_minute))
        self._path(key).write_text(draft.model_dump_json(indent=2), encoding="utf-8")
        logger.debug("Draft {} saved locally ({} words)", key, draft.metrics.word_count)
        return draft

    def read(self, key: str) -> Optional[LocalDraft]:
        """Return the stored snapshot, or None if absent or unreadable."""
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return LocalDraft.model_validate_json(path.read_text(encoding="utf-8"))
        except ValidationError as e:
            logger.warning("Ignoring unreadable draft {}: {}", path, e.error_count())
            return None

    def load(self, key: str) -> Optional[Document]:
        draft = self.read(key)
        return decode(draft.content) if draft else None

    def discard(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)
