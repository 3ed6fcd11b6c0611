from dataclasses import dataclass, field
from datetime import datetime

from blogpub.core.models import Article, ArticlePayload
from blogpub.crud.repo import ArticleRepo


@dataclass
class MemoryArticleRepo(ArticleRepo):
    """Process-local ArticleRepo; ids count up from 1."""
    _articles: dict[int, Article] = field(default_factory=dict)

    def create(self, payload: ArticlePayload) -> Article:
        now = datetime.now()
        article = Article(id=len(self._articles) + 1, created_at=now, updated_at=now, **payload.model_dump())
        self._articles[article.id] = article
        return article

    def update(self, article_id: int, payload: ArticlePayload) -> Article:
        article = self.get(article_id).model_copy(update={**payload.model_dump(), "updated_at": datetime.now()})
        self._articles[article_id] = article
        return article

    def get(self, article_id: int) -> Article:
        if article_id not in self._articles:
            raise LookupError(f"Article {article_id} not found")
        return self._articles[article_id]
