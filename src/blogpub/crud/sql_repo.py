from __future__ import annotations

from sqlmodel import Session

from blogpub.core.models import Article, ArticlePayload
from blogpub.crud.articles import create_article, get_article, update_article
from blogpub.crud.repo import ArticleRepo


class SQLArticleRepo(ArticleRepo):
    """ArticleRepo over a local articles table; commits after every write."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, payload: ArticlePayload) -> Article:
        row = create_article(self.session, payload)
        self.session.commit()
        self.session.refresh(row)
        return Article.model_validate(row)

    def update(self, article_id: int, payload: ArticlePayload) -> Article:
        row = get_article(self.session, article_id)
        if row is None:
            raise LookupError(f"Article {article_id} not found")
        row, status = update_article(self.session, row, payload)
        if status != 'unchanged':
            self.session.commit()
            self.session.refresh(row)
        return Article.model_validate(row)

    def get(self, article_id: int) -> Article:
        row = get_article(self.session, article_id)
        if row is None:
            raise LookupError(f"Article {article_id} not found")
        return Article.model_validate(row)
