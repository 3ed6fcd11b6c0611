"""Persistence collaborator interface shared by the SQL store and the REST client"""

from abc import ABC, abstractmethod

from blogpub.core.models import Article, ArticlePayload


class ArticleRepo(ABC):
    @abstractmethod
    def create(self, payload: ArticlePayload) -> Article:
        """Persist a new article and return it with its generated id and timestamps."""
        raise NotImplementedError

    @abstractmethod
    def update(self, article_id: int, payload: ArticlePayload) -> Article:
        """Overwrite an existing article; last writer wins."""
        raise NotImplementedError

    @abstractmethod
    def get(self, article_id: int) -> Article:
        """Return the article or raise LookupError."""
        raise NotImplementedError
