"""Shared fixtures for crud unit tests"""

import pytest
from sqlalchemy import create_engine
from sqlmodel import SQLModel, Session

from blogpub.core.models import ArticlePayload
from blogpub.crud.articles import create_article
from blogpub.crud.models import ArticleRow


def _make_payload(text: str = "World", title: str = "Hello", author: str = "Ada", **kw) -> ArticlePayload:
    content = {"blocks": [
        {"type": "heading", "data": {"text": title, "level": 1}},
        {"type": "paragraph", "data": {"text": text}},
    ]}
    return ArticlePayload(title=title, author_name=author, content=content, excerpt=f"{title} {text}", **kw)


@pytest.fixture(name="engine")
def engine_fixture():
    """In-memory SQLite engine with all tables created."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False})
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Fresh session per test; changes are not committed."""
    with Session(engine) as s:
        yield s


@pytest.fixture(name="article")
def article_fixture(session) -> ArticleRow:
    """A minimal article persisted to the session."""
    return create_article(session, _make_payload())


@pytest.fixture(name="make_payload")
def make_payload_fixture():
    """Factory for two-block ArticlePayloads: make_payload(text=..., title=..., author=..., **fields)."""
    return _make_payload
