"""Unit tests for crud/sql_repo.py"""

import pytest

from blogpub.core.models import Article, ArticleStatus
from blogpub.crud.sql_repo import SQLArticleRepo


@pytest.fixture(name="repo")
def repo_fixture(session):
    return SQLArticleRepo(session)


def test_create_returns_article(repo, make_payload):
    article = repo.create(make_payload())
    assert isinstance(article, Article)
    assert article.id is not None
    assert article.created_at is not None
    assert article.content["blocks"][0]["type"] == "heading"


def test_get_round_trip(repo, make_payload):
    created = repo.create(make_payload(tags=["a", "b"]))
    fetched = repo.get(created.id)
    assert fetched == created
    assert fetched.tags == ["a", "b"]


def test_get_missing(repo):
    with pytest.raises(LookupError):
        repo.get(404)


def test_update_overwrites(repo, make_payload):
    created = repo.create(make_payload())
    updated = repo.update(created.id, make_payload(text="Later", status=ArticleStatus.published))
    assert updated.status == ArticleStatus.published
    assert updated.content["blocks"][1]["data"]["text"] == "Later"


def test_update_unchanged(repo, make_payload):
    created = repo.create(make_payload())
    assert repo.update(created.id, make_payload()).updated_at == created.updated_at


def test_update_missing(repo, make_payload):
    with pytest.raises(LookupError):
        repo.update(99, make_payload())
