"""REST client for the articles API and its media endpoints"""

from __future__ import annotations

from typing import Any

import httpx
from loguru import logger
from pydantic import ValidationError

from blogpub.config import Settings
from blogpub.core.models import Article, ArticlePayload
from blogpub.crud.repo import ArticleRepo
from blogpub.errors import UpstreamFailure


class ArticlesClient(ArticleRepo):
    """Talks to the articles API. Every failure surfaces as UpstreamFailure; nothing is retried.

    Responses use the envelope {"success": bool, "data": ..., "message": str}.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "ArticlesClient":
        return cls(settings.api_base_url, settings.api_timeout)

    def __enter__(self) -> "ArticlesClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()
    def _request(self, method: str, path: str, **kwargs: Any) -> tuple[int, Any]:
        """Send a request and return (status, envelope data), raising UpstreamFailure on any failure."""
        logger.debug("API request: {} {}", method, path)
        try:
            resp = self._client.request(method, path, **kwargs)
        except httpx.TimeoutException as exc:
            logger.error("API timeout: {} {}", method, path)
            raise UpstreamFailure(None, f"Request timed out: {method} {path}") from exc
        except httpx.HTTPError as exc:
            logger.error("API transport error: {} {}: {}", method, path, exc)
            raise UpstreamFailure(None, str(exc) or type(exc).__name__) from exc

        try:
            body = resp.json()
        except ValueError:
            body = None

        if not resp.is_success:
            message = resp.reason_phrase or "Request failed"
            if isinstance(body, dict):
                message = body.get("message") or body.get("error") or message
            logger.error("API error: {} {} -> {} {}", method, path, resp.status_code, message)
            raise UpstreamFailure(resp.status_code, message)

        if not isinstance(body, dict):
            raise UpstreamFailure(resp.status_code, "Response was not a JSON object")
        return resp.status_code, body.get("data")

    @staticmethod
    def _article(status: int, data: Any) -> Article:
        try:
            return Article.model_validate(data)
        except ValidationError as exc:
            logger.error("API returned an unusable article: {}", exc)
            raise UpstreamFailure(status, f"Response did not contain a valid article: {exc.error_count()} error(s)") from exc

    # --- articles ---

    def create(self, payload: ArticlePayload) -> Article:
        return self._article(*self._request("POST", "/articles", json=payload.model_dump(mode="json")))

    def update(self, article_id: int, payload: ArticlePayload) -> Article:
        return self._article(*self._request("PUT", f"/articles/{article_id}", json=payload.model_dump(mode="json")))

    def get(self, article_id: int) -> Article:
        try:
            status, data = self._request("GET", f"/articles/{article_id}")
        except UpstreamFailure as e:
            if e.status == 404:
                raise LookupError(f"Article {article_id} not found") from e
            raise
        return self._article(status, data)

    def list(
        self,
        page: int = 1,
        limit: int = 10,
        author: str | None = None,
        sort_by: str = "created_at",
        order: str = "DESC",
    ) -> list[Article]:
        params: dict[str, Any] = {"page": page, "limit": limit, "sortBy": sort_by, "order": order}
        if author:
            params["author"] = author
        status, data = self._request("GET", "/articles", params=params)
        if data is None:
            return []
        if not isinstance(data, list):
            raise UpstreamFailure(status, "Article listing was not a list")
        return [self._article(status, d) for d in data]

    def delete(self, article_id: int) -> None:
        self._request("DELETE", f"/articles/{article_id}")

    # --- media ---

    def _upload(self, path: str, image: bytes, filename: str, content_type: str, **fields: str) -> str:
        """POST one image file and return the URL the media service assigned to it."""
        status, data = self._request(
            "POST", path, files={"image": (filename, image, content_type)}, data=fields or None,
        )
        if not isinstance(data, dict):
            raise UpstreamFailure(status, "Upload response was not a JSON object")
        url = data.get("cloudinary_url") or data.get("url")
        if not isinstance(url, str) or not url:
            raise UpstreamFailure(status, "Upload response did not include an image URL")
        logger.info("Uploaded image to {}: {}", path, url)
        return url

    def upload_image(
        self,
        article_id: int,
        image: bytes,
        filename: str = "image",
        content_type: str = "application/octet-stream",
        alt: str = "",
        caption: str = "",
    ) -> str:
        """Upload an inline image for an article and return its resolvable URL."""
        return self._upload(
            f"/media/articles/{article_id}/inline", image, filename, content_type, alt_text=alt, caption=caption,
        )

    def upload_featured_image(
        self, article_id: int, image: bytes, filename: str = "image", content_type: str = "application/octet-stream",
    ) -> str:
        """Upload the article's featured (header) image and return its URL."""
        return self._upload(f"/media/articles/{article_id}/featured", image, filename, content_type)

    def upload_thumbnail(
        self, article_id: int, image: bytes, filename: str = "image", content_type: str = "application/octet-stream",
    ) -> str:
        return self._upload(f"/media/articles/{article_id}/thumbnail", image, filename, content_type)

    def delete_media(self, article_id: int, media_id: str) -> None:
        self._request("DELETE", f"/media/articles/{article_id}/{media_id}")
        logger.info("Deleted media {} from article {}", media_id, article_id)
