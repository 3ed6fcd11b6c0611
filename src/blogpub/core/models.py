"""Typed content blocks, article records, and the payloads exchanged with persistence"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator, model_validator


class BlockType(str, Enum):
    """Closed set of block types an article body may contain"""
    heading = "heading"
    paragraph = "paragraph"
    list = "list"
    quote = "quote"
    code = "code"
    delimiter = "delimiter"
    image = "image"
    embed = "embed"
    raw = "raw"


class ArticleStatus(str, Enum):
    draft = "draft"
    published = "published"
    archived = "archived"


# --- block payloads ---

class _Payload(BaseModel):
    """Editor tunes and other unknown keys ride along untouched."""
    model_config = ConfigDict(extra="allow")


class HeadingData(_Payload):
    text: str = ""
    level: int = 2          # editor default level

    @field_validator("level", mode="before")
    @classmethod
    def _clamp_level(cls, v: Any) -> int:
        """Clamp heading level into 1-6; None falls back to the default level."""
        if v is None:
            return 2
        try:
            level = int(v)
        except (TypeError, ValueError, OverflowError) as e:
            raise ValueError(f"heading level must be a number, got {v!r}") from e
        return min(6, max(1, level))


class ParagraphData(_Payload):
    text: str = ""


class ListItem(_Payload):
    """Nested list entry: rich-text content plus optional child items."""
    content: str = ""
    items: list[Union[str, "ListItem"]] = Field(default_factory=list)


ListItem.model_rebuild()


class ListData(_Payload):
    style: Literal["ordered", "unordered"] = "unordered"
    items: list[Union[str, ListItem]] = Field(default_factory=list)


class QuoteData(_Payload):
    text: str = ""
    caption: Optional[str] = None


class CodeData(_Payload):
    code: str = ""


class DelimiterData(_Payload):
    pass


class ImageData(_Payload):
    url: Optional[str] = None
    file: Optional[Union[dict[str, Any], str]] = None   # upload reference before url is known
    caption: Optional[str] = None
    alt: Optional[str] = None

    @model_validator(mode="after")
    def _promote_file_url(self) -> "ImageData":
        """Editor uploads report {file: {url}}; surface that as url. A non-string url is left unresolved."""
        if not self.url and isinstance(self.file, dict) and isinstance(self.file.get("url"), str) and self.file["url"]:
            self.url = self.file["url"]
        return self

    @property
    def resolved(self) -> bool:
        return bool(self.url)


class EmbedData(_Payload):
    embed: str = ""
    caption: Optional[str] = None


class RawData(_Payload):
    html: str = ""


# --- blocks ---

class _BlockBase(BaseModel):
    id: Optional[str] = None    # editor-assigned block id, preserved when present


class HeadingBlock(_BlockBase):
    type: Literal["heading"] = "heading"
    data: HeadingData = Field(default_factory=HeadingData)


class ParagraphBlock(_BlockBase):
    type: Literal["paragraph"] = "paragraph"
    data: ParagraphData = Field(default_factory=ParagraphData)


class ListBlock(_BlockBase):
    type: Literal["list"] = "list"
    data: ListData = Field(default_factory=ListData)


class QuoteBlock(_BlockBase):
    type: Literal["quote"] = "quote"
    data: QuoteData = Field(default_factory=QuoteData)


class CodeBlock(_BlockBase):
    type: Literal["code"] = "code"
    data: CodeData = Field(default_factory=CodeData)


class DelimiterBlock(_BlockBase):
    type: Literal["delimiter"] = "delimiter"
    data: DelimiterData = Field(default_factory=DelimiterData)


class ImageBlock(_BlockBase):
    type: Literal["image"] = "image"
    data: ImageData = Field(default_factory=ImageData)


class EmbedBlock(_BlockBase):
    type: Literal["embed"] = "embed"
    data: EmbedData = Field(default_factory=EmbedData)


class RawBlock(_BlockBase):
    type: Literal["raw"] = "raw"
    data: RawData = Field(default_factory=RawData)


Block = Annotated[
    Union[
        HeadingBlock, ParagraphBlock, ListBlock, QuoteBlock, CodeBlock,
        DelimiterBlock, ImageBlock, EmbedBlock, RawBlock,
    ],
    Field(discriminator="type"),
]

BLOCK_ADAPTER: TypeAdapter = TypeAdapter(Block)


class OpaqueBlock(BaseModel):
    """A block whose type is outside BlockType, kept verbatim and never rendered."""
    type: str
    data: dict[str, Any] = Field(default_factory=dict)
    id: Optional[str] = None


AnyBlock = Union[Block, OpaqueBlock]


def new_block(block_type: BlockType | str, **data: Any) -> Block:
    """Build a validated block of the given type, e.g. new_block('heading', text='Hi', level=1)."""
    return BLOCK_ADAPTER.validate_python({"type": BlockType(block_type).value, "data": data})


# --- articles ---

def _unique_tags(tags: list[str]) -> list[str]:
    """Trim, drop empties, and deduplicate tags preserving first-seen order."""
    return list(dict.fromkeys(t.strip() for t in tags if t and t.strip()))


class ArticleMetrics(BaseModel):
    word_count: int = Field(..., ge=0)
    reading_time: int = Field(..., ge=1)


class ArticlePayload(BaseModel):
    """Body sent to the persistence collaborator on create/update."""
    title: str = Field(..., min_length=1, max_length=255)
    author_name: str = Field(..., min_length=1, max_length=100)
    content: dict[str, Any]
    status: ArticleStatus = ArticleStatus.draft
    excerpt: str = ""
    tags: list[str] = Field(default_factory=list)
    reading_time: int = Field(default=1, ge=1)

    @field_validator("tags")
    @classmethod
    def _dedupe_tags(cls, v: list[str]) -> list[str]:
        return _unique_tags(v)


class Article(BaseModel):
    """An article record as returned by a persistence collaborator.

    content may be the structured form, a legacy flat HTML string, or missing
    on records written before structured content existed.
    """
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    author_name: str = ""
    content: Optional[Union[dict[str, Any], str]] = None
    status: ArticleStatus = ArticleStatus.draft
    excerpt: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    reading_time: int = 1
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags(cls, v: Any) -> list[str]:
        if v is None:
            return []
        if isinstance(v, str):
            v = v.split(",")
        return _unique_tags(list(v))

    @field_validator("reading_time", mode="before")
    @classmethod
    def _default_reading_time(cls, v: Any) -> int:
        return v or 1
