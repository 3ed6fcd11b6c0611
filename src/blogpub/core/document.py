"""In-memory Document: the ordered block sequence owned by one editing session"""

from typing import Any, Iterable, Iterator

from blogpub.core.models import AnyBlock, ListBlock, ListItem, OpaqueBlock, ParagraphBlock
from blogpub.core.utils.text import INLINE_MARKS, toggle_wrap
from blogpub.errors import OutOfRange


class BlockSequence:
    """Read-only snapshot of a Document's blocks in reading order.

    The snapshot is taken on construction; every iteration yields fresh copies,
    so it can be walked any number of times and mutating what it yields never
    reaches the Document or later iterations.
    """

    def __init__(self, blocks: Iterable[AnyBlock]):
        self._blocks = tuple(b.model_copy(deep=True) for b in blocks)

    def __iter__(self) -> Iterator[AnyBlock]:
        return (b.model_copy(deep=True) for b in self._blocks)

    def __len__(self) -> int:
        return len(self._blocks)

    def __getitem__(self, index: int) -> AnyBlock:
        return self._blocks[index].model_copy(deep=True)


class Document:
    """Ordered sequence of Blocks; sequence order is the canonical reading order."""

    def __init__(self, blocks: Iterable[AnyBlock] = ()):
        self._blocks: list[AnyBlock] = [b.model_copy(deep=True) for b in blocks]

    @classmethod
    def new(cls) -> "Document":
        """A fresh article body: one empty placeholder paragraph."""
        return cls([ParagraphBlock()])

    def __len__(self) -> int:
        return len(self._blocks)

    def __iter__(self) -> Iterator[AnyBlock]:
        return iter(self.to_sequence())

    def __getitem__(self, index: int) -> AnyBlock:
        self._check(index)
        return self._blocks[index].model_copy(deep=True)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return self._blocks == other._blocks

    def __repr__(self) -> str:
        return f"Document({[b.type for b in self._blocks]!r})"

    def _check(self, index: int) -> None:
        if not 0 <= index < len(self._blocks):
            raise OutOfRange(index, len(self._blocks))

    # --- mutations ---

    def insert_block(self, index: int, block: AnyBlock) -> None:
        """Insert a copy of block at index, clamped to [0, len]."""
        index = max(0, min(index, len(self._blocks)))
        self._blocks.insert(index, block.model_copy(deep=True))

    def append_block(self, block: AnyBlock) -> None:
        self.insert_block(len(self._blocks), block)

    def remove_block(self, index: int) -> AnyBlock:
        """Remove and return the block at index. Raises OutOfRange."""
        self._check(index)
        return self._blocks.pop(index)

    def update_block_data(self, index: int, patch: dict[str, Any]) -> AnyBlock:
        """Merge patch into the block's data, re-validating against the block's own payload model.

        The block type never changes. Raises OutOfRange, or pydantic's
        ValidationError when the merged payload is invalid for the type.
        """
        self._check(index)
        block = self._blocks[index]
        if isinstance(block, OpaqueBlock):
            updated = block.model_copy(update={"data": {**block.data, **patch}})
        else:
            merged = {**block.data.model_dump(), **patch}
            updated = block.model_copy(update={"data": type(block.data).model_validate(merged)})
        self._blocks[index] = updated
        return updated.model_copy(deep=True)

    def move_block(self, from_index: int, to_index: int) -> None:
        """Move a block so it ends up at to_index. Raises OutOfRange for either bad index."""
        self._check(from_index)
        self._check(to_index)
        if from_index == to_index:
            return
        self._blocks.insert(to_index, self._blocks.pop(from_index))

    def toggle_mark(self, index: int, mark: str, item: int | None = None) -> AnyBlock:
        """Wrap or unwrap a block's rich text in an inline mark tag.

        List blocks need item to pick the entry. Raises OutOfRange for bad
        indices and ValueError for unsupported marks or blocks without rich text.
        """
        if mark not in INLINE_MARKS:
            raise ValueError(f"Unsupported inline mark {mark!r}; expected one of {sorted(INLINE_MARKS)}")
        self._check(index)
        block = self._blocks[index]

        if isinstance(block, ListBlock):
            if item is None:
                raise ValueError("List blocks need an item index to toggle a mark")
            items = list(block.data.items)
            if not 0 <= item < len(items):
                raise OutOfRange(item, len(items))
            entry = items[item]
            if isinstance(entry, ListItem):
                items[item] = entry.model_copy(update={"content": toggle_wrap(entry.content, mark)})
            else:
                items[item] = toggle_wrap(entry, mark)
            return self.update_block_data(index, {"items": items})

        if block.type in ("heading", "paragraph", "quote"):
            return self.update_block_data(index, {"text": toggle_wrap(block.data.text, mark)})

        raise ValueError(f"Block type {block.type!r} has no rich text to mark")

    # --- snapshots ---

    def to_sequence(self) -> BlockSequence:
        """Snapshot of the blocks in canonical order, safe to read while editing continues."""
        return BlockSequence(self._blocks)
