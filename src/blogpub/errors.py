"""Failure types raised by the document model, codec and persistence boundary"""


class BlogpubError(Exception):
    """Base class for all blogpub failures."""


class OutOfRange(BlogpubError, IndexError):
    """A Document index operation was given an index outside the block sequence."""

    def __init__(self, index: int, length: int):
        self.index = index
        self.length = length
        super().__init__(f"Block index {index} out of range for document of {length} block(s)")


class EmptyContent(BlogpubError, ValueError):
    """Publish attempted on a Document with no visible text."""

    def __init__(self, message: str = "Please add some content before publishing"):
        super().__init__(message)


class MalformedBlock(BlogpubError, ValueError):
    """A structured-form block entry could not be decoded."""

    def __init__(self, position: int, reason: str):
        self.position = position
        self.reason = reason
        super().__init__(f"Malformed block at position {position}: {reason}")


class UnknownBlockType(BlogpubError):
    """A block with an unrecognized type reached the renderer."""

    def __init__(self, block_type: str):
        self.block_type = block_type
        super().__init__(f"Unknown block type: {block_type!r}")


class UpstreamFailure(BlogpubError):
    """The persistence or media collaborator returned an error or timed out.

    status is the HTTP status code, or None for transport errors and timeouts.
    """

    def __init__(self, status: int | None, message: str):
        self.status = status
        self.message = message
        prefix = f"HTTP {status}" if status is not None else "Upstream unavailable"
        super().__init__(f"{prefix}: {message}")
