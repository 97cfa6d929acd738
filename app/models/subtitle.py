"""Subtitle entry model."""


class SubtitleEntry:
    """A single caption with its display interval in milliseconds."""

    __slots__ = ("in_point", "out_point", "content")

    def __init__(self, in_point: int, out_point: int, content: str):
        self.in_point = in_point
        self.out_point = out_point
        self.content = content

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SubtitleEntry):
            return NotImplemented
        return (self.in_point, self.out_point, self.content) == (
            other.in_point,
            other.out_point,
            other.content,
        )

    def __hash__(self) -> int:
        return hash((self.in_point, self.out_point, self.content))

    def __repr__(self) -> str:
        return f"SubtitleEntry(in={self.in_point}, out={self.out_point}, content={self.content!r})"
