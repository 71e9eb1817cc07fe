from __future__ import annotations

from dataclasses import dataclass

from legaldoc.errors import InputError


@dataclass(frozen=True)
class TextChunk:
    index: int
    start: int
    text: str


def split_into_chunks(text: str, size: int) -> list[TextChunk]:
    """Partition `text` into contiguous slices of at most `size` characters.

    No attempt is made to respect sentence or paragraph boundaries; joining
    the chunk texts in order gives back `text` exactly.
    """

    if size < 1:
        raise InputError(f"Chunk size must be positive, got {size}")

    return [
        TextChunk(index=i, start=start, text=text[start : start + size])
        for i, start in enumerate(range(0, len(text), size))
    ]
