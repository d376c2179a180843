"""Ordered table of machine words (data image or code image)."""

from __future__ import annotations

from typing import Iterator, TextIO

_WORD_MASK = 0xFFFFFF


class DataTable:
    """Words in insertion order, written out with consecutive addresses."""

    def __init__(self) -> None:
        self._values: list[int] = []

    def insert(self, value: int) -> None:
        """Append a word to the end of the table."""
        self._values.append(value)

    def write_with_index(self, stream: TextIO, start: int) -> int:
        """Write each word with its address from ``start``; return the next address."""
        for address, value in enumerate(self._values, start):
            stream.write(f"{address:06d} \t 0x{value & _WORD_MASK:06X}\n")
        return start + len(self._values)

    def __iter__(self) -> Iterator[int]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)