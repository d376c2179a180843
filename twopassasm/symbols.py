"""Symbol table and label recognition."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Iterator, TextIO

from .textutils import DATA, ENTRY, LABEL_ALREADY_EXIST, Reporter, get_next_word

_UNSIGNED_MASK = 0xFFFFFFFF


@dataclass
class Symbol:
    """A named value with a property such as '.data', '.extern' or 'code'."""

    name: str
    prop: str | None
    value: int


class SymbolTable:
    """Symbols, most recently added first; lookups find the newest match."""

    def __init__(self) -> None:
        self._symbols: deque[Symbol] = deque()

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._symbols)

    def __len__(self) -> int:
        return len(self._symbols)

    def __contains__(self, name: object) -> bool:
        return any(symbol.name == name for symbol in self._symbols)

    def get(self, name: str) -> Symbol | None:
        """Return the newest symbol called ``name``, or None."""
        return next((s for s in self._symbols if s.name == name), None)

    def value_of(self, name: str) -> int:
        """Return the value of symbol ``name``, or -1 if there is none."""
        symbol = self.get(name)
        return -1 if symbol is None else symbol.value

    def add(self, name: str, prop: str | None, value: int, reporter: Reporter) -> Symbol:
        """Add a symbol; a repeated name is an error unless ``prop`` is None."""
        if prop is not None and name in self:
            reporter.error(LABEL_ALREADY_EXIST % name)
        symbol = Symbol(name, prop, value)
        self._symbols.appendleft(symbol)
        return symbol

    def add_ic_to_data(self, ic: int) -> None:
        """Shift '.data' symbols past the code image of length ``ic``."""
        for symbol in self._symbols:
            if symbol.prop == DATA:
                symbol.value += ic

    def write_entries(self, stream: TextIO) -> None:
        """Write every '.entry' symbol with its address."""
        for symbol in self._symbols:
            if symbol.prop == ENTRY:
                _write_symbol(stream, symbol)

    def write_externals(self, stream: TextIO) -> None:
        """Write every symbol with its address."""
        for symbol in self._symbols:
            _write_symbol(stream, symbol)


def _write_symbol(stream: TextIO, symbol: Symbol) -> None:
    stream.write(f"{symbol.name} \t 0x{symbol.value & _UNSIGNED_MASK:06X}\n")


def is_label_line(line: str) -> bool:
    """True if the first word is an alphanumeric name followed by ':'."""
    first = get_next_word(line, True)
    if not first.endswith(":"):
        return False
    return all(c.isascii() and c.isalnum() for c in first[:-1])


def get_label(line: str) -> str:
    """Return the label of a label line, without its ':'."""
    return get_next_word(line, True)[:-1]