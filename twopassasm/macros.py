"""Macro definitions collected by the pre-assembler."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TextIO

from .textutils import get_next_word


@dataclass
class Macro:
    """A named macro; each added line goes before the lines already held."""

    name: str
    lines: list[str] = field(default_factory=list)

    def add_line(self, line: str) -> None:
        """Put ``line`` at the start of the macro body."""
        self.lines.insert(0, line)


class MacroTable:
    """Macros by name; a later definition hides an earlier one."""

    def __init__(self) -> None:
        self._macros: dict[str, Macro] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._macros

    def __len__(self) -> int:
        return len(self._macros)

    def add(self, macro: Macro) -> None:
        """Register ``macro`` under its name."""
        self._macros.pop(macro.name, None)
        self._macros[macro.name] = macro

    def is_call(self, line: str) -> bool:
        """True if the first word of ``line`` names a known macro."""
        return get_next_word(line, False) in self._macros

    def write_macro(self, stream: TextIO, name: str) -> None:
        """Write the body of macro ``name``; nothing if it is unknown."""
        macro = self._macros.get(name)
        if macro is not None:
            stream.writelines(macro.lines)