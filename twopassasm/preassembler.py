"""Macro expansion: turns a '.as' source into an '.am' file."""

from __future__ import annotations

from contextlib import ExitStack
from pathlib import Path
from typing import Iterable, Iterator

from .macros import Macro, MacroTable
from .orders import get_order_num, is_directive
from .textutils import (
    FINISH_PRE_ASSEMBLER_LOG,
    LINE_MAX_LEN,
    MACRO_LINE_SYNTAX_ERR,
    MACROEND_LINE_SYNTAX_ERR,
    PRE_ASSEMBLY_FILE_ERR,
    START_PRE_ASSEMBLER_LOG,
    Reporter,
    get_next_word,
    is_empty_or_comment,
    read_next_word,
)

MACRO_START_WORD = "mcro"
MACRO_END_WORD = "mcroend"
SOURCE_EXT = ".as"
PRE_ASSEMBLED_EXT = ".am"


def _bounded_lines(lines: Iterable[str]) -> Iterator[str]:
    """Yield lines, splitting any longer than the line buffer into pieces."""
    size = LINE_MAX_LEN - 1
    for line in lines:
        yield from (line[i : i + size] for i in range(0, len(line), size))


def is_end_of_macro(line: str) -> bool:
    """True if the first word of ``line`` ends a macro definition."""
    return get_next_word(line, True) == MACRO_END_WORD


def is_macro_start(line: str) -> bool:
    """True if ``line`` starts, at its first column, a macro definition."""
    return get_next_word(line, False) == MACRO_START_WORD


def is_valid_macro(name: str, line: str) -> bool:
    """True if ``name`` is not a command, ``line`` holds no directive and nothing follows the name."""
    if get_order_num(name) >= 0 or is_directive(line):
        return False
    _, rest = read_next_word(line, True)
    return is_empty_or_comment(rest)


def is_valid_end_macro(line: str) -> bool:
    """True if the macro end word stands alone on ``line``."""
    _, rest = read_next_word(line, True)
    return is_empty_or_comment(rest)


def pre_assemble(base: str | Path, reporter: Reporter) -> Path:
    """Expand macros of ``base.as`` into ``base.am`` and return the output path."""
    base = str(base)
    reporter.log(START_PRE_ASSEMBLER_LOG % base)
    src_path = Path(base + SOURCE_EXT)
    dest_path = Path(base + PRE_ASSEMBLED_EXT)
    table = MacroTable()
    with ExitStack() as stack:
        try:
            src = stack.enter_context(src_path.open("r"))
            dest = stack.enter_context(dest_path.open("w"))
        except OSError:
            reporter.error(PRE_ASSEMBLY_FILE_ERR)
            return dest_path

        reporter.line = 0
        current: Macro | None = None
        inside_macro = False
        for line in _bounded_lines(src):
            reporter.line += 1
            if is_macro_start(line):
                inside_macro = True
                _, rest = read_next_word(line, False)
                name = get_next_word(rest, True)
                if not is_valid_macro(name, rest):
                    reporter.error(MACRO_LINE_SYNTAX_ERR % rest)
                current = Macro(name)
                continue
            if inside_macro:
                if not is_end_of_macro(line):
                    current.add_line(line)
                    continue
                inside_macro = False
                if not is_valid_end_macro(line):
                    reporter.error(MACROEND_LINE_SYNTAX_ERR)
                    break
                table.add(current)
            elif table.is_call(line):
                table.write_macro(dest, get_next_word(line, False))
            elif line != "\n":
                dest.write(line)
        reporter.log(FINISH_PRE_ASSEMBLER_LOG)
    return dest_path