"""Second pass: encodes instructions, resolves entries and writes the outputs."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator

from .data import DataTable
from .orders import encode_order, get_order_num
from .symbols import SymbolTable, is_label_line
from .textutils import (
    CANT_OPEN_FINAL_DEST_FILE,
    ENTRY,
    ENTRY_LINE_WITHOUT_ENTRY,
    FINISH_ANALYZE_WITH_ERRORS,
    FINISH_WRITE_BIN_FILES,
    LINE_MAX_LEN,
    START_IC,
    START_WRITE_BIN_FILES,
    Reporter,
    read_next_word,
)

POST_MACROS_EXT = ".am"
ASSEMBLY_EXT = ".ob"
ENTRY_EXT = ".ent"
EXTERNAL_EXT = ".ext"
START_SEC_PASS_LOG = "start second pass on file: %s"


def _bounded_lines(lines: Iterable[str]) -> Iterator[str]:
    """Yield lines, splitting any longer than the line buffer into pieces."""
    size = LINE_MAX_LEN - 1
    for line in lines:
        yield from (line[i : i + size] for i in range(0, len(line), size))


def write_machine_file(
    base: str | Path, assembly: DataTable, data_table: DataTable
) -> Path:
    """Write the code image followed by the data image to ``base.ob``."""
    path = Path(f"{base}{ASSEMBLY_EXT}")
    with path.open("w") as stream:
        next_address = assembly.write_with_index(stream, START_IC)
        data_table.write_with_index(stream, next_address)
    return path


def write_entries_file(base: str | Path, symbols: SymbolTable) -> Path:
    """Write the entry symbols to ``base.ent``."""
    path = Path(f"{base}{ENTRY_EXT}")
    with path.open("w") as stream:
        symbols.write_entries(stream)
    return path


def write_externals_file(base: str | Path, externals: SymbolTable) -> Path:
    """Write the uses of external symbols to ``base.ext``."""
    path = Path(f"{base}{EXTERNAL_EXT}")
    with path.open("w") as stream:
        externals.write_externals(stream)
    return path


def second_pass(
    base: str | Path, data_table: DataTable, symbols: SymbolTable, reporter: Reporter
) -> list[Path]:
    """Encode ``base.am`` and, if no error was found, write the output files.

    Returns the paths written, or an empty list when errors were reported.
    """
    assembly = DataTable()
    externals = SymbolTable()
    path = Path(f"{base}{POST_MACROS_EXT}")
    reporter.line = 0
    ic = START_IC
    reporter.log(START_SEC_PASS_LOG % base)
    with path.open("r") as source:
        for line in _bounded_lines(source):
            reporter.line += 1
            rest = line
            if is_label_line(rest):
                _, rest = read_next_word(rest, True)
            word, rest = read_next_word(rest, True)
            order_num = get_order_num(word)
            if order_num >= 0:
                encoded = encode_order(rest, order_num, symbols, externals, ic, reporter)
                assembly.insert(encoded.word)
                if encoded.src_data:
                    assembly.insert(encoded.src_data)
                if encoded.dest_data:
                    assembly.insert(encoded.dest_data)
            elif word == ENTRY:
                name, rest = read_next_word(rest, True)
                symbol = symbols.get(name)
                if symbol is not None:
                    symbol.prop = ENTRY
                else:
                    reporter.error(ENTRY_LINE_WITHOUT_ENTRY % name)
            ic += 1

    if reporter.has_errors:
        reporter.log(FINISH_ANALYZE_WITH_ERRORS % base)
        return []

    reporter.log(START_WRITE_BIN_FILES)
    reporter.line = 0
    try:
        written = [
            write_machine_file(base, assembly, data_table),
            write_entries_file(base, symbols),
            write_externals_file(base, externals),
        ]
    except OSError:
        reporter.error(CANT_OPEN_FINAL_DEST_FILE)
        raise
    reporter.log(FINISH_WRITE_BIN_FILES)
    return written