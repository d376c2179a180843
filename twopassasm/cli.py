"""Command line entry: assembles each named source file."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence, TextIO

from .data import DataTable
from .first_pass import first_pass
from .preassembler import pre_assemble
from .second_pass import second_pass
from .symbols import SymbolTable
from .textutils import MEMORY_ERROR, Reporter


def assemble_file(base: str | Path, stream: TextIO | None = None) -> bool:
    """Assemble ``base.as``; return True if no error was reported."""
    reporter = Reporter(filename=str(base), stream=stream)
    pre_assemble(base, reporter)
    if reporter.has_errors:
        return False
    data_table = DataTable()
    symbols = SymbolTable()
    first_pass(base, data_table, symbols, reporter)
    second_pass(base, data_table, symbols, reporter)
    return not reporter.has_errors


def main(argv: Sequence[str] | None = None) -> int:
    """Assemble the files named on the command line, last one first."""
    parser = argparse.ArgumentParser(
        prog="twopassasm",
        description="Assemble source files into object, entry and external files.",
    )
    parser.add_argument(
        "files", nargs="*", help="source base names, without the .as extension"
    )
    args = parser.parse_args(argv)
    all_ok = True
    for base in reversed(args.files):
        try:
            all_ok = assemble_file(base) and all_ok
        except OSError:
            print(MEMORY_ERROR)
            return 1
    return 0 if all_ok else 1


if __name__ == "__main__":
    sys.exit(main())