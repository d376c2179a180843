"""Word scanning, number parsing and diagnostic reporting shared by the passes."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import TextIO

LINE_MAX_LEN = 82
DATA = ".data"
STRING = ".string"
ENTRY = ".entry"
EXTERNAL = ".extern"
ADDRESS_MAX_LEN = 21
START_IC = 100

FIRST_SCAN_LOG = "start first pass on file: %s"
START_PRE_ASSEMBLER_LOG = "start pre assembler for file: %s"
START_SECOND_SCAN_LOG = "start second pass on file: %s"
FINISH_PRE_ASSEMBLER_LOG = "finish pre assembler analyze"
MEMORY_ERROR = "memory error, try to free all memory and exit the assembler immediatly"
DATA_OUT_OF_RANGE_ERROR = "num is too big to be inserted to data"
RELATIVE_ADDRESS_OUT_OF_RANGE = (
    "too big relative address in symbols table, that can't insert to memory, %s"
)
NO_STRING_IN_LINE = "no string started in line: %s"
STRING_END_WITHOUT_QUOTES = "string line didnt end with quotes, entire line: %s"
LABEL_WITHOUT_DIRECTIVE_OR_ORDER = (
    "synthax error, the line contains only label without directive or order"
)
ORDER_AND_DIRECTIVE_IN_ONE_LINE = "synthax error, the line contatin directive and order"
EXTERNAL_OR_ENTRY_WITH_COMMA = (
    "synthax error, external or entry directive shouldn't contains comma"
)
COMMAS_DONT_MATCH_DATA = "synthax error, count of comma's dont match count of data in line"
WORDS_UNMATCH_ORDER = "synthax error, num of words in line dont match the order type"
WORDS_UNMATCH_COMMAS = "syntax error, num of words in line don't match the num of comma's"
WRONG_NUMBER_IN_DATA = "wrong number in data command line:  %s"
FINISH_FIRST_SCAN = "finish first pass on file, dc start in address: %d"
PRE_ASSEMBLY_FILE_ERR = "Error reading or writing to pre assembly file"
MACRO_LINE_SYNTAX_ERR = "macro start line synthax error %s"
MACROEND_LINE_SYNTAX_ERR = "synthax error, macro end line contains another words in line"
CANT_OPEN_FINAL_DEST_FILE = "can't open file for write"
ENTRY_LINE_WITHOUT_ENTRY = "entry line without good symbol, entryName: %s"
START_WRITE_BIN_FILES = "start write to binary files"
FINISH_WRITE_BIN_FILES = "finish to analyze and convert the assembly file"
FINISH_ANALYZE_WITH_ERRORS = (
    "finish analyze file: '%s', found errors, no binary file create"
)
LABEL_ALREADY_EXIST = "label with the name: %s already exist"

_DIGITS = "0123456789"


@dataclass
class Reporter:
    """Prints diagnostics tagged with file name and line, and remembers errors."""

    filename: str = ""
    line: int = 0
    has_errors: bool = False
    stream: TextIO | None = None

    def _out(self) -> TextIO:
        return self.stream if self.stream is not None else sys.stdout

    def error(self, message: str) -> None:
        """Report an error; the file will then produce no output files."""
        self._out().write(
            f"Found Error, File: {self.filename}, Line {self.line}: {message}\n"
        )
        self.has_errors = True

    def log(self, message: str) -> None:
        """Report progress information."""
        self._out().write(f"File: {self.filename} Line {self.line}: {message}\n")


def read_next_word(line: str, skip_spaces: bool) -> tuple[str, str]:
    """Return the next word of ``line`` and the text that follows it.

    Leading blanks and commas are skipped when ``skip_spaces`` is true; a word
    ends at a blank, a comma, a newline or the end of the text.
    """
    pos = 0
    if skip_spaces:
        while pos < len(line) and line[pos] in " ,\t":
            pos += 1
    start = pos
    while pos < len(line) and line[pos] not in " \t\n,\0":
        pos += 1
    return line[start:pos], line[pos:]


def get_next_word(line: str, skip_spaces: bool) -> str:
    """Return the next word of ``line`` without consuming it.

    Leading spaces, tabs and newlines are skipped when ``skip_spaces`` is true;
    the word ends at a space, a newline or the end of the text.
    """
    pos = 0
    if skip_spaces:
        while pos < len(line) and line[pos] in " \t\n":
            pos += 1
    start = pos
    while pos < len(line) and line[pos] not in " \n\0":
        pos += 1
    return line[start:pos]


def str_to_int(word: str) -> int:
    """Convert a decimal string with an optional sign to an integer."""
    negative = word.startswith("-")
    if word[:1] in ("+", "-"):
        word = word[1:]
    total = 0
    for power, char in zip(range(len(word) - 1, -1, -1), word):
        total += 10**power * (ord(char) - ord("0"))
    return -total if negative else total


def is_empty_or_comment(line: str) -> bool:
    """True for a comment line (starting with ';') or a blank line."""
    if line.startswith(";"):
        return True
    for char in line:
        if char in "\n\0":
            break
        if char not in " \t":
            return False
    return True


def is_valid_num(word: str) -> bool:
    """True if ``word`` is an optional sign followed only by decimal digits."""
    if word[:1] in ("+", "-"):
        word = word[1:]
    return all(char in _DIGITS for char in word)


def get_register(word: str) -> int | None:
    """Return the register index named by ``word`` (r0..r7), or None."""
    if len(word) < 2 or word[0] != "r":
        return None
    digit = word[1]
    if digit in _DIGITS and int(digit) < 8:
        return int(digit)
    return None