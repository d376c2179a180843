"""First pass: collects labels, data and the length of the code image."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator

from .data import DataTable
from .orders import CODE, get_order_ic_len, get_order_num, is_directive, is_exact_directive
from .symbols import SymbolTable, get_label, is_label_line
from .textutils import (
    ADDRESS_MAX_LEN,
    COMMAS_DONT_MATCH_DATA,
    DATA,
    DATA_OUT_OF_RANGE_ERROR,
    ENTRY,
    EXTERNAL,
    EXTERNAL_OR_ENTRY_WITH_COMMA,
    LABEL_WITHOUT_DIRECTIVE_OR_ORDER,
    LINE_MAX_LEN,
    NO_STRING_IN_LINE,
    ORDER_AND_DIRECTIVE_IN_ONE_LINE,
    START_IC,
    STRING,
    STRING_END_WITHOUT_QUOTES,
    WORDS_UNMATCH_COMMAS,
    WORDS_UNMATCH_ORDER,
    WRONG_NUMBER_IN_DATA,
    Reporter,
    is_empty_or_comment,
    is_valid_num,
    read_next_word,
    str_to_int,
)

POST_MACROS_EXT = ".am"
FIRST_PASS_LOG = "start first pass on file: %s"
FINISH_LOG = "finish first pass on file, dc start in address: %d"
# Number of words on a line for each command, the command name included.
COMMANDS_WORDS = (3, 3, 3, 3, 3, 2, 2, 2, 2, 2, 2, 2, 2, 2, 1, 1)

_DATA_MAX = 2 ** (ADDRESS_MAX_LEN - 1) - 1
_DATA_MIN = -(2 ** (ADDRESS_MAX_LEN - 1))


def _bounded_lines(lines: Iterable[str]) -> Iterator[str]:
    """Yield lines, splitting any longer than the line buffer into pieces."""
    size = LINE_MAX_LEN - 1
    for line in lines:
        yield from (line[i : i + size] for i in range(0, len(line), size))


def _char_at(text: str, pos: int) -> str:
    return text[pos] if pos < len(text) else "\0"


def add_string_data(table: DataTable, line: str, reporter: Reporter) -> int:
    """Store the characters of a '.string' line and a terminating zero.

    Returns the number of words added to ``table``.
    """
    _, rest = read_next_word(line, True)
    rest = rest.lstrip(" \t")
    if not rest.startswith('"'):
        reporter.error(NO_STRING_IN_LINE % line)
    body = rest[1:]
    count = 0
    pos = 0
    while _char_at(body, pos + 1) not in "\0\n":
        table.insert(ord(body[pos]))
        count += 1
        pos += 1
    if _char_at(body, pos) != '"':
        reporter.error(STRING_END_WITHOUT_QUOTES % body[pos:])
    table.insert(0)
    return count + 1


def verify_syntax(line: str, reporter: Reporter) -> None:
    """Check word and comma counts of a line that follows any label."""
    comma_count = word_count = 0
    word_end = True
    order_num = get_order_num(line)
    for char in line:
        if char in "\n\0":
            break
        if word_end and char not in " ,\t":
            word_count += 1
            word_end = False
        if char == ",":
            comma_count += 1
            word_end = True
        elif char != '"' and not word_end and char in " \t":
            word_end = True

    if is_empty_or_comment(line):
        reporter.error(LABEL_WITHOUT_DIRECTIVE_OR_ORDER)
    if is_directive(line) and order_num >= 0:
        reporter.error(ORDER_AND_DIRECTIVE_IN_ONE_LINE)
    if is_exact_directive(line, EXTERNAL) or is_exact_directive(line, ENTRY):
        if comma_count > 0:
            reporter.error(EXTERNAL_OR_ENTRY_WITH_COMMA)
    elif is_exact_directive(line, DATA):
        if comma_count != word_count - 2:
            reporter.error(COMMAS_DONT_MATCH_DATA)
    if order_num > 0:
        if COMMANDS_WORDS[order_num] != word_count:
            reporter.error(WORDS_UNMATCH_ORDER)
        if comma_count != word_count - 2:
            reporter.error(WORDS_UNMATCH_COMMAS)


def add_ints_data(table: DataTable, line: str, reporter: Reporter) -> int:
    """Store the numbers of a '.data' line; return how many were added."""
    _, rest = read_next_word(line, True)
    count = 0
    word, rest = read_next_word(rest, True)
    while word:
        if is_valid_num(word):
            num = str_to_int(word)
            if num > _DATA_MAX or num < _DATA_MIN:
                reporter.error(DATA_OUT_OF_RANGE_ERROR)
                reporter.error(f"num: {num}")
                num = 0
            table.insert(num)
            count += 1
        else:
            reporter.error(WRONG_NUMBER_IN_DATA % word)
        word, rest = read_next_word(rest, True)
    return count


def first_pass(
    base: str | Path, data_table: DataTable, symbols: SymbolTable, reporter: Reporter
) -> int:
    """Scan ``base.am``, filling the data and symbol tables.

    Returns the address that follows the code image.
    """
    path = Path(f"{base}{POST_MACROS_EXT}")
    ic = START_IC
    dc = 0
    reporter.line = 0
    reporter.log(FIRST_PASS_LOG % path)
    with path.open("r") as source:
        for line in _bounded_lines(source):
            reporter.line += 1
            if is_empty_or_comment(line):
                continue
            label: str | None = None
            rest = line
            if is_label_line(rest):
                label = get_label(rest)
                _, rest = read_next_word(rest, False)
            verify_syntax(rest, reporter)
            if is_exact_directive(rest, STRING):
                if label is not None:
                    symbols.add(label, STRING, dc, reporter)
                dc += add_string_data(data_table, rest, reporter)
            elif is_exact_directive(rest, DATA):
                if label is not None:
                    symbols.add(label, DATA, dc, reporter)
                dc += add_ints_data(data_table, rest, reporter)
            elif is_exact_directive(rest, ENTRY):
                continue
            elif is_exact_directive(rest, EXTERNAL):
                _, after = read_next_word(rest, False)
                name, _ = read_next_word(after, True)
                symbols.add(name, EXTERNAL, 0, reporter)
            else:
                if label is not None:
                    symbols.add(label, CODE, ic, reporter)
                ic += get_order_ic_len(rest)
    reporter.log(FINISH_LOG % ic)
    symbols.add_ic_to_data(ic)
    return ic