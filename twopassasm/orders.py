"""Instruction table, addressing-mode detection and instruction encoding."""

from __future__ import annotations

from dataclasses import dataclass

from .symbols import SymbolTable
from .textutils import (
    ADDRESS_MAX_LEN,
    DATA,
    ENTRY,
    EXTERNAL,
    RELATIVE_ADDRESS_OUT_OF_RANGE,
    STRING,
    Reporter,
    get_next_word,
    get_register,
    is_valid_num,
    read_next_word,
    str_to_int,
)

CODE = "code"
DIRECTIVES = (DATA, STRING, ENTRY, EXTERNAL)
COMMANDS = (
    "mov", "cmp", "add", "sub", "lea", "clr", "not", "inc",
    "dec", "jmp", "bne", "jsr", "red", "prn", "rts", "stop",
)
COMMANDS_LEN = len(COMMANDS)
OP_CODES = (0, 1, 2, 2, 4, 5, 5, 5, 5, 9, 9, 9, 12, 13, 14, 15)
FUNCTS = (0, 0, 1, 2, 0, 1, 2, 3, 4, 1, 2, 3, 0, 0, 0, 0)

STOP_ORDER = COMMANDS.index("stop")
_FIELD_MASK = 0xFFFFF8
_ARE_ABSOLUTE = 0x04
_ARE_RELOCATABLE = 0x02
_UNKNOWN_DEST = (
    "address for dest operand dont exist or dont match the order, line: %s"
)


@dataclass(frozen=True)
class EncodedOrder:
    """The instruction word and the extra words of its operands (0 when absent)."""

    word: int
    src_data: int = 0
    dest_data: int = 0


def is_directive(line: str) -> bool:
    """True if any directive name appears anywhere in ``line``."""
    return any(directive in line for directive in DIRECTIVES)


def is_exact_directive(line: str, directive: str) -> bool:
    """True if the first word of ``line`` is exactly ``directive``."""
    return get_next_word(line, True) == directive


def get_order_num(word: str) -> int:
    """Index of the command named ``word``, or -1."""
    try:
        return COMMANDS.index(word)
    except ValueError:
        return -1


def get_order_ic_len(line: str) -> int:
    """Number of memory words the instruction on ``line`` occupies (0 if none)."""
    word, rest = read_next_word(line, True)
    if get_order_num(word) == -1:
        return 0
    count = 1
    word, rest = read_next_word(rest, True)
    while word and word != "\n":
        if get_register(word) is None:
            count += 1
        word, rest = read_next_word(rest, True)
    return count


def get_op_code(order: str) -> int:
    """Op code of command ``order``, or the number of commands if unknown."""
    num = get_order_num(order)
    return COMMANDS_LEN if num < 0 else OP_CODES[num] & 0xF


def get_funct(order: str) -> int:
    """Funct field of command ``order``, or the number of commands if unknown."""
    num = get_order_num(order)
    return COMMANDS_LEN if num < 0 else FUNCTS[num] & 0x7


def is_immediate_address(word: str) -> bool:
    """True for an immediate operand such as '#-5'."""
    return word.startswith("#") and is_valid_num(word[1:])


def is_direct_address(symbols: SymbolTable, word: str) -> bool:
    """True if ``word`` names a known symbol."""
    return word in symbols


def is_relative_address(symbols: SymbolTable, word: str) -> bool:
    """True for '&label' where the label is a known symbol."""
    return word.startswith("&") and word[1:] in symbols


def direct_data_word(
    symbols: SymbolTable, externals: SymbolTable, word: str, ic: int
) -> int:
    """Extra word for a direct operand; external uses are recorded at ``ic``."""
    symbol = symbols.get(word)
    if symbol is None:
        raise KeyError(word)
    if symbol.prop == EXTERNAL:
        externals.add(symbol.name, None, ic, Reporter())
    return ((symbol.value << 3) & _FIELD_MASK) | _ARE_RELOCATABLE


def immediate_data_word(word: str) -> int:
    """Extra word for an immediate operand such as '#7'."""
    return ((str_to_int(word[1:]) << 3) & _FIELD_MASK) | _ARE_ABSOLUTE


def relative_data_word(
    symbols: SymbolTable, word: str, ic: int, reporter: Reporter
) -> int:
    """Extra word for a relative operand '&label', measured from ``ic``."""
    diff = symbols.value_of(word[1:]) - ic
    if diff < -(2 ** (ADDRESS_MAX_LEN - 1)):
        reporter.error(RELATIVE_ADDRESS_OUT_OF_RANGE % word)
    return ((diff << 3) & _FIELD_MASK) | _ARE_ABSOLUTE


def combine_order_bits(
    op_code: int,
    funct: int,
    src_reg: int,
    dest_reg: int,
    src_address: int,
    dest_address: int,
) -> int:
    """Pack the instruction fields into one 24-bit word."""
    return (
        (op_code & 0x3F) << 18
        | (src_address & 0x03) << 16
        | (src_reg & 0x07) << 13
        | (dest_address & 0x03) << 11
        | (dest_reg & 0x07) << 8
        | (funct & 0x1F) << 3
    )


def _encode_operand(
    word: str,
    symbols: SymbolTable,
    externals: SymbolTable,
    ic: int,
    reporter: Reporter,
) -> tuple[int, int] | None:
    """Return (addressing mode, data word), or None if the operand is unknown."""
    if get_register(word) is not None:
        return 3, 0
    if is_immediate_address(word):
        return 0, immediate_data_word(word)
    if is_direct_address(symbols, word):
        return 1, direct_data_word(symbols, externals, word, ic)
    if is_relative_address(symbols, word):
        return 2, relative_data_word(symbols, word, ic, reporter)
    return None


def encode_order(
    line: str,
    order_num: int,
    symbols: SymbolTable,
    externals: SymbolTable,
    ic: int,
    reporter: Reporter,
) -> EncodedOrder:
    """Encode the operands in ``line`` (the text after the command name)."""
    op_code = OP_CODES[order_num]
    funct = OP_CODES[order_num]
    if order_num == STOP_ORDER:
        return EncodedOrder(combine_order_bits(op_code, funct, 0, 0, 0, 0))

    first, rest = read_next_word(line, True)
    dest_word, rest = read_next_word(rest, True)
    src_address = src_data = 0
    if dest_word:
        encoded = _encode_operand(first, symbols, externals, ic, reporter)
        if encoded is not None:
            src_address, src_data = encoded
    else:
        dest_word = first

    dest_address = dest_data = 0
    encoded = _encode_operand(dest_word, symbols, externals, ic, reporter)
    if encoded is None:
        reporter.error(_UNKNOWN_DEST % rest)
    else:
        dest_address, dest_data = encoded

    word = combine_order_bits(op_code, funct, 0, 0, src_address, dest_address)
    return EncodedOrder(word, src_data, dest_data)