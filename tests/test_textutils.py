import io

import pytest

from twopassasm.textutils import (
    LABEL_ALREADY_EXIST,
    Reporter,
    get_next_word,
    get_register,
    is_empty_or_comment,
    is_valid_num,
    read_next_word,
    str_to_int,
)


def test_read_next_word_skips_leading_blanks():
    word, rest = read_next_word("  mov r1, r2\n", True)
    assert word == "mov"
    assert rest == " r1, r2\n"


def test_read_next_word_stops_at_comma():
    word, rest = read_next_word(" r1, r2\n", True)
    assert word == "r1"
    assert rest == ", r2\n"
    word, rest = read_next_word(rest, True)
    assert word == "r2"
    assert rest == "\n"


def test_read_next_word_without_skip_returns_empty_on_blank():
    word, rest = read_next_word("  mov", False)
    assert word == ""
    assert rest == "  mov"


def test_read_next_word_at_end():
    assert read_next_word("", True) == ("", "")


def test_get_next_word_does_not_split_on_tab_or_comma():
    assert get_next_word("\n a\tb,c d", True) == "a\tb,c"


def test_get_next_word_no_skip():
    assert get_next_word(" x", False) == ""
    assert get_next_word("mcro m1\n", False) == "mcro"


@pytest.mark.parametrize("text,value", [("-42", -42), ("+7", 7), ("123", 123), ("0", 0)])
def test_str_to_int(text, value):
    assert str_to_int(text) == value


@pytest.mark.parametrize("n", range(-300, 300, 37))
def test_str_to_int_round_trip(n):
    assert str_to_int(str(n)) == n


@pytest.mark.parametrize(
    "line,expected",
    [
        ("; comment\n", True),
        ("   \t \n", True),
        ("", True),
        ("  mov r1\n", False),
        (" ; not first\n", False),
    ],
)
def test_is_empty_or_comment(line, expected):
    assert is_empty_or_comment(line) is expected


@pytest.mark.parametrize(
    "word,expected",
    [("12", True), ("-5", True), ("+0", True), ("1a", False), ("x", False), ("--1", False)],
)
def test_is_valid_num(word, expected):
    assert is_valid_num(word) is expected


@pytest.mark.parametrize(
    "word,expected",
    [("r0", 0), ("r3", 3), ("r7", 7), ("r8", None), ("x1", None), ("r", None), ("ra", None)],
)
def test_get_register(word, expected):
    assert get_register(word) == expected


def test_reporter_error_sets_flag_and_formats():
    out = io.StringIO()
    reporter = Reporter(filename="prog", line=5, stream=out)
    reporter.error(LABEL_ALREADY_EXIST % "X")
    assert reporter.has_errors
    assert out.getvalue() == "Found Error, File: prog, Line 5: label with the name: X already exist\n"


def test_reporter_log_does_not_set_flag():
    out = io.StringIO()
    reporter = Reporter(filename="prog", line=2, stream=out)
    reporter.log("hello")
    assert not reporter.has_errors
    assert out.getvalue() == "File: prog Line 2: hello\n"