import io

from twopassasm.symbols import SymbolTable, get_label, is_label_line
from twopassasm.textutils import DATA, ENTRY, EXTERNAL, STRING, Reporter


def _reporter():
    return Reporter(filename="t", stream=io.StringIO())


def test_add_and_get():
    table = SymbolTable()
    reporter = _reporter()
    table.add("MAIN", "code", 100, reporter)
    symbol = table.get("MAIN")
    assert symbol.name == "MAIN"
    assert symbol.prop == "code"
    assert symbol.value == 100
    assert "MAIN" in table
    assert not reporter.has_errors


def test_missing_symbol():
    table = SymbolTable()
    assert table.get("NOPE") is None
    assert table.value_of("NOPE") == -1
    assert "NOPE" not in table


def test_duplicate_label_is_error():
    table = SymbolTable()
    reporter = _reporter()
    table.add("X", DATA, 0, reporter)
    table.add("X", "code", 104, reporter)
    assert reporter.has_errors
    assert "label with the name: X already exist" in reporter.stream.getvalue()
    assert table.value_of("X") == 104
    assert len(table) == 2


def test_repeated_external_reference_is_allowed():
    table = SymbolTable()
    reporter = _reporter()
    table.add("EXT", None, 101, reporter)
    table.add("EXT", None, 105, reporter)
    assert not reporter.has_errors
    assert [s.value for s in table] == [105, 101]


def test_add_ic_to_data_only_moves_data():
    table = SymbolTable()
    reporter = _reporter()
    table.add("D", DATA, 2, reporter)
    table.add("S", STRING, 3, reporter)
    table.add("C", "code", 100, reporter)
    table.add("E", EXTERNAL, 0, reporter)
    table.add_ic_to_data(110)
    assert table.value_of("D") == 112
    assert table.value_of("S") == 3
    assert table.value_of("C") == 100
    assert table.value_of("E") == 0


def test_write_entries_only_entries():
    table = SymbolTable()
    reporter = _reporter()
    table.add("A", "code", 100, reporter)
    table.add("B", "code", 255, reporter)
    table.get("B").prop = ENTRY
    out = io.StringIO()
    table.write_entries(out)
    assert out.getvalue() == "B \t 0x0000FF\n"


def test_write_externals_newest_first():
    table = SymbolTable()
    reporter = _reporter()
    table.add("W", None, 100, reporter)
    table.add("V", None, 101, reporter)
    out = io.StringIO()
    table.write_externals(out)
    names = [line.split()[0] for line in out.getvalue().splitlines()]
    assert names == ["V", "W"]


def test_is_label_line():
    assert is_label_line("LOOP: mov r1, r2\n")
    assert is_label_line("  L1: stop\n")
    assert not is_label_line("mov r1, r2\n")
    assert not is_label_line("BAD_X: stop\n")
    assert not is_label_line("\n")


def test_get_label():
    assert get_label("  LOOP: mov r1, r2\n") == "LOOP"