import io

from twopassasm.macros import Macro, MacroTable


def test_add_line_prepends():
    macro = Macro("m1")
    macro.add_line("inc r1\n")
    macro.add_line("dec r2\n")
    assert macro.lines == ["dec r2\n", "inc r1\n"]


def test_write_macro_outputs_body():
    macro = Macro("m1")
    macro.add_line("inc r1\n")
    macro.add_line("dec r2\n")
    table = MacroTable()
    table.add(macro)
    out = io.StringIO()
    table.write_macro(out, "m1")
    assert out.getvalue() == "dec r2\ninc r1\n"


def test_write_unknown_macro_writes_nothing():
    out = io.StringIO()
    MacroTable().write_macro(out, "nothing")
    assert out.getvalue() == ""


def test_is_call_uses_first_word():
    table = MacroTable()
    table.add(Macro("m1"))
    assert table.is_call("m1\n")
    assert table.is_call("m1 extra\n")
    assert not table.is_call(" m1\n")
    assert not table.is_call("m2\n")
    assert "m1" in table


def test_newest_definition_wins():
    first = Macro("m")
    first.add_line("stop\n")
    second = Macro("m")
    second.add_line("rts\n")
    table = MacroTable()
    table.add(first)
    table.add(second)
    out = io.StringIO()
    table.write_macro(out, "m")
    assert out.getvalue() == "rts\n"
    assert len(table) == 1