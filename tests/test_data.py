import io

from twopassasm.data import DataTable


def test_insert_keeps_order():
    table = DataTable()
    for value in (5, 1, 9):
        table.insert(value)
    assert list(table) == [5, 1, 9]
    assert len(table) == 3


def test_write_with_index_format():
    table = DataTable()
    table.insert(0x41)
    out = io.StringIO()
    next_index = table.write_with_index(out, 100)
    assert out.getvalue() == "000100 \t 0x000041\n"
    assert next_index == 101


def test_negative_values_are_masked_to_24_bits():
    table = DataTable()
    table.insert(-1)
    out = io.StringIO()
    table.write_with_index(out, 0)
    assert out.getvalue() == "000000 \t 0xFFFFFF\n"


def test_indexes_continue_across_tables():
    code, data = DataTable(), DataTable()
    for value in range(3):
        code.insert(value)
    for value in range(2):
        data.insert(value)
    out = io.StringIO()
    index = code.write_with_index(out, 100)
    index = data.write_with_index(out, index)
    lines = out.getvalue().splitlines()
    assert index == 105
    assert [int(line.split()[0]) for line in lines] == list(range(100, 105))


def test_empty_table_writes_nothing():
    out = io.StringIO()
    assert DataTable().write_with_index(out, 7) == 7
    assert out.getvalue() == ""