import sys
from pathlib import Path
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

import pytest

from models.table_models import Table
from services.csv_parser import open_csv, parse_csv
from services.errors import CsvDecodeError, EmptyFileError, MalformedRowError
from services.table_renderer import render_csv


def write_csv(tmp_path, content, name="data.csv"):
    path = tmp_path / name
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8", newline="")
    return str(path)


def test_parse_people_example(tmp_path):
    path = write_csv(tmp_path, 'name,age\nAda,36\n"O,Brien",40\n')
    table = parse_csv(path)

    assert table.columns == ["name", "age"]
    assert table.rows == [
        {"name": "Ada", "age": "36"},
        {"name": "O,Brien", "age": "40"},
    ]


def test_records_keep_header_order(tmp_path):
    lines = ["a,b,c"] + [f"{i},{i * 2},{i * 3}" for i in range(5)]
    path = write_csv(tmp_path, "\n".join(lines) + "\n")
    table = parse_csv(path)

    assert table.row_count == 5
    for record in table.rows:
        assert list(record.keys()) == ["a", "b", "c"]


def test_short_row_is_padded(tmp_path):
    path = write_csv(tmp_path, "a,b,c\n1\n")
    table = parse_csv(path)

    assert table.rows == [{"a": "1", "b": "", "c": ""}]
    assert list(table.rows[0].keys()) == ["a", "b", "c"]


def test_long_row_is_truncated(tmp_path):
    path = write_csv(tmp_path, "a,b\n1,2,3\n")
    assert parse_csv(path).rows == [{"a": "1", "b": "2"}]


def test_strict_mode_rejects_short_row(tmp_path):
    path = write_csv(tmp_path, "a,b,c\n1,2,3\n4\n")

    with pytest.raises(MalformedRowError) as exc:
        parse_csv(path, strict=True)
    assert exc.value.line_num == 3


def test_blank_lines_are_skipped(tmp_path):
    path = write_csv(tmp_path, "\n\na,b\n\n1,2\n\n3,4\n")
    table = parse_csv(path)

    assert table.columns == ["a", "b"]
    assert table.rows == [{"a": "1", "b": "2"}, {"a": "3", "b": "4"}]


def test_quoted_fields_hold_newlines_and_quotes(tmp_path):
    path = write_csv(tmp_path, 'note,tag\n"line one\nline two","say ""hi"""\n')
    table = parse_csv(path)

    assert table.rows == [{"note": "line one\nline two", "tag": 'say "hi"'}]


def test_header_only_gives_empty_table_with_columns(tmp_path):
    path = write_csv(tmp_path, "a,b\n")
    table = parse_csv(path)

    assert table.columns == ["a", "b"]
    assert table.rows == []


def test_bom_is_stripped(tmp_path):
    path = write_csv(tmp_path, b"\xef\xbb\xbfa,b\r\n1,2\r\n")
    table = parse_csv(path)

    assert table.columns == ["a", "b"]
    assert table.rows == [{"a": "1", "b": "2"}]


def test_duplicate_header_keeps_first_position_last_value(tmp_path):
    path = write_csv(tmp_path, "a,b,a\n1,2,3\n")
    table = parse_csv(path)

    assert table.columns == ["a", "b"]
    assert table.rows == [{"a": "3", "b": "2"}]


def test_zero_byte_file_is_empty(tmp_path):
    path = write_csv(tmp_path, b"")
    with pytest.raises(EmptyFileError):
        parse_csv(path)


def test_blank_only_file_is_empty(tmp_path):
    path = write_csv(tmp_path, "\n\n\n")
    with pytest.raises(EmptyFileError):
        open_csv(path)


def test_missing_path_raises_os_error(tmp_path):
    with pytest.raises(OSError):
        parse_csv(str(tmp_path / "nope.csv"))


def test_invalid_utf8_raises_decode_error(tmp_path):
    path = write_csv(tmp_path, b"a,b\n\xff\xfe,1\n")
    with pytest.raises(CsvDecodeError):
        parse_csv(path)


def test_stream_is_lazy_and_restartable(tmp_path):
    path = write_csv(tmp_path, "a\n1\n2\n3\n")
    stream = open_csv(path)

    assert stream.columns == ["a"]
    it = iter(stream)
    assert next(it) == {"a": "1"}
    assert [r["a"] for r in stream] == ["1", "2", "3"]
    it.close()


def test_render_then_parse_round_trip(tmp_path):
    table = Table(
        columns=["id", "city", "score"],
        rows=[
            {"id": "1", "city": "Lima", "score": "9.5"},
            {"id": "2", "city": "Oslo", "score": ""},
        ],
    )
    path = write_csv(tmp_path, render_csv(table))

    assert parse_csv(path) == table


def test_comma_value_survives_round_trip(tmp_path):
    table = Table(columns=["name"], rows=[{"name": "O,Brien"}, {"name": 'He said "no"'}])
    text = render_csv(table)

    assert '"O,Brien"' in text
    path = write_csv(tmp_path, text)
    assert parse_csv(path).rows == table.rows
