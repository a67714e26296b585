# backend/services/csv_parser.py

import csv
from typing import Iterator, List, Tuple

from models.table_models import Record, Table
from services.errors import CsvDecodeError, EmptyFileError, MalformedRowError

ENCODING = "utf-8-sig"  # strips a leading BOM


class CsvDialect(csv.Dialect):
    """
    Comma-delimited, double-quoted fields, "" inside quotes is one literal quote.
    Quoted fields may span lines.
    """

    delimiter = ","
    quotechar = '"'
    escapechar = None
    doublequote = True
    skipinitialspace = False
    lineterminator = "\n"
    quoting = csv.QUOTE_MINIMAL
    strict = False


def _rows(handle, path: str) -> Iterator[Tuple[int, List[str]]]:
    """
    Yields (line_num, fields) for every non-blank row.
    line_num is the physical line the row ends on.
    """
    reader = csv.reader(handle, dialect=CsvDialect)
    try:
        for row in reader:
            # csv.reader yields [] for blank lines
            if not row:
                continue
            yield reader.line_num, row
    except csv.Error as e:
        raise MalformedRowError(str(e), reader.line_num) from e
    except UnicodeDecodeError as e:
        raise CsvDecodeError(f"{path} is not valid UTF-8: {e}") from e


def _read_header(path: str) -> List[str]:
    with open(path, "r", encoding=ENCODING, newline="") as handle:
        first = next(_rows(handle, path), None)

    if first is None:
        raise EmptyFileError(f"{path} has no header line")

    # Duplicate names keep their first position.
    return list(dict.fromkeys(first[1]))


class RecordStream:
    """
    Lazy view over the data rows of a CSV file.

    The header is read on construction so that a missing or empty file fails
    at the call site. Each iteration re-opens the file and starts from the top.
    """

    def __init__(self, path: str, strict: bool = False):
        self.path = path
        self.strict = strict
        self.columns = _read_header(path)

    def __iter__(self) -> Iterator[Record]:
        with open(self.path, "r", encoding=ENCODING, newline="") as handle:
            rows = _rows(handle, self.path)
            first = next(rows, None)
            if first is None:
                # truncated after the header was read
                return

            header = first[1]
            width = len(header)
            for line_num, row in rows:
                yield self._to_record(header, row, width, line_num)

    def _to_record(self, header: List[str], row: List[str], width: int, line_num: int) -> Record:
        if len(row) != width:
            if self.strict:
                raise MalformedRowError(
                    f"expected {width} fields, got {len(row)}", line_num
                )
            if len(row) < width:
                row = row + [""] * (width - len(row))
            else:
                row = row[:width]

        record: Record = {col: "" for col in self.columns}
        for name, value in zip(header, row):
            record[name] = value
        return record


def open_csv(path: str, strict: bool = False) -> RecordStream:
    return RecordStream(path, strict=strict)


def parse_csv(path: str, strict: bool = False) -> Table:
    """
    Parse the CSV at `path` into a Table.
    Short rows are padded with "" and long rows truncated, unless strict=True.
    """
    stream = open_csv(path, strict=strict)
    return Table(columns=stream.columns, rows=list(stream))
