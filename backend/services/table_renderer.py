# backend/services/table_renderer.py

import csv
import html
import io
from typing import List

from models.table_models import Table
from services.csv_parser import CsvDialect

PAGE_STYLE = """
    body {
      font-family: 'Arial', sans-serif;
      margin: 0;
      padding: 20px;
      background-color: #f4f4f9;
    }
    table {
      width: 100%;
      border-collapse: collapse;
      margin-top: 20px;
      background: white;
    }
    th, td {
      padding: 12px;
      border: 1px solid #ddd;
      text-align: left;
    }
    th {
      background-color: #4a90e2;
      color: white;
    }
    tr:nth-child(even) {
      background-color: #f9f9f9;
    }
    button {
      margin-top: 20px;
      padding: 10px 20px;
      background-color: #4a90e2;
      color: white;
      border: none;
      border-radius: 5px;
      cursor: pointer;
    }
"""


def render_html_table(table: Table, table_id: str = "csvTable") -> str:
    """
    Render a Table as a <table> fragment.
    Header cells come from table.columns, so an empty table still gets a header row.
    All text is HTML-escaped.
    """
    parts: List[str] = [f'<table id="{html.escape(table_id)}">', "<thead><tr>"]
    for col in table.columns:
        parts.append(f"<th>{html.escape(col)}</th>")
    parts.append("</tr></thead>")

    parts.append("<tbody>")
    for row in table.rows:
        parts.append("<tr>")
        for col in table.columns:
            parts.append(f"<td>{html.escape(row.get(col, ''))}</td>")
        parts.append("</tr>")
    parts.append("</tbody></table>")

    return "".join(parts)


def render_html_page(table: Table, back_url: str = "/", title: str = "Processed CSV Data") -> str:
    safe_title = html.escape(title)
    # back_url lands inside a JS string inside an attribute
    target = html.escape(back_url.replace("\\", "\\\\").replace("'", "\\'"))

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{safe_title}</title>
  <style>{PAGE_STYLE}  </style>
</head>
<body>
  <h1>{safe_title}</h1>
  {render_html_table(table)}
  <button onclick="window.location.href='{target}'">Go Back</button>
</body>
</html>
"""


def render_csv(table: Table) -> str:
    """
    Serialize a Table back to CSV text, header line first.
    Fields holding a comma, quote or line break are quoted; quotes are doubled.
    """
    out = io.StringIO()
    writer = csv.writer(out, dialect=CsvDialect)
    writer.writerow(table.columns)
    for row in table.rows:
        writer.writerow([row.get(col, "") for col in table.columns])
    return out.getvalue()
