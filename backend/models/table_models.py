from pydantic import BaseModel
from typing import Dict, List

# One parsed row: column name -> cell text, in header order.
Record = Dict[str, str]


class Table(BaseModel):
    columns: List[str]
    rows: List[Record] = []

    @property
    def row_count(self) -> int:
        return len(self.rows)
