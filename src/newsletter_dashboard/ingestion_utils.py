"""Boundary helpers between the spreadsheet fetcher and the metrics engine.

The fetcher returns a JSON envelope::

    {"success": true, "data": {"Sheet1": [[...], ...]}, "sheets": ["Sheet1"],
     "lastUpdated": "2024-01-08T09:00:00Z"}

These helpers validate that envelope, pick the sheet to display and read local
CSV/JSON exports into the same shape. Fetching itself happens elsewhere.
"""
from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .models import RawTable, SheetOverview

DEFAULT_FETCH_ERROR = "Failed to fetch data"


class SheetFetchError(RuntimeError):
    """Raised when the fetcher reports an unsuccessful response."""


def _cell_to_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class SheetSnapshot(BaseModel):
    """One fetcher payload: every sheet of the spreadsheet as raw rows."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    data: Dict[str, List[List[str]]] = Field(default_factory=dict)
    sheets: List[str] = Field(default_factory=list)
    last_updated: Optional[str] = Field(None, alias="lastUpdated")
    error: Optional[str] = None

    @field_validator("data", mode="before")
    @classmethod
    def coerce_cells(cls, v):
        """Sheets API rows may hold numbers or nulls; keep everything as text."""
        if v is None:
            return {}
        if not isinstance(v, dict):
            return v
        return {
            str(name): [[_cell_to_str(c) for c in (row or [])] for row in (rows or [])]
            for name, rows in v.items()
        }

    @field_validator("sheets", mode="before")
    @classmethod
    def drop_blank_names(cls, v):
        if v is None:
            return []
        return [str(s) for s in v if s]

    @model_validator(mode="after")
    def default_sheet_order(self):
        if not self.sheets and self.data:
            self.sheets = list(self.data.keys())
        return self


def parse_sheet_response(payload: Union[str, bytes, Dict[str, Any]]) -> SheetSnapshot:
    """Validate a fetcher payload; raise :class:`SheetFetchError` when it reports failure."""
    if isinstance(payload, (str, bytes)):
        payload = json.loads(payload)
    snapshot = SheetSnapshot.model_validate(payload)
    if not snapshot.success:
        raise SheetFetchError(snapshot.error or DEFAULT_FETCH_ERROR)
    return snapshot


def active_sheet_name(snapshot: SheetSnapshot, name: Optional[str] = None) -> Optional[str]:
    if name and name in snapshot.data:
        return name
    return snapshot.sheets[0] if snapshot.sheets else None


def select_sheet(snapshot: SheetSnapshot, name: Optional[str] = None) -> RawTable:
    """Rows of ``name`` when present, else of the first listed sheet."""
    sheet = active_sheet_name(snapshot, name)
    if sheet is None:
        return []
    return snapshot.data.get(sheet, [])


def sheet_overview(snapshot: SheetSnapshot) -> Optional[SheetOverview]:
    """Row/column/sheet counts of the first sheet; None without header + data."""
    if not snapshot.sheets:
        return None
    first = snapshot.data.get(snapshot.sheets[0]) or []
    if len(first) < 2:
        return None
    return SheetOverview(
        total_rows=len(first) - 1,
        columns=len(first[0]) if first[0] else 0,
        sheets=len(snapshot.sheets),
    )


def _csv_width(path: Path) -> int:
    with path.open("r", encoding="utf-8", newline="") as f:
        return max((len(row) for row in csv.reader(f)), default=0)


def _read_csv_rows(path: Path) -> List[List[str]]:
    """Read every row as text; rows shorter than the widest one are padded with blanks."""
    width = _csv_width(path)
    if width == 0:
        return []
    df = pd.read_csv(
        path,
        header=None,
        names=range(width),
        dtype="string",
        keep_default_na=False,
        skip_blank_lines=True,
        engine="python",
    )
    return df.fillna("").astype(str).values.tolist()


def read_snapshot(input_path: str | Path) -> SheetSnapshot:
    """Read a local export into a :class:`SheetSnapshot`.

    ``.csv`` files become a single sheet named after the file. ``.json`` files
    may hold a full fetcher envelope or a bare list of rows.
    """
    p = Path(input_path)
    if not p.exists():
        raise FileNotFoundError(f"Input not found: {p}")
    ext = p.suffix.lower()
    if ext == ".json":
        payload = json.loads(p.read_text(encoding="utf-8"))
        if isinstance(payload, list):
            return SheetSnapshot(data={p.stem: payload}, sheets=[p.stem])
        return parse_sheet_response(payload)
    # Fallback: treat anything else as CSV
    return SheetSnapshot(data={p.stem: _read_csv_rows(p)}, sheets=[p.stem])


def read_table(input_path: str | Path, sheet: Optional[str] = None) -> RawTable:
    return select_sheet(read_snapshot(input_path), sheet)
