"""Dataset view — schema-less rows wrapped for role and KPI resolution.

Accepts a list of row mappings or a ``pandas.DataFrame``.  The column
inventory is the key set of the first row, as delivered by the query
layer; numeric/textual typing is sniffed from a small row sample.

Also handles reading a dataset from disk for the CLI:
- CSV (UTF-8 comma-delimited, or UTF-16 LE tab-delimited exports)
- JSON (a list of row objects, or ``{"rows": [...]}``)
"""

import json
import math
import numbers
import re
from pathlib import Path

import pandas as pd

SAMPLE_ROWS = 5

# Column names that identify rows rather than describe them
IDENTIFIER_PATTERN = re.compile(r"id|date|url|email|uuid", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Value coercion
# ---------------------------------------------------------------------------

def to_number(value):
    """Coerce a cell to a finite float, or ``None`` when it is not a number.

    Examples:
        42 -> 42.0
        "63,571" -> 63571.0
        " 12.5 " -> 12.5
        True -> None
        "n/a" -> None
        NaN -> None
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (list, tuple, dict, set)):
        return None
    if isinstance(value, numbers.Number):
        try:
            f = float(value)
        except (TypeError, ValueError):
            return None
        return f if math.isfinite(f) else None
    if not isinstance(value, str):
        return None
    s = value.strip().replace(",", "")
    if not s:
        return None
    try:
        f = float(s)
    except ValueError:
        return None
    return f if math.isfinite(f) else None


def _is_null(value) -> bool:
    if isinstance(value, (list, tuple, dict, set)):
        return False
    return value is None or bool(pd.isna(value))


# ---------------------------------------------------------------------------
# View
# ---------------------------------------------------------------------------

class DatasetView:
    """Read-only view of a dataset with a typed column inventory."""

    def __init__(self, data=None):
        if isinstance(data, DatasetView):
            self.frame = data.frame
            self.columns = list(data.columns)
        elif isinstance(data, pd.DataFrame):
            self.frame = data.reset_index(drop=True)
            self.columns = [str(c) for c in data.columns] if len(data) else []
            self.frame.columns = [str(c) for c in data.columns]
        else:
            rows = [dict(r) for r in (data or [])]
            self.frame = pd.DataFrame.from_records(rows) if rows else pd.DataFrame()
            self.columns = [str(k) for k in rows[0].keys()] if rows else []
            if rows:
                self.frame.columns = [str(c) for c in self.frame.columns]

        sample = self.frame.head(SAMPLE_ROWS)
        self.numeric_columns = [c for c in self.columns if self._sample_is_numeric(sample, c)]
        self.textual_columns = [c for c in self.columns if c not in self.numeric_columns]

    @staticmethod
    def _sample_is_numeric(sample: pd.DataFrame, col: str) -> bool:
        values = [v for v in sample[col].tolist() if not _is_null(v)]
        return bool(values) and all(to_number(v) is not None for v in values)

    def __len__(self) -> int:
        return len(self.frame) if self.columns else 0

    @property
    def is_empty(self) -> bool:
        return len(self) == 0

    def has_column(self, col: str | None) -> bool:
        return col is not None and col in self.columns

    # -- typed picks -------------------------------------------------------

    @property
    def main_textual(self) -> str | None:
        """First non-identifier text column, then any text column, then the first column."""
        for col in self.textual_columns:
            if not IDENTIFIER_PATTERN.search(col):
                return col
        if self.textual_columns:
            return self.textual_columns[0]
        return self.columns[0] if self.columns else None

    @property
    def main_numeric(self) -> str | None:
        return self.numeric_columns[0] if self.numeric_columns else None

    @property
    def second_numeric(self) -> str | None:
        if len(self.numeric_columns) > 1:
            return self.numeric_columns[1]
        return self.main_numeric

    def first_value(self, col: str):
        if self.is_empty or col not in self.frame.columns:
            return None
        return self.frame[col].iloc[0]

    # -- aggregates --------------------------------------------------------

    def numbers(self, col: str) -> pd.Series:
        """Column coerced to floats with anything non-numeric counted as 0."""
        coerced = self.frame[col].map(to_number)
        return pd.to_numeric(coerced, errors="coerce").fillna(0.0)

    def sum(self, col: str) -> float:
        if self.is_empty or col not in self.frame.columns:
            return 0.0
        return float(self.numbers(col).sum())

    def average(self, col: str) -> float:
        """Sum divided by the row count."""
        if self.is_empty:
            return 0.0
        return self.sum(col) / len(self)

    def distinct_count(self, col: str) -> int:
        if self.is_empty or col not in self.frame.columns:
            return 0
        series = self.frame[col]
        try:
            return int(series.nunique(dropna=False))
        except TypeError:
            # unhashable cells (nested objects) are compared by their text form
            return int(series.astype(str).nunique(dropna=False))


# ---------------------------------------------------------------------------
# Loading from disk
# ---------------------------------------------------------------------------

def detect_encoding(path):
    """Detect whether a file is UTF-16 LE (with BOM) or UTF-8.

    Returns (encoding, delimiter) tuple.
    """
    with open(path, "rb") as f:
        raw = f.read(4)
    if raw[:2] == b"\xff\xfe":
        return "utf-16", "\t"
    return "utf-8-sig", ","


def clean_columns(df):
    """Strip whitespace from column names and drop fully-empty columns."""
    df.columns = [str(c).strip() for c in df.columns]
    return df.dropna(axis=1, how="all")


def load_dataset(path) -> DatasetView:
    """Read a CSV or JSON dataset file into a :class:`DatasetView`."""
    path = Path(path)
    if path.suffix.lower() == ".json":
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
        if isinstance(payload, dict):
            payload = payload.get("rows", payload.get("data"))
        if not isinstance(payload, list):
            raise ValueError(f"JSON dataset must be a list of rows: {path}")
        if not all(isinstance(row, dict) for row in payload):
            raise ValueError(f"JSON dataset rows must be objects: {path}")
        return DatasetView(payload)

    encoding, sep = detect_encoding(path)
    df = pd.read_csv(path, encoding=encoding, sep=sep)
    return DatasetView(clean_columns(df))
