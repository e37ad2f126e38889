"""Numeric pair handling: validation and text/table ingestion.

``as_arrays`` is the gate in front of the fitting engine. ``parse_text`` and
``pairs_from_frame`` turn pasted text or an uploaded table into clean pairs,
keeping a record of every rejected row.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

import numpy as np
import pandas as pd

from .errors import InvalidInputError

MIN_POINTS = 2

Point = Tuple[float, float]

# comma, tab, semicolon or any whitespace
SEPARATOR_RE = re.compile(r"[\s,;]+")


@dataclass(frozen=True)
class RejectedRow:
    row_number: int
    row_data: Tuple[Any, ...]
    reason: str


@dataclass
class ParsedData:
    points: List[Point] = field(default_factory=list)
    rejected: List[RejectedRow] = field(default_factory=list)
    total: int = 0
    header: Optional[Tuple[str, str]] = None

    @property
    def valid(self) -> int:
        return len(self.points)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.points, columns=["x", "y"], dtype=float)


def as_arrays(
    points, min_points: int = MIN_POINTS
) -> Tuple[np.ndarray, np.ndarray]:
    """Validate *points* and split them into x and y float arrays.

    Accepts a sequence of (x, y) pairs, an (n, 2) array or a DataFrame whose
    first two columns are x and y.
    """
    if isinstance(points, pd.DataFrame):
        points = points.iloc[:, :2].to_numpy()
    try:
        arr = np.asarray(points, dtype=float)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"Points must be numeric pairs: {exc}") from exc
    if arr.size == 0:
        arr = arr.reshape(0, 2)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise InvalidInputError(
            f"Points must be (x, y) pairs, got array of shape {arr.shape}"
        )
    if len(arr) < min_points:
        raise InvalidInputError(
            f"At least {min_points} data points are required, got {len(arr)}"
        )
    if not np.all(np.isfinite(arr)):
        raise InvalidInputError("Points must contain only finite numbers")
    return arr[:, 0].copy(), arr[:, 1].copy()


def _is_number(token: str) -> bool:
    try:
        return np.isfinite(float(token))
    except ValueError:
        return False


def parse_text(text: str) -> ParsedData:
    """Parse pasted two-column text.

    Lines are split on commas, tabs, semicolons or whitespace and the first
    two fields are used. A first line that does not start with a number is
    taken as a header. Blank lines are skipped and not counted.
    """
    rows = [
        [tok for tok in SEPARATOR_RE.split(line.strip()) if tok]
        for line in (text or "").splitlines()
    ]
    rows = [r for r in rows if r]
    out = ParsedData(total=len(rows))
    start = 0
    if rows and not _is_number(rows[0][0]):
        if len(rows[0]) >= 2:
            out.header = (rows[0][0], rows[0][1])
        start = 1
        out.total -= 1
    for i, row in enumerate(rows[start:], start=start + 1):
        if len(row) < 2:
            out.rejected.append(
                RejectedRow(i, tuple(row), "Missing value")
            )
            continue
        if not (_is_number(row[0]) and _is_number(row[1])):
            out.rejected.append(
                RejectedRow(i, tuple(row), "Non-numeric or missing value")
            )
            continue
        out.points.append((float(row[0]), float(row[1])))
    return out


def pairs_from_frame(df: pd.DataFrame) -> ParsedData:
    """Take the first two columns of an uploaded table as x and y.

    Row numbers in rejections count the header line, matching what a user
    sees in a spreadsheet.
    """
    if df is None or df.shape[1] < 2:
        raise InvalidInputError("Table needs at least two columns")
    sub = df.iloc[:, :2]
    x = pd.to_numeric(sub.iloc[:, 0], errors="coerce")
    y = pd.to_numeric(sub.iloc[:, 1], errors="coerce")
    ok = np.isfinite(x) & np.isfinite(y)
    out = ParsedData(
        total=int(len(sub)),
        header=(str(sub.columns[0]), str(sub.columns[1])),
    )
    for pos, (good, xv, yv) in enumerate(zip(ok, x, y)):
        if good:
            out.points.append((float(xv), float(yv)))
        else:
            out.rejected.append(
                RejectedRow(
                    pos + 2,
                    tuple(sub.iloc[pos].tolist()),
                    "Non-numeric or missing value",
                )
            )
    return out


def read_upload(uploaded_file) -> ParsedData:
    """Read a CSV/Excel upload into pairs."""
    name = getattr(uploaded_file, "name", "").lower()
    if hasattr(uploaded_file, "seek"):
        uploaded_file.seek(0)
    if name.endswith(".xlsx") or name.endswith(".xls"):
        df = pd.read_excel(uploaded_file)
    else:
        try:
            df = pd.read_csv(uploaded_file, sep=None, engine="python")
        except (pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
            raise InvalidInputError(f"Could not read table: {exc}") from exc
    return pairs_from_frame(df)


__all__ = [
    "MIN_POINTS",
    "ParsedData",
    "RejectedRow",
    "as_arrays",
    "parse_text",
    "pairs_from_frame",
    "read_upload",
]
