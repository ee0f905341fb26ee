"""
Step 5: Project JSON records into a uniform table

Each column is a (path, parser, default) triple. For every record:
1. pluck(record, path, default)
2. parser(value)
3. a parser failure is kept on that row as a RowError

Rows are never dropped or reordered here. The caller decides what to do
with failed rows (skip them, fill them, or abort).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

import pandas as pd

from .errors import RowError
from .pluck import Path, pluck

logger = logging.getLogger(__name__)

Parser = Callable[[Any], Any]


def identity(value: Any) -> Any:
    return value


@dataclass(frozen=True)
class Column:
    """How to fill one output column from a record."""
    path: Path
    parser: Parser = identity
    default: Any = None


ColumnSpec = Union[Column, Tuple[Path, Parser], Tuple[Path, Parser, Any]]


@dataclass(frozen=True)
class ProjectedRow:
    index: int
    values: Dict[str, Any]
    errors: Dict[str, RowError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class Projection:
    """Ordered result of `project`, one row per input record."""
    columns: Tuple[str, ...]
    rows: Tuple[ProjectedRow, ...]

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self):
        return iter(self.rows)

    @property
    def ok_rows(self) -> List[ProjectedRow]:
        return [r for r in self.rows if r.ok]

    @property
    def failed_rows(self) -> List[ProjectedRow]:
        return [r for r in self.rows if not r.ok]

    def to_frame(self, drop_failed: bool = False) -> pd.DataFrame:
        """
        Convert to a DataFrame with the declared column order.

        Failed cells are None. With drop_failed=True rows carrying any
        error are left out.
        """
        rows = self.ok_rows if drop_failed else list(self.rows)
        if not rows:
            return pd.DataFrame(columns=list(self.columns))
        return pd.DataFrame(
            [[r.values.get(c) for c in self.columns] for r in rows],
            columns=list(self.columns),
        )


def _as_column(spec: ColumnSpec) -> Column:
    if isinstance(spec, Column):
        return spec
    if isinstance(spec, tuple) and len(spec) in (2, 3):
        return Column(*spec)
    raise TypeError(f"Column spec must be Column or (path, parser[, default]), got {spec!r}")


def project(
    records: Iterable[Any],
    fields: Mapping[str, ColumnSpec],
) -> Projection:
    """
    Map JSON records through a field selection into a uniform table.

    Args:
        records: Ordered JSON records (usually a list of dicts)
        fields: column name -> Column (or (path, parser[, default]))

    Returns:
        Projection with len(rows) == number of records, in input order
    """
    columns = {name: _as_column(spec) for name, spec in fields.items()}

    rows: List[ProjectedRow] = []
    for index, record in enumerate(records):
        values: Dict[str, Any] = {}
        errors: Dict[str, RowError] = {}
        for name, column in columns.items():
            raw = pluck(record, column.path, column.default)
            try:
                values[name] = column.parser(raw)
            except (ValueError, TypeError, ArithmeticError) as e:
                values[name] = None
                errors[name] = RowError(column=name, reason=str(e), raw_value=raw)
        if errors:
            logger.warning("[project] row=%s failed columns=%s", index, sorted(errors))
        rows.append(ProjectedRow(index=index, values=values, errors=errors))

    return Projection(columns=tuple(columns), rows=tuple(rows))


# ---------------------------------------------------------------------------
# Parsers
# ---------------------------------------------------------------------------

def parse_timestamp(value: Any) -> datetime:
    """ISO-8601 string -> timezone-aware timestamp (UTC if no offset given)."""
    if value is None:
        raise ValueError("missing timestamp")
    if not isinstance(value, str):
        raise TypeError(f"timestamp must be a string, got {type(value).__name__}")

    ts = pd.Timestamp(value)
    if pd.isna(ts):
        raise ValueError(f"unparsable timestamp: {value!r}")
    if ts.tzinfo is None:
        ts = ts.tz_localize("UTC")
    return ts.to_pydatetime()


def parse_number(value: Any) -> float:
    if value is None:
        raise ValueError("missing number")
    if isinstance(value, bool):
        raise TypeError("boolean is not a number")
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError as e:
            raise ValueError(f"number out of float range: {e}") from e
    if isinstance(value, str):
        return float(value)
    raise TypeError(f"expected a number, got {type(value).__name__}")


def optional_number(value: Any) -> Optional[float]:
    """Like parse_number, but null passes through as None."""
    if value is None:
        return None
    return parse_number(value)


def parse_text(value: Any) -> str:
    if value is None:
        raise ValueError("missing text")
    if not isinstance(value, str):
        raise TypeError(f"expected a string, got {type(value).__name__}")
    return value
