"""Formatted ASCII table display for tidy and glance output.

These tables mirror the statsmodels summary style: an optional top
panel of model-level statistics (from ``glance``) and a bottom panel
with one line per component (from ``tidy``).  Both functions take the
DataFrames the dispatcher returns, so they work for every model family
without knowing anything about it.
"""

from __future__ import annotations

import math
import textwrap

import pandas as pd

from .columns import IDENTIFIER_COLUMNS

_WIDTH = 80
_ID_WIDTH = 22


def _truncate(name: str, max_len: int) -> str:
    """Truncate *name* to *max_len*, appending ``'...'`` if needed."""
    if len(name) <= max_len:
        return name
    return name[: max_len - 3] + "..."


def _fmt_p(p: float | None) -> str:
    """Format a p-value: scientific notation if tiny, 4 dp otherwise."""
    if p is None or (isinstance(p, float) and math.isnan(p)):
        return "N/A"
    if p < 0.0001:
        return f"{p:.2e}"
    return f"{p:.4f}"


def _fmt_val(val: object) -> str:
    """Format a statistic for display; ``None``/``nan`` become ``'N/A'``."""
    if val is None:
        return "N/A"
    if isinstance(val, bool):
        return "Yes" if val else "No"
    if isinstance(val, (int, float)):
        if isinstance(val, float) and math.isnan(val):
            return "N/A"
        if isinstance(val, int) or float(val).is_integer() and abs(val) < 1e9:
            return str(int(val))
        if abs(val) >= 1e5 or abs(val) < 1e-3:
            return f"{val:.3e}"
        return f"{val:.4f}"
    return str(val)


def _print_title(title: str) -> None:
    print("=" * _WIDTH)
    for line in textwrap.wrap(title, width=_WIDTH - 2):
        print(f"{line:^{_WIDTH}}")
    print("=" * _WIDTH)


def _print_glance_rows(glance_table: pd.DataFrame) -> None:
    """Two label/value pairs per line, left and right halves."""
    items = []
    for name in glance_table.columns:
        val = glance_table[name].iloc[0]
        if hasattr(val, "item"):  # NumPy scalar → Python scalar
            val = val.item()
        items.append((f"{name}:", _fmt_val(val)))
    half = _WIDTH // 2
    for i in range(0, len(items), 2):
        left_label, left_val = items[i]
        line = f"{left_label:<20}{left_val:>{half - 22}}  "
        if i + 1 < len(items):
            right_label, right_val = items[i + 1]
            line += f"{right_label:<20}{right_val:>{half - 20}}"
        print(line.rstrip())


def print_glance_table(
    glance_table: pd.DataFrame,
    *,
    title: str = "Model Statistics",
) -> None:
    """Print a one-row ``glance`` table as labelled statistics.

    Args:
        glance_table: Output of :func:`~modeltidy.glance`.
        title: Title for the output table.
    """
    _print_title(title)
    _print_glance_rows(glance_table)
    print("=" * _WIDTH)


def print_tidy_table(
    tidy_table: pd.DataFrame,
    *,
    glance_table: pd.DataFrame | None = None,
    title: str = "Model Summary",
) -> None:
    """Print a ``tidy`` table in statsmodels summary style.

    Identifier columns (``term``, ``cluster``, ...) are joined into the
    left-hand label; the remaining numeric columns share the rest of
    the 80-character line.  ``p.value`` is formatted in scientific
    notation when tiny.

    Args:
        tidy_table: Output of :func:`~modeltidy.tidy`.
        glance_table: Optional output of :func:`~modeltidy.glance`,
            shown as a header panel.
        title: Title for the output table.
    """
    _print_title(title)
    if glance_table is not None:
        _print_glance_rows(glance_table)
        print("-" * _WIDTH)

    ids = [c for c in IDENTIFIER_COLUMNS if c in tidy_table.columns]
    stats = [
        c
        for c in tidy_table.columns
        if c not in ids and pd.api.types.is_numeric_dtype(tidy_table[c])
    ]
    col_w = (_WIDTH - _ID_WIDTH) // max(len(stats), 1)

    header = f"{'':<{_ID_WIDTH}}" + "".join(
        f"{_truncate(c, col_w - 1):>{col_w}}" for c in stats
    )
    print(header)
    print("-" * _WIDTH)
    for _, row in tidy_table.iterrows():
        label = " ".join(str(row[c]) for c in ids)
        cells = []
        for c in stats:
            val = row[c]
            text = _fmt_p(float(val)) if c == "p.value" else _fmt_val(float(val))
            cells.append(f"{_truncate(text, col_w - 1):>{col_w}}")
        print(f"{_truncate(label, _ID_WIDTH - 1):<{_ID_WIDTH}}" + "".join(cells))
    print("=" * _WIDTH)


__all__ = ["print_glance_table", "print_tidy_table"]
