"""Confidence-interval and exponentiation helpers for tidy adapters.

Adapters that can report a point estimate and a standard error build
their ``conf.low``/``conf.high`` columns here, so that every model
family computes intervals the same way:

    θ̂ ± q · SE(θ̂)

where *q* is the ``(1 + level) / 2`` quantile of Student's t with the
model's residual degrees of freedom when the family uses t-based
inference, and of the standard normal otherwise.  Because *q* is
monotone in the level, a 99% interval always contains the 95%
interval for the same estimate.

Exponentiation maps log-scale estimates (log odds, log rates) to the
ratio scale.  It is applied to the estimate and the bounds, never to
the standard error or the test statistic.
"""

from __future__ import annotations

import numpy as np
import pandas as pd
from scipy import stats as _sp_stats

from .columns import CONF_HIGH, CONF_LOW, ESTIMATE


def critical_value(conf_level: float, df: float | None = None) -> float:
    """Two-sided critical value for *conf_level*.

    Args:
        conf_level: Confidence level in (0, 1).
        df: Degrees of freedom for a t quantile; ``None`` (or a
            non-finite value) uses the normal quantile.
    """
    if not 0.0 < conf_level < 1.0:
        raise ValueError(f"conf_level must lie in (0, 1), got {conf_level!r}.")
    p = 0.5 + conf_level / 2.0
    if df is not None and np.isfinite(df) and df > 0:
        return float(_sp_stats.t.ppf(p, df))
    return float(_sp_stats.norm.ppf(p))


def wald_conf_int(
    estimate: np.ndarray,
    std_error: np.ndarray,
    conf_level: float,
    df: float | None = None,
) -> tuple[np.ndarray, np.ndarray]:
    """Wald interval ``estimate ± q · std_error``.

    Returns:
        ``(low, high)`` arrays with the shape of *estimate*.  A
        ``NaN`` standard error yields ``NaN`` bounds.
    """
    estimate = np.asarray(estimate, dtype=float)
    std_error = np.asarray(std_error, dtype=float)
    half = critical_value(conf_level, df) * std_error
    return estimate - half, estimate + half


def add_conf_int(
    table: pd.DataFrame,
    conf_level: float,
    df: float | None = None,
) -> pd.DataFrame:
    """Return *table* with ``conf.low``/``conf.high`` appended.

    *table* must carry ``estimate`` and ``std.error`` columns.
    """
    low, high = wald_conf_int(
        table[ESTIMATE].to_numpy(), table["std.error"].to_numpy(), conf_level, df
    )
    return table.assign(**{CONF_LOW: low, CONF_HIGH: high})


def exponentiate(table: pd.DataFrame) -> pd.DataFrame:
    """Return *table* with the estimate and interval bounds exponentiated."""
    cols = [c for c in (ESTIMATE, CONF_LOW, CONF_HIGH) if c in table.columns]
    return table.assign(**{c: np.exp(table[c].astype(float)) for c in cols})


__all__ = ["add_conf_int", "critical_value", "exponentiate", "wald_conf_int"]
