"""Helpers shared by the statsmodels adapters.

Every statsmodels results wrapper exposes the same core surface —
``params``, ``bse``, ``tvalues``, ``pvalues``, ``model.data`` — so
coefficient tables, data reconstruction and prediction on new data are
implemented once here and parameterised by the per-family adapters.

Observation index
~~~~~~~~~~~~~~~~~
statsmodels drops incomplete rows before fitting (``missing="drop"``,
the formula API default).  When the model was fitted on pandas input,
``model.data.row_labels`` holds the labels of the rows actually used,
which is exactly the observation index the row aligner needs.  For
NumPy input there are no labels, and rows can only be matched when
nothing was dropped.
"""

from __future__ import annotations

import warnings
from typing import Any

import numpy as np
import pandas as pd
from statsmodels.tools.sm_exceptions import ValueWarning

from ..columns import ESTIMATE
from ..exceptions import InputError
from ..inference import add_conf_int, exponentiate
from ..options import SummaryOptions

# Names statsmodels and patsy give the constant column.
_CONSTANT_NAMES = frozenset({"const", "Intercept"})


# ------------------------------------------------------------------ #
# tidy
# ------------------------------------------------------------------ #


def term_names(results: Any) -> list[str]:
    """Parameter names, in parameter order."""
    params = results.params
    if isinstance(params, pd.Series):
        return [str(name) for name in params.index]
    names = getattr(results.model.data, "param_names", None)
    if names is None or len(names) != np.size(params):
        names = results.model.exog_names
    return [str(name) for name in names]


def t_df(results: Any) -> float | None:
    """Residual df when the results use t inference, else ``None``."""
    if getattr(results, "use_t", False):
        return float(results.df_resid)
    return None


def coefficient_table(
    results: Any,
    options: SummaryOptions,
    *,
    df: float | None = None,
) -> pd.DataFrame:
    """``term / estimate / std.error / statistic / p.value`` for *results*.

    Confidence bounds are Wald intervals at ``options.conf_level``
    using a t quantile with *df* degrees of freedom, or a normal
    quantile when *df* is ``None``.
    """
    table = pd.DataFrame(
        {
            "term": term_names(results),
            ESTIMATE: np.asarray(results.params, dtype=float),
        }
    )
    if not options.quick:
        table["std.error"] = np.asarray(results.bse, dtype=float)
        table["statistic"] = np.asarray(results.tvalues, dtype=float)
        table["p.value"] = np.asarray(results.pvalues, dtype=float)
        if options.conf_int:
            table = add_conf_int(table, options.conf_level, df)
    if options.exponentiate:
        table = exponentiate(table)
    return table


def scalar(value: Any) -> float:
    """Coerce a statsmodels statistic (possibly a 0-d/1x1 array) to float."""
    return float(np.squeeze(np.asarray(value, dtype=float)))


# ------------------------------------------------------------------ #
# augment
# ------------------------------------------------------------------ #


def row_labels(results: Any) -> pd.Index | None:
    """Labels of the rows used in fitting, or ``None`` for NumPy input."""
    labels = getattr(results.model.data, "row_labels", None)
    return None if labels is None else pd.Index(labels)


def model_frame(results: Any) -> pd.DataFrame:
    """Best-effort reconstruction of the data *results* was fitted on.

    Formula models keep the caller's DataFrame (incomplete rows
    included) and it is returned as-is.  Otherwise the frame is rebuilt
    from ``endog`` and ``exog``: only complete rows survive, columns
    the model did not use are lost, and the constant is left out.
    """
    model = results.model
    frame = getattr(model.data, "frame", None)
    if isinstance(frame, pd.DataFrame):
        return frame

    columns: dict[str, np.ndarray] = {}
    endog = np.asarray(model.endog)
    if endog.ndim == 1:
        columns[str(model.endog_names)] = endog
    exog = np.asarray(model.exog)
    for j, name in enumerate(model.exog_names):
        if name not in _CONSTANT_NAMES:
            columns[str(name)] = exog[:, j]
    return pd.DataFrame(columns, index=row_labels(results))


def training_observations(
    results: Any,
    values: pd.DataFrame,
    options: SummaryOptions,
) -> dict[str, Any]:
    """Keyword arguments for ``Observations`` on the fitting data."""
    return {
        "values": values,
        "labels": row_labels(results),
        "data": None if options.data is not None else model_frame(results),
    }


def _exog_frame(results: Any, frame: pd.DataFrame) -> pd.DataFrame:
    """Select the design columns of a non-formula model from *frame*."""
    names = list(results.model.exog_names)
    missing = [name for name in names if name not in frame.columns]
    if any(name not in _CONSTANT_NAMES for name in missing):
        raise InputError(f"newdata lacks the model's columns {missing}.")
    if missing:
        frame = frame.assign(**{name: 1.0 for name in missing})
    return frame.loc[:, names]


def predict_newdata(
    results: Any,
    newdata: pd.DataFrame,
    **kwargs: Any,
) -> tuple[np.ndarray, np.ndarray | None]:
    """Predict on *newdata*; return ``(values, positions)``.

    *positions* are the 0-based rows of *newdata* the predictions
    belong to.  Formula models silently drop rows with a missing
    predictor; those rows are simply absent from *positions*.
    """
    frame = newdata.reset_index(drop=True)
    if getattr(results.model, "formula", None) is None:
        frame = _exog_frame(results, frame)
    with warnings.catch_warnings():
        # "nan values have been dropped" is expected; the aligner
        # restores those rows with missing markers.
        warnings.simplefilter("ignore", ValueWarning)
        predicted = results.predict(frame, **kwargs)

    if isinstance(predicted, pd.Series):
        return predicted.to_numpy(dtype=float), np.asarray(predicted.index, dtype=np.intp)
    predicted = np.asarray(predicted, dtype=float)
    if len(predicted) == len(frame):
        return predicted, np.arange(len(frame))
    # Unknown which rows were dropped; let the aligner refuse.
    return predicted, None
