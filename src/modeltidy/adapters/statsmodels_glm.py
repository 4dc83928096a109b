"""Adapters for statsmodels generalized linear model results.

Coefficients are on the link scale; ``tidy(exponentiate=True)`` turns
log-odds into odds ratios (binomial/logit) and log-rates into rate
ratios (Poisson/log).  Intervals use the normal quantile unless the
model was fitted with ``use_t=True``.
"""

from __future__ import annotations

from typing import Any

import numpy as np
import pandas as pd
from statsmodels.genmod.generalized_linear_model import GLMResults

from ..aligner import Observations
from ..columns import AUGMENT, GLANCE, TIDY
from ..exceptions import InputError
from ..options import SummaryOptions
from ..registry import TypeRegistry
from ._statsmodels import (
    coefficient_table,
    predict_newdata,
    t_df,
    training_observations,
)

GLANCE_COLUMNS = (
    "null.deviance",
    "df.null",
    "logLik",
    "AIC",
    "BIC",
    "deviance",
    "df.residual",
    "converged",
    "nobs",
)

_RESIDUALS = {
    "deviance": "resid_deviance",
    "pearson": "resid_pearson",
    "response": "resid_response",
    "working": "resid_working",
}
_PREDICT_TYPES = ("response", "link")


def tidy_glm(results: Any, options: SummaryOptions) -> pd.DataFrame:
    return coefficient_table(results, options, df=t_df(results))


def glance_glm(results: Any, options: SummaryOptions) -> pd.DataFrame:  # noqa: ARG001
    row: dict[str, Any] = {
        "null.deviance": float(results.null_deviance),
        "df.null": float(results.df_resid + results.df_model),
        "logLik": float(results.llf),
        "AIC": float(results.aic),
        "BIC": float(results.bic_llf),
        "deviance": float(results.deviance),
        "df.residual": float(results.df_resid),
        "nobs": int(results.nobs),
    }
    # Set by the IRLS fitter only; gradient-based fits leave it unset.
    converged = getattr(results, "converged", None)
    if converged is not None:
        row["converged"] = bool(converged)
    return pd.DataFrame([row])


def augment_glm(results: Any, options: SummaryOptions) -> Observations:
    """Fitted values, residuals and GLM influence measures.

    Family-specific options:
        type_predict: ``"response"`` (default) for ``.fitted`` on the
            mean scale, ``"link"`` for the linear predictor.
        type_residuals: ``"deviance"`` (default), ``"pearson"``,
            ``"response"`` or ``"working"``.
        influence: Compute ``.hat``, ``.cooksd`` and ``.std.resid``
            (default ``True``).
    """
    type_predict = options.get("type_predict", "response")
    if type_predict not in _PREDICT_TYPES:
        raise InputError(
            f"type_predict must be one of {list(_PREDICT_TYPES)}, got {type_predict!r}."
        )
    type_residuals = options.get("type_residuals", "deviance")
    if type_residuals not in _RESIDUALS:
        raise InputError(
            f"type_residuals must be one of {sorted(_RESIDUALS)}, got {type_residuals!r}."
        )
    link = results.model.family.link

    if options.newdata is not None:
        mu, positions = predict_newdata(results, options.newdata)
        fitted = link(mu) if type_predict == "link" else mu
        return Observations(values=pd.DataFrame({".fitted": fitted}), positions=positions)

    mu = np.asarray(results.fittedvalues, dtype=float)
    values = pd.DataFrame(
        {
            ".fitted": link(mu) if type_predict == "link" else mu,
            ".resid": np.asarray(getattr(results, _RESIDUALS[type_residuals]), dtype=float),
        }
    )
    if options.get("influence", True):
        influence = results.get_influence()
        values[".hat"] = np.asarray(influence.hat_matrix_diag, dtype=float)
        values[".cooksd"] = np.asarray(influence.cooks_distance[0], dtype=float)
        values[".std.resid"] = np.asarray(influence.resid_studentized, dtype=float)
    return Observations(**training_observations(results, values, options))


def register(registry: TypeRegistry) -> None:
    # GEEResults subclasses GLMResults but has no deviance or IRLS state.
    registry.register(GLMResults, TIDY, tidy_glm, exact=True)
    registry.register(
        GLMResults, GLANCE, glance_glm, columns=GLANCE_COLUMNS, exact=True
    )
    registry.register(GLMResults, AUGMENT, augment_glm, exact=True)
