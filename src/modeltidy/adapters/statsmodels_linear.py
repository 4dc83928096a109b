"""Adapters for statsmodels linear regression results (OLS, WLS, GLS).

``tidy`` uses t-based Wald intervals with the residual degrees of
freedom, matching ``RegressionResults.conf_int``.  ``augment`` on the
fitting data adds the OLS influence measures (leverage, leave-one-out
sigma, Cook's distance, internally studentized residuals) from
``OLSInfluence``; on ``newdata`` it adds predictions only.
"""

from __future__ import annotations

from typing import Any

import numpy as np
import pandas as pd
from statsmodels.regression.linear_model import OLSResults, RegressionResults

from ..aligner import Observations
from ..columns import AUGMENT, GLANCE, TIDY
from ..options import SummaryOptions
from ..registry import TypeRegistry
from ._statsmodels import (
    coefficient_table,
    predict_newdata,
    scalar,
    t_df,
    training_observations,
)

GLANCE_COLUMNS = (
    "r.squared",
    "adj.r.squared",
    "sigma",
    "statistic",
    "p.value",
    "df",
    "logLik",
    "AIC",
    "BIC",
    "deviance",
    "df.residual",
    "nobs",
)


def tidy_regression(results: Any, options: SummaryOptions) -> pd.DataFrame:
    return coefficient_table(results, options, df=t_df(results))


def glance_regression(results: Any, options: SummaryOptions) -> pd.DataFrame:  # noqa: ARG001
    return pd.DataFrame(
        {
            "r.squared": [scalar(results.rsquared)],
            "adj.r.squared": [scalar(results.rsquared_adj)],
            "sigma": [float(np.sqrt(results.scale))],
            "statistic": [scalar(results.fvalue)],
            "p.value": [scalar(results.f_pvalue)],
            "df": [float(results.df_model)],
            "logLik": [float(results.llf)],
            "AIC": [float(results.aic)],
            "BIC": [float(results.bic)],
            "deviance": [float(results.ssr)],
            "df.residual": [float(results.df_resid)],
            "nobs": [int(results.nobs)],
        }
    )


def augment_regression(results: Any, options: SummaryOptions) -> Observations:
    """Fitted values and residual diagnostics.

    Family-specific options:
        influence: Compute ``.hat``, ``.sigma``, ``.cooksd`` and
            ``.std.resid`` (default ``True``).  Influence measures
            need the hat matrix diagonal; turn them off for very
            large fits.
    """
    if options.newdata is not None:
        fitted, positions = predict_newdata(results, options.newdata)
        return Observations(values=pd.DataFrame({".fitted": fitted}), positions=positions)

    values = pd.DataFrame(
        {
            ".fitted": np.asarray(results.fittedvalues, dtype=float),
            ".resid": np.asarray(results.resid, dtype=float),
        }
    )
    if options.get("influence", True):
        influence = results.get_influence()
        values[".hat"] = np.asarray(influence.hat_matrix_diag, dtype=float)
        values[".sigma"] = np.sqrt(np.asarray(influence.sigma2_not_obsi, dtype=float))
        values[".cooksd"] = np.asarray(influence.cooks_distance[0], dtype=float)
        values[".std.resid"] = np.asarray(
            influence.resid_studentized_internal, dtype=float
        )
    return Observations(**training_observations(results, values, options))


def register(registry: TypeRegistry) -> None:
    # WLS and GLS fits return RegressionResults, OLS returns OLSResults.
    # QuantReg and the regularized fits subclass these and stay unmatched.
    for tag in (RegressionResults, OLSResults):
        registry.register(tag, TIDY, tidy_regression, exact=True)
        registry.register(
            tag, GLANCE, glance_regression, columns=GLANCE_COLUMNS, exact=True
        )
        registry.register(tag, AUGMENT, augment_regression, exact=True)
