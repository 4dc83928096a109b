"""Adapters for statsmodels discrete-choice and count results.

Covers ``Logit``, ``Probit``, ``Poisson`` and ``NegativeBinomial``.
Each results class is registered exactly; other discrete families
(``MNLogit``, zero-inflated and generalized count models) have a
different parameter layout and are left unregistered.

For these models ``results.fittedvalues`` is the *linear predictor*;
``.fitted`` is taken from ``results.predict()`` instead so that it is
on the response scale (probability or expected count), and ``.resid``
is the response residual ``y - .fitted``.
"""

from __future__ import annotations

from typing import Any

import numpy as np
import pandas as pd
from statsmodels.discrete.discrete_model import (
    LogitResults,
    NegativeBinomialResults,
    PoissonResults,
    ProbitResults,
)

from ..aligner import Observations
from ..columns import AUGMENT, GLANCE, TIDY
from ..options import SummaryOptions
from ..registry import TypeRegistry
from ._statsmodels import (
    coefficient_table,
    predict_newdata,
    t_df,
    training_observations,
)

GLANCE_COLUMNS = (
    "pseudo.r.squared",
    "statistic",
    "p.value",
    "df",
    "logLik",
    "null.logLik",
    "AIC",
    "BIC",
    "df.residual",
    "converged",
    "nobs",
)

def tidy_discrete(results: Any, options: SummaryOptions) -> pd.DataFrame:
    return coefficient_table(results, options, df=t_df(results))


def glance_discrete(results: Any, options: SummaryOptions) -> pd.DataFrame:  # noqa: ARG001
    row: dict[str, Any] = {
        "pseudo.r.squared": float(results.prsquared),
        "statistic": float(results.llr),
        "p.value": float(results.llr_pvalue),
        "df": float(results.df_model),
        "logLik": float(results.llf),
        "null.logLik": float(results.llnull),
        "AIC": float(results.aic),
        "BIC": float(results.bic),
        "df.residual": float(results.df_resid),
        "nobs": int(results.nobs),
    }
    retvals = getattr(results, "mle_retvals", None) or {}
    if "converged" in retvals:
        row["converged"] = bool(retvals["converged"])
    return pd.DataFrame([row])


def augment_discrete(results: Any, options: SummaryOptions) -> Observations:
    if options.newdata is not None:
        fitted, positions = predict_newdata(results, options.newdata)
        return Observations(values=pd.DataFrame({".fitted": fitted}), positions=positions)

    fitted = np.asarray(results.predict(), dtype=float)
    endog = np.asarray(results.model.endog, dtype=float)
    values = pd.DataFrame({".fitted": fitted, ".resid": endog - fitted})
    return Observations(**training_observations(results, values, options))


def register(registry: TypeRegistry) -> None:
    for tag in (LogitResults, ProbitResults, PoissonResults, NegativeBinomialResults):
        registry.register(tag, TIDY, tidy_discrete, exact=True)
        registry.register(
            tag, GLANCE, glance_discrete, columns=GLANCE_COLUMNS, exact=True
        )
        registry.register(tag, AUGMENT, augment_discrete, exact=True)
