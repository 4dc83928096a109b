"""Adapters for statsmodels linear mixed-effects results (``MixedLM``).

``tidy`` reports every parameter: the fixed-effect coefficients
(``effect="fixed"``) followed by the variance components
(``effect="ran_pars"``, e.g. ``Group Var``).  Standard errors of
variance components can be ``NaN`` when the estimate sits on the
boundary; they are reported as-is.

``augment`` on the fitting data uses ``fittedvalues`` (fixed plus
predicted random effects).  On ``newdata`` only the fixed-effects
prediction is available.
"""

from __future__ import annotations

from typing import Any

import numpy as np
import pandas as pd
from statsmodels.regression.mixed_linear_model import MixedLMResults

from ..aligner import Observations
from ..columns import AUGMENT, GLANCE, TIDY
from ..options import SummaryOptions
from ..registry import TypeRegistry
from ._statsmodels import coefficient_table, predict_newdata, training_observations

GLANCE_COLUMNS = ("sigma", "logLik", "AIC", "BIC", "converged", "nobs")


def tidy_mixed(results: Any, options: SummaryOptions) -> pd.DataFrame:
    table = coefficient_table(results, options)
    k_fe = int(results.model.k_fe)
    effect = np.where(np.arange(len(table)) < k_fe, "fixed", "ran_pars")
    table.insert(0, "effect", effect)
    return table


def glance_mixed(results: Any, options: SummaryOptions) -> pd.DataFrame:  # noqa: ARG001
    return pd.DataFrame(
        {
            "sigma": [float(np.sqrt(results.scale))],
            # AIC/BIC are NaN for REML fits.
            "logLik": [float(results.llf)],
            "AIC": [float(results.aic)],
            "BIC": [float(results.bic)],
            "converged": [bool(results.converged)],
            "nobs": [len(results.model.endog)],
        }
    )


def augment_mixed(results: Any, options: SummaryOptions) -> Observations:
    if options.newdata is not None:
        fitted, positions = predict_newdata(results, options.newdata)
        return Observations(values=pd.DataFrame({".fitted": fitted}), positions=positions)

    values = pd.DataFrame(
        {
            ".fitted": np.asarray(results.fittedvalues, dtype=float),
            ".resid": np.asarray(results.resid, dtype=float),
        }
    )
    return Observations(**training_observations(results, values, options))


def register(registry: TypeRegistry) -> None:
    registry.register(MixedLMResults, TIDY, tidy_mixed, exact=True)
    registry.register(
        MixedLMResults, GLANCE, glance_mixed, columns=GLANCE_COLUMNS, exact=True
    )
    registry.register(MixedLMResults, AUGMENT, augment_mixed, exact=True)
