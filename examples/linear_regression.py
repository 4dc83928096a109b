"""
Example 1: Linear Regression (Continuous Outcome)
Longley macroeconomic dataset (bundled with statsmodels)

Demonstrates:
- ``tidy`` with and without confidence intervals, and ``quick=True``
- ``glance`` for model-level fit statistics
- ``augment`` on the fitting data, including rows the model dropped
- ``augment`` on new data with a missing predictor
- ``print_tidy_table`` for a statsmodels-style summary
"""

import numpy as np
import statsmodels.api as sm
import statsmodels.formula.api as smf

from modeltidy import augment, glance, print_tidy_table, tidy

# ============================================================================
# Load data
# ============================================================================

longley = sm.datasets.longley.load_pandas().data
# Knock out two predictor values so that the fit drops those rows.
longley.loc[[3, 11], "UNEMP"] = np.nan

fit = smf.ols("TOTEMP ~ GNP + UNEMP + ARMED + POP", data=longley).fit()

# ============================================================================
# tidy: one row per coefficient
# ============================================================================

coefs = tidy(fit, conf_int=True)
assert list(coefs["term"]) == ["Intercept", "GNP", "UNEMP", "ARMED", "POP"]
assert (coefs["conf.low"] <= coefs["estimate"]).all()
print(coefs)

wide = tidy(fit, conf_int=True, conf_level=0.99)
assert (wide["conf.low"] <= coefs["conf.low"]).all()

print(tidy(fit, quick=True))

# ============================================================================
# glance: one row per model
# ============================================================================

stats = glance(fit)
assert len(stats) == 1
assert stats["nobs"].iloc[0] == len(longley) - 2
print(stats.T)

print_tidy_table(coefs, glance_table=stats, title="OLS: Total Employment (Longley)")

# ============================================================================
# augment: one row per input row
# ============================================================================

rows = augment(fit, data=longley)
assert len(rows) == len(longley)
assert rows[".fitted"].isna().sum() == 2
print(rows[["TOTEMP", ".fitted", ".resid", ".hat", ".cooksd"]].head(6))

# New data: the row with a missing predictor comes back unpredicted.
newdata = longley.iloc[:4].copy()
newdata.loc[1, "GNP"] = np.nan
predicted = augment(fit, newdata=newdata)
assert len(predicted) == 4
assert predicted[".fitted"].isna().tolist() == [False, True, False, True]
print(predicted[["GNP", "UNEMP", ".fitted"]])
