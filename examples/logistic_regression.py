"""
Example 2: Logistic Regression (Binary Outcome)
Spector & Mazzeo (1980) PSI teaching-method dataset (bundled with statsmodels)

Demonstrates:
- The same three calls on ``Logit`` and on a binomial ``GLM``
- ``exponentiate=True`` for odds ratios with matching bounds
- GLM-specific augment options (``type_predict``, ``type_residuals``)
- ``registered_kinds`` and ``NoAdapterError`` for unsupported objects
"""

import numpy as np
import statsmodels.api as sm
import statsmodels.formula.api as smf

from modeltidy import (
    NoAdapterError,
    augment,
    glance,
    print_glance_table,
    registered_kinds,
    tidy,
)

# ============================================================================
# Load data
# ============================================================================

spector = sm.datasets.spector.load_pandas().data

# ============================================================================
# Logit
# ============================================================================

logit = smf.logit("GRADE ~ GPA + TUCE + PSI", data=spector).fit(disp=0)
assert registered_kinds(logit) == {"glance", "tidy", "augment"}

odds = tidy(logit, conf_int=True, exponentiate=True)
assert np.allclose(odds["estimate"], np.exp(logit.params.to_numpy()))
print(odds)

print_glance_table(glance(logit), title="Logit: GRADE ~ GPA + TUCE + PSI")

probs = augment(logit)
assert probs[".fitted"].between(0, 1).all()
print(probs.head())

# ============================================================================
# Binomial GLM: same coefficients, different model-level statistics
# ============================================================================

glm = smf.glm(
    "GRADE ~ GPA + TUCE + PSI", data=spector, family=sm.families.Binomial()
).fit()
assert np.allclose(tidy(glm)["estimate"], tidy(logit)["estimate"], atol=1e-5)
print(glance(glm).T)

on_link = augment(glm, data=spector, type_predict="link", type_residuals="pearson")
print(on_link[["GRADE", ".fitted", ".resid", ".hat"]].head())

# ============================================================================
# Unsupported objects
# ============================================================================

try:
    tidy(spector)
except NoAdapterError as exc:
    print(f"NoAdapterError: {exc}")
