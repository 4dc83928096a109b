"""
Example 3: Clustering and Multilevel Models (synthetic data)

Demonstrates:
- ``tidy``/``glance``/``augment`` on scikit-learn ``KMeans``
- ``effect`` identifiers in ``tidy`` for a ``MixedLM`` fit
- Registering a plugin adapter for a user-defined model class
"""

import numpy as np
import pandas as pd
import statsmodels.formula.api as smf
from sklearn.cluster import KMeans

from modeltidy import Observations, augment, glance, register_adapter, tidy

rng = np.random.default_rng(2024)

# ============================================================================
# KMeans
# ============================================================================

points = pd.DataFrame(
    np.vstack(
        [
            rng.normal((0.0, 0.0), 0.4, size=(50, 2)),
            rng.normal((4.0, 1.0), 0.4, size=(50, 2)),
            rng.normal((2.0, 4.0), 0.4, size=(50, 2)),
        ]
    ),
    columns=["height", "width"],
)
km = KMeans(n_clusters=3, n_init=10, random_state=0).fit(points)

print(tidy(km))
print(glance(km))
assigned = augment(km, data=points)
assert assigned[".cluster"].nunique() == 3

# ============================================================================
# Linear mixed model
# ============================================================================

n_groups, per_group = 12, 15
group = np.repeat(np.arange(n_groups), per_group)
x = rng.standard_normal(n_groups * per_group)
y = 2.0 + 0.7 * x + rng.normal(0, 1.0, n_groups)[group] + rng.normal(0, 0.5, x.size)
panel = pd.DataFrame({"y": y, "x": x, "school": group})

mixed = smf.mixedlm("y ~ x", data=panel, groups=panel["school"]).fit()
effects = tidy(mixed, conf_int=True)
assert effects["effect"].tolist() == ["fixed", "fixed", "ran_pars"]
print(effects)
print(glance(mixed))

# ============================================================================
# Plugin: a user-defined model class
# ============================================================================


class MeanModel:
    """Predicts the sample mean of ``y`` for every row."""

    def __init__(self, frame, column):
        self.frame = frame
        self.column = column
        self.mean = float(frame[column].mean())


def tidy_mean(model, options):
    return pd.DataFrame({"term": ["mean"], "estimate": [model.mean]})


def augment_mean(model, options):
    values = pd.DataFrame({".fitted": np.full(len(model.frame), model.mean)})
    values[".resid"] = model.frame[model.column].to_numpy() - values[".fitted"]
    return Observations(values=values, data=model.frame)


register_adapter(MeanModel, "tidy", tidy_mean)
register_adapter(MeanModel, "augment", augment_mean)

baseline = MeanModel(panel, "y")
print(tidy(baseline))
print(augment(baseline).head())
