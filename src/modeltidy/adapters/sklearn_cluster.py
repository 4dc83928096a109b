"""Adapters for scikit-learn ``KMeans`` clustering.

``tidy`` is in long format: one row per cluster centre coordinate,
keyed by ``cluster`` and ``term`` (the feature), with the coordinate
in ``estimate`` and the cluster's ``size``.  Centres have no sampling
distribution, so ``conf_int=True`` yields missing bounds and
``exponentiate=True`` is rejected.

``augment`` adds the assigned ``.cluster``.  KMeans does not keep its
training data: pass ``data`` (the rows it was fitted on, in order) or
``newdata`` (rows to assign; rows with a missing feature are left
unassigned).
"""

from __future__ import annotations

from typing import Any

import numpy as np
import pandas as pd
from sklearn.cluster import KMeans

from ..aligner import Observations
from ..columns import AUGMENT, CONF_HIGH, CONF_LOW, GLANCE, TIDY
from ..exceptions import InputError
from ..options import SummaryOptions
from ..registry import TypeRegistry

GLANCE_COLUMNS = ("tot.withinss", "iter", "nobs")


def _feature_names(model: Any) -> list[str]:
    names = getattr(model, "feature_names_in_", None)
    if names is not None:
        return [str(name) for name in names]
    return [f"x{j}" for j in range(model.cluster_centers_.shape[1])]


def _feature_frame(model: Any, frame: pd.DataFrame) -> pd.DataFrame:
    """Columns of *frame* the model clusters on, in fitting order."""
    names = getattr(model, "feature_names_in_", None)
    if names is not None:
        missing = [name for name in names if name not in frame.columns]
        if missing:
            raise InputError(f"newdata lacks the model's features {missing}.")
        return frame.loc[:, list(names)]
    numeric = frame.select_dtypes("number")
    if numeric.shape[1] != model.n_features_in_:
        raise InputError(
            f"KMeans was fitted on {model.n_features_in_} unnamed features; "
            f"newdata has {numeric.shape[1]} numeric columns."
        )
    return numeric


def tidy_kmeans(model: Any, options: SummaryOptions) -> pd.DataFrame:
    if options.exponentiate:
        raise InputError("exponentiate=True is not meaningful for cluster centres.")
    centers = np.asarray(model.cluster_centers_, dtype=float)
    k, p = centers.shape
    sizes = np.bincount(model.labels_, minlength=k)
    table = pd.DataFrame(
        {
            "cluster": np.repeat(np.arange(k), p),
            "term": np.tile(_feature_names(model), k),
            "estimate": centers.ravel(),
            "size": np.repeat(sizes, p),
        }
    )
    if options.conf_int:
        table[CONF_LOW] = np.nan
        table[CONF_HIGH] = np.nan
    return table


def glance_kmeans(model: Any, options: SummaryOptions) -> pd.DataFrame:  # noqa: ARG001
    return pd.DataFrame(
        {
            "tot.withinss": [float(model.inertia_)],
            "iter": [int(model.n_iter_)],
            "nobs": [len(model.labels_)],
        }
    )


def augment_kmeans(model: Any, options: SummaryOptions) -> Observations:
    k = model.cluster_centers_.shape[0]
    if options.newdata is not None:
        features = _feature_frame(model, options.newdata)
        complete = features.notna().all(axis=1).to_numpy()
        positions = np.flatnonzero(complete)
        if positions.size:
            rows = features.iloc[positions]
            if getattr(model, "feature_names_in_", None) is None:
                rows = rows.to_numpy()
            labels = model.predict(rows)
        else:
            labels = np.empty(0, dtype=int)
    elif options.data is not None:
        labels = model.labels_
        positions = None
    else:
        raise InputError(
            "KMeans does not keep its training data; pass data= or newdata=."
        )
    values = pd.DataFrame({".cluster": pd.Categorical(labels, categories=np.arange(k))})
    return Observations(values=values, positions=positions)


def register(registry: TypeRegistry) -> None:
    registry.register(KMeans, TIDY, tidy_kmeans)
    registry.register(KMeans, GLANCE, glance_kmeans, columns=GLANCE_COLUMNS)
    registry.register(KMeans, AUGMENT, augment_kmeans)
