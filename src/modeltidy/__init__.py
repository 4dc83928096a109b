"""modeltidy — standardized tabular summaries of fitted models.

Turns heterogeneous fitted-model objects into three standardized
``pandas.DataFrame`` views with a shared column-naming, row-count and
missing-data convention:

* :func:`glance` — one row per model (``r.squared``, ``AIC``, ...);
* :func:`tidy` — one row per component (``term``, ``estimate``, ...);
* :func:`augment` — one row per observation of the input data, with
  ``.``-prefixed derived columns (``.fitted``, ``.resid``, ...).

Model families plug in through :func:`register_adapter`.  Adapters for
statsmodels (OLS/WLS/GLS, GLM, Logit/Probit/Poisson, MixedLM) and
scikit-learn ``KMeans`` are registered on import.

Public API:
    .. autosummary::
        glance
        tidy
        augment
        summarize
        Dispatcher
        register_adapter
        resolve_adapter
        registered_kinds
        TypeRegistry
        AdapterSpec
        Observations
        RowAligner
        SummaryOptions
        normalize_options
        get_conf_level
        set_conf_level
        print_glance_table
        print_tidy_table
        ModelTidyError
        NoAdapterError
        ContractViolationError
        AlignmentError
        InputError
"""

from ._config import get_conf_level, set_conf_level
from .aligner import Observations, RowAligner
from .dispatch import Dispatcher, augment, glance, summarize, tidy
from .display import print_glance_table, print_tidy_table
from .exceptions import (
    AlignmentError,
    ContractViolationError,
    InputError,
    ModelTidyError,
    NoAdapterError,
)
from .options import SummaryOptions, normalize_options
from .registry import (
    AdapterSpec,
    TypeRegistry,
    register_adapter,
    registered_kinds,
    resolve_adapter,
)

# Registers the built-in adapters into the default registry.
from . import adapters  # noqa: E402,F401  isort: skip

__all__ = [
    "glance",
    "tidy",
    "augment",
    "summarize",
    "Dispatcher",
    "register_adapter",
    "resolve_adapter",
    "registered_kinds",
    "TypeRegistry",
    "AdapterSpec",
    "Observations",
    "RowAligner",
    "SummaryOptions",
    "normalize_options",
    "get_conf_level",
    "set_conf_level",
    "print_glance_table",
    "print_tidy_table",
    "ModelTidyError",
    "NoAdapterError",
    "ContractViolationError",
    "AlignmentError",
    "InputError",
]

__version__ = "0.1.0"
