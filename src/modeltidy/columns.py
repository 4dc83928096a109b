"""Column naming conventions shared by every summarization kind.

This module is the SINGLE SOURCE OF TRUTH for column names.  Adapters
import names from here rather than spelling them out, and the kind
policies in :mod:`modeltidy.kinds` validate adapter output against it.

Conventions
~~~~~~~~~~~
* Columns derived from the model and appended to caller data by
  ``augment`` carry the reserved ``"."`` prefix (``.fitted``,
  ``.resid``, ...), so they can never be mistaken for a data column.
* Component-level (``tidy``) and model-level (``glance``) columns use a
  fixed vocabulary of dotted lower-case names (``std.error``,
  ``p.value``, ``adj.r.squared``), with the information criteria kept
  in their conventional capitalisation (``AIC``, ``BIC``, ``logLik``).
* No column may encode the generating call (``call``, ``formula``).
  Summaries describe the fitted object, not the call that built it.

Column order
~~~~~~~~~~~~
Each kind has a canonical order.  Recognized columns are emitted in
that order; any other columns follow in the order the adapter produced
them.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

# ------------------------------------------------------------------ #
# Kinds and reserved names
# ------------------------------------------------------------------ #

GLANCE = "glance"
TIDY = "tidy"
AUGMENT = "augment"

KINDS: tuple[str, ...] = (GLANCE, TIDY, AUGMENT)

DERIVED_PREFIX = "."
"""Prefix that marks a column as derived from the model."""

ROWNAMES = ".rownames"
"""Column holding the input dataset's row labels in augment output."""

FORBIDDEN_COLUMNS: frozenset[str] = frozenset({"call", "formula"})
"""Names that would encode the generating call rather than the model."""


@dataclass(frozen=True)
class ColumnInfo:
    """Semantic description of one canonical column.

    Attributes:
        name: Column name as it appears in output tables.
        dtype: One of ``"numeric"``, ``"string"``, ``"boolean"``,
            ``"categorical"``.
        description: One-line human-readable meaning.
    """

    name: str
    dtype: str
    description: str


_INFO: tuple[ColumnInfo, ...] = (
    # ---- Component identifiers (tidy) -----------------------------
    ColumnInfo("effect", "string", "Fixed effect or random-effect parameter"),
    ColumnInfo("group", "string", "Grouping factor a parameter belongs to"),
    ColumnInfo("component", "string", "Model component (e.g. principal component)"),
    ColumnInfo("y.level", "string", "Response level for multi-outcome models"),
    ColumnInfo("cluster", "categorical", "Cluster label"),
    ColumnInfo("term", "string", "Name of the model term"),
    # ---- Component estimates (tidy) -------------------------------
    ColumnInfo("estimate", "numeric", "Point estimate"),
    ColumnInfo("std.error", "numeric", "Standard error of the estimate"),
    ColumnInfo("statistic", "numeric", "Test statistic"),
    ColumnInfo("p.value", "numeric", "Two-sided p-value of the test statistic"),
    ColumnInfo("conf.low", "numeric", "Lower confidence bound"),
    ColumnInfo("conf.high", "numeric", "Upper confidence bound"),
    ColumnInfo("size", "numeric", "Number of observations in the cluster"),
    ColumnInfo("withinss", "numeric", "Within-cluster sum of squares"),
    # ---- Model-level statistics (glance) --------------------------
    ColumnInfo("r.squared", "numeric", "Coefficient of determination"),
    ColumnInfo("adj.r.squared", "numeric", "Adjusted R-squared"),
    ColumnInfo("pseudo.r.squared", "numeric", "McFadden pseudo R-squared"),
    ColumnInfo("sigma", "numeric", "Residual standard deviation"),
    ColumnInfo("df", "numeric", "Model degrees of freedom"),
    ColumnInfo("logLik", "numeric", "Log-likelihood"),
    ColumnInfo("null.logLik", "numeric", "Log-likelihood of the null model"),
    ColumnInfo("AIC", "numeric", "Akaike information criterion"),
    ColumnInfo("BIC", "numeric", "Bayesian information criterion"),
    ColumnInfo("deviance", "numeric", "Residual deviance (RSS for OLS)"),
    ColumnInfo("df.residual", "numeric", "Residual degrees of freedom"),
    ColumnInfo("null.deviance", "numeric", "Deviance of the null model"),
    ColumnInfo("df.null", "numeric", "Degrees of freedom of the null model"),
    ColumnInfo("nobs", "numeric", "Number of observations used in fitting"),
    ColumnInfo("converged", "boolean", "Whether the optimiser converged"),
    ColumnInfo("totss", "numeric", "Total sum of squares"),
    ColumnInfo("tot.withinss", "numeric", "Total within-cluster sum of squares"),
    ColumnInfo("betweenss", "numeric", "Between-cluster sum of squares"),
    ColumnInfo("iter", "numeric", "Number of iterations run"),
    # ---- Derived per-observation columns (augment) ----------------
    ColumnInfo(ROWNAMES, "string", "Row label of the input dataset"),
    ColumnInfo(".fitted", "numeric", "Fitted or predicted value"),
    ColumnInfo(".se.fit", "numeric", "Standard error of the fitted value"),
    ColumnInfo(".lower", "numeric", "Lower prediction bound"),
    ColumnInfo(".upper", "numeric", "Upper prediction bound"),
    ColumnInfo(".resid", "numeric", "Residual"),
    ColumnInfo(".std.resid", "numeric", "Standardised residual"),
    ColumnInfo(".hat", "numeric", "Leverage (diagonal of the hat matrix)"),
    ColumnInfo(".sigma", "numeric", "Residual SD when the observation is dropped"),
    ColumnInfo(".cooksd", "numeric", "Cook's distance"),
    ColumnInfo(".cluster", "categorical", "Assigned cluster"),
)

_VOCABULARY: dict[str, ColumnInfo] = {info.name: info for info in _INFO}

IDENTIFIER_COLUMNS: tuple[str, ...] = (
    "effect",
    "group",
    "component",
    "y.level",
    "cluster",
    "term",
)
"""Columns that identify a component; together they key a tidy row."""

ESTIMATE = "estimate"
CONF_LOW = "conf.low"
CONF_HIGH = "conf.high"

_CANONICAL_ORDER: dict[str, tuple[str, ...]] = {
    TIDY: IDENTIFIER_COLUMNS
    + (
        "estimate",
        "std.error",
        "statistic",
        "p.value",
        "conf.low",
        "conf.high",
    ),
    GLANCE: (
        "r.squared",
        "adj.r.squared",
        "pseudo.r.squared",
        "sigma",
        "statistic",
        "p.value",
        "df",
        "logLik",
        "null.logLik",
        "AIC",
        "BIC",
        "deviance",
        "df.residual",
        "null.deviance",
        "df.null",
        "totss",
        "tot.withinss",
        "betweenss",
        "iter",
        "converged",
        "nobs",
    ),
    AUGMENT: (
        ROWNAMES,
        ".fitted",
        ".se.fit",
        ".lower",
        ".upper",
        ".resid",
        ".std.resid",
        ".hat",
        ".sigma",
        ".cooksd",
        ".cluster",
    ),
}


# ------------------------------------------------------------------ #
# Lookup
# ------------------------------------------------------------------ #


def is_reserved(name: str) -> bool:
    """Return ``True`` if *name* carries the derived-column prefix."""
    return isinstance(name, str) and name.startswith(DERIVED_PREFIX)


def is_recognized(name: str) -> bool:
    """Return ``True`` for vocabulary names and reserved names."""
    return name in _VOCABULARY or is_reserved(name)


def column_info(name: str) -> ColumnInfo | None:
    """Return the :class:`ColumnInfo` for *name*, or ``None``."""
    return _VOCABULARY.get(name)


def _check_kind(kind: str) -> None:
    if kind not in _CANONICAL_ORDER:
        msg = f"Unknown summarization kind {kind!r}. Choose from: {list(KINDS)}"
        raise ValueError(msg)


def canonical_order(kind: str) -> tuple[str, ...]:
    """Return the canonical column order for *kind*.

    Raises:
        ValueError: If *kind* is not one of :data:`KINDS`.
    """
    _check_kind(kind)
    return _CANONICAL_ORDER[kind]


def order_columns(columns: Iterable[str], kind: str) -> list[str]:
    """Order *columns* canonically for *kind*.

    Columns named in :func:`canonical_order` come first, in canonical
    order; the remaining columns follow in their original order.
    """
    columns = list(columns)
    present = set(columns)
    head = [name for name in canonical_order(kind) if name in present]
    placed = set(head)
    return head + [name for name in columns if name not in placed]


__all__ = [
    "AUGMENT",
    "CONF_HIGH",
    "CONF_LOW",
    "DERIVED_PREFIX",
    "ESTIMATE",
    "FORBIDDEN_COLUMNS",
    "GLANCE",
    "IDENTIFIER_COLUMNS",
    "KINDS",
    "ROWNAMES",
    "TIDY",
    "ColumnInfo",
    "canonical_order",
    "column_info",
    "is_recognized",
    "is_reserved",
    "order_columns",
]
