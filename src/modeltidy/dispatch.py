"""Generic entry points: ``glance``, ``tidy`` and ``augment``.

Every call follows the same pipeline::

    kwargs ──► normalize_options ──► registry.resolve_for(model, kind)
                                            │
             ┌──────────────────────────────┘
             ▼
    policy.invoke ──► policy.validate ──► policy.finalize ──► DataFrame

1. **Normalize** — caller options become a frozen
   :class:`~.options.SummaryOptions` (defaults, precedence, type
   checks).
2. **Resolve** — the adapter for ``(model_type(model), kind)`` is looked up
   in the registry.  A missing adapter raises
   :class:`~.exceptions.NoAdapterError`.
3. **Invoke** — the kind policy calls the adapter; for ``augment`` it
   also runs the row aligner.
4. **Validate** — the kind contract is checked (row count, identifier
   uniqueness, column names).  Violations raise
   :class:`~.exceptions.ContractViolationError`.
5. **Finalize** — columns are put in canonical order.

Exceptions raised by the adapter itself propagate unchanged.  No
partial table is ever returned.
"""

from __future__ import annotations

import logging
from typing import Any

import pandas as pd

from ._context import CallContext
from .aligner import RowAligner
from .columns import AUGMENT, GLANCE, KINDS, TIDY
from .exceptions import _tag_name
from .kinds import AugmentKind, GlanceKind, TidyKind
from .options import SummaryOptions, normalize_options
from .registry import TypeRegistry, default_registry, model_type

logger = logging.getLogger(__name__)


class Dispatcher:
    """Resolves, invokes and validates adapters for one registry.

    Args:
        registry: Adapter registry to resolve against.  Defaults to
            the process-wide registry that built-in adapters and
            plugins populate.
        aligner: Row aligner used by ``augment``.
    """

    def __init__(
        self,
        registry: TypeRegistry | None = None,
        aligner: RowAligner | None = None,
    ) -> None:
        self.registry = registry if registry is not None else default_registry()
        self._policies = {
            GLANCE: GlanceKind(),
            TIDY: TidyKind(),
            AUGMENT: AugmentKind(aligner),
        }

    def summarize(
        self,
        kind: str,
        model: Any,
        options: SummaryOptions | None = None,
        **kwargs: Any,
    ) -> pd.DataFrame:
        """Produce the *kind* summary of *model*.

        Args:
            kind: ``"glance"``, ``"tidy"`` or ``"augment"``.
            model: Fitted model object.
            options: Pre-normalized options.  Mutually exclusive with
                *kwargs*.
            **kwargs: Raw options, normalized with
                :func:`~.options.normalize_options`.

        Returns:
            The summary table.

        Raises:
            ValueError: If *kind* is unknown.
            TypeError: If both *options* and *kwargs* are given.
            InputError: If the options are invalid.
            NoAdapterError: If no adapter is registered.
            ContractViolationError: If the adapter breaks the contract.
            AlignmentError: If augment rows cannot be matched.
        """
        if kind not in KINDS:
            msg = f"Unknown summarization kind {kind!r}. Choose from: {list(KINDS)}"
            raise ValueError(msg)
        if options is None:
            options = normalize_options(kind, **kwargs)
        elif kwargs:
            msg = "Pass either a SummaryOptions instance or keyword options, not both."
            raise TypeError(msg)

        spec = self.registry.resolve_for(model, kind)
        resolved_type = model_type(model)
        logger.debug(
            "Resolved %s adapter for %s via %s",
            kind,
            _tag_name(resolved_type),
            _tag_name(spec.type_tag),
        )

        policy = self._policies[kind]
        ctx = CallContext(
            kind=kind, spec=spec, options=options, model_type=resolved_type
        )
        table = policy.invoke(spec, model, options, ctx)
        policy.validate(table, options, ctx)
        return policy.finalize(table, options, ctx)


# ------------------------------------------------------------------ #
# Module-level API (default registry)
# ------------------------------------------------------------------ #

_DISPATCHER = Dispatcher()


def summarize(kind: str, model: Any, **kwargs: Any) -> pd.DataFrame:
    """Produce the *kind* summary of *model* using the default registry."""
    return _DISPATCHER.summarize(kind, model, **kwargs)


def glance(model: Any, **kwargs: Any) -> pd.DataFrame:
    """One-row model-level summary of *model*.

    Args:
        model: Fitted model object.
        **kwargs: Family-specific options.

    Returns:
        A single-row DataFrame of model statistics (``r.squared``,
        ``AIC``, ``nobs``, ...).
    """
    return _DISPATCHER.summarize(GLANCE, model, **kwargs)


def tidy(
    model: Any,
    *,
    conf_int: bool = False,
    conf_level: float | None = None,
    exponentiate: bool = False,
    quick: bool = False,
    **kwargs: Any,
) -> pd.DataFrame:
    """Component-level summary of *model*: one row per term.

    Args:
        model: Fitted model object.
        conf_int: Add ``conf.low``/``conf.high`` columns.
        conf_level: Confidence level; defaults to
            :func:`~._config.get_conf_level` (0.95).
        exponentiate: Report exponentiated estimates and bounds
            (odds ratios, rate ratios).
        quick: Return only the identifier and ``estimate`` columns.
        **kwargs: Family-specific options.

    Returns:
        A DataFrame with columns such as ``term``, ``estimate``,
        ``std.error``, ``statistic``, ``p.value``.
    """
    return _DISPATCHER.summarize(
        TIDY,
        model,
        conf_int=conf_int,
        conf_level=conf_level,
        exponentiate=exponentiate,
        quick=quick,
        **kwargs,
    )


def augment(
    model: Any,
    *,
    data: Any = None,
    newdata: Any = None,
    **kwargs: Any,
) -> pd.DataFrame:
    """Observation-level summary: the input data with derived columns.

    Args:
        model: Fitted model object.
        data: The data the model was fitted on.  When omitted, the
            adapter reconstructs it from the model where it can.
        newdata: New data to predict on; takes precedence over *data*.
        **kwargs: Family-specific options.

    Returns:
        The input rows, in input order, with ``.``-prefixed derived
        columns (``.fitted``, ``.resid``, ...) appended.  Rows the
        model did not use carry missing values in every derived
        column.
    """
    return _DISPATCHER.summarize(AUGMENT, model, data=data, newdata=newdata, **kwargs)


__all__ = ["Dispatcher", "augment", "glance", "summarize", "tidy"]
