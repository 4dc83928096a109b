"""Kind policies: per-kind invocation, contract checks and column order.

The dispatcher is generic over the three summarization kinds.  What
differs between them — how the adapter is invoked, what shape its
output must have, how columns are ordered — lives in one small policy
object per kind:

* :class:`GlanceKind` — exactly one row; column set within the
  adapter's declared schema, when it declares one.
* :class:`TidyKind` — one row per model component, keyed by the
  identifier columns; ``estimate`` always present; confidence bounds
  present exactly when requested; ``quick`` trims to identifiers and
  estimate.
* :class:`AugmentKind` — the adapter returns
  :class:`~.aligner.Observations`, which the :class:`~.aligner.RowAligner`
  merges into the input dataset; the row count must equal the input's.

A failed check raises :class:`~.exceptions.ContractViolationError`.
Nothing is repaired: an adapter that breaks its contract is a bug in
the adapter, and the caller gets no table at all.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

import pandas as pd

from .aligner import Observations, RowAligner, resolve_input
from .columns import (
    AUGMENT,
    CONF_HIGH,
    CONF_LOW,
    ESTIMATE,
    FORBIDDEN_COLUMNS,
    GLANCE,
    IDENTIFIER_COLUMNS,
    ROWNAMES,
    TIDY,
    is_recognized,
    is_reserved,
    order_columns,
)

if TYPE_CHECKING:
    from ._context import CallContext
    from .options import SummaryOptions
    from .registry import AdapterSpec


class _TableKind:
    """Shared behaviour for kinds whose adapters return a DataFrame."""

    name: ClassVar[str]

    def invoke(
        self,
        spec: AdapterSpec,
        model: Any,
        options: SummaryOptions,
        ctx: CallContext,
    ) -> pd.DataFrame:
        table = spec(model, options)
        if not isinstance(table, pd.DataFrame):
            raise ctx.violation(
                "table-type",
                f"adapter returned {type(table).__name__}, expected a DataFrame",
            )
        return table

    def _check_columns(self, table: pd.DataFrame, ctx: CallContext) -> None:
        columns = list(table.columns)
        bad = [c for c in columns if not isinstance(c, str)]
        if bad:
            raise ctx.violation("column-name", f"non-string column names {bad!r}")
        if len(set(columns)) != len(columns):
            dupes = sorted({c for c in columns if columns.count(c) > 1})
            raise ctx.violation("unique-columns", f"duplicate columns {dupes}")
        forbidden = [c for c in columns if c in FORBIDDEN_COLUMNS]
        if forbidden:
            raise ctx.violation(
                "call-level-column",
                f"columns {forbidden} describe the call, not the model",
            )
        extras = set(ctx.spec.extra_columns)
        unknown = [c for c in columns if not is_recognized(c) and c not in extras]
        if unknown:
            raise ctx.violation(
                "column-name",
                f"columns {unknown} are neither conventional, reserved, nor "
                "declared by the adapter",
            )

    def validate(
        self,
        table: pd.DataFrame,
        options: SummaryOptions,
        ctx: CallContext,
    ) -> None:
        self._check_columns(table, ctx)

    def finalize(
        self,
        table: pd.DataFrame,
        options: SummaryOptions,
        ctx: CallContext,
    ) -> pd.DataFrame:
        ordered = order_columns(table.columns, self.name)
        return table.loc[:, ordered].reset_index(drop=True)


class GlanceKind(_TableKind):
    """Model-level summary: exactly one row."""

    name = GLANCE

    def validate(
        self,
        table: pd.DataFrame,
        options: SummaryOptions,
        ctx: CallContext,
    ) -> None:
        super().validate(table, options, ctx)
        if len(table) != 1:
            raise ctx.violation("one-row", f"glance returned {len(table)} rows")
        schema = ctx.spec.columns
        if schema is not None:
            undeclared = [c for c in table.columns if c not in schema]
            if undeclared:
                raise ctx.violation(
                    "glance-schema",
                    f"columns {undeclared} are outside the declared glance schema",
                )


class TidyKind(_TableKind):
    """Component-level summary: one row per model component."""

    name = TIDY

    def validate(
        self,
        table: pd.DataFrame,
        options: SummaryOptions,
        ctx: CallContext,
    ) -> None:
        super().validate(table, options, ctx)
        ids = [c for c in IDENTIFIER_COLUMNS if c in table.columns]
        if not ids:
            raise ctx.violation(
                "identifier",
                f"no component identifier column (one of {list(IDENTIFIER_COLUMNS)})",
            )
        if ESTIMATE not in table.columns:
            raise ctx.violation("estimate", "no 'estimate' column")
        if table.duplicated(subset=ids).any():
            raise ctx.violation(
                "one-row-per-component",
                f"identifier columns {ids} do not uniquely key the rows",
            )
        if options.quick:
            return
        has_ci = {CONF_LOW, CONF_HIGH} & set(table.columns)
        if options.conf_int and len(has_ci) != 2:
            raise ctx.violation(
                "conf-int",
                "conf_int=True but 'conf.low'/'conf.high' are missing",
            )
        if not options.conf_int and has_ci:
            raise ctx.violation(
                "conf-int",
                "confidence bounds returned although conf_int=False",
            )

    def finalize(
        self,
        table: pd.DataFrame,
        options: SummaryOptions,
        ctx: CallContext,
    ) -> pd.DataFrame:
        if options.quick:
            keep = [c for c in table.columns if c in IDENTIFIER_COLUMNS or c == ESTIMATE]
            table = table.loc[:, keep]
        return super().finalize(table, options, ctx)


class AugmentKind:
    """Observation-level summary: the input dataset plus derived columns."""

    name = AUGMENT

    def __init__(self, aligner: RowAligner | None = None) -> None:
        self.aligner = aligner or RowAligner()

    def invoke(
        self,
        spec: AdapterSpec,
        model: Any,
        options: SummaryOptions,
        ctx: CallContext,
    ) -> pd.DataFrame:
        observations = spec(model, options)
        if not isinstance(observations, Observations):
            raise ctx.violation(
                "observations-type",
                f"adapter returned {type(observations).__name__}, expected Observations",
            )
        values = observations.values
        if not isinstance(values, pd.DataFrame):
            raise ctx.violation(
                "observations-type",
                f"Observations.values is {type(values).__name__}, expected a DataFrame",
            )
        columns = list(values.columns)
        unprefixed = [c for c in columns if not is_reserved(c) or c == ROWNAMES]
        if unprefixed:
            raise ctx.violation(
                "reserved-prefix",
                f"derived columns {unprefixed} must carry the '.' prefix "
                f"(and may not be {ROWNAMES!r})",
            )
        if len(set(columns)) != len(columns):
            raise ctx.violation("unique-columns", f"duplicate derived columns {columns}")

        data = resolve_input(options, observations)
        if data is None:
            raise ctx.violation(
                "reconstruction",
                "no data or newdata given and the adapter reconstructed none",
            )
        ctx.derived_columns = columns
        return self.aligner.align(data, observations, ctx)

    def validate(
        self,
        table: pd.DataFrame,
        options: SummaryOptions,
        ctx: CallContext,
    ) -> None:
        if len(table) != ctx.n_input_rows:
            raise ctx.violation(
                "row-count",
                f"augment returned {len(table)} rows for {ctx.n_input_rows} input rows",
            )

    def finalize(
        self,
        table: pd.DataFrame,
        options: SummaryOptions,
        ctx: CallContext,
    ) -> pd.DataFrame:
        # The aligner emits [.rownames] + data + derived; only the
        # derived tail is reordered.  Slicing by position keeps caller
        # columns intact even when their names repeat.
        derived = ctx.derived_columns or []
        if not derived:
            return table
        split = table.shape[1] - len(derived)
        head = table.iloc[:, :split]
        tail = table.iloc[:, split:]
        return pd.concat([head, tail.loc[:, order_columns(derived, AUGMENT)]], axis=1)


__all__ = ["AugmentKind", "GlanceKind", "TidyKind"]
