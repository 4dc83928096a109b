"""Call context — per-call record of dispatch decisions.

A :class:`CallContext` is created by the dispatcher at the start of
every ``summarize`` call and travels through the kind policy and the
row aligner.  It collects what was resolved (kind, matched type tag,
adapter) and what happened to the rows, so that contract violations
and debug logs can report full diagnostic context without threading a
growing list of arguments through every function.

The context never outlives the call that created it.

Lifecycle::

    ┌─────────────────────────────────────────────┐
    │  Dispatcher.summarize(kind, model, options) │
    │  ├─ spec = registry.resolve_for(model, …)   │
    │  ├─ ctx = CallContext(kind, spec, …)        │
    │  ├─ policy.invoke(spec, model, opts, ctx)   │
    │  │   └─ aligner.align(…, ctx=ctx)           │
    │  │       ├─ ctx.n_input_rows = …            │
    │  │       ├─ ctx.n_observations = …          │
    │  │       └─ ctx.n_filled_rows = …           │
    │  ├─ policy.validate(table, …, ctx)          │
    │  └─ return policy.finalize(table, …)        │
    └─────────────────────────────────────────────┘
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .exceptions import ContractViolationError, _tag_name

if TYPE_CHECKING:
    from .options import SummaryOptions
    from .registry import AdapterSpec


@dataclass
class CallContext:
    """Mutable accumulator for one summarization call.

    Every optional field defaults to ``None`` so the context can be
    created empty and populated as the call proceeds.
    """

    # ---- Resolution ----------------------------------------------
    kind: str
    """Summarization kind (``"glance"``, ``"tidy"`` or ``"augment"``)."""

    spec: AdapterSpec
    """Registration record of the resolved adapter."""

    options: SummaryOptions
    """Normalized options the adapter was called with."""

    model_type: type | None = None
    """Class the adapter was resolved on (the wrapped results class for
    statsmodels results)."""

    # ---- Alignment (augment only) --------------------------------
    n_input_rows: int | None = None
    """Row count of the input dataset."""

    n_observations: int | None = None
    """Number of per-observation values produced by the adapter."""

    n_filled_rows: int | None = None
    """Input rows that received the missing marker."""

    alignment: str | None = None
    """How rows were matched: ``"positions"``, ``"labels"`` or ``"order"``."""

    derived_columns: list[str] | None = None
    """Derived column names, in the order the adapter produced them."""

    @property
    def type_tag(self) -> Any:
        """Type tag the resolved adapter was registered under."""
        return self.spec.type_tag

    @property
    def adapter_name(self) -> str:
        """Qualified name of the adapter callable, for messages."""
        fn = self.spec.adapter
        module = getattr(fn, "__module__", None) or "?"
        name = getattr(fn, "__qualname__", None) or type(fn).__qualname__
        return f"{module}.{name}"

    def violation(self, invariant: str, message: str) -> ContractViolationError:
        """Build a :class:`ContractViolationError` for this call."""
        model = _tag_name(self.model_type) if self.model_type else "?"
        where = f"adapter {self.adapter_name}, model {model}"
        if self.n_input_rows is not None:
            where += (
                f"; {self.n_observations} observations aligned onto "
                f"{self.n_input_rows} rows by {self.alignment}, "
                f"{self.n_filled_rows} filled"
            )
        return ContractViolationError(
            f"{message} ({where})",
            kind=self.kind,
            type_tag=self.type_tag,
            invariant=invariant,
        )


__all__ = ["CallContext"]
