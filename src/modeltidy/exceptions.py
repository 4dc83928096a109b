"""Exception hierarchy for modeltidy.

Every error raised by the summarization core inherits from
:class:`ModelTidyError` so callers can catch library errors in one
place.  Exceptions raised *inside* an adapter (a statsmodels numerical
failure, say) are not wrapped — they propagate unmodified.

Taxonomy
~~~~~~~~
* :class:`NoAdapterError` — no adapter registered for
  ``(type tag, kind)``.  The sole "not implemented for this model"
  signal.
* :class:`ContractViolationError` — an adapter returned output that
  breaks a shape or column invariant.  A programming defect in the
  adapter, never silently corrected.
* :class:`AlignmentError` — derived per-observation values could not be
  mapped back onto the rows of the input dataset.
* :class:`InputError` — the caller supplied an unusable option value or
  ``data``/``newdata`` argument.
"""

from __future__ import annotations

from typing import Any


class ModelTidyError(Exception):
    """Base exception for all modeltidy errors."""


class NoAdapterError(ModelTidyError, NotImplementedError):
    """No adapter is registered for the requested model type and kind.

    Attributes:
        kind: Summarization kind that was requested (``"tidy"``, ...).
        type_tag: Type tag of the model object.
        available: Kinds that *are* registered for this object.
    """

    def __init__(
        self,
        message: str,
        kind: str | None = None,
        type_tag: Any = None,
        available: frozenset[str] = frozenset(),
    ):
        super().__init__(message)
        self.kind = kind
        self.type_tag = type_tag
        self.available = available


class ContractViolationError(ModelTidyError):
    """An adapter's output violates the summarization contract.

    Attributes:
        kind: Summarization kind being produced.
        type_tag: Type tag the adapter was registered under.
        invariant: Short name of the violated invariant
            (e.g. ``"one-row"``, ``"column-name"``).
    """

    def __init__(
        self,
        message: str,
        kind: str | None = None,
        type_tag: Any = None,
        invariant: str | None = None,
    ):
        detail = f"[{kind} / {_tag_name(type_tag)} / {invariant}] {message}"
        super().__init__(detail)
        self.kind = kind
        self.type_tag = type_tag
        self.invariant = invariant


class AlignmentError(ModelTidyError):
    """Row correspondence between model output and input data is unknown.

    Attributes:
        n_rows: Row count of the input dataset.
        n_observations: Number of per-observation values the adapter
            produced.
    """

    def __init__(
        self,
        message: str,
        n_rows: int | None = None,
        n_observations: int | None = None,
    ):
        super().__init__(message)
        self.n_rows = n_rows
        self.n_observations = n_observations


class InputError(ModelTidyError, ValueError):
    """Caller-supplied options or datasets are unusable."""


def _tag_name(type_tag: Any) -> str:
    """Readable name for a class or qualified-name type tag."""
    if type_tag is None:
        return "?"
    if isinstance(type_tag, type):
        return f"{type_tag.__module__}.{type_tag.__qualname__}"
    return str(type_tag)
