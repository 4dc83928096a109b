"""Row alignment — merging per-observation model output into a dataset.

``augment`` adapters compute derived per-observation quantities
(fitted values, residuals, leverage, ...) over the observations the
*model* used.  That set is frequently a strict subset of the caller's
rows: a row with a missing predictor is dropped at fit time, and a row
of ``newdata`` with a missing predictor cannot be predicted.  The
:class:`RowAligner` maps those values back onto every row of the input
dataset.

Algorithm
~~~~~~~~~
1. Pick the input dataset: ``newdata``, else ``data``, else the frame
   the adapter reconstructed from the model (:func:`resolve_input`).
2. The row index is the 0-based *position* in the input dataset.  When
   the input carries informative row labels (anything but the default
   ``RangeIndex``), they are kept in a ``.rownames`` column.
3. Find each derived value's position:

   * ``Observations.positions`` — 0-based positions, used as-is;
   * ``Observations.labels`` — row labels, looked up in the input
     index (which must then be unique);
   * neither — positional, but only when the derived row count equals
     the input row count.

   Anything else is an :class:`~.exceptions.AlignmentError`; rows are
   never guessed.
4. Rows without a derived value get the missing marker (``NaN``/``NA``)
   in every derived column.  Nothing is dropped or reordered.
5. Output = ``.rownames`` + input columns (input order) + derived
   columns, on a fresh ``RangeIndex``.

The output row count always equals the input row count.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np
import pandas as pd

from ._compat import as_pandas_frame
from .columns import ROWNAMES
from .exceptions import AlignmentError, InputError

if TYPE_CHECKING:
    from ._context import CallContext
    from .options import SummaryOptions

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Observations:
    """Per-observation output of an augment adapter.

    Attributes:
        values: Derived columns, one row per observation the model
            used (or could predict).  Every column name must carry the
            reserved ``"."`` prefix.
        positions: 0-based positions of those observations in the
            input dataset, or ``None``.
        labels: Row labels of those observations in the input
            dataset, or ``None``.  Ignored when *positions* is given.
        data: The dataset the adapter reconstructed from the model
            when the caller supplied neither ``data`` nor ``newdata``.
    """

    values: pd.DataFrame
    positions: Sequence[int] | np.ndarray | None = None
    labels: Sequence[Any] | pd.Index | None = None
    data: pd.DataFrame | None = None

    @property
    def n_observations(self) -> int:
        return len(self.values)


def resolve_input(
    options: SummaryOptions,
    observations: Observations,
) -> pd.DataFrame | None:
    """Return the dataset to augment: newdata, then data, then reconstructed."""
    if options.newdata is not None:
        return options.newdata
    if options.data is not None:
        return options.data
    if observations.data is not None:
        return as_pandas_frame(observations.data, name="reconstructed data")
    return None


def _is_default_index(index: pd.Index) -> bool:
    """``True`` for ``RangeIndex(0, n, 1)`` — labels that carry no information."""
    return (
        isinstance(index, pd.RangeIndex)
        and index.start == 0
        and index.step == 1
    )


class RowAligner:
    """Aligns adapter output to the rows of an input dataset."""

    def align(
        self,
        data: pd.DataFrame,
        observations: Observations,
        ctx: CallContext | None = None,
    ) -> pd.DataFrame:
        """Merge *observations* into *data*.

        Args:
            data: The input dataset.
            observations: Derived values and their observation index.
            ctx: Optional call context, updated with alignment stats.

        Returns:
            A new DataFrame with ``len(data)`` rows.

        Raises:
            AlignmentError: If the observation index cannot be mapped
                onto the rows of *data*.
            InputError: If a derived column name already exists in
                *data*.
        """
        n = len(data)
        values = observations.values
        m = len(values)

        keep_labels = not _is_default_index(data.index)
        added = list(values.columns) + ([ROWNAMES] if keep_labels else [])
        collisions = [name for name in added if name in data.columns]
        if collisions:
            raise InputError(
                f"Input data already has column(s) {collisions}, which augment "
                "would add. Rename them before augmenting."
            )

        positions, how = self._positions(data, observations)

        derived = values.reset_index(drop=True)
        derived.index = pd.Index(positions)
        derived = derived.reindex(pd.RangeIndex(n))

        result = data.reset_index(drop=True)
        if keep_labels:
            result.insert(0, ROWNAMES, data.index.to_numpy())
        result = pd.concat([result, derived], axis=1)

        n_filled = n - m
        if n_filled:
            logger.debug(
                "Aligned %d observations onto %d rows by %s; %d rows filled "
                "with missing values.",
                m,
                n,
                how,
                n_filled,
            )
        if ctx is not None:
            ctx.n_input_rows = n
            ctx.n_observations = m
            ctx.n_filled_rows = n_filled
            ctx.alignment = how
        return result

    # ---- Correspondence ------------------------------------------
    #
    # Each branch returns ``(positions, how)`` where ``positions[i]``
    # is the input row of the i-th derived value.  Positions must be
    # unique and in range; reindexing then places every value and
    # fills the remaining rows with the missing marker.

    def _positions(
        self,
        data: pd.DataFrame,
        observations: Observations,
    ) -> tuple[np.ndarray, str]:
        n = len(data)
        m = observations.n_observations

        if observations.positions is not None:
            pos = np.asarray(observations.positions)
            if pos.size == 0:
                pos = pos.astype(np.intp)
            if pos.ndim != 1 or len(pos) != m:
                raise AlignmentError(
                    f"Adapter reported {len(pos)} positions for {m} observations.",
                    n_rows=n,
                    n_observations=m,
                )
            if not np.issubdtype(pos.dtype, np.integer):
                raise AlignmentError(
                    f"Observation positions must be integers, got dtype {pos.dtype}.",
                    n_rows=n,
                    n_observations=m,
                )
            if m and (pos.min() < 0 or pos.max() >= n):
                raise AlignmentError(
                    f"Observation positions fall outside the {n} input rows.",
                    n_rows=n,
                    n_observations=m,
                )
            if len(np.unique(pos)) != m:
                raise AlignmentError(
                    "Observation positions contain duplicates.",
                    n_rows=n,
                    n_observations=m,
                )
            return pos, "positions"

        if observations.labels is not None:
            labels = pd.Index(observations.labels)
            if len(labels) != m:
                raise AlignmentError(
                    f"Adapter reported {len(labels)} labels for {m} observations.",
                    n_rows=n,
                    n_observations=m,
                )
            if not data.index.is_unique:
                raise AlignmentError(
                    "Input data has duplicate row labels; observations cannot "
                    "be matched to rows by label.",
                    n_rows=n,
                    n_observations=m,
                )
            if not labels.is_unique:
                raise AlignmentError(
                    "Observation labels contain duplicates.",
                    n_rows=n,
                    n_observations=m,
                )
            pos = data.index.get_indexer(labels)
            missing = int(np.sum(pos < 0))
            if missing:
                raise AlignmentError(
                    f"{missing} of {m} observation labels were not found in the "
                    "input data's row index.",
                    n_rows=n,
                    n_observations=m,
                )
            return pos, "labels"

        if m == n:
            return np.arange(n), "order"

        raise AlignmentError(
            f"Model produced {m} observations for {n} input rows and reported "
            "no observation index; rows cannot be matched.",
            n_rows=n,
            n_observations=m,
        )


__all__ = ["Observations", "RowAligner", "resolve_input"]
