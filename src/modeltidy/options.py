"""Normalized option record passed to every adapter.

Adapters never see raw keyword arguments.  The dispatcher collects the
caller's options, validates them once with :func:`normalize_options`,
and hands each adapter a frozen :class:`SummaryOptions`.  This keeps
the defaults and precedence rules in one place instead of letting each
adapter interpret them differently.

Normalization rules
~~~~~~~~~~~~~~~~~~~
* ``conf_level`` defaults to :func:`~._config.get_conf_level` and is
  validated only when ``conf_int=True``; otherwise it is ignored.
* ``exponentiate`` and ``quick`` only apply to ``tidy`` and are reset
  for other kinds.
* ``quick=True`` turns ``conf_int`` off: quick output carries only the
  identifier and point-estimate columns.
* ``data`` and ``newdata`` must be table-like.  When both are given,
  ``newdata`` takes precedence and ``data`` is dropped.
* Any other keyword is family-specific and passed through in
  :attr:`SummaryOptions.extras`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

import numpy as np
import pandas as pd

from ._compat import as_pandas_frame
from ._config import get_conf_level
from .columns import AUGMENT, KINDS, TIDY
from .exceptions import InputError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class SummaryOptions:
    """Validated options for one summarization call.

    Attributes:
        conf_int: Whether ``conf.low``/``conf.high`` are requested.
        conf_level: Confidence level for the interval, in (0, 1).
        exponentiate: Report ``exp(estimate)`` (and exponentiated
            bounds), e.g. odds ratios for logistic models.
        quick: Return only identifier and point-estimate columns.
        data: Dataset to augment (``None`` when absent or overridden
            by *newdata*).
        newdata: New dataset to predict on.
        extras: Family-specific options, read-only.
    """

    conf_int: bool = False
    conf_level: float = 0.95
    exponentiate: bool = False
    quick: bool = False
    data: pd.DataFrame | None = field(default=None, repr=False)
    newdata: pd.DataFrame | None = field(default=None, repr=False)
    extras: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def get(self, key: str, default: Any = None) -> Any:
        """Family-specific option *key*, or *default*."""
        return self.extras.get(key, default)

    @property
    def alpha(self) -> float:
        """Two-sided significance level, ``1 - conf_level``."""
        return 1.0 - self.conf_level


def _check_flag(value: Any, name: str) -> bool:
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    raise InputError(f"'{name}' must be a boolean, got {type(value).__name__}.")


def normalize_options(
    kind: str,
    *,
    conf_int: Any = False,
    conf_level: Any = None,
    exponentiate: Any = False,
    quick: Any = False,
    data: Any = None,
    newdata: Any = None,
    **extras: Any,
) -> SummaryOptions:
    """Validate caller options for *kind* and build a :class:`SummaryOptions`.

    Args:
        kind: Summarization kind the options are for.
        conf_int: Request confidence-interval columns.
        conf_level: Confidence level; ``None`` uses the configured
            default.
        exponentiate: Exponentiate estimates (tidy only).
        quick: Reduced-column fast path (tidy only).
        data: Dataset to augment (augment only).
        newdata: New dataset to predict on (augment only).
        **extras: Family-specific options, passed through.

    Returns:
        A frozen :class:`SummaryOptions`.

    Raises:
        ValueError: If *kind* is unknown.
        InputError: If a flag is not boolean, ``conf_level`` is out of
            range while ``conf_int=True``, or ``data``/``newdata`` is
            not table-like.
    """
    if kind not in KINDS:
        msg = f"Unknown summarization kind {kind!r}. Choose from: {list(KINDS)}"
        raise ValueError(msg)

    conf_int = _check_flag(conf_int, "conf_int")
    exponentiate = _check_flag(exponentiate, "exponentiate")
    quick = _check_flag(quick, "quick")

    if kind != TIDY and (exponentiate or quick):
        logger.debug("Ignoring tidy-only options for %s.", kind)
        exponentiate = quick = False
    if quick and conf_int:
        logger.debug("quick=True: confidence intervals are not computed.")
        conf_int = False

    level = get_conf_level() if conf_level is None else conf_level
    if conf_int:
        if isinstance(level, bool) or not isinstance(level, (int, float, np.floating)):
            raise InputError(
                f"'conf_level' must be a number, got {type(level).__name__}."
            )
        level = float(level)
        if not 0.0 < level < 1.0:
            raise InputError(
                f"'conf_level' must lie strictly between 0 and 1, got {level!r}."
            )
    elif (
        isinstance(level, bool)
        or not isinstance(level, (int, float, np.floating))
        or not 0.0 < float(level) < 1.0
    ):
        # Not requested, so not validated; keep the record well-formed.
        level = get_conf_level()

    data_df = None
    newdata_df = None
    if kind == AUGMENT:
        if newdata is not None:
            newdata_df = as_pandas_frame(newdata, name="newdata")
            if data is not None:
                logger.debug("Both data and newdata supplied; newdata takes precedence.")
        elif data is not None:
            data_df = as_pandas_frame(data, name="data")
    else:
        # Outside augment these carry no core meaning; leave them to
        # the adapter as family-specific options.
        if data is not None:
            extras["data"] = data
        if newdata is not None:
            extras["newdata"] = newdata

    return SummaryOptions(
        conf_int=conf_int,
        conf_level=float(level),
        exponentiate=exponentiate,
        quick=quick,
        data=data_df,
        newdata=newdata_df,
        extras=MappingProxyType(dict(extras)),
    )


__all__ = ["SummaryOptions", "normalize_options"]
