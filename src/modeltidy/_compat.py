"""Accept Polars frames wherever a ``data``/``newdata`` table is taken.

Adapters and the row aligner are written against pandas.  Tables that
arrive as ``polars.DataFrame`` or ``polars.LazyFrame`` are turned into
pandas once, when options are normalized, and nothing downstream has to
know Polars exists.

Polars stays optional.  It is looked up in :data:`sys.modules` rather
than imported: an object can only be a Polars frame if the caller has
already imported Polars, so modeltidy never pays for the import itself.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Any, TypeAlias

import pandas as pd

from .exceptions import InputError

if TYPE_CHECKING:
    import polars as pl

    FrameLike: TypeAlias = pd.DataFrame | pl.DataFrame | pl.LazyFrame
else:
    FrameLike: TypeAlias = Any


def _loaded_polars() -> Any:
    return sys.modules.get("polars")


def as_pandas_frame(obj: FrameLike, *, name: str = "data") -> pd.DataFrame:
    """Return *obj* as a pandas DataFrame.

    pandas frames (and subclasses) are returned unchanged, without a
    copy.  A Polars ``LazyFrame`` is collected first; a Polars
    ``DataFrame`` goes through ``to_pandas()``, which needs pyarrow.

    Args:
        obj: The table to convert.
        name: Argument name quoted in the error message.

    Raises:
        InputError: *obj* is neither a pandas nor a Polars frame.
    """
    if isinstance(obj, pd.DataFrame):
        return obj

    pl = _loaded_polars()
    if pl is not None:
        if isinstance(obj, pl.LazyFrame):
            obj = obj.collect()
        if isinstance(obj, pl.DataFrame):
            return obj.to_pandas()

    accepted = "a pandas DataFrame"
    if pl is not None:
        accepted += " or a Polars DataFrame/LazyFrame"
    msg = f"'{name}' must be {accepted}, got {type(obj).__name__}."
    raise InputError(msg)
