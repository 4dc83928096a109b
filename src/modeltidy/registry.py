"""Adapter registry: maps ``(type tag, kind)`` to adapter callables.

Every model family that modeltidy can summarize is described by up to
three adapters — one per summarization kind — registered against the
family's *type tag*.  A type tag is either the model's class or a
dotted qualified class name (``"statsmodels.regression.linear_model.
OLSResults"``).  String tags let a plugin register
against a class without importing the (possibly heavyweight) package
that defines it.

Resolution
~~~~~~~~~~
Resolution walks the class's MRO most-specific-first.  For each
ancestor it checks the class object itself, then its qualified name.
The first hit wins, so a subclass registration always shadows a base
class registration, and a plugin can target a base class to cover a
whole hierarchy.  A registration made with ``exact=True`` is skipped
for subclasses and the walk continues to the next ancestor.  statsmodels
results are resolved on the wrapped results class rather than on the
``ResultsWrapper`` proxy (see :func:`model_type`).  When nothing
matches, :class:`~.exceptions.NoAdapterError` is raised — never a
generic ``TypeError`` or ``AttributeError``.

Concurrency
~~~~~~~~~~~
Registration is rare (plugin load time), resolution is frequent (every
call).  The adapter table is therefore copy-on-write: ``register``
builds a new table under a lock and swaps it in with a single
assignment, and ``resolve`` reads whichever snapshot is current
without taking the lock.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from ._typing import Adapter, TypeTag
from .columns import FORBIDDEN_COLUMNS, GLANCE, KINDS
from .exceptions import NoAdapterError, _tag_name

logger = logging.getLogger(__name__)


def qualified_name(cls: type) -> str:
    """Return ``"module.QualName"`` for *cls*."""
    return f"{cls.__module__}.{cls.__qualname__}"


_RESULTS_WRAPPER = "statsmodels.base.wrapper.ResultsWrapper"


def model_type(model: Any) -> type:
    """Return the class adapters are resolved against for *model*.

    statsmodels hands back its results behind ``ResultsWrapper``
    proxies whose class hierarchy does not follow the model family
    (every discrete and GLM wrapper subclasses the linear-regression
    one).  For those, the wrapped results class is used instead.  Any
    other object resolves on its own class.
    """
    cls = type(model)
    for base in cls.__mro__:
        if qualified_name(base) == _RESULTS_WRAPPER:
            inner = getattr(model, "_results", None)
            if inner is not None:
                return type(inner)
            break
    return cls


@dataclass(frozen=True)
class AdapterSpec:
    """Registration record for one ``(type tag, kind)`` adapter.

    Attributes:
        type_tag: Class or qualified-name string the adapter was
            registered under.
        kind: Summarization kind the adapter produces.
        adapter: The adapter callable.
        extra_columns: Column names outside the canonical vocabulary
            that the adapter may emit.
        columns: Static glance schema — the full set of column names
            the glance adapter may ever return, or ``None`` when the
            adapter does not declare one.
        exact: Match only objects whose type *is* the tag, never its
            subclasses.
    """

    type_tag: TypeTag
    kind: str
    adapter: Adapter
    extra_columns: tuple[str, ...] = ()
    columns: frozenset[str] | None = None
    exact: bool = False

    def __call__(self, model: Any, options: Any) -> Any:
        return self.adapter(model, options)


class TypeRegistry:
    """Thread-safe mapping of ``(type tag, kind)`` to :class:`AdapterSpec`."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._table: Mapping[tuple[TypeTag, str], AdapterSpec] = MappingProxyType({})

    # ---- Mutation --------------------------------------------------

    def register(
        self,
        type_tag: TypeTag,
        kind: str,
        adapter: Adapter,
        *,
        extra_columns: Iterable[str] = (),
        columns: Iterable[str] | None = None,
        exact: bool = False,
    ) -> AdapterSpec:
        """Register *adapter* for ``(type_tag, kind)``, replacing any previous one.

        Args:
            type_tag: A class or a dotted qualified class name.
            kind: ``"glance"``, ``"tidy"`` or ``"augment"``.
            adapter: Callable ``adapter(model, options)``.
            extra_columns: Non-canonical column names the adapter may
                emit.
            columns: Static glance schema (glance adapters only).
            exact: Do not extend the registration to subclasses.  Use
                this when subclasses of *type_tag* routinely lack
                attributes the adapter reads.

        Returns:
            The stored :class:`AdapterSpec`.

        Raises:
            TypeError: If *type_tag* is neither a class nor a string,
                or *adapter* is not callable.
            ValueError: If *kind* is unknown, a declared column name
                is forbidden, or *columns* is given for a non-glance
                kind.
        """
        if not isinstance(type_tag, (type, str)) or (
            isinstance(type_tag, str) and not type_tag
        ):
            msg = f"type_tag must be a class or a qualified name, got {type_tag!r}."
            raise TypeError(msg)
        if kind not in KINDS:
            msg = f"Unknown summarization kind {kind!r}. Choose from: {list(KINDS)}"
            raise ValueError(msg)
        if not callable(adapter):
            msg = f"Adapter for {_tag_name(type_tag)!r} / {kind!r} is not callable."
            raise TypeError(msg)

        extras = tuple(extra_columns)
        schema = frozenset(columns) if columns is not None else None
        if schema is not None and kind != GLANCE:
            msg = "A static column schema can only be declared for glance adapters."
            raise ValueError(msg)
        forbidden = FORBIDDEN_COLUMNS.intersection(extras) | FORBIDDEN_COLUMNS.intersection(
            schema or ()
        )
        if forbidden:
            msg = f"Columns {sorted(forbidden)} may not appear in summaries."
            raise ValueError(msg)

        spec = AdapterSpec(
            type_tag=type_tag,
            kind=kind,
            adapter=adapter,
            extra_columns=extras,
            columns=schema,
            exact=bool(exact),
        )
        with self._lock:
            table = dict(self._table)
            replaced = (type_tag, kind) in table
            table[(type_tag, kind)] = spec
            self._table = MappingProxyType(table)
        logger.debug(
            "%s %s adapter for %s",
            "Replaced" if replaced else "Registered",
            kind,
            _tag_name(type_tag),
        )
        return spec

    def unregister(self, type_tag: TypeTag, kind: str) -> None:
        """Remove the registration for ``(type_tag, kind)``.

        Raises:
            KeyError: If nothing is registered for the pair.
        """
        with self._lock:
            table = dict(self._table)
            del table[(type_tag, kind)]
            self._table = MappingProxyType(table)

    # ---- Lookup ----------------------------------------------------

    @staticmethod
    def _candidates(type_tag: TypeTag) -> list[tuple[TypeTag, bool]]:
        """``(tag, inherited)`` pairs to try for *type_tag*, most specific first.

        ``inherited`` is ``True`` for tags that come from a base class;
        exact registrations never match those.
        """
        if isinstance(type_tag, str):
            return [(type_tag, False)]
        candidates: list[tuple[TypeTag, bool]] = []
        for depth, cls in enumerate(type_tag.__mro__):
            if cls is object:
                continue
            candidates.append((cls, depth > 0))
            candidates.append((qualified_name(cls), depth > 0))
        return candidates

    def _applicable(self, type_tag: TypeTag) -> list[AdapterSpec]:
        """Every spec that applies to *type_tag*, most specific first."""
        table = self._table  # snapshot
        found: list[AdapterSpec] = []
        for tag, inherited in self._candidates(type_tag):
            for kind in KINDS:
                spec = table.get((tag, kind))
                if spec is not None and not (inherited and spec.exact):
                    found.append(spec)
        return found

    def resolve(self, type_tag: TypeTag, kind: str) -> AdapterSpec:
        """Return the adapter for *kind* applicable to *type_tag*.

        Raises:
            ValueError: If *kind* is unknown.
            NoAdapterError: If no adapter is registered for *kind*
                anywhere in the type hierarchy.
        """
        if kind not in KINDS:
            msg = f"Unknown summarization kind {kind!r}. Choose from: {list(KINDS)}"
            raise ValueError(msg)
        applicable = self._applicable(type_tag)
        for spec in applicable:
            if spec.kind == kind:
                return spec

        available = frozenset(spec.kind for spec in applicable)
        listing = ", ".join(sorted(available)) or "none"
        msg = (
            f"No {kind} adapter is registered for {_tag_name(type_tag)}. "
            f"Registered kinds for this type: {listing}."
        )
        raise NoAdapterError(msg, kind=kind, type_tag=type_tag, available=available)

    def resolve_for(self, model: Any, kind: str) -> AdapterSpec:
        """Resolve the adapter for the runtime type of *model*.

        See :func:`model_type` for how the runtime type is chosen.
        """
        return self.resolve(model_type(model), kind)

    def kinds_for(self, type_tag: TypeTag) -> frozenset[str]:
        """Return the kinds with an adapter applicable to *type_tag*."""
        return frozenset(spec.kind for spec in self._applicable(type_tag))

    def __contains__(self, key: object) -> bool:
        return key in self._table

    def __len__(self) -> int:
        return len(self._table)


# ------------------------------------------------------------------ #
# Default registry
# ------------------------------------------------------------------ #
#
# Built-in adapters (``modeltidy.adapters``) and third-party plugins
# register into this instance.  Callers who need an isolated table
# (tests, embedding) construct their own ``TypeRegistry`` and pass it
# to ``Dispatcher``.

_REGISTRY = TypeRegistry()
"""Process-wide default registry."""


def default_registry() -> TypeRegistry:
    """Return the process-wide default registry."""
    return _REGISTRY


def register_adapter(
    type_tag: TypeTag,
    kind: str,
    adapter: Adapter,
    *,
    extra_columns: Iterable[str] = (),
    columns: Iterable[str] | None = None,
    exact: bool = False,
) -> AdapterSpec:
    """Register *adapter* in the default registry.

    See :meth:`TypeRegistry.register` for the arguments.
    """
    return _REGISTRY.register(
        type_tag,
        kind,
        adapter,
        extra_columns=extra_columns,
        columns=columns,
        exact=exact,
    )


def resolve_adapter(model: Any, kind: str) -> AdapterSpec:
    """Resolve the default-registry adapter for *model* and *kind*."""
    return _REGISTRY.resolve_for(model, kind)


def registered_kinds(model: Any) -> frozenset[str]:
    """Return the kinds the default registry can produce for *model*."""
    return _REGISTRY.kinds_for(model_type(model))


__all__ = [
    "AdapterSpec",
    "TypeRegistry",
    "default_registry",
    "model_type",
    "qualified_name",
    "register_adapter",
    "registered_kinds",
    "resolve_adapter",
]
