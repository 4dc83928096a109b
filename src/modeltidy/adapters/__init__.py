"""Built-in adapters for statsmodels and scikit-learn models.

Each module implements the adapters for one model family and exposes
``register(registry)``.  :func:`register_builtin_adapters` wires them
all into a registry; it runs against the default registry when this
package is imported, the same way third-party plugins register at
import time.

New families are added by writing a module with ``tidy_*``,
``glance_*`` and ``augment_*`` callables plus a ``register`` function,
and listing it in ``_MODULES``.  The dispatcher, the kind policies and
the row aligner need no changes per family.
"""

from __future__ import annotations

from ..registry import TypeRegistry, default_registry
from . import (
    sklearn_cluster,
    statsmodels_discrete,
    statsmodels_glm,
    statsmodels_linear,
    statsmodels_mixed,
)

_MODULES = (
    statsmodels_linear,
    statsmodels_glm,
    statsmodels_discrete,
    statsmodels_mixed,
    sklearn_cluster,
)


def register_builtin_adapters(registry: TypeRegistry | None = None) -> None:
    """Register every built-in adapter into *registry* (default: global)."""
    registry = registry if registry is not None else default_registry()
    for module in _MODULES:
        module.register(registry)


register_builtin_adapters()

__all__ = ["register_builtin_adapters"]
