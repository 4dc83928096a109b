"""Shared type aliases for the modeltidy package."""

from collections.abc import Callable
from typing import Any

# A model object's type tag: its class, or a dotted qualified class name.
TypeTag = type | str

# Adapter callables: (model, options) -> table (glance / tidy) or
# Observations (augment).
Adapter = Callable[..., Any]
