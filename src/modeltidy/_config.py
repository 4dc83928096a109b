"""Process-wide configuration for the modeltidy package.

Controls the default confidence level used by ``tidy(conf_int=True)``
when the caller does not pass ``conf_level`` explicitly.

Resolution order (first match wins):
    1. Programmatic override via :func:`set_conf_level`.
    2. The ``MODELTIDY_CONF_LEVEL`` environment variable.
    3. The built-in default, ``0.95``.

Examples:
    Report 90% intervals by default from the shell::

        export MODELTIDY_CONF_LEVEL=0.90

    Programmatically::

        import modeltidy
        modeltidy.set_conf_level(0.90)

    Restore the default resolution order::

        modeltidy.set_conf_level("auto")
"""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)

_ENV_VAR = "MODELTIDY_CONF_LEVEL"
_DEFAULT_CONF_LEVEL = 0.95

# Sentinel indicating "no programmatic override has been set".
_conf_level_override: float | None = None


def _valid_level(value: float) -> bool:
    return 0.0 < value < 1.0


def get_conf_level() -> float:
    """Return the active default confidence level.

    Resolution order:
        1. Value set by :func:`set_conf_level`.
        2. ``MODELTIDY_CONF_LEVEL`` environment variable.
        3. ``0.95``.

    Returns:
        A float strictly between 0 and 1.
    """
    # 1. Programmatic override
    if _conf_level_override is not None:
        return _conf_level_override

    # 2. Environment variable
    env = os.environ.get(_ENV_VAR, "").strip()
    if env:
        try:
            level = float(env)
        except ValueError:
            level = float("nan")
        if _valid_level(level):
            return level
        logger.warning(
            "Ignoring %s=%r: expected a number strictly between 0 and 1.",
            _ENV_VAR,
            env,
        )

    # 3. Built-in default
    return _DEFAULT_CONF_LEVEL


def set_conf_level(level: float | str | None) -> None:
    """Override the default confidence level.

    Args:
        level: A float strictly between 0 and 1, or ``"auto"`` /
            ``None`` to restore the default resolution order.

    Raises:
        ValueError: If *level* is not a valid confidence level.
    """
    global _conf_level_override
    if level is None or (isinstance(level, str) and level.strip().lower() == "auto"):
        _conf_level_override = None
        return
    if isinstance(level, bool) or not isinstance(level, (int, float)):
        raise ValueError(
            f"Unknown confidence level {level!r}. Pass a float in (0, 1) or 'auto'."
        )
    if not _valid_level(float(level)):
        raise ValueError(
            f"Confidence level must lie strictly between 0 and 1, got {level!r}."
        )
    _conf_level_override = float(level)
