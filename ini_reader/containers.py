"""Process-wide selection of the mapping type backing parsed documents."""

from __future__ import annotations

import logging
import os
from collections import OrderedDict
from collections.abc import Callable, MutableMapping

from .constants import MAP_IMPLEMENTATION_ENV_VAR

logger = logging.getLogger(__name__)

MAP_IMPLEMENTATIONS: dict[str, Callable[[], MutableMapping]] = {
    "dict": dict,
    "ordered": OrderedDict,
}
DEFAULT_MAP_IMPLEMENTATION = "dict"

_selected: str | None = None


def _check_name(name: str, origin: str) -> str:
    if name not in MAP_IMPLEMENTATIONS:
        error_message = (
            f"Invalid map implementation {name!r} from {origin} "
            f"(expected one of: {', '.join(MAP_IMPLEMENTATIONS)})"
        )
        raise ValueError(error_message)
    return name


def set_map_implementation(name: str | None) -> None:
    """Select the mapping type used for every subsequent parse.

    Args:
        name: ``"dict"`` or ``"ordered"``. None clears the selection so the
            environment variable or the default applies again.

    Raises:
        ValueError: If `name` is not a known implementation.

    Examples:
        set_map_implementation("ordered")
    """
    global _selected
    if name is not None:
        _check_name(name, "set_map_implementation")
    _selected = name
    logger.debug("Map implementation set to %s", name or "<unset>")


def get_map_implementation() -> str:
    """Resolve the active map implementation name.

    An explicit `set_map_implementation` call wins, then the
    ``INI_READER_MAP_IMPLEMENTATION`` environment variable, then ``"dict"``.

    Raises:
        ValueError: If the environment variable names an unknown implementation.
    """
    if _selected is not None:
        return _selected

    env_value = os.environ.get(MAP_IMPLEMENTATION_ENV_VAR)
    if env_value is None:
        return DEFAULT_MAP_IMPLEMENTATION
    return _check_name(env_value.strip(), MAP_IMPLEMENTATION_ENV_VAR)


def new_map() -> MutableMapping:
    """Create an empty mapping of the active implementation."""
    return MAP_IMPLEMENTATIONS[get_map_implementation()]()
