"""Read-only helpers for querying a parsed document."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TypeVar

from .constants import INTEGER_PATTERN
from .exceptions import ConversionError
from .models import Document

T = TypeVar("T")

BOOLEAN_STATES = {
    "true": True,
    "1": True,
    "yes": True,
    "on": True,
    "false": False,
    "0": False,
    "no": False,
    "off": False,
}


def sections(document: Document) -> list[str]:
    """Return section names in the document's iteration order."""
    return list(document.keys())


def has_section(document: Document, name: str) -> bool:
    return name in document


def options(document: Document, section: str) -> list[str] | None:
    """Return the keys defined in `section`, or None if the section is absent.

    An existing section without keys yields an empty list, which is distinct
    from None.
    """
    if not has_section(document, section):
        return None
    return list(document[section].keys())


def has_option(document: Document, section: str, key: str) -> bool:
    return has_section(document, section) and key in document[section]


def get(
    document: Document,
    section: str,
    key: str,
    *,
    vars: Mapping[str, str | None] | None = None,
    fallback: str | None = None,
) -> str | None:
    """Look up an option value.

    `vars` is consulted first and wins whenever it contains `key`, even when
    its value is None. The document is searched next, then `fallback` is
    returned.

    Args:
        document: Parsed configuration.
        section: Section to read from.
        key: Option name.
        vars: Overrides keyed by option name.
        fallback: Value returned when the option is found nowhere.

    Returns:
        str | None: The value, None for lone keys, or `fallback`.

    Examples:
        get(doc, "server", "port", fallback="8080")
        get(doc, "server", "port", vars={"port": "9090"})  # "9090"
    """
    if vars is not None and key in vars:
        return vars[key]
    if has_option(document, section, key):
        return document[section][key]
    return fallback


def _convert(
    document: Document,
    section: str,
    key: str,
    converter: Callable[[str], T],
    target: str,
    **lookup: object,
) -> T | None:
    value = get(document, section, key, **lookup)
    if value is None:
        return None
    try:
        return converter(value)
    except ValueError as error:
        raise ConversionError(section, key, value, target) from error


def _to_int(value: str) -> int:
    text = value.strip()
    if not INTEGER_PATTERN.fullmatch(text):
        raise ValueError(f"invalid integer literal: {value!r}")
    return int(text)


def get_int(document: Document, section: str, key: str, **lookup: object) -> int | None:
    """Return an option as an integer; see `get` for `vars` and `fallback`.

    Raises:
        ConversionError: If the value is not an ASCII decimal integer, with an
            optional sign. Underscores are rejected.
    """
    return _convert(document, section, key, _to_int, "int", **lookup)


def get_float(document: Document, section: str, key: str, **lookup: object) -> float | None:
    """Return an option as a float; see `get` for `vars` and `fallback`.

    Raises:
        ConversionError: If the value is not a number.
    """
    return _convert(document, section, key, float, "float", **lookup)


def _to_bool(value: str) -> bool:
    try:
        return BOOLEAN_STATES[value.lower()]
    except KeyError as error:
        raise ValueError(value) from error


def get_bool(document: Document, section: str, key: str, **lookup: object) -> bool | None:
    """Return an option as a boolean.

    ``true``, ``1``, ``yes`` and ``on`` are True; ``false``, ``0``, ``no`` and
    ``off`` are False, compared case-insensitively.

    Raises:
        ConversionError: If the value is not one of the accepted words.

    Examples:
        get_bool(doc, "feature", "enabled", fallback="off")
    """
    return _convert(document, section, key, _to_bool, "bool", **lookup)
