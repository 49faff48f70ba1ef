"""State transitions applied while folding configuration lines.

Each function takes a `ParseState` and returns the next one. The section
tables inside the result belong to a single parse and are filled in place.
"""

from __future__ import annotations

from dataclasses import replace

from .config import JoinStyle
from .constants import SECTION_INDEX_WIDTH
from .containers import new_map
from .models import Failure, ParseState


def fail(state: ParseState, message: str) -> ParseState:
    """Move `state` into the terminal failed state.

    A state that already failed keeps its original failure.
    """
    if state.failed:
        return state
    return replace(state, result=Failure(message=message, line_number=state.line_number))


def begin_section(state: ParseState, raw_name: str) -> ParseState:
    """Open the section named by `raw_name`.

    With ``overwrite_sections`` enabled an existing table is reused, otherwise
    a fresh table is stored under a key prefixed with the number of sections
    seen so far (``"006_name"``), so repeated headers never merge.

    Args:
        state: Current accumulator state.
        raw_name: Section name as captured between the brackets.

    Returns:
        ParseState: State targeting the section, with continuation disabled.

    Examples:
        begin_section(ParseState(), " general ").current_section  # "general"
    """
    document = state.result.document
    name = raw_name.strip()

    if state.options.overwrite_sections:
        section_key = name
        if section_key not in document:
            document[section_key] = new_map()
    else:
        section_key = f"{len(document):0{SECTION_INDEX_WIDTH}d}_{name}"
        document[section_key] = new_map()

    return replace(state, current_section=section_key, continuation=False, last_key=None)


def define_config(state: ParseState, raw_key: str, raw_value: str | None) -> ParseState:
    """Store a key in the current section.

    Args:
        state: Current accumulator state.
        raw_key: Key text; surrounding whitespace is removed.
        raw_value: Value text, trimmed before storing, or None for a lone key.

    Returns:
        ParseState: State whose next line may continue this value, or a
            failed state when no section has been opened yet.

    Examples:
        define_config(state, " port ", " 8080 ")  # stores "port" -> "8080"
    """
    if state.current_section is None:
        return fail(
            state,
            "A configuration section must be defined before defining configuration "
            f"values in line {state.line_number}",
        )

    key = raw_key.strip()
    table = state.result.document[state.current_section]
    table[key] = None if raw_value is None else raw_value.strip()

    return replace(state, continuation=True, last_key=key)


def append_continuation(state: ParseState, text: str) -> ParseState:
    """Extend the most recently defined value with a continuation line.

    The previous value is joined to `text` using the separator of the
    configured `JoinStyle`; a None value renders as an empty string.
    """
    table = state.result.document[state.current_section]
    previous = table.get(state.last_key)
    separator = JoinStyle(state.options.join_continuations).separator
    joined = f"{'' if previous is None else previous}{separator}{text.strip()}"
    return define_config(state, state.last_key, joined)
