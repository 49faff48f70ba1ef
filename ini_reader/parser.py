"""Line classification and the fold that turns lines into a document."""

from __future__ import annotations

import io
import logging
from collections.abc import Iterable, Mapping
from dataclasses import replace
from pathlib import Path

from .accumulator import append_continuation, begin_section, define_config, fail
from .config import ParserOptions, resolve_options
from .constants import (
    COLON_DELIMITER,
    COMMENT_PREFIXES,
    EQUALS_DELIMITER,
    INLINE_COMMENT_CHAR,
    SECTION_PATTERN,
    TAB_COLUMNS,
)
from .exceptions import IniSyntaxError
from .filesystem import stream_lines
from .models import Document, Failure, ParseState

logger = logging.getLogger(__name__)


def strip_inline_comments(line: str) -> str:
    """Drop everything from the first ``;`` onwards.

    There is no escaping: a semicolon always starts a comment, even inside
    what looks like a value.

    Examples:
        strip_inline_comments("key = value ; note")  # "key = value "
    """
    return line.split(INLINE_COMMENT_CHAR, 1)[0]


def leading_whitespace_columns(line: str) -> int:
    """Compute the column width of leading whitespace.

    Every whitespace character counts as one column except tabs, which count
    as two.

    Examples:
        leading_whitespace_columns("    value")  # 4
        leading_whitespace_columns("\\t value")  # 3
    """
    columns = 0
    for character in line:
        if character == "\t":
            columns += TAB_COLUMNS
            continue
        if character.isspace():
            columns += 1
            continue
        break
    return columns


def is_skippable(line: str) -> bool:
    """Return True for blank lines and full-line comments."""
    stripped = line.strip()
    return not stripped or stripped.startswith(COMMENT_PREFIXES)


def _is_continuation(state: ParseState, line: str, indent: int) -> bool:
    return state.continuation and indent > state.last_indent and bool(line.strip())


def _define(state: ParseState, raw_key: str, raw_value: str | None) -> ParseState:
    # an empty key is an error, never stored as "" or read as a lone key
    if not raw_key.strip():
        return fail(state, f"Syntax Error on line {state.line_number}")
    return define_config(state, raw_key, raw_value)


def _try_skip(state: ParseState, line: str) -> ParseState | None:
    if not is_skippable(line):
        return None
    return replace(state, continuation=False)


def _try_section(state: ParseState, line: str) -> ParseState | None:
    match = SECTION_PATTERN.search(line)
    if match is None:
        return None
    logger.debug("Section %r opened on line %d", match.group(1).strip(), state.line_number)
    return begin_section(state, match.group(1))


def _try_equals_definition(state: ParseState, line: str) -> ParseState | None:
    if EQUALS_DELIMITER not in line:
        return None
    key, value = line.split(EQUALS_DELIMITER, 1)
    return _define(state, key, value)


def _try_colon_definition(state: ParseState, line: str) -> ParseState | None:
    if COLON_DELIMITER not in line:
        return None
    key, value = line.split(COLON_DELIMITER, 1)
    return _define(state, key, value)


def _try_lone_key(state: ParseState, line: str) -> ParseState | None:
    key = line.strip()
    if not key:
        return None
    # a lone key can never be continued
    return replace(define_config(state, key, None), continuation=False)


# Order matters: section headers win over delimiters, and ``=`` over ``:``.
_CLASSIFIERS = (
    _try_skip,
    _try_section,
    _try_equals_definition,
    _try_colon_definition,
    _try_lone_key,
)


def parse_line(state: ParseState, line: str) -> ParseState:
    """Apply one raw line to the accumulator state.

    Inline comments are removed and indentation measured first. A line
    indented deeper than the last definition, immediately after it, extends
    that value. Any other line is classified by the first matching form:
    blank or comment, section header, ``=`` definition, ``:`` definition,
    lone key. Failed states pass through unchanged.

    Args:
        state: State produced by the previous line.
        line: Raw line, with or without its line ending.

    Returns:
        ParseState: The next state, with `line_number` advanced by one unless
            the line failed to parse.

    Examples:
        state = parse_line(ParseState(), "[server]\\n")
        state = parse_line(state, "port = 8080\\n")
    """
    if state.failed:
        return state

    line = strip_inline_comments(line)
    indent = leading_whitespace_columns(line)

    if _is_continuation(state, line, indent):
        # last_indent stays at the indentation of the defining line
        next_state = append_continuation(state, line.strip())
        return replace(next_state, line_number=state.line_number + 1, continuation=True)

    for classify in _CLASSIFIERS:
        next_state = classify(state, line)
        if next_state is not None:
            if next_state.failed:
                return next_state
            return replace(next_state, line_number=state.line_number + 1, last_indent=indent)

    return fail(state, f"Syntax Error on line {state.line_number}")


def fold_lines(lines: Iterable[str], options: ParserOptions) -> ParseState:
    """Fold `parse_line` over `lines`, stopping at the first failure.

    Args:
        lines: Raw configuration lines.
        options: Already validated parser options.

    Returns:
        ParseState: Final state; its `result` is the parse outcome.
    """
    state = ParseState(options=options)
    for line in lines:
        state = parse_line(state, line)
        if state.failed:
            logger.debug("Parsing stopped: %s", state.result.message)
            break
    return state


def parse_lines(
    lines: Iterable[str],
    options: ParserOptions | Mapping[str, object] | None = None,
    **overrides: object,
) -> Document:
    """Parse configuration text supplied as a sequence of lines.

    Options are resolved and validated before the first line is read.

    Args:
        lines: Any iterable of lines, consumed lazily and at most once.
        options: Base options as a `ParserOptions` or a mapping.
        overrides: Option values applied on top of `options`.

    Returns:
        Document: Mapping of section name to a mapping of key to value, where
            lone keys map to None.

    Raises:
        OptionsError: If an option name is unknown or a value is invalid.
        IniSyntaxError: If a definition precedes every section header or a
            line cannot be classified.

    Examples:
        parse_lines(["[db]", "host = localhost"])  # {"db": {"host": "localhost"}}
        parse_lines(lines, join_continuations="with_space")
    """
    resolved = resolve_options(options, **overrides)
    result = fold_lines(lines, resolved).result
    if isinstance(result, Failure):
        raise IniSyntaxError(result.line_number, result.message)
    return result.document


def parse_string(
    content: str,
    options: ParserOptions | Mapping[str, object] | None = None,
    **overrides: object,
) -> Document:
    """Parse configuration held in a string.

    The text is read through an in-memory buffer that is closed on every
    exit path. See `parse_lines` for arguments and errors.

    Examples:
        parse_string("[section]\\nkey = value\\n")
    """
    resolved = resolve_options(options, **overrides)
    with io.StringIO(content) as buffer:
        return parse_lines(buffer, resolved)


class ParseFileError(Exception):
    """Raised when a configuration file cannot be read or decoded."""


def parse_file(
    filepath: Path | str,
    options: ParserOptions | Mapping[str, object] | None = None,
    **overrides: object,
) -> Document:
    """Parse a configuration file, streaming it line by line.

    The file handle is released when parsing finishes, including when a
    syntax error stops the fold early.

    Args:
        filepath: Path to the file.
        options: Base options as a `ParserOptions` or a mapping.
        overrides: Option values applied on top of `options`.

    Returns:
        Document: Parsed configuration.

    Raises:
        OptionsError: If options are invalid; raised before the file is opened.
        IniSyntaxError: If the content is malformed.
        ParseFileError: If the file cannot be opened or is not valid UTF-8.

    Examples:
        parse_file(Path("setup.cfg"), overwrite_sections=False)
    """
    resolved = resolve_options(options, **overrides)
    filepath = Path(filepath)

    try:
        with stream_lines(filepath) as lines:
            return parse_lines(lines, resolved)
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise ParseFileError(error_message) from error
    except IOError as error:
        raise ParseFileError(str(error)) from error
