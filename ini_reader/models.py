"""Data models for ini-reader."""

from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass, field
from typing import Union

from .config import ParserOptions
from .containers import new_map

SectionTable = MutableMapping[str, Union[str, None]]
Document = MutableMapping[str, SectionTable]


@dataclass(frozen=True)
class Ok:
    """Successful parse result wrapping the document built so far."""

    document: Document


@dataclass(frozen=True)
class Failure:
    """Terminal parse result.

    Attributes:
        message: Description of the problem, mentioning the line number.
        line_number: One-based line on which parsing stopped.
    """

    message: str
    line_number: int


ParseResult = Union[Ok, Failure]


def _empty_result() -> ParseResult:
    return Ok(new_map())


@dataclass(frozen=True)
class ParseState:
    """Accumulator state threaded through every line of one parse.

    Attributes:
        line_number: One-based number of the line about to be processed.
        current_section: Storage key of the section receiving definitions, or
            None before the first header.
        last_indent: Indentation, in columns, of the last line that was not a
            continuation.
        continuation: Whether the next line may continue the last value.
        last_key: Key a continuation line would extend.
        options: Resolved parser options.
        result: Document being built, or the failure that stopped the parse.
    """

    line_number: int = 1
    current_section: str | None = None
    last_indent: int = 0
    continuation: bool = False
    last_key: str | None = None
    options: ParserOptions = field(default_factory=ParserOptions)
    result: ParseResult = field(default_factory=_empty_result)

    @property
    def failed(self) -> bool:
        return isinstance(self.result, Failure)
