"""Package-specific exception types."""

from __future__ import annotations


class ParseError(ValueError):
    """Base class for parsing-related errors.

    Represents errors encountered while folding configuration lines.
    """


class IniSyntaxError(ParseError):
    """Raised when a line cannot be applied to the configuration being built.

    Covers definitions that appear before any section header as well as
    lines that match no known form.

    Args:
        line_number: One-based index of the offending line.
        message: Human readable description that mentions the line number.
    """

    def __init__(self, line_number: int, message: str):
        self.line_number = line_number
        self.message = message
        super().__init__(message)


class ConversionError(ValueError):
    """Raised when a typed getter cannot convert an option value.

    Args:
        section: Section the value was read from.
        key: Option name.
        value: Raw text that failed to convert.
        target: Name of the requested type.
    """

    def __init__(self, section: str, key: str, value: str, target: str):
        self.section = section
        self.key = key
        self.value = value
        self.target = target
        super().__init__(f"Cannot convert [{section}] {key} = {value!r} to {target}")
