"""Constants used across the ini-reader package."""

from __future__ import annotations

import re

# Line syntax
SECTION_PATTERN = re.compile(r"\[([^\]]+)\]")
INLINE_COMMENT_CHAR = ";"
COMMENT_PREFIXES = ("#", ";")
EQUALS_DELIMITER = "="
COLON_DELIMITER = ":"

# Accepted by get_int: ASCII digits only, no digit separators
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")

# Tabs count as two columns when measuring indentation
TAB_COLUMNS = 2

# Width of the sequence prefix used when reopened sections are kept apart
SECTION_INDEX_WIDTH = 3

# Environment overrides
MAP_IMPLEMENTATION_ENV_VAR = "INI_READER_MAP_IMPLEMENTATION"
MAX_FILE_SIZE_ENV_VAR = "INI_READER_MAX_FILE_SIZE"

DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
