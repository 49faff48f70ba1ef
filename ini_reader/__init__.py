"""
ini-reader: parser for INI-style configuration files.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    ini-reader setup.cfg --section metadata

Library Usage:
    from ini_reader import get, parse_string

    document = parse_string("[server]\\nport = 8080\\n")
    port = get(document, "server", "port")
"""

from .accessors import get, get_bool, get_float, get_int, has_option, has_section, options, sections
from .config import JoinStyle, OptionsError, ParserOptions
from .containers import get_map_implementation, set_map_implementation
from .exceptions import ConversionError, IniSyntaxError, ParseError
from .parser import ParseFileError, parse_file, parse_lines, parse_string

__version__ = "0.1.0"

__all__ = [
    # Parsing
    "parse_lines",
    "parse_string",
    "parse_file",
    # Accessors
    "sections",
    "has_section",
    "options",
    "has_option",
    "get",
    "get_int",
    "get_float",
    "get_bool",
    # Options
    "ParserOptions",
    "JoinStyle",
    "get_map_implementation",
    "set_map_implementation",
    # Exceptions
    "ConversionError",
    "IniSyntaxError",
    "OptionsError",
    "ParseError",
    "ParseFileError",
    # Version
    "__version__",
]
