"""Parser options and configuration loading."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from enum import Enum
from pathlib import Path
import tomllib

from .constants import DEFAULT_MAX_FILE_SIZE
from .containers import MAP_IMPLEMENTATIONS


class JoinStyle(Enum):
    """Separator used when a continuation line extends a value.

    Attributes:
        WITH_NEWLINE: Join continuation lines with ``"\\n"``.
        WITH_SPACE: Join continuation lines with a single space.
    """

    WITH_NEWLINE = "with_newline"
    WITH_SPACE = "with_space"

    @property
    def separator(self) -> str:
        return "\n" if self is JoinStyle.WITH_NEWLINE else " "


@dataclass(frozen=True)
class ParserOptions:
    """Options controlling how configuration lines are folded.

    Attributes:
        join_continuations: How continuation lines are joined to the value
            they extend. Accepts a `JoinStyle` or its string value.
        overwrite_sections: When True, a reopened section keeps adding to the
            table it had before. When False, every header opens a new table
            stored under a numbered key.

    Examples:
        ParserOptions(join_continuations=JoinStyle.WITH_SPACE)
        ParserOptions(overwrite_sections=False)
    """

    join_continuations: JoinStyle | str = JoinStyle.WITH_NEWLINE
    overwrite_sections: bool = True


OPTION_NAMES = tuple(field.name for field in fields(ParserOptions))


class OptionsError(ValueError):
    """Exception raised when parser options or configuration are invalid.

    Every problem found is collected before raising, so a caller sees all of
    them at once.

    Attributes:
        messages: One message per rejected option name or value.

    Examples:
        raise OptionsError(["Unknown option `colour`"])
    """

    def __init__(self, messages: list[str] | str):
        self.messages = [messages] if isinstance(messages, str) else list(messages)
        super().__init__("; ".join(self.messages))


def normalize_options(options: ParserOptions) -> ParserOptions:
    join_continuations = options.join_continuations
    if isinstance(join_continuations, str):
        try:
            join_continuations = JoinStyle(join_continuations)
        except ValueError:
            # left as-is so validation can report it
            pass
    return replace(options, join_continuations=join_continuations)


def collect_option_errors(options: ParserOptions) -> list[str]:
    """List every problem with the values held by `options`.

    Args:
        options: Options to check. String join styles are normalized first.

    Returns:
        list[str]: Error messages, empty when the options are valid.
    """
    options = normalize_options(options)
    errors: list[str] = []

    if not isinstance(options.join_continuations, JoinStyle):
        allowed = ", ".join(style.value for style in JoinStyle)
        errors.append(
            f"`join_continuations` must be one of: {allowed} "
            f"(got {options.join_continuations!r})"
        )
    if not isinstance(options.overwrite_sections, bool):
        errors.append(
            f"`overwrite_sections` must be a boolean (got {options.overwrite_sections!r})"
        )

    return errors


def validate_options(options: ParserOptions) -> None:
    """Validate a `ParserOptions` instance.

    Raises:
        OptionsError: If any option holds an out-of-domain value.

    Examples:
        validate_options(ParserOptions(join_continuations="with_space"))
    """
    errors = collect_option_errors(options)
    if errors:
        raise OptionsError(errors)


def resolve_options(
    options: ParserOptions | Mapping[str, object] | None = None, **overrides: object
) -> ParserOptions:
    """Merge caller-supplied options over the defaults and validate them.

    Args:
        options: Base options, either a `ParserOptions` or a mapping of option
            names to values. Defaults apply when omitted.
        overrides: Option values applied on top of `options`.

    Returns:
        ParserOptions: Normalized options ready for parsing.

    Raises:
        OptionsError: If any option name is unknown or any value is out of
            domain. All problems are reported together.

    Examples:
        resolve_options(join_continuations="with_space")
        resolve_options({"overwrite_sections": False})
    """
    if isinstance(options, ParserOptions):
        base = options
        requested: dict[str, object] = dict(overrides)
    else:
        base = ParserOptions()
        requested = {**dict(options or {}), **overrides}

    errors = [f"Unknown option `{name}`" for name in requested if name not in OPTION_NAMES]
    known = {name: value for name, value in requested.items() if name in OPTION_NAMES}

    resolved = normalize_options(replace(base, **known))
    try:
        validate_options(resolved)
    except OptionsError as error:
        raise OptionsError(errors + error.messages) from None
    if errors:
        raise OptionsError(errors)
    return resolved


@dataclass
class ReaderConfig:
    """Settings for the command line tool, loadable from TOML files.

    Attributes:
        join_continuations: Default join style for continuation lines.
        overwrite_sections: Whether reopened sections merge.
        map_implementation: Mapping type used for documents (``"dict"`` or
            ``"ordered"``).
        max_file_size: Largest file, in bytes, the tool will read.

    Examples:
        ReaderConfig(map_implementation="ordered")
    """

    join_continuations: str = JoinStyle.WITH_NEWLINE.value
    overwrite_sections: bool = True
    map_implementation: str = "dict"
    max_file_size: int = DEFAULT_MAX_FILE_SIZE

    def parser_options(self) -> ParserOptions:
        """Build validated `ParserOptions` from this configuration."""
        return resolve_options(
            join_continuations=self.join_continuations,
            overwrite_sections=self.overwrite_sections,
        )


def load_config(search_path: Path) -> ReaderConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.ini-reader]`` table from `pyproject.toml` and the
    ``[ini-reader]`` or ``[tool.ini-reader]`` table from `.ini-reader.toml`.
    Returns defaults when nothing is found. TOML files that cannot be read or
    decoded are skipped.

    Args:
        search_path: Directory used as the starting point for lookup.

    Returns:
        ReaderConfig: Loaded configuration with defaults applied.

    Raises:
        OptionsError: If a table is present but is not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("conf"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "ini-reader")]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / ".ini-reader.toml",
            table_paths=[("ini-reader",), ("tool", "ini-reader")],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return ReaderConfig()


_MISSING = object()


def _load_from_file(config_file: Path, table_paths: list[tuple[str, ...]]) -> ReaderConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> ReaderConfig:
    table_display = ".".join(table_path)

    if not isinstance(raw_config, dict):
        raise OptionsError(f"Invalid `[{table_display}]` settings in {config_file}")

    try:
        return ReaderConfig(**raw_config)
    except TypeError as error:
        raise OptionsError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def validate_config(config: ReaderConfig) -> None:
    """Validate a `ReaderConfig` instance.

    Raises:
        OptionsError: If parser options are invalid, the map implementation is
            unknown, or `max_file_size` is not a positive integer.
    """
    errors = collect_option_errors(
        ParserOptions(
            join_continuations=config.join_continuations,
            overwrite_sections=config.overwrite_sections,
        )
    )
    if config.map_implementation not in MAP_IMPLEMENTATIONS:
        errors.append(
            f"`map_implementation` must be one of: {', '.join(MAP_IMPLEMENTATIONS)} "
            f"(got {config.map_implementation!r})"
        )
    if (
        isinstance(config.max_file_size, bool)
        or not isinstance(config.max_file_size, int)
        or config.max_file_size <= 0
    ):
        errors.append("`max_file_size` must be a positive integer")
    if errors:
        raise OptionsError(errors)


def apply_overrides(config: ReaderConfig, **overrides: object) -> ReaderConfig:
    """Apply override values to a `ReaderConfig`; None values are ignored."""
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> ReaderConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None
            values are ignored.

    Returns:
        ReaderConfig: Validated configuration.

    Raises:
        OptionsError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), join_continuations="with_space")
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config
