"""
Parses an INI-style configuration file and prints it as JSON.
Prints the whole document, a single section, or a single value.
"""

from __future__ import annotations

import json
from pathlib import Path

import click
from .accessors import get, has_option, has_section
from .config import OptionsError, build_config
from .containers import MAP_IMPLEMENTATIONS, set_map_implementation
from .exceptions import IniSyntaxError
from .filesystem import collect_file_stat, enforce_file_size, get_max_file_size
from .parser import ParseFileError, parse_file

__all__ = ["cli"]


@click.command()
@click.version_option(package_name="ini-reader")
@click.option(
    "--join-continuations",
    type=click.Choice(["with_newline", "with_space"]),
    help="Separator for continuation lines",
)
@click.option(
    "--overwrite-sections/--no-overwrite-sections",
    default=None,
    help="Merge reopened sections or keep each occurrence apart",
)
@click.option(
    "--map-implementation",
    type=click.Choice(list(MAP_IMPLEMENTATIONS)),
    help="Mapping type used for the parsed document",
)
@click.option("--section", help="Only print this section")
@click.option("--key", help="Only print this key (requires --section)")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    join_continuations: str | None = None,
    overwrite_sections: bool | None = None,
    map_implementation: str | None = None,
    section: str | None = None,
    key: str | None = None,
):
    """
    Entry point for parsing a configuration file.

    Args:
        filepath: Path to the configuration file.
        join_continuations: Override for the continuation separator.
        overwrite_sections: Override for merging reopened sections.
        map_implementation: Override for the document mapping type.
        section: Section to print instead of the whole document.
        key: Key within `section` to print.

    Raises:
        click.BadParameter: If options or configuration values are invalid.
        click.ClickException: If the file cannot be read or parsed, or the
            requested section or key does not exist.

    Examples:
        ini-reader setup.cfg --section metadata --key name
    """
    if key is not None and section is None:
        raise click.BadParameter("--key requires --section")

    path = Path(filepath).resolve()
    try:
        config = build_config(
            path.parent,
            join_continuations=join_continuations,
            overwrite_sections=overwrite_sections,
            map_implementation=map_implementation,
        )
        options = config.parser_options()
    except OptionsError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        enforce_file_size(collect_file_stat(path), max_file_size, path)
    except IOError as error:
        raise click.ClickException(str(error)) from error

    set_map_implementation(config.map_implementation)
    try:
        document = parse_file(path, options)
    except (IniSyntaxError, ParseFileError) as error:
        raise click.ClickException(f"{path}: {error}") from error
    finally:
        set_map_implementation(None)

    if section is None:
        output = document
    elif not has_section(document, section):
        raise click.ClickException(f"No section {section!r} in {path}")
    elif key is None:
        output = document[section]
    elif not has_option(document, section, key):
        raise click.ClickException(f"No key {key!r} in section {section!r} of {path}")
    else:
        output = get(document, section, key)

    click.echo(json.dumps(output, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    cli()
