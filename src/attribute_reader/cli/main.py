"""
Main CLI entry point for attribute-reader using Click.

Usage:
    attribute-reader read FILE [--config FILE] [--field NAME]... [--ignore FIELD=VALUE]...
    attribute-reader inspect FILE
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Optional

import click

from attribute_reader import __version__
from attribute_reader.config import ReaderConfig
from attribute_reader.errors import AttributeReaderError
from attribute_reader.parsers import DescribeFeatureTypeParser
from attribute_reader.reader import AttributeRecordBuilder, SchemaResponse
from attribute_reader.result import ResultSet
from attribute_reader.writers import OUTPUT_FORMATS, result_to_json, write_result

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging based on verbosity."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


class Config:
    """Shared configuration for CLI commands."""

    def __init__(self) -> None:
        self.verbose = False
        self.debug = False


pass_config = click.make_pass_decorator(Config, ensure=True)


def _split_assignment(option: str, assignment: str) -> tuple[str, str]:
    """Split a FIELD=VALUE option value."""
    name, sep, value = assignment.partition("=")
    if not sep or not name:
        raise click.BadParameter(f"Expected FIELD=VALUE, got '{assignment}'", param_hint=option)
    return name, value


def _collect_ignore_rules(
    ignore: tuple[str, ...],
    ignore_patterns: tuple[str, ...],
) -> dict[str, Any]:
    """
    Build ignore rules from command-line options.

    Repeating --ignore for the same field collects the values into a set of
    values; --ignore-pattern compiles a regular expression.
    """
    rules: dict[str, Any] = {}
    for assignment in ignore:
        name, value = _split_assignment("--ignore", assignment)
        existing = rules.get(name)
        if existing is None:
            rules[name] = value
        elif isinstance(existing, list):
            existing.append(value)
        else:
            rules[name] = [existing, value]

    for assignment in ignore_patterns:
        name, pattern = _split_assignment("--ignore-pattern", assignment)
        try:
            rules[name] = re.compile(pattern)
        except re.error as e:
            raise click.BadParameter(f"Invalid pattern '{pattern}': {e}", param_hint="--ignore-pattern")

    return rules


def _load_feature(feature_json: Optional[str]) -> Optional[dict[str, Any]]:
    """Load feature attribute values from a JSON file."""
    if not feature_json:
        return None
    with open(feature_json, "r") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise click.ClickException(f"Invalid feature JSON in {feature_json}: {e}")
    if not isinstance(data, dict):
        raise click.ClickException(f"Feature JSON in {feature_json} must be an object")
    return data


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug output")
@click.version_option(version=__version__, prog_name="attribute-reader")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, debug: bool) -> None:
    """Read feature type attributes from WFS DescribeFeatureType documents."""
    ctx.ensure_object(Config)
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug
    setup_logging(verbose=verbose, debug=debug)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--config",
    "-c",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON reader configuration (fields, ignore, feature)",
)
@click.option(
    "--field",
    "-f",
    "fields",
    multiple=True,
    help="Field to read (can be specified multiple times)",
)
@click.option(
    "--ignore",
    "-i",
    multiple=True,
    help="Skip attributes whose FIELD equals VALUE (FIELD=VALUE, repeatable)",
)
@click.option(
    "--ignore-pattern",
    "ignore_patterns",
    multiple=True,
    help="Skip attributes whose FIELD matches REGEX (FIELD=REGEX, repeatable)",
)
@click.option(
    "--feature-json",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON file with feature attribute values to fill the 'value' field",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="Write the records to this file",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    default="json",
    show_default=True,
    help="Output file format",
)
@pass_config
def read(
    config: Config,
    file: str,
    config_file: Optional[str],
    fields: tuple[str, ...],
    ignore: tuple[str, ...],
    ignore_patterns: tuple[str, ...],
    feature_json: Optional[str],
    as_json: bool,
    output: Optional[str],
    output_format: str,
) -> None:
    """Read attribute records from a DescribeFeatureType document.

    Example:
        attribute-reader read states.xsd -f name -f type --ignore-pattern name=^the_geom
    """
    try:
        reader_config = (
            ReaderConfig.from_json_file(config_file) if config_file else ReaderConfig()
        )
        reader_config = reader_config.merge(
            fields=list(fields) or None,
            ignore=_collect_ignore_rules(ignore, ignore_patterns) or None,
            feature=_load_feature(feature_json),
        )
        builder = AttributeRecordBuilder.from_config(reader_config)

        logger.info(f"Reading schema document: {file}")
        response = SchemaResponse(response_text=Path(file).read_bytes())
        result = builder.parse_response(response)
    except AttributeReaderError as e:
        raise click.ClickException(str(e))

    logger.info(f"Read {result.count} attribute record(s)")

    if as_json:
        click.echo(result_to_json(result))
    else:
        _print_result_summary(result)

    if output:
        path = write_result(result, output, output_format=output_format, fields=builder.fields)
        click.echo(click.style(f"\nOutput file: {path}", fg="green"), err=as_json)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@pass_config
def inspect(config: Config, file: str, as_json: bool) -> None:
    """List the feature types described by a schema document.

    Example:
        attribute-reader inspect states.xsd
    """
    try:
        data = DescribeFeatureTypeParser().parse_file(file)
    except AttributeReaderError as e:
        raise click.ClickException(str(e))

    if as_json:
        output = {
            "target_namespace": data.target_namespace,
            "target_prefix": data.target_prefix,
            "feature_types": [
                {
                    "type_name": ft.type_name,
                    "properties": ft.property_names,
                }
                for ft in data.feature_types
            ],
        }
        click.echo(json.dumps(output, indent=2))
    else:
        click.echo(f"Namespace: {data.target_namespace or 'Not declared'}")
        click.echo(f"Prefix: {data.target_prefix or 'Not declared'}")
        click.echo(f"Feature types: {data.num_feature_types}")
        for ft in data.feature_types:
            click.echo(f"  {ft.type_name}: {len(ft.properties)} attribute(s)")
        if data.num_feature_types != 1:
            click.echo(
                click.style("Only documents with exactly one feature type can be read", fg="yellow")
            )


def _print_result_summary(result: ResultSet) -> None:
    """Print a summary of the result set."""
    click.echo(result.summary())


def app(args: Optional[list[str]] = None) -> int:
    """
    Main application entry point (for testing).

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success)
    """
    try:
        cli(args, standalone_mode=False)
        return 0
    except click.ClickException as e:
        e.show()
        return 1
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        return 1


def main() -> None:
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
