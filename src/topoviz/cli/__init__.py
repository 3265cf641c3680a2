"""
topoviz CLI - convert Kafka Streams topology descriptions to diagrams.

Usage:
    topoviz --help
    topoviz topology.txt
    topoviz topology.txt --format dot --output topology.dot
    kafka-app --describe | topoviz - --format mermaid
    topoviz --list-formats
"""

import logging
import sys
from pathlib import Path
from typing import IO, Optional, Union

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from topoviz.config import VisualizerConfig
from topoviz.converter import TopologyConverter
from topoviz.exceptions import ParseError, UnsupportedFormatError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USER_ERROR = 1
EXIT_INTERNAL_ERROR = 2


def configure_logging(level: int) -> None:
    """Send topoviz log records to stderr through rich."""
    package_logger = logging.getLogger("topoviz")
    for handler in list(package_logger.handlers):
        if isinstance(handler, RichHandler):
            package_logger.removeHandler(handler)
    package_logger.addHandler(
        RichHandler(console=Console(stderr=True), show_path=False, show_time=False)
    )
    package_logger.setLevel(level)


def read_input(input_file: str) -> Union[str, IO[str]]:
    """Return the stdin stream for '-', otherwise the file's contents."""
    if input_file == "-":
        return click.get_text_stream("stdin")

    path = Path(input_file)
    if not path.exists():
        raise ParseError(f"Input file does not exist: {input_file}", source=input_file)
    if not path.is_file():
        raise ParseError(f"Input path is not a file: {input_file}", source=input_file)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(f"Cannot read input file {input_file}: {e}", source=input_file) from e


def write_output(output: str, output_path: Optional[Path]) -> None:
    if output_path is None:
        click.echo(output, nl=False)
        return
    output_path.write_text(output, encoding="utf-8")
    click.echo(f"Output written to: {output_path.resolve()}", err=True)


@click.command()
@click.argument("input_file", metavar="INPUT", required=False)
@click.option(
    "-f", "--format", "output_format",
    default="mermaid",
    show_default=True,
    envvar="TOPOVIZ_FORMAT",
    help="Output format (see --list-formats)"
)
@click.option(
    "-o", "--output", "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output file (default: stdout)"
)
@click.option(
    "-l", "--list-formats",
    is_flag=True,
    help="List available output formats and exit"
)
@click.option(
    "--log-level",
    default="WARNING",
    show_default=True,
    envvar="TOPOVIZ_LOG_LEVEL",
    help="Log level for diagnostics on stderr"
)
@click.version_option(package_name="topoviz")
def main(input_file: Optional[str], output_format: str, output_path: Optional[Path],
         list_formats: bool, log_level: str):
    """Convert a Kafka Streams topology description to a diagram.

    INPUT is a file holding the output of TopologyDescription.toString(),
    or '-' to read it from stdin.

    \b
    Examples:
        topoviz topology.txt
        topoviz topology.txt --format dot -o topology.dot
        topoviz --list-formats
    """
    converter = TopologyConverter()

    if list_formats:
        click.echo("Available output formats:")
        for name in converter.available_formats():
            click.echo(f"  - {name}")
        sys.exit(EXIT_OK)

    try:
        config = VisualizerConfig(
            output_format=output_format,
            output_path=output_path,
            log_level=log_level,
        )
    except ValidationError as e:
        for error in e.errors():
            click.echo(f"Error: {error['msg']}", err=True)
        sys.exit(EXIT_USER_ERROR)

    configure_logging(config.log_level_value)

    if input_file is None:
        click.echo("Error: Missing INPUT (a file path, or '-' for stdin).", err=True)
        sys.exit(EXIT_USER_ERROR)

    try:
        topology_text = read_input(input_file)
        output = converter.convert_from_text(topology_text, config.output_format)
        write_output(output, config.output_path)
    except (ParseError, UnsupportedFormatError) as e:
        click.echo(f"Error: {e.message}", err=True)
        if e.suggestion:
            click.echo(e.suggestion, err=True)
        sys.exit(EXIT_USER_ERROR)
    except OSError as e:
        click.echo(f"Error: Cannot write output: {e}", err=True)
        sys.exit(EXIT_USER_ERROR)
    except Exception as e:
        logger.exception("Unexpected error while converting topology")
        click.echo(f"Unexpected error: {e}", err=True)
        sys.exit(EXIT_INTERNAL_ERROR)

    sys.exit(EXIT_OK)


if __name__ == "__main__":
    main()
