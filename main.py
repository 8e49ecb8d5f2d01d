#!/usr/bin/env python3
"""schema-shapes - Entry point."""
import logging
import sys

import click
from colorama import Fore, Style, init

from config import app_config
from schema_shapes import __version__
from schema_shapes.cli.report import SchemaReport
from schema_shapes.errors import SchemaClassificationError

# Initialize colorama
init(autoreset=True)


def _load_report(location: str) -> SchemaReport:
    try:
        return SchemaReport(location)
    except SchemaClassificationError as e:
        click.echo(f"{Fore.RED}{e}{Style.RESET_ALL}")
        sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option("--log-level", default=None, help="Logging level (default from SCHEMA_SHAPES_LOG_LEVEL)")
def cli(log_level):
    """Classify API schema nodes into canonical shapes."""
    logging.basicConfig(
        level=(log_level or app_config.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("location")
@click.option("--pointer", default="", help="JSON pointer of the schema inside the document")
@click.option("--json", "as_json", is_flag=True, help="Print flags as JSON")
def classify(location, pointer, as_json):
    """Classify one schema of the document at LOCATION."""
    report = _load_report(location)

    try:
        result = report.classify(pointer)
    except SchemaClassificationError as e:
        click.echo(f"{Fore.RED}❌ {e}{Style.RESET_ALL}")
        sys.exit(1)

    report.print_result(result, as_json)


@cli.command()
@click.argument("location")
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON")
def scan(location, as_json):
    """Classify every named schema of the document at LOCATION."""
    report = _load_report(location)
    results = report.scan()
    report.print_scan(results, as_json)

    if any(isinstance(outcome, SchemaClassificationError) for outcome in results.values()):
        sys.exit(1)


if __name__ == "__main__":
    cli()
