#!/usr/bin/env python3
"""
CLI tool for sanitizing text files and encoding them for output contexts.
"""

import sys

import click
from rich.console import Console

from ..encoders import encode
from ..exceptions import ConfigurationError, ContentSafetyError
from ..logging_config import setup_logging_from_config
from ..models import EncodingContext, SanitizationLevel
from ..sanitizer import sanitize
from ..utils import config_dict_to_objects, resolve_config
from ..validation import safe_read_file

console = Console()


@click.command()
@click.argument(
    "input_file", type=click.Path(exists=True, file_okay=True, dir_okay=False)
)
@click.option("--output", "-o", help="Output file for sanitized text")
@click.option("--config", "-c", help="Configuration file path")
@click.option(
    "--level",
    "-l",
    type=click.Choice([level.value for level in SanitizationLevel]),
    help="Sanitization level (default: from config, else standard)",
)
@click.option(
    "--encode",
    "-e",
    "encoding",
    type=click.Choice([context.value for context in EncodingContext]),
    help="Encode the sanitized text for an output context",
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
def main(input_file, output, config, level, encoding, verbose):
    """Sanitize INPUT_FILE and print or save the result."""

    config_dict, config_path = resolve_config(config)
    setup_logging_from_config(config_dict, verbose)
    if verbose and config_path:
        console.print(f"[blue]Using config file: {config_path}[/blue]")

    try:
        sanitizer_config, _, _ = config_dict_to_objects(config_dict)
    except ConfigurationError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    level = SanitizationLevel(level) if level else sanitizer_config.level

    try:
        text = safe_read_file(input_file)
    except ContentSafetyError as e:
        console.print(f"[red]Error reading input file: {e}[/red]")
        sys.exit(1)

    result = sanitize(text, level)
    if encoding:
        result = encode(result, encoding)

    if verbose:
        console.print(f"[green]Sanitized {input_file} at {level.value} level[/green]")
        console.print(f"  Input length: {len(text)}")
        console.print(f"  Output length: {len(result)}")
        if encoding:
            console.print(f"  Encoded for: {encoding}")

    if output:
        try:
            with open(output, "w", encoding="utf-8") as f:
                f.write(result)
            console.print(f"[green]Sanitized text saved to {output}[/green]")
        except OSError as e:
            console.print(f"[red]Error saving output file: {e}[/red]")
            sys.exit(1)
    else:
        click.echo(result)


if __name__ == "__main__":
    main()
