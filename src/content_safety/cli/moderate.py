#!/usr/bin/env python3
"""
CLI tool for checking text against the content policy and validating
display names.
"""

import sys

import click
from rich.console import Console
from rich.table import Table

from ..exceptions import ConfigurationError, ContentSafetyError
from ..logging_config import setup_logging_from_config
from ..models import SanitizationLevel
from ..moderator import content_score, filter_profanity, get_violations, validate_name
from ..sanitizer import sanitize
from ..utils import config_dict_to_objects, resolve_config
from ..validation import safe_read_file

console = Console()


@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, file_okay=True, dir_okay=False),
    required=False,
)
@click.option("--name", "-n", help="Validate a display name instead of a file")
@click.option("--config", "-c", help="Configuration file path")
@click.option("--sanitize-first", is_flag=True, help="Sanitize text before checking")
@click.option("--filter", "show_filtered", is_flag=True, help="Print text with profanity masked")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
def main(input_file, name, config, sanitize_first, show_filtered, verbose):
    """Check INPUT_FILE (or --name) against the content policy."""

    config_dict, config_path = resolve_config(config)
    setup_logging_from_config(config_dict, verbose)
    if verbose and config_path:
        console.print(f"[blue]Using config file: {config_path}[/blue]")

    try:
        _, moderation_config, _ = config_dict_to_objects(config_dict)
    except ConfigurationError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    if name is not None:
        check_name(name)
        return

    if not input_file:
        console.print("[red]Error: Provide INPUT_FILE or --name.[/red]")
        sys.exit(1)

    try:
        text = safe_read_file(input_file)
    except ContentSafetyError as e:
        console.print(f"[red]Error reading input file: {e}[/red]")
        sys.exit(1)

    if sanitize_first:
        text = sanitize(text, SanitizationLevel.STANDARD)

    violations = get_violations(text)
    score = content_score(text)

    if violations:
        display_violations(violations)
    else:
        console.print("[green]No policy violations found[/green]")

    colour = "green" if score >= moderation_config.min_bio_score else "red"
    console.print(f"[{colour}]Content score: {score}/100[/{colour}]")
    console.print(f"Appropriate: {not violations}")

    if verbose:
        console.print(f"  Acceptance floor: {moderation_config.min_bio_score}")

    if show_filtered:
        console.print("\n[bold]Filtered text:[/bold]")
        click.echo(filter_profanity(text))


def check_name(name):
    """Validate a display name and print the outcome."""
    result = validate_name(name)
    if result.is_valid:
        console.print("[green]Name is valid[/green]")
    else:
        console.print(f"[red]Name is invalid: {result.reason}[/red]")


def display_violations(violations):
    """Display detected policy violations."""
    table = Table(title="Policy Violations")
    table.add_column("Violation", style="red")
    table.add_column("Description", style="yellow")

    for violation in violations:
        table.add_row(violation.value, violation.description)

    console.print(table)


if __name__ == "__main__":
    main()
