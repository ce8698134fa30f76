#!/usr/bin/env python3
"""
CLI tool for scoring a profile snapshot for fake/bot signals.
"""

import sys

import click
from rich.console import Console
from rich.table import Table

from ..exceptions import ConfigurationError, ContentSafetyError
from ..logging_config import setup_logging_from_config
from ..pipeline import screen_profile
from ..profile_analyzer import FakeProfileAnalyzer
from ..utils import config_dict_to_objects, load_profile_from_file, resolve_config

console = Console()


@click.command()
@click.argument(
    "profile_file", type=click.Path(exists=True, file_okay=True, dir_okay=False)
)
@click.option("--config", "-c", help="Configuration file path")
@click.option("--timeout", type=float, help="Photo check timeout in seconds")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
def main(profile_file, config, timeout, verbose):
    """Analyze the profile described in PROFILE_FILE (YAML)."""

    config_dict, config_path = resolve_config(config)
    if timeout is not None:
        config_dict["analyzer"]["plugin_timeout"] = timeout
    setup_logging_from_config(config_dict, verbose)
    if verbose and config_path:
        console.print(f"[blue]Using config file: {config_path}[/blue]")

    try:
        _, _, analyzer_config = config_dict_to_objects(config_dict)
    except ConfigurationError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    try:
        snapshot = load_profile_from_file(profile_file)
    except ContentSafetyError as e:
        console.print(f"[red]Error loading profile: {e}[/red]")
        sys.exit(1)

    if verbose:
        console.print(f"[blue]Photos: {len(snapshot.photos)}[/blue]")
        console.print(f"[blue]Worker pool: {analyzer_config.max_workers}[/blue]")

    analyzer = FakeProfileAnalyzer(config=analyzer_config)
    with console.status("[bold green]Analyzing profile..."):
        result = screen_profile(snapshot, analyzer)

    display_analysis(result.profile)

    if result.behavior is not None:
        console.print(
            f"\nBehavior suspicion score: {result.behavior.suspicion_score:.2f}"
        )
        for indicator in result.behavior.indicators:
            console.print(f"  • {indicator.description}")

    if result.queue_for_review:
        console.print("[yellow]Queued for human review[/yellow]")


def display_analysis(analysis):
    """Display fake profile indicators, score and recommendation."""
    if analysis.indicators:
        table = Table(title="Fake Profile Indicators")
        table.add_column("Indicator", style="cyan")
        table.add_column("Description", style="yellow")
        for indicator in analysis.indicators:
            table.add_row(indicator.kind.value, indicator.description)
        console.print(table)
    else:
        console.print("[green]No fake profile indicators found[/green]")

    colour = "red" if analysis.is_suspicious else "green"
    console.print(
        f"[{colour}]Suspicion score: {analysis.suspicion_score:.2f}[/{colour}]"
    )
    console.print(f"Recommendation: {analysis.recommendation.value}")


if __name__ == "__main__":
    main()
