#!/usr/bin/env python3
"""
CLI tool for managing configuration files.
"""

import os
import sys

import click
import yaml
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from ..utils import (
    create_default_config,
    find_config_file,
    load_config_from_file,
    save_config_to_file,
    validate_config,
)

console = Console()

NO_CONFIG_MESSAGE = (
    "[red]No configuration file found. "
    "Specify path or run in directory with config file.[/red]"
)


@click.group()
def main():
    """Manage content-safety-pipeline configuration."""
    pass


@main.command()
@click.option(
    "--output", "-o", default="content-safety.yml", help="Output configuration file"
)
@click.option("--force", is_flag=True, help="Overwrite existing file")
def init(output, force):
    """Initialize a new configuration file with default values."""

    if os.path.exists(output) and not force:
        console.print(
            f"[red]Configuration file {output} already exists. Use --force to overwrite.[/red]"
        )
        sys.exit(1)

    config = create_default_config()
    save_config_to_file(config, output)
    console.print(f"[green]Created default configuration file: {output}[/green]")

    console.print("\n[bold]Generated configuration:[/bold]")
    with open(output, "r", encoding="utf-8") as f:
        syntax = Syntax(f.read(), "yaml", theme="monokai", line_numbers=True)
        console.print(syntax)


@main.command()
@click.argument("config_file", type=click.Path(exists=True), required=False)
def validate(config_file):
    """Validate a configuration file."""

    config_file = config_file or find_config_file()
    if not config_file:
        console.print(NO_CONFIG_MESSAGE)
        sys.exit(1)

    console.print(f"[blue]Validating configuration file: {config_file}[/blue]")

    config_dict = load_config_from_file(config_file)
    if not isinstance(config_dict, dict):
        console.print("[red]Configuration file must contain a mapping[/red]")
        sys.exit(1)

    errors = validate_config(config_dict)
    if errors:
        console.print(f"[red]Validation failed with {len(errors)} errors:[/red]")
        for error in errors:
            console.print(f"  • {error}")
        sys.exit(1)

    console.print("[green]Configuration file is valid[/green]")
    console.print("\n[bold]Configuration summary:[/bold]")
    display_config_summary(config_dict)


@main.command()
@click.argument("config_file", type=click.Path(exists=True), required=False)
def show(config_file):
    """Show current configuration settings."""

    config_file = config_file or find_config_file()
    if not config_file:
        console.print(NO_CONFIG_MESSAGE)
        sys.exit(1)

    console.print(f"[blue]Configuration file: {config_file}[/blue]")
    config_dict = load_config_from_file(config_file)

    console.print("\n[bold]Configuration content:[/bold]")
    yaml_content = yaml.dump(config_dict, default_flow_style=False, indent=2)
    syntax = Syntax(yaml_content, "yaml", theme="monokai", line_numbers=True)
    console.print(syntax)

    if isinstance(config_dict, dict):
        console.print("\n[bold]Summary:[/bold]")
        display_config_summary(config_dict)


@main.command("set")
@click.argument("key")
@click.argument("value")
@click.argument("config_file", type=click.Path(exists=True), required=False)
def set_value(key, value, config_file):
    """Set a configuration value (e.g. moderation.min_bio_score 60)."""

    config_file = config_file or find_config_file()
    if not config_file:
        console.print(NO_CONFIG_MESSAGE)
        sys.exit(1)

    config_dict = load_config_from_file(config_file)

    keys = key.split(".")
    current = config_dict
    for k in keys[:-1]:
        if not isinstance(current.get(k), dict):
            current[k] = {}
        current = current[k]

    current[keys[-1]] = parse_value(value)

    errors = validate_config(config_dict)
    if errors:
        console.print("[red]Refusing to save invalid configuration:[/red]")
        for error in errors:
            console.print(f"  • {error}")
        sys.exit(1)

    save_config_to_file(config_dict, config_file)
    console.print(f"[green]✓ Set {key} = {current[keys[-1]]}[/green]")


def parse_value(value):
    """Convert a command-line string to bool, number, null or string."""
    lowered = value.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    if lowered in ("null", "none"):
        return None
    try:
        if "." in value:
            return float(value)
        return int(value)
    except ValueError:
        return value


def display_config_summary(config_dict):
    """Display a summary of configuration settings."""
    table = Table(title="Configuration Summary")
    table.add_column("Section", style="cyan")
    table.add_column("Setting", style="yellow")
    table.add_column("Value", style="green")

    def add_section_rows(section_name, section_dict, prefix=""):
        for key, value in section_dict.items():
            if isinstance(value, dict):
                add_section_rows(section_name, value, f"{prefix}{key}.")
            else:
                table.add_row(
                    section_name if not prefix else "", f"{prefix}{key}", str(value)
                )

    for section, settings in config_dict.items():
        if isinstance(settings, dict):
            add_section_rows(section.title(), settings)
        else:
            table.add_row(section.title(), "", str(settings))

    console.print(table)


if __name__ == "__main__":
    main()
