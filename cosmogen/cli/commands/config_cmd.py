"""Config command for viewing and managing cosmogen configuration."""

from dataclasses import fields

import typer

from ... import config as config_module
from ...config import CosmogenConfig, DefaultsConfig, GenerationConfig, coerce_value
from ..app import app, console


VALID_KEYS = {
    *(f"generation.{f.name}" for f in fields(GenerationConfig)),
    *(f"defaults.{f.name}" for f in fields(DefaultsConfig)),
}


@app.command("config")
def config_command(
    action: str = typer.Argument(
        ...,
        help="Action: show, set, reset",
    ),
    key: str | None = typer.Argument(
        None,
        help="Config key (e.g. generation.quality, defaults.seed)",
    ),
    value: str | None = typer.Argument(
        None,
        help="Value to set",
    ),
):
    """View or modify cosmogen configuration.

    Examples:
        cosmogen config show
        cosmogen config set generation.quality ultra
        cosmogen config set generation.radiated_fraction 0.04
        cosmogen config set defaults.population_size 200
        cosmogen config reset
    """
    if action == "show":
        _show_config()
    elif action == "set":
        if not key or value is None:
            console.print("[red]Usage:[/red] cosmogen config set <key> <value>")
            console.print()
            console.print("Available keys:")
            for k in sorted(VALID_KEYS):
                console.print(f"  {k}")
            raise typer.Exit(1)
        _set_config(key, value)
    elif action == "reset":
        _reset_config()
    else:
        console.print(f"[red]Unknown action:[/red] {action}")
        console.print("Valid actions: show, set, reset")
        raise typer.Exit(1)


def _show_config():
    """Display current resolved configuration."""
    config = CosmogenConfig.load()

    console.print()
    console.print("[bold]cosmogen Configuration[/bold]")
    console.print("─" * 40)

    for zone, values in config.to_dict().items():
        console.print()
        console.print(f"[bold cyan]{zone.capitalize()}[/bold cyan]")
        width = max(len(name) for name in values)
        for name, val in values.items():
            console.print(f"  {name.ljust(width)} = {val}")

    console.print()
    config_file = config_module.CONFIG_FILE
    if config_file.exists():
        console.print(f"Config file: {config_file}")
    else:
        console.print(f"Config file: [dim]not created yet[/dim] ({config_file})")
    console.print()


def _set_config(key: str, value: str):
    """Set a config value and save."""
    if key not in VALID_KEYS:
        console.print(f"[red]Unknown key:[/red] {key}")
        console.print()
        console.print("Available keys:")
        for k in sorted(VALID_KEYS):
            console.print(f"  {k}")
        raise typer.Exit(1)

    config = CosmogenConfig.load()
    zone, field_name = key.split(".", 1)
    section = getattr(config, zone)

    try:
        coerced = coerce_value(section, field_name, value)
        current = {f.name: getattr(section, f.name) for f in fields(section)}
        current[field_name] = coerced
        # Re-run dataclass validation on the updated section
        setattr(config, zone, type(section)(**current))
    except ValueError as e:
        console.print(f"[red]Invalid value for {key}:[/red] {value} ({e})")
        raise typer.Exit(1)

    config.save()

    console.print(f"[green]✓[/green] Set {key} = {coerced}")
    console.print(f"  Saved to {config_module.CONFIG_FILE}")


def _reset_config():
    """Reset config to defaults."""
    config_file = config_module.CONFIG_FILE
    if config_file.exists():
        config_file.unlink()
        console.print("[green]✓[/green] Config reset to defaults")
        console.print(f"  Removed {config_file}")
    else:
        console.print("Config already at defaults (no config file exists)")
