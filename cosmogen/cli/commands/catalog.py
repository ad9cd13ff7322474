"""Registry browsing commands: list and show."""

import typer

from ...core.models.registry import DOMAINS
from ...registry import get_registry
from ..app import app, console, get_json_mode
from ..utils import ExitCode, Output, format_value


@app.command("list")
def list_command(
    domain: str | None = typer.Option(
        None,
        "--domain",
        "-d",
        help=f"Only list one domain ({', '.join(DOMAINS)})",
    ),
):
    """List registered classifications.

    Examples:
        cosmogen list
        cosmogen list --domain galaxy
        cosmogen --json list -d black_hole
    """
    out = Output(console=console, json_mode=get_json_mode())

    if domain is not None and domain not in DOMAINS:
        out.error(
            f"Unknown domain: {domain}",
            suggestion=f"Expected one of: {', '.join(DOMAINS)}",
        )
        raise typer.Exit(out.finish())

    registry = get_registry()
    rows = [
        [
            definition.key,
            definition.domain,
            definition.name,
            definition.observational_status,
            format_value(definition.discoverability),
        ]
        for definition in registry.definitions(domain)
    ]
    out.table(
        "Classifications",
        ["Key", "Domain", "Name", "Status", "Discoverability"],
        rows,
    )
    out.success(f"{len(rows)} classifications", count=len(rows))
    raise typer.Exit(out.finish())


@app.command("show")
def show_command(
    key: str = typer.Argument(..., help="Classification key (see `cosmogen list`)"),
):
    """Show a classification's type definition.

    Examples:
        cosmogen show kerr
        cosmogen --json show spiral_sb
    """
    out = Output(console=console, json_mode=get_json_mode())

    definition = get_registry().get(key)
    if definition is None:
        out.error(
            f"Unknown classification: {key}",
            suggestion="Run `cosmogen list` to see registered classifications",
            exit_code=ExitCode.UNKNOWN_CLASSIFICATION,
        )
        raise typer.Exit(out.finish())

    if out.json_mode:
        out.set_data("type_definition", definition.model_dump(mode="json"))
        raise typer.Exit(out.finish())

    out.header(f"{definition.name} [{definition.key}]")
    out.text(definition.description)
    out.blank()
    out.text(f"[bold]Domain:[/bold] {definition.domain}")
    out.text(f"[bold]Status:[/bold] {definition.observational_status}")
    if definition.real_world_example:
        out.text(f"[bold]Example:[/bold] {definition.real_world_example}")
    out.text(f"[bold]Formation:[/bold] {', '.join(definition.formation_mechanisms)}")
    out.blank()

    rows = []
    for name in definition.sampled_field_names():
        low, high = definition.bounds(name)
        rows.append([name, definition.scale_for(name), format_value(low), format_value(high)])
    out.table("Sampled ranges", ["Field", "Scale", "Low", "High"], rows)

    flags = [name for name, enabled in definition.observables.items() if enabled]
    if flags:
        out.text(f"[bold]Observables:[/bold] {', '.join(flags)}")
    if definition.unique_features:
        out.text(f"[bold]Unique features:[/bold] {', '.join(definition.unique_features)}")
    raise typer.Exit(out.finish())
