"""Generate command for single objects."""

from pathlib import Path

import typer

from ...config import CosmogenConfig
from ...core.errors import CosmogenError
from ...core.models.registry import DOMAINS
from ...engine import generate_single
from ...records import save_json
from ..app import app, console, get_json_mode
from ..utils import Output, format_value, metric_rows, parse_overrides, report_error


@app.command("generate")
def generate_command(
    key: str | None = typer.Argument(
        None,
        help="Classification key (random when omitted)",
    ),
    seed: int | None = typer.Option(
        None, "--seed", help="Random seed (defaults to the configured seed)"
    ),
    mass: float | None = typer.Option(
        None, "--mass", "-m", help="Mass override in solar masses"
    ),
    overrides: list[str] | None = typer.Option(
        None,
        "--set",
        help="Override a sampled field, e.g. --set spin=0.9 (repeatable)",
    ),
    domain: str | None = typer.Option(
        None,
        "--domain",
        "-d",
        help=f"Restrict a random pick to one domain ({', '.join(DOMAINS)})",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Save the reproducible tuple to a JSON file",
    ),
):
    """
    Generate one object and report its derived statistics.

    EXIT CODES:
        0 = Success
        1 = Invalid override
        2 = Unknown classification
        5 = Generation error

    Examples:
        cosmogen generate kerr --seed 7
        cosmogen generate supermassive --mass 4e6 --set spin=0.9
        cosmogen generate --domain star --seed 3 -o star.json
    """
    out = Output(console=console, json_mode=get_json_mode())
    config = CosmogenConfig.load()
    seed = config.defaults.seed if seed is None else seed

    try:
        parsed = parse_overrides(overrides)
    except ValueError as e:
        out.error(str(e), suggestion="Use --set field=value with a numeric value")
        raise typer.Exit(out.finish())

    try:
        result = generate_single(
            key,
            seed,
            mass,
            overrides=parsed,
            domain=domain,
            config=config.generation,
        )
    except CosmogenError as e:
        report_error(out, e)
        raise typer.Exit(out.finish())
    except ValueError as e:
        out.error(str(e))
        raise typer.Exit(out.finish())

    stats = result.statistics
    if out.json_mode:
        out.set_data("object", result.to_dict())
    else:
        out.header(f"{result.type_definition.name} [{result.key}]")
        out.text(
            f"seed={result.config.seed}  class={stats.mass_class}  "
            f"stage={stats.evolution_stage}  quality={stats.quality_label}  "
            f"stable={format_value(stats.stable)}"
        )
        out.blank()
        out.table("Metrics", ["Metric", "Value"], metric_rows(result))
        if stats.signatures:
            out.text(f"[bold]Signatures:[/bold] {', '.join(stats.signatures)}")
        out.text(f"[dim]Generated in {stats.generation_time_ms:.2f} ms[/dim]")

    if output:
        save_json([result], output, meta={"command": "generate"})
        out.success(f"Saved to {output}", output=str(output))

    raise typer.Exit(out.finish())
