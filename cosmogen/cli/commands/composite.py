"""Composite generation commands: binary, merger and population."""

from collections import Counter
from pathlib import Path

import typer

from ...config import CosmogenConfig
from ...core.errors import CosmogenError
from ...core.models.registry import DOMAINS
from ...engine import generate_binary, generate_merger_sequence, generate_population
from ...records import CompositeCall, save_json
from ..app import app, console, get_json_mode
from ..utils import ExitCode, Output, format_value, report_error, show_results


def _seed_or_default(seed: int | None, config: CosmogenConfig) -> int:
    return config.defaults.seed if seed is None else seed


@app.command("binary")
def binary_command(
    primary: str | None = typer.Argument(None, help="Primary classification (random when omitted)"),
    secondary: str | None = typer.Argument(
        None, help="Secondary classification (random within the primary's domain when omitted)"
    ),
    seed: int | None = typer.Option(None, "--seed", help="Random seed"),
    domain: str | None = typer.Option(
        None, "--domain", "-d", help=f"Domain for random picks ({', '.join(DOMAINS)})"
    ),
    output: Path | None = typer.Option(None, "--output", "-o", help="Save reproducible tuples to JSON"),
):
    """
    Generate a bound binary system.

    Examples:
        cosmogen binary stellar_mass stellar_mass --seed 11
        cosmogen binary --domain star
    """
    out = Output(console=console, json_mode=get_json_mode())
    config = CosmogenConfig.load()
    call = CompositeCall(
        operation="binary",
        seed=_seed_or_default(seed, config),
        args={"primary_key": primary, "secondary_key": secondary, "domain": domain},
    )

    try:
        pair = generate_binary(seed=call.seed, config=config.generation, **call.args)
    except CosmogenError as e:
        report_error(out, e)
        raise typer.Exit(out.finish())

    first, second = pair
    show_results(out, "Binary system", list(pair))
    out.text(
        f"separation={format_value(first.config.orbital_separation_km)} km  "
        f"period={format_value(first.config.orbital_period_days)} d  "
        f"e={first.config.orbital_eccentricity:.3f}"
    )
    if first.domain == "black_hole":
        out.text(
            f"strain={format_value(first.physics.strain_amplitude)}  "
            f"merger signature={format_value(first.observables.merger_signature)}"
        )
    out.set_data(
        "orbit",
        {
            "separation_km": first.config.orbital_separation_km,
            "period_days": first.config.orbital_period_days,
            "eccentricity": first.config.orbital_eccentricity,
            "interaction_strength": first.config.interaction_strength,
        },
    )

    if output:
        save_json(pair, output, meta={"command": "binary"}, call=call)
        out.success(f"Saved to {output}", output=str(output))
    raise typer.Exit(out.finish())


@app.command("merger")
def merger_command(
    primary: str | None = typer.Argument(None, help="Primary classification (random when omitted)"),
    secondary: str | None = typer.Argument(None, help="Secondary classification"),
    seed: int | None = typer.Option(None, "--seed", help="Random seed"),
    domain: str | None = typer.Option(
        None, "--domain", "-d", help=f"Domain for random picks ({', '.join(DOMAINS)})"
    ),
    output: Path | None = typer.Option(None, "--output", "-o", help="Save reproducible tuples to JSON"),
):
    """
    Generate a merger sequence: both progenitors and the remnant.

    Examples:
        cosmogen merger stellar_mass stellar_mass --seed 5
        cosmogen merger spiral_sb spiral_sb
    """
    out = Output(console=console, json_mode=get_json_mode())
    config = CosmogenConfig.load()
    call = CompositeCall(
        operation="merger",
        seed=_seed_or_default(seed, config),
        args={"primary_key": primary, "secondary_key": secondary, "domain": domain},
    )

    try:
        sequence = generate_merger_sequence(seed=call.seed, config=config.generation, **call.args)
    except CosmogenError as e:
        report_error(out, e)
        raise typer.Exit(out.finish())

    show_results(out, "Merger sequence", sequence)
    remnant = sequence[-1]
    out.success(
        f"Remnant {remnant.key} with {format_value(remnant.config.mass)} M☉",
        remnant=remnant.key,
        remnant_mass=remnant.config.mass,
    )

    if output:
        save_json(sequence, output, meta={"command": "merger"}, call=call)
        out.success(f"Saved to {output}", output=str(output))
    raise typer.Exit(out.finish())


@app.command("population")
def population_command(
    class_key: str | None = typer.Option(
        None, "--class", "-c", help="Classification for every member (random per member when omitted)"
    ),
    count: int | None = typer.Option(
        None, "--count", "-n", help="Number of members (defaults to the configured population size)"
    ),
    seed: int | None = typer.Option(None, "--seed", help="Random seed"),
    domain: str | None = typer.Option(
        None, "--domain", "-d", help=f"Domain for random picks ({', '.join(DOMAINS)})"
    ),
    output: Path | None = typer.Option(None, "--output", "-o", help="Save reproducible tuples to JSON"),
):
    """
    Generate a population of objects within a sphere.

    EXIT CODES:
        0 = Success
        1 = Invalid argument
        4 = Composition error
        10 = Cancelled

    Examples:
        cosmogen population -n 100 --seed 42
        cosmogen population -c primordial_micro -n 20
        cosmogen population --domain galaxy -o galaxies.json
    """
    out = Output(console=console, json_mode=get_json_mode())
    config = CosmogenConfig.load()
    count = config.defaults.population_size if count is None else count
    seed = _seed_or_default(seed, config)

    if count < 0:
        out.error(f"--count must be non-negative, got {count}")
        raise typer.Exit(out.finish())

    members = None
    try:
        if out.json_mode:
            members = generate_population(
                class_key, count, seed, domain=domain, config=config.generation
            )
        else:
            from rich.progress import (
                Progress,
                SpinnerColumn,
                TextColumn,
                BarColumn,
                TaskProgressColumn,
            )

            with Progress(
                SpinnerColumn(),
                TextColumn("[cyan]Generating population...[/cyan]"),
                BarColumn(),
                TaskProgressColumn(),
                console=console,
                transient=True,
            ) as progress:
                task = progress.add_task("Generating", total=count)

                def on_progress(current: int, total: int):
                    progress.update(task, completed=current)

                members = generate_population(
                    class_key,
                    count,
                    seed,
                    domain=domain,
                    config=config.generation,
                    on_progress=on_progress,
                )
    except CosmogenError as e:
        report_error(out, e)
        raise typer.Exit(out.finish())
    except ValueError as e:
        out.error(str(e))
        raise typer.Exit(out.finish())
    except KeyboardInterrupt:
        out.error("Population generation cancelled", exit_code=ExitCode.USER_CANCELLED)
        raise typer.Exit(out.finish())

    out.success(f"Generated {len(members)} objects (seed={seed})", count=len(members), seed=seed)
    if out.json_mode:
        show_results(out, "Population", members)
    else:
        by_key = Counter(m.key for m in members)
        out.table(
            "Population by classification",
            ["Key", "Count"],
            [[key, str(n)] for key, n in by_key.most_common()],
        )

    if output:
        call = CompositeCall(
            operation="population",
            seed=seed,
            args={"class_key": class_key, "count": count, "domain": domain},
        )
        save_json(members, output, meta={"command": "population"}, call=call)
        out.success(f"Saved to {output}", output=str(output))
    raise typer.Exit(out.finish())
