"""Regenerate command: rebuild objects from a saved records file."""

from pathlib import Path

import typer

from ...config import CosmogenConfig
from ...core.errors import CosmogenError
from ...engine import regenerate_records
from ...records import load_records
from ..app import app, console, get_json_mode
from ..utils import ExitCode, Output, report_error, show_results


@app.command("regenerate")
def regenerate_command(
    path: Path = typer.Argument(..., help="Records file written with --output"),
):
    """
    Rebuild every object in a records file from its reproducible tuple.

    Files written by binary, merger and population replay the recorded call,
    so orbits, positions and remnants are rebuilt along with the members.

    Examples:
        cosmogen generate kerr --seed 7 -o kerr.json
        cosmogen regenerate kerr.json
        cosmogen merger stellar_mass stellar_mass --seed 5 -o merger.json
        cosmogen regenerate merger.json
    """
    out = Output(console=console, json_mode=get_json_mode())

    if not path.exists():
        out.error(f"File not found: {path}", exit_code=ExitCode.FILE_NOT_FOUND)
        raise typer.Exit(out.finish())

    config = CosmogenConfig.load()
    try:
        meta, records = load_records(path)
        results = regenerate_records(meta, records, config=config.generation)
    except CosmogenError as e:
        report_error(out, e)
        raise typer.Exit(out.finish())

    out.set_data("meta", meta)
    show_results(out, "Regenerated objects", results)
    out.success(f"Regenerated {len(results)} objects from {path}", count=len(results))
    raise typer.Exit(out.finish())
