"""CLI utilities for dual-mode output (human-friendly + machine-readable).

This module provides utilities for CLI commands to support both:
- Human mode (default): Rich formatting with colors, tables, progress bars
- Machine mode (--json): Structured JSON output for scripts and tools

Example:
    from ..utils import Output, ExitCode

    @app.command()
    def my_command():
        out = Output(console=console, json_mode=get_json_mode())
        out.success("Generated kerr", key="kerr", seed=42)
        out.table("Metrics", ["Metric", "Value"], [["mass_solar", "12.4"]])
        raise typer.Exit(out.finish())
"""

from __future__ import annotations

import json
import math
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, PrivateAttr
from rich.console import Console
from rich.table import Table

from ..core.errors import (
    CompositionFailed,
    CosmogenError,
    GenerationCancelled,
    InvalidOverride,
    UnknownClassification,
)
from ..core.models import GenerationResult


class ExitCode:
    """Standardized exit codes for CLI commands.

    Scripts can check $? and know exactly what failed:
        0 = Success
        1 = Validation error (bad override or argument)
        2 = Unknown classification
        3 = File not found
        4 = Composition error
        5 = Generation error
        10 = User cancelled
    """

    SUCCESS = 0
    VALIDATION_ERROR = 1
    UNKNOWN_CLASSIFICATION = 2
    FILE_NOT_FOUND = 3
    COMPOSITION_ERROR = 4
    GENERATION_ERROR = 5
    USER_CANCELLED = 10


class Output(BaseModel):
    """Collects command output for either the terminal or ``--json``.

    Human mode prints through Rich as it goes. JSON mode accumulates a single
    document (``status``, ``errors``, ``exit_code`` plus whatever the command
    adds) and prints it from ``finish()``.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    console: Console
    json_mode: bool = False

    _data: dict[str, Any] = PrivateAttr()
    _exit_code: int = PrivateAttr(default=ExitCode.SUCCESS)

    def model_post_init(self, __context: Any) -> None:
        self._data = {"status": "success", "errors": []}

    def success(self, message: str, **data: Any) -> None:
        if self.json_mode:
            self._data.update(data)
        else:
            self.console.print(f"[green]✓[/green] {message}")

    def error(
        self,
        message: str,
        *,
        category: str | None = None,
        suggestion: str | None = None,
        exit_code: int = ExitCode.VALIDATION_ERROR,
    ) -> None:
        """Record a failure; the last error's exit code wins."""
        self._exit_code = exit_code
        self._data["status"] = "error"
        if not self.json_mode:
            self.console.print(f"[red]✗[/red] {message}")
            if suggestion:
                self.console.print(f"  [dim]→ {suggestion}[/dim]")
            return
        entry: dict[str, Any] = {"message": message}
        if category:
            entry["category"] = category
        if suggestion:
            entry["suggestion"] = suggestion
        self._data["errors"].append(entry)

    def text(self, message: str) -> None:
        if not self.json_mode:
            self.console.print(message)

    def blank(self) -> None:
        if not self.json_mode:
            self.console.print()

    def header(self, title: str) -> None:
        if self.json_mode:
            return
        self.console.print()
        self.console.rule(f"[bold]{title}[/bold]", align="left")

    def table(self, title: str, columns: list[str], rows: list[list[str]]) -> None:
        """Render rows as a table, or store them under the snake_cased title."""
        if self.json_mode:
            self._data[title.lower().replace(" ", "_")] = [dict(zip(columns, row)) for row in rows]
            return
        table = Table(title=title, header_style="bold")
        for index, column in enumerate(columns):
            # Values right-aligned, labels left
            table.add_column(column, justify="left" if index == 0 else "right")
        for row in rows:
            table.add_row(*row)
        self.console.print(table)

    def set_data(self, key: str, value: Any) -> None:
        self._data[key] = value

    def finish(self) -> int:
        """Print the JSON document when in JSON mode and return the exit code."""
        if self.json_mode:
            self._data["exit_code"] = self._exit_code
            print(json.dumps(self._data, indent=2, default=str))
        return self._exit_code


# =============================================================================
# Error mapping
# =============================================================================


def exit_code_for(error: CosmogenError) -> int:
    if isinstance(error, InvalidOverride):
        return ExitCode.VALIDATION_ERROR
    if isinstance(error, UnknownClassification):
        return ExitCode.UNKNOWN_CLASSIFICATION
    if isinstance(error, GenerationCancelled):
        return ExitCode.USER_CANCELLED
    if isinstance(error, CompositionFailed):
        return ExitCode.COMPOSITION_ERROR
    return ExitCode.GENERATION_ERROR


def report_error(out: Output, error: CosmogenError) -> None:
    """Record a generation error on the output with its mapped exit code."""
    suggestion = None
    if isinstance(error, UnknownClassification):
        suggestion = "Run `cosmogen list` to see registered classifications"
    out.error(
        str(error),
        category=type(error).__name__,
        suggestion=suggestion,
        exit_code=exit_code_for(error),
    )


# =============================================================================
# Formatting
# =============================================================================


def parse_overrides(values: Iterable[str] | None) -> dict[str, float]:
    """Parse repeated ``--set field=value`` options.

    Raises:
        ValueError: If an entry is not ``field=number``
    """
    overrides: dict[str, float] = {}
    for item in values or []:
        name, sep, raw = item.partition("=")
        name = name.strip()
        if not sep or not name:
            raise ValueError(f"Expected field=value, got {item!r}")
        try:
            overrides[name] = float(raw)
        except ValueError:
            raise ValueError(f"Override {name!r} needs a numeric value, got {raw!r}") from None
    return overrides


def format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, float):
        if math.isinf(value):
            return "∞" if value > 0 else "-∞"
        if math.isnan(value):
            return "n/a"
        return f"{value:.4g}"
    return str(value)


def result_rows(results: Iterable[GenerationResult]) -> list[list[str]]:
    """One summary row per result for object tables."""
    rows = []
    for r in results:
        stats = r.statistics
        rows.append(
            [
                r.key,
                r.config.composite_role or "-",
                str(r.config.seed),
                format_value(r.config.mass),
                stats.mass_class,
                stats.evolution_stage,
                stats.quality_label,
            ]
        )
    return rows


RESULT_COLUMNS = ["Key", "Role", "Seed", "Mass (M☉)", "Class", "Stage", "Quality"]


def metric_rows(result: GenerationResult) -> list[list[str]]:
    return [[name, format_value(value)] for name, value in result.statistics.metrics.items()]


def show_results(out: Output, title: str, results: list[GenerationResult]) -> None:
    """Summary table in human mode, full derived results in JSON mode."""
    if out.json_mode:
        out.set_data("objects", [r.to_dict() for r in results])
    else:
        out.table(title, RESULT_COLUMNS, result_rows(results))
