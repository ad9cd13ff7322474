"""CLI commands for cosmogen."""

from . import (
    catalog,
    generate,
    composite,
    records,
    config_cmd,
)

__all__ = [
    "catalog",
    "generate",
    "composite",
    "records",
    "config_cmd",
]
