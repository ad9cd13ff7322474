"""Shared utilities."""

from .callbacks import ItemProgressCallback, StepProgressCallback

__all__ = ["ItemProgressCallback", "StepProgressCallback"]
