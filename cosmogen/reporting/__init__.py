"""Statistics reporting for generated objects."""

from .statistics import (
    build_report,
    classify_black_hole_mass,
    classify_galaxy_mass,
    classify_star_mass,
    quality_label,
)

__all__ = [
    "build_report",
    "classify_black_hole_mass",
    "classify_galaxy_mass",
    "classify_star_mass",
    "quality_label",
]
