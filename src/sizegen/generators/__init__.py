"""Batch draw generation with metric recording."""

from .draw_generator import DrawGenerator, distribution_name

__all__ = [
    "DrawGenerator",
    "distribution_name",
]
