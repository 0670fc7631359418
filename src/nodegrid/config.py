"""Centralized configuration for nodegrid."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class LayoutConfig:
    """Configuration for the layout pipeline."""

    spacing_x: float = 50.0
    spacing_y: float = 80.0
    island_spacing: float = 80.0
    force: bool = False
    default_width: float = 100.0
    default_height: float = 50.0
    sweep_limit_factor: int = 4
    align_columns: bool = True
    grid_column_width: float = 200.0
    grid_row_height: float = 100.0
    grid_island_spacing: float = 150.0
    engine: str = "sugiyama"
