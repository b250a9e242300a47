"""Utility functions for TikzSchem."""

from tikzschem.utils.geometry import (
    point_to_segment_distance,
    points_coincide,
    snap_to_grid,
)

__all__ = ["point_to_segment_distance", "points_coincide", "snap_to_grid"]
