"""
Pure layout functions for graph visualisations on a normalised 0-100 plane.

Positions are functions of (count, slot index) only, so the same input always
yields the same layout and nothing here caps how many slots a caller may ask for.
"""

import math

SPREAD_START = 10.0
SPREAD_WIDTH = 80.0
STAGGER_OFFSET = 6.0
STAGGER_MIN_COUNT = 5

DIRECTOR_COLUMNS = (12.0, 88.0)
DIRECTOR_FIRST_ROW_Y = 35.0
DIRECTOR_ROW_SPACING = 25.0

RING_RADIUS = 30.0


def band_position(index: int, count: int, band_y: float) -> tuple[float, float]:
    """Evenly spread ``count`` slots across 10-90% of the width at ``band_y``.

    Odd slots drop by a small offset once the band gets crowded, so adjacent
    labels do not overlap.
    """
    if count <= 0:
        raise ValueError("count must be positive")
    step = SPREAD_WIDTH / count
    x = SPREAD_START + step * index + step / 2
    y = band_y
    if count >= STAGGER_MIN_COUNT and index % 2 == 1:
        y += STAGGER_OFFSET
    return round(x, 4), round(y, 4)


def director_position(slot: int) -> tuple[float, float]:
    """Side slots: even slots on the left column, odd slots on the right."""
    x = DIRECTOR_COLUMNS[slot % 2]
    y = DIRECTOR_FIRST_ROW_Y + DIRECTOR_ROW_SPACING * (slot // 2)
    return x, y


def radial_position(
    index: int, count: int, center: tuple[float, float] = (50.0, 50.0)
) -> tuple[float, float]:
    """Place slot ``index`` of ``count`` on a ring, starting at 12 o'clock."""
    if count <= 0:
        raise ValueError("count must be positive")
    angle = -math.pi / 2 + 2 * math.pi * index / count
    x = center[0] + RING_RADIUS * math.cos(angle)
    y = center[1] + RING_RADIUS * math.sin(angle)
    return round(x, 4), round(y, 4)
