"""Central numerical tolerances and score sentinels.

This module centralizes tiny numeric thresholds used across the codebase so
they can be tuned consistently and referenced without scattering literals.
"""
from __future__ import annotations

import math

# Geometry tolerances
EPS_AREA: float = 1e-12           # minimum positive (absolute) triangle area
EPS_ZERO_AREA: float = 1e-12      # twice-area below which a projected triangle counts as empty
EPS_NORMAL: float = 0.0           # cross-product length at or below which a normal is undefined

# Score sentinels (min-heap convention: negative means flipping helps)
NO_IMPROVEMENT: float = math.inf  # never flip
ALWAYS_ROTATE: float = -math.inf  # current diagonal is degenerate, flip first

__all__ = [
    'EPS_AREA',
    'EPS_ZERO_AREA',
    'EPS_NORMAL',
    'NO_IMPROVEMENT',
    'ALWAYS_ROTATE',
]
