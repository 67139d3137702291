"""
Configuration for matching point sets with match_points()
"""
from __future__ import annotations

from dataclasses import dataclass

NEAREST_NEIGHBOUR = "nearest_neighbour"
MINIMUM_DISTANCE = "minimum_distance"
MAXIMUM_CARDINALITY = "maximum_cardinality"

STRATEGIES = (NEAREST_NEIGHBOUR, MINIMUM_DISTANCE, MAXIMUM_CARDINALITY)


@dataclass(slots=True)
class MatchConfig:
    """
    Settings for matching predicted points to actual points.

    Attributes:
        strategy: How pairs are chosen:
            - "nearest_neighbour": closest pairs first (fast, greedy)
            - "minimum_distance": smallest total distance
            - "maximum_cardinality": most pairs, regardless of distance
            Default: "nearest_neighbour"
        dimensions: Use the XY (2) or XYZ (3) distance
            Default: 2

    Raises:
        ValueError: If the strategy or dimensions are not recognised

    Example:
        >>> config = MatchConfig(strategy="minimum_distance", dimensions=3)
    """
    strategy: str = NEAREST_NEIGHBOUR
    dimensions: int = 2

    def __post_init__(self):
        if self.strategy not in STRATEGIES:
            raise ValueError(
                f"Unknown strategy '{self.strategy}'. "
                f"Expected one of: {', '.join(STRATEGIES)}"
            )
        if self.dimensions not in (2, 3):
            raise ValueError(f"dimensions must be 2 or 3, got {self.dimensions}")
