"""
Point types consumed by the match calculators.

Anything exposing ``x``, ``y`` and ``z`` attributes satisfies the
``Coordinate`` protocol; ``BasePoint`` is the concrete implementation
used throughout the package.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class Coordinate(Protocol):
    """Read-only 3D coordinate"""
    x: float
    y: float
    z: float


def distance_xy_squared(a: Coordinate, b: Coordinate) -> float:
    dx = a.x - b.x
    dy = a.y - b.y
    return dx * dx + dy * dy


def distance_xyz_squared(a: Coordinate, b: Coordinate) -> float:
    dx = a.x - b.x
    dy = a.y - b.y
    dz = a.z - b.z
    return dx * dx + dy * dy + dz * dz


@dataclass(frozen=True, slots=True)
class BasePoint:
    """
    Immutable point in 2D/3D space.

    Attributes:
        x: X coordinate
        y: Y coordinate
        z: Z coordinate (default 0.0)
    """
    x: float
    y: float
    z: float = 0.0

    def distance_xy(self, other: Coordinate) -> float:
        return math.sqrt(distance_xy_squared(self, other))

    def distance_xyz(self, other: Coordinate) -> float:
        return math.sqrt(distance_xyz_squared(self, other))

    def distance_xy_squared(self, other: Coordinate) -> float:
        return distance_xy_squared(self, other)

    def distance_xyz_squared(self, other: Coordinate) -> float:
        return distance_xyz_squared(self, other)


@dataclass(frozen=True, slots=True)
class Pulse(BasePoint):
    """
    A point that is visible over the inclusive frame interval [start, end].

    Attributes:
        start: First frame
        end: Last frame (must be >= start)

    Raises:
        ValueError: If end < start
    """
    start: int = 0
    end: int = 0

    def __post_init__(self):
        if self.end < self.start:
            raise ValueError(
                f"Pulse end ({self.end}) is before start ({self.start})"
            )

    @property
    def time_points(self) -> int:
        """Number of frames covered by the pulse"""
        return self.end - self.start + 1

    def overlap(self, other: Pulse) -> int:
        """
        Count the frames shared with another pulse.

        Returns:
            Number of overlapping frames (0 if the intervals are disjoint)
        """
        if self.end < other.start or other.end < self.start:
            return 0
        return min(self.end, other.end) - max(self.start, other.start) + 1

    def score(self, other: Pulse, d2: float, dt: float) -> float:
        """
        Score the match against another pulse.

        The overlap is weighted by a distance factor that is 1 at zero
        distance and 0.5 when the squared distance equals dt.

        Args:
            other: Pulse to compare
            d2: Squared distance between the two pulses
            dt: Squared distance at which the weight is halved

        Returns:
            overlap * dt / (d2 + dt), or NaN when d2 and dt are both 0
        """
        if d2 + dt == 0:
            return math.nan
        return self.overlap(other) * (dt / (d2 + dt))


@dataclass(frozen=True, slots=True)
class PointPair:
    """
    A matched pair of coordinates.

    Either side may be None, e.g. when a pair records an unmatched point.
    """
    point1: Optional[Coordinate]
    point2: Optional[Coordinate]

    def distance_xy(self) -> float:
        """XY distance between the points, or NaN if either is missing"""
        if self.point1 is None or self.point2 is None:
            return math.nan
        return math.sqrt(distance_xy_squared(self.point1, self.point2))

    def distance_xyz(self) -> float:
        """XYZ distance between the points, or NaN if either is missing"""
        if self.point1 is None or self.point2 is None:
            return math.nan
        return math.sqrt(distance_xyz_squared(self.point1, self.point2))
