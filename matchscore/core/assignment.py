"""
Assignment types: a pairing of an actual (target) id with a predicted id.

Immutable variants are plain values; mutable variants can be updated in
place when re-used in a tight loop. All variants order by distance.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, TypeVar


class AssignmentLike(Protocol):
    target_id: int
    predicted_id: int
    distance: float


class FractionalAssignmentLike(AssignmentLike, Protocol):
    score: float


class _DistanceOrdering:
    """Mixin providing ascending ordering on distance"""
    __slots__ = ()

    def __lt__(self, other: AssignmentLike):
        return self.distance < other.distance

    def __le__(self, other: AssignmentLike):
        return self.distance <= other.distance

    def __gt__(self, other: AssignmentLike):
        return self.distance > other.distance

    def __ge__(self, other: AssignmentLike):
        return self.distance >= other.distance


@dataclass(frozen=True, slots=True, order=False)
class Assignment(_DistanceOrdering):
    """
    Immutable assignment of a target to a prediction.

    Attributes:
        target_id: Id of the actual item
        predicted_id: Id of the predicted item
        distance: Distance (or rank) of the pairing; lower is better
    """
    target_id: int
    predicted_id: int
    distance: float


@dataclass(slots=True, eq=False)
class MutableAssignment(_DistanceOrdering):
    """Assignment whose fields can be updated in place"""
    target_id: int
    predicted_id: int
    distance: float


@dataclass(frozen=True, slots=True)
class FractionalAssignment(_DistanceOrdering):
    """
    Immutable assignment carrying a fractional match score.

    Attributes:
        target_id: Id of the actual item
        predicted_id: Id of the predicted item
        distance: Distance (or rank) of the pairing; lower is better
        score: Fraction of a true positive this pairing is worth
    """
    target_id: int
    predicted_id: int
    distance: float
    score: float = 1.0


@dataclass(slots=True, eq=False)
class MutableFractionalAssignment(_DistanceOrdering):
    """Fractional assignment whose fields can be updated in place"""
    target_id: int
    predicted_id: int
    distance: float
    score: float = 1.0


A = TypeVar("A", bound=AssignmentLike)


def _distance(assignment: AssignmentLike) -> float:
    return assignment.distance


def sort_assignments(assignments: list[A]) -> list[A]:
    """
    Sort assignments in place, ascending by distance.

    The sort is stable: assignments with equal distance keep their
    input order.

    Returns:
        The same list, for chaining
    """
    assignments.sort(key=_distance)
    return assignments
