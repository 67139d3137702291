"""
Bipartite matching algorithms
"""

from matchscore.core.assignment import (
    Assignment,
    MutableAssignment,
    FractionalAssignment,
    MutableFractionalAssignment,
    sort_assignments,
)
from matchscore.core.graphs import extract_subgraphs
from matchscore.core.hopcroft_karp import HopcroftKarpMatching
from matchscore.core.kuhn_munkres import kuhn_munkres_assignment
from matchscore.core.matchings import (
    maximum_cardinality,
    nearest_neighbour,
    minimum_distance,
    MAX_COST,
    NO_ASSIGNMENT,
)

__all__ = [
    "Assignment",
    "MutableAssignment",
    "FractionalAssignment",
    "MutableFractionalAssignment",
    "sort_assignments",
    "extract_subgraphs",
    "HopcroftKarpMatching",
    "kuhn_munkres_assignment",
    "maximum_cardinality",
    "nearest_neighbour",
    "minimum_distance",
    "MAX_COST",
    "NO_ASSIGNMENT",
]
