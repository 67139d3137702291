"""
Point types and numeric helpers
"""

from matchscore.utils.numeric import divide, limits
from matchscore.utils.points import Coordinate, BasePoint, Pulse, PointPair
from matchscore.utils.resequencer import Resequencer

__all__ = [
    "divide",
    "limits",
    "Coordinate",
    "BasePoint",
    "Pulse",
    "PointPair",
    "Resequencer",
]
