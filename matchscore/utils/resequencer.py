"""
Renumbering of arbitrary integer ids into a dense 0-based sequence
"""
from __future__ import annotations

from typing import Optional, Sequence

import numpy as np


class Resequencer:
    """
    Maps integer ids to 0..k-1 in order of first appearance.

    Example:
        >>> r = Resequencer()
        >>> r.renumber([10, -3, 10, 7])
        array([0, 1, 0, 2])
        >>> r.number_of_ids
        3
    """

    def __init__(self, cache_map: bool = False):
        """
        Args:
            cache_map: Keep the mapping from the last call to renumber()
                so it can be retrieved with get_map()
        """
        self.cache_map = cache_map
        self._map: Optional[dict[int, int]] = None
        self.number_of_ids = 0

    def renumber(self, ids: Sequence[int] | np.ndarray) -> np.ndarray:
        """
        Renumber the ids.

        Args:
            ids: Integer ids (any range, may be negative)

        Returns:
            int64 array of the same length with ids in [0, number_of_ids)
        """
        mapping: dict[int, int] = {}
        values = np.asarray(ids, dtype=np.int64)
        out = np.empty(values.shape[0], dtype=np.int64)
        for i, value in enumerate(values.tolist()):
            new_id = mapping.get(value)
            if new_id is None:
                new_id = len(mapping)
                mapping[value] = new_id
            out[i] = new_id

        self.number_of_ids = len(mapping)
        self._map = mapping if self.cache_map else None
        return out

    def get_map(self) -> dict[int, int]:
        """
        Get the old -> new id mapping from the last renumber() call.

        Raises:
            ValueError: If cache_map is off or renumber() was not called
        """
        if self._map is None:
            raise ValueError(
                "No id map available; set cache_map=True and call renumber()"
            )
        return dict(self._map)
