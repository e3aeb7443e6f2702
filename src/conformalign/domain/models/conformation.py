#!/usr/bin/env python3
# src/conformalign/domain/models/conformation.py

"""
Domain model for one 3-D coordinate assignment of a structure.
"""

from typing import Hashable, Sequence

import numpy as np

from .alignment_result import Transform


class Conformation:
    """Ordered, index-addressable coordinates of every atom in a structure.

    Coordinates are held as an ``(n_atoms, 3)`` float64 array and are
    modified in place by :meth:`apply_transform`.
    """

    def __init__(self, conf_id: Hashable, coordinates: Sequence[Sequence[float]]):
        coords = np.array(coordinates, dtype=np.float64)
        if coords.ndim != 2 or coords.shape[1] != 3:
            raise ValueError(
                f"Expected coordinates of shape (n, 3), got {coords.shape}"
            )
        self.conf_id = conf_id
        self._coordinates = coords

    def __len__(self) -> int:
        return len(self._coordinates)

    def __getitem__(self, index: int) -> np.ndarray:
        return self._coordinates[index].copy()

    @property
    def num_atoms(self) -> int:
        return len(self._coordinates)

    def get_coordinates(self) -> np.ndarray:
        """Return a copy of all coordinates."""
        return self._coordinates.copy()

    def get_positions(self, atom_ids: Sequence[int]) -> np.ndarray:
        """Return a copy of the coordinates for the given atom indices."""
        return self._coordinates[list(atom_ids)]

    def set_coordinates(self, coordinates: Sequence[Sequence[float]]) -> None:
        coords = np.asarray(coordinates, dtype=np.float64)
        if coords.shape != self._coordinates.shape:
            raise ValueError(
                f"Shape mismatch: {coords.shape} vs {self._coordinates.shape}"
            )
        self._coordinates[:] = coords

    def apply_transform(self, transform: Transform) -> None:
        """Move every atom by ``transform`` in place."""
        self._coordinates[:] = transform.apply(self._coordinates)

    def __repr__(self) -> str:
        return f"Conformation(conf_id={self.conf_id!r}, num_atoms={self.num_atoms})"
