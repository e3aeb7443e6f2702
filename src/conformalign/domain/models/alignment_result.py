"""Domain models for superposition transforms and alignment results."""

from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np

Correspondence = List[Tuple[int, int]]


@dataclass
class Transform:
    """Rigid transform ``x' = R x + t``; ``R`` may be improper when reflecting."""

    rotation: np.ndarray = field(default_factory=lambda: np.eye(3))
    translation: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def apply(self, coords: np.ndarray) -> np.ndarray:
        """Transform a single point or an ``(n, 3)`` array of points."""
        return np.dot(coords, self.rotation.T) + self.translation

    def is_proper(self) -> bool:
        return bool(np.linalg.det(self.rotation) > 0)

    def as_matrix(self) -> np.ndarray:
        """Return the 4x4 homogeneous matrix."""
        matrix = np.eye(4)
        matrix[:3, :3] = self.rotation
        matrix[:3, 3] = self.translation
        return matrix


@dataclass
class AlignmentResult:
    """Contains results from superposing one correspondence."""

    rmsd: float
    ssr: float
    transform: Transform
    correspondence: Correspondence

    @property
    def matched_atoms(self) -> int:
        return len(self.correspondence)
