"""RMSD of a fixed correspondence between two coordinate sets."""

import math
from typing import Optional, Sequence

import numpy as np

from ..exceptions import DimensionMismatch, NoCorrespondenceFound
from ..models.alignment_result import Correspondence


def rms_from_ssr(ssr: float, n_points: int) -> float:
    """Convert a sum of squared residuals over ``n_points`` into an RMS."""
    return math.sqrt(ssr / n_points)


def as_weights(weights: Optional[Sequence[float]], n_points: int) -> np.ndarray:
    """
    Return ``weights`` as an array, or all ones when omitted.

    Raises:
        DimensionMismatch: If the length differs from ``n_points``
        ValueError: If a weight is negative or none is positive
    """
    if weights is None:
        return np.ones(n_points)
    w = np.asarray(weights, dtype=np.float64).reshape(-1)
    if len(w) != n_points:
        raise DimensionMismatch(f"Got {len(w)} weights for {n_points} points")
    if np.any(w < 0):
        raise ValueError("Weights must be non-negative")
    if not np.any(w > 0):
        raise ValueError("At least one weight must be positive")
    return w


def paired_positions(
    probe_coords: np.ndarray, ref_coords: np.ndarray, correspondence: Correspondence
):
    """Gather (probe_points, ref_points) rows in correspondence order."""
    if not correspondence:
        raise NoCorrespondenceFound("Correspondence is empty")
    probe_idx = [p for p, _ in correspondence]
    ref_idx = [r for _, r in correspondence]
    return (
        np.asarray(probe_coords, dtype=np.float64)[probe_idx],
        np.asarray(ref_coords, dtype=np.float64)[ref_idx],
    )


def score_correspondence(
    probe_coords: np.ndarray,
    ref_coords: np.ndarray,
    correspondence: Correspondence,
    weights: Optional[Sequence[float]] = None,
) -> float:
    """
    RMS deviation of paired atoms, without moving either structure.

    Args:
        probe_coords: (n_probe, 3) probe coordinates
        ref_coords: (n_ref, 3) reference coordinates
        correspondence: (probe_index, ref_index) pairs
        weights: Optional per-pair weights

    Returns:
        sqrt(sum(w_i * |p_i - q_i|^2) / n)
    """
    probe_points, ref_points = paired_positions(probe_coords, ref_coords, correspondence)
    n_points = len(correspondence)
    w = as_weights(weights, n_points)

    ssr = float(np.dot(w, np.sum((probe_points - ref_points) ** 2, axis=1)))
    return rms_from_ssr(ssr, n_points)
