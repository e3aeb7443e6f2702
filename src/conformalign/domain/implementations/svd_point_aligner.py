"""Closed-form weighted rigid superposition of two point sets."""

from typing import Optional, Sequence, Tuple

import numpy as np

from ...config import DEFAULT_MAX_ITERATIONS
from ..exceptions import DimensionMismatch
from ..models.alignment_result import Transform
from .rmsd_evaluator import as_weights


def align_points(
    ref_points: np.ndarray,
    probe_points: np.ndarray,
    weights: Optional[Sequence[float]] = None,
    reflect: bool = False,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> Tuple[Transform, float]:
    """
    Find the rigid transform that best moves ``probe_points`` onto ``ref_points``.

    Minimizes ``sum(w_i * |R p_i + t - q_i|^2)`` with the SVD of the weighted
    cross-covariance matrix.

    Args:
        ref_points: (n, 3) reference coordinates
        probe_points: (n, 3) probe coordinates, paired row by row
        weights: Optional per-point weights, all ones when omitted
        reflect: Allow an improper rotation (mirror image)
        max_iterations: Accepted for interface compatibility; the closed-form
            solution does not iterate

    Returns:
        Tuple of (Transform, weighted sum of squared residuals)

    Raises:
        DimensionMismatch: If point or weight counts disagree
        ValueError: If the point sets are empty or the weights are invalid
    """
    ref = np.asarray(ref_points, dtype=np.float64).reshape(-1, 3)
    probe = np.asarray(probe_points, dtype=np.float64).reshape(-1, 3)
    if len(ref) != len(probe):
        raise DimensionMismatch(
            f"Reference has {len(ref)} points, probe has {len(probe)}"
        )
    if len(ref) == 0:
        raise ValueError("Cannot align empty point sets")
    w = as_weights(weights, len(ref))

    if len(ref) == 1:
        return Transform(translation=ref[0] - probe[0]), 0.0

    # Weighted centroids
    w_sum = w.sum()
    ref_center = np.dot(w, ref) / w_sum
    probe_center = np.dot(w, probe) / w_sum

    ref_centered = ref - ref_center
    probe_centered = probe - probe_center

    # Cross-covariance H = sum w_i p_i q_i^T
    covariance = np.dot((probe_centered * w[:, np.newaxis]).T, ref_centered)

    U, S, Vt = np.linalg.svd(covariance)
    V = Vt.T

    if reflect:
        d = 1.0
    else:
        d = 1.0 if np.linalg.det(np.dot(V, U.T)) >= 0 else -1.0

    rotation = np.dot(V * np.array([1.0, 1.0, d]), U.T)
    translation = ref_center - np.dot(rotation, probe_center)

    ssr = (
        np.dot(w, np.sum(probe_centered**2, axis=1))
        + np.dot(w, np.sum(ref_centered**2, axis=1))
        - 2.0 * (S[0] + S[1] + d * S[2])
    )

    return Transform(rotation=rotation, translation=translation), max(float(ssr), 0.0)
