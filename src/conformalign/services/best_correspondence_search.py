"""Service selecting the correspondence with the lowest RMSD."""

import logging
from typing import Hashable, List, Optional, Sequence

import numpy as np
from tqdm import tqdm

from ..config import AlignmentConfig
from ..domain.exceptions import DimensionMismatch
from ..domain.implementations.rmsd_evaluator import (
    paired_positions,
    rms_from_ssr,
    score_correspondence,
)
from ..domain.implementations.svd_point_aligner import align_points
from ..domain.models.alignment_result import AlignmentResult, Correspondence
from ..domain.models.molecular_graph import MolecularGraph
from .correspondence_provider import AtomMap, CorrespondenceProvider


def _check_weights(
    weights: Optional[Sequence[float]], candidates: List[Correspondence]
) -> None:
    if weights is None:
        return
    for correspondence in candidates:
        if len(weights) != len(correspondence):
            raise DimensionMismatch(
                f"Got {len(weights)} weights for a correspondence of "
                f"length {len(correspondence)}"
            )


class BestCorrespondenceSearch:
    """Superposes a probe conformation onto a reference over several correspondences.

    Candidates are scored in the provider's order and the first one reaching
    the minimum RMS wins. Only the winning transform is ever applied to the
    probe, and nothing is applied when a call fails.
    """

    def __init__(
        self,
        provider: Optional[CorrespondenceProvider] = None,
        config: Optional[AlignmentConfig] = None,
    ):
        self.provider = provider or CorrespondenceProvider()
        self.config = config or AlignmentConfig()
        self.logger = logging.getLogger(__name__)

    def best_alignment(
        self,
        probe: MolecularGraph,
        reference: MolecularGraph,
        probe_conf_id: Optional[Hashable] = None,
        ref_conf_id: Optional[Hashable] = None,
        atom_map: Optional[AtomMap] = None,
        weights: Optional[Sequence[float]] = None,
        reflect: Optional[bool] = None,
        max_iterations: Optional[int] = None,
        max_matches: Optional[int] = None,
        symmetrize: Optional[bool] = None,
    ) -> AlignmentResult:
        """
        Find the best superposition without moving the probe.

        Args:
            probe: Structure to be moved
            reference: Fixed structure
            probe_conf_id: Probe conformation, first stored if None
            ref_conf_id: Reference conformation, first stored if None
            atom_map: Explicit correspondence(s); the oracle is used if None
            weights: Per-pair weights applied to every candidate
            reflect: Allow mirror images
            max_iterations: Passed through to the aligner
            max_matches: Cap on oracle matches
            symmetrize: Relax terminal O/N groups before matching

        Returns:
            AlignmentResult of the winning correspondence

        Raises:
            NoCorrespondenceFound: If there are no candidates
            DimensionMismatch: If the weights do not fit the candidates
            InvalidConformationId: If a conformation id is unknown
        """
        reflect = self.config.reflect if reflect is None else reflect
        max_iterations = (
            self.config.max_iterations if max_iterations is None else max_iterations
        )
        probe_coords = probe.get_coordinates(probe_conf_id)
        ref_coords = reference.get_coordinates(ref_conf_id)

        candidates = self.provider.candidates(
            probe,
            reference,
            atom_map=atom_map,
            max_matches=self.config.max_matches if max_matches is None else max_matches,
            symmetrize=self.config.symmetrize if symmetrize is None else symmetrize,
        )
        _check_weights(weights, candidates)

        best: Optional[AlignmentResult] = None
        for correspondence in tqdm(
            candidates,
            desc="Scoring correspondences",
            disable=not self.config.show_progress,
        ):
            result = self._align_correspondence(
                probe_coords, ref_coords, correspondence, weights, reflect, max_iterations
            )
            self.logger.debug(f"Candidate RMS {result.rmsd:.6f}")
            if best is None or result.rmsd < best.rmsd:
                best = result

        self.logger.info(
            f"Best RMS {best.rmsd:.4f} over {len(candidates)} correspondences"
        )
        return best

    def align_and_score(
        self,
        probe: MolecularGraph,
        reference: MolecularGraph,
        probe_conf_id: Optional[Hashable] = None,
        ref_conf_id: Optional[Hashable] = None,
        **kwargs,
    ) -> float:
        """
        Move the probe conformation onto its best superposition.

        Accepts the keyword arguments of :meth:`best_alignment`.

        Returns:
            The lowest RMS over all candidate correspondences
        """
        best = self.best_alignment(
            probe, reference, probe_conf_id=probe_conf_id, ref_conf_id=ref_conf_id, **kwargs
        )
        probe.get_conformation(probe_conf_id).apply_transform(best.transform)
        return best.rmsd

    def score_only(
        self,
        probe: MolecularGraph,
        reference: MolecularGraph,
        probe_conf_id: Optional[Hashable] = None,
        ref_conf_id: Optional[Hashable] = None,
        atom_map: Optional[AtomMap] = None,
        weights: Optional[Sequence[float]] = None,
        max_matches: Optional[int] = None,
        symmetrize: Optional[bool] = None,
    ) -> float:
        """
        Lowest in-place RMS over the candidates; no superposition is performed.

        Neither structure is modified.
        """
        probe_coords = probe.get_coordinates(probe_conf_id)
        ref_coords = reference.get_coordinates(ref_conf_id)

        candidates = self.provider.candidates(
            probe,
            reference,
            atom_map=atom_map,
            max_matches=self.config.max_matches if max_matches is None else max_matches,
            symmetrize=self.config.symmetrize if symmetrize is None else symmetrize,
        )
        _check_weights(weights, candidates)

        best_rms = np.inf
        for correspondence in candidates:
            rms = score_correspondence(probe_coords, ref_coords, correspondence, weights)
            if rms < best_rms:
                best_rms = rms
        return float(best_rms)

    def get_alignment_transform(
        self,
        probe: MolecularGraph,
        reference: MolecularGraph,
        probe_conf_id: Optional[Hashable] = None,
        ref_conf_id: Optional[Hashable] = None,
        atom_map: Optional[Correspondence] = None,
        weights: Optional[Sequence[float]] = None,
        reflect: Optional[bool] = None,
        max_iterations: Optional[int] = None,
    ) -> AlignmentResult:
        """Superpose on a single correspondence (explicit or first match) without moving anything."""
        probe_coords = probe.get_coordinates(probe_conf_id)
        ref_coords = reference.get_coordinates(ref_conf_id)

        correspondence = self.provider.first_match(probe, reference, atom_map)
        _check_weights(weights, [correspondence])
        return self._align_correspondence(
            probe_coords,
            ref_coords,
            correspondence,
            weights,
            self.config.reflect if reflect is None else reflect,
            self.config.max_iterations if max_iterations is None else max_iterations,
        )

    def align_molecule(
        self,
        probe: MolecularGraph,
        reference: MolecularGraph,
        probe_conf_id: Optional[Hashable] = None,
        ref_conf_id: Optional[Hashable] = None,
        **kwargs,
    ) -> float:
        """Superpose on a single correspondence and move the probe; returns the RMS."""
        result = self.get_alignment_transform(
            probe, reference, probe_conf_id=probe_conf_id, ref_conf_id=ref_conf_id, **kwargs
        )
        probe.get_conformation(probe_conf_id).apply_transform(result.transform)
        return result.rmsd

    def _align_correspondence(
        self,
        probe_coords: np.ndarray,
        ref_coords: np.ndarray,
        correspondence: Correspondence,
        weights: Optional[Sequence[float]],
        reflect: bool,
        max_iterations: int,
    ) -> AlignmentResult:
        probe_points, ref_points = paired_positions(
            probe_coords, ref_coords, correspondence
        )
        transform, ssr = align_points(
            ref_points,
            probe_points,
            weights=weights,
            reflect=reflect,
            max_iterations=max_iterations,
        )
        return AlignmentResult(
            rmsd=rms_from_ssr(ssr, len(correspondence)),
            ssr=ssr,
            transform=transform,
            correspondence=correspondence,
        )
