"""Service aligning the conformations of one structure onto a reference conformation."""

import logging
from typing import Hashable, List, Optional, Sequence

from tqdm import tqdm

from ..config import AlignmentConfig
from ..domain.exceptions import DimensionMismatch
from ..domain.implementations.rmsd_evaluator import rms_from_ssr
from ..domain.implementations.svd_point_aligner import align_points
from ..domain.models.molecular_graph import MolecularGraph


class MultiConformerAligner:
    """Superposes every conformation of a structure onto one of them."""

    def __init__(self, config: Optional[AlignmentConfig] = None):
        self.config = config or AlignmentConfig()
        self.logger = logging.getLogger(__name__)

    def align_conformers(
        self,
        graph: MolecularGraph,
        atom_ids: Optional[Sequence[int]] = None,
        conf_ids: Optional[Sequence[Hashable]] = None,
        weights: Optional[Sequence[float]] = None,
        reflect: Optional[bool] = None,
        max_iterations: Optional[int] = None,
        rms_list: Optional[List[float]] = None,
        show_progress: Optional[bool] = None,
    ) -> List[float]:
        """
        Align conformations in place onto a reference conformation.

        Args:
            graph: Structure whose conformations are moved
            atom_ids: Atoms used for the fit, all atoms if None
            conf_ids: Conformations to process; the first is the reference.
                All stored conformations, first as reference, if None
            weights: Per-atom weights over ``atom_ids``
            reflect: Allow mirror images
            max_iterations: Passed through to the aligner
            rms_list: If given, the RMS of every non-reference conformation
                is appended to it
            show_progress: Display a progress bar

        Returns:
            RMS of every non-reference conformation, in processing order

        Raises:
            InvalidConformationId: If a conformation id is unknown
            DimensionMismatch: If the weights do not fit the atom selection
        """
        rms_values: List[float] = []
        if graph.num_conformations() == 0:
            return rms_values

        reflect = self.config.reflect if reflect is None else reflect
        max_iterations = (
            self.config.max_iterations if max_iterations is None else max_iterations
        )
        show_progress = (
            self.config.show_progress if show_progress is None else show_progress
        )

        if conf_ids is not None and len(conf_ids) > 0:
            conf_ids = list(conf_ids)
        else:
            conf_ids = graph.conformation_ids()
        if atom_ids is None:
            atom_ids = list(range(graph.num_atoms))

        if weights is not None and len(weights) != len(atom_ids):
            raise DimensionMismatch(
                f"Got {len(weights)} weights for {len(atom_ids)} atoms"
            )

        # Resolve every id up front so a bad id leaves all conformations untouched
        conformations = [graph.get_conformation(conf_id) for conf_id in conf_ids]
        ref_points = conformations[0].get_positions(atom_ids)

        for conformation in tqdm(
            conformations[1:], desc="Aligning conformers", disable=not show_progress
        ):
            transform, ssr = align_points(
                ref_points,
                conformation.get_positions(atom_ids),
                weights=weights,
                reflect=reflect,
                max_iterations=max_iterations,
            )
            conformation.apply_transform(transform)
            rms = rms_from_ssr(ssr, len(atom_ids))
            rms_values.append(rms)
            self.logger.debug(f"Conformer {conformation.conf_id!r}: RMS {rms:.4f}")

        if rms_list is not None:
            rms_list.extend(rms_values)
        return rms_values
