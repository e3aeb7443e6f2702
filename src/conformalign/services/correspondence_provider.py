"""Service producing candidate atom correspondences between two structures."""

import logging
from typing import List, Optional, Sequence, Union

from ..config import DEFAULT_MAX_MATCHES, LARGE_MATCH_WARNING_THRESHOLD
from ..domain.exceptions import NoCorrespondenceFound
from ..domain.implementations.rdkit_substructure_oracle import RDKitSubstructureOracle
from ..domain.implementations.terminal_group_symmetrizer import (
    TerminalGroupSymmetrizer,
)
from ..domain.interfaces.correspondence_oracle import CorrespondenceOracle, MatchOptions
from ..domain.models.alignment_result import Correspondence
from ..domain.models.molecular_graph import MolecularGraph

AtomMap = Union[Correspondence, Sequence[Correspondence]]


def _is_map_list(atom_map: AtomMap) -> bool:
    first = atom_map[0]
    return len(first) == 0 or hasattr(first[0], "__len__")


class CorrespondenceProvider:
    """
    Yields candidate correspondences for a probe/reference pair.

    Explicit maps from the caller are used as given; otherwise the oracle is
    asked for every embedding of the (optionally symmetrized) probe in the
    reference. Candidates keep the oracle's enumeration order.
    """

    def __init__(
        self,
        oracle: Optional[CorrespondenceOracle] = None,
        symmetrizer: Optional[TerminalGroupSymmetrizer] = None,
        warning_threshold: int = LARGE_MATCH_WARNING_THRESHOLD,
    ):
        self.oracle = oracle or RDKitSubstructureOracle()
        self.symmetrizer = symmetrizer or TerminalGroupSymmetrizer()
        self.warning_threshold = warning_threshold
        self.logger = logging.getLogger(__name__)

    def candidates(
        self,
        probe: MolecularGraph,
        reference: MolecularGraph,
        atom_map: Optional[AtomMap] = None,
        max_matches: int = DEFAULT_MAX_MATCHES,
        symmetrize: bool = True,
    ) -> List[Correspondence]:
        """
        Return one or more correspondences of (probe_index, ref_index) pairs.

        Args:
            probe: Structure to be moved
            reference: Fixed structure
            atom_map: A correspondence, or a list of them, to use as-is
            max_matches: Cap on the number of oracle matches
            symmetrize: Relax terminal O/N groups before matching

        Raises:
            NoCorrespondenceFound: If no correspondence is available
        """
        if atom_map is not None:
            return self._explicit(atom_map, probe, reference)

        query = self.symmetrizer.symmetrize(probe) if symmetrize else probe
        options = MatchOptions(
            allow_recursive_patterns=True,
            use_stereochemistry=False,
            allow_query_vs_query_matches=False,
            uniquify=False,
            max_matches=max_matches,
        )
        return self._from_oracle(probe, reference, query, options)

    def first_match(
        self,
        probe: MolecularGraph,
        reference: MolecularGraph,
        atom_map: Optional[Correspondence] = None,
    ) -> Correspondence:
        """Return the explicit map, or the first unique oracle match without symmetrization."""
        if atom_map is not None:
            return self._explicit(atom_map, probe, reference)[0]

        options = MatchOptions(
            allow_recursive_patterns=True,
            use_stereochemistry=False,
            allow_query_vs_query_matches=True,
            uniquify=True,
            max_matches=1,
        )
        return self._from_oracle(probe, reference, probe, options)[0]

    def _explicit(
        self, atom_map: AtomMap, probe: MolecularGraph, reference: MolecularGraph
    ) -> List[Correspondence]:
        if len(atom_map) == 0:
            raise NoCorrespondenceFound("Explicit atom map is empty")
        maps = list(atom_map) if _is_map_list(atom_map) else [atom_map]
        correspondences = []
        for mapping in maps:
            if len(mapping) == 0:
                raise NoCorrespondenceFound("Explicit atom map is empty")
            correspondences.append(self._checked(mapping, probe, reference))
        return correspondences

    def _checked(
        self, mapping, probe: MolecularGraph, reference: MolecularGraph
    ) -> Correspondence:
        """Validate one explicit map against both structures."""
        correspondence = [(int(p), int(r)) for p, r in mapping]
        seen = set()
        for probe_idx, ref_idx in correspondence:
            if not 0 <= probe_idx < probe.num_atoms:
                raise ValueError(
                    f"Probe index {probe_idx} out of range for {probe.num_atoms} atoms"
                )
            if not 0 <= ref_idx < reference.num_atoms:
                raise ValueError(
                    f"Reference index {ref_idx} out of range for "
                    f"{reference.num_atoms} atoms"
                )
            if probe_idx in seen:
                raise ValueError(f"Probe index {probe_idx} is mapped more than once")
            seen.add(probe_idx)
        return correspondence

    def _from_oracle(
        self,
        probe: MolecularGraph,
        reference: MolecularGraph,
        query: MolecularGraph,
        options: MatchOptions,
    ) -> List[Correspondence]:
        matches = self.oracle.match(reference, query, options)
        if not matches:
            raise NoCorrespondenceFound(
                "No sub-structure match found between the reference and probe"
            )

        if len(matches) >= self.warning_threshold:
            self.logger.warning(
                f"{len(matches)} matches detected for molecule "
                f"{probe.name or '<unnamed>'}, "
                "this may lead to a performance slowdown"
            )
        else:
            self.logger.info(f"Found {len(matches)} candidate correspondences")
        return matches
