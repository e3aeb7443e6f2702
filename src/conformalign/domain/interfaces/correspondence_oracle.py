"""Interface for substructure matching engines."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

from ...config import DEFAULT_MAX_MATCHES
from ..models.alignment_result import Correspondence
from ..models.molecular_graph import MolecularGraph


@dataclass(frozen=True)
class MatchOptions:
    """Flags forwarded to the matching engine."""

    allow_recursive_patterns: bool = True
    use_stereochemistry: bool = False
    allow_query_vs_query_matches: bool = False
    uniquify: bool = False
    max_matches: int = DEFAULT_MAX_MATCHES


class CorrespondenceOracle(ABC):
    """Abstract base class for substructure matching engines."""

    @abstractmethod
    def match(
        self, reference: MolecularGraph, probe: MolecularGraph, options: MatchOptions
    ) -> List[Correspondence]:
        """
        Find embeddings of the probe structure in the reference structure.

        Args:
            reference: Structure searched for the probe
            probe: Query structure; may carry SINGLE_OR_DOUBLE query bonds
            options: Matching flags

        Returns:
            List of correspondences, each a list of (probe_index, ref_index)
            pairs; empty when nothing matches
        """
        pass
