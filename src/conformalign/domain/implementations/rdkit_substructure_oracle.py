"""Correspondence oracle backed by RDKit substructure matching."""

import logging
from typing import List

from rdkit import Chem

from ...infrastructure.adapters.rdkit_adapter import to_rdkit_mol
from ..interfaces.correspondence_oracle import CorrespondenceOracle, MatchOptions
from ..models.alignment_result import Correspondence
from ..models.molecular_graph import MolecularGraph


class RDKitSubstructureOracle(CorrespondenceOracle):
    """Finds embeddings of the probe in the reference with RDKit."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def match(
        self, reference: MolecularGraph, probe: MolecularGraph, options: MatchOptions
    ) -> List[Correspondence]:
        ref_mol = to_rdkit_mol(reference)
        probe_mol = to_rdkit_mol(probe)

        params = Chem.SubstructMatchParameters()
        params.recursionPossible = options.allow_recursive_patterns
        params.useChirality = options.use_stereochemistry
        params.useQueryQueryMatches = options.allow_query_vs_query_matches
        params.uniquify = options.uniquify
        params.maxMatches = options.max_matches

        matches = ref_mol.GetSubstructMatches(probe_mol, params)
        self.logger.debug(f"RDKit returned {len(matches)} matches")

        # match[i] is the reference atom matched by probe atom i
        return [list(enumerate(match)) for match in matches]
