"""Relax match criteria for interchangeable terminal heteroatoms."""

import logging
import threading
from typing import Dict, List, Optional, Tuple

from rdkit import Chem

from ...config import SYMMETRIZATION_REPLACEMENTS, SYMMETRIZATION_SMARTS
from ...infrastructure.adapters.rdkit_adapter import to_rdkit_mol
from ..models.bond import BondType
from ..models.molecular_graph import MolecularGraph

logger = logging.getLogger(__name__)

_pattern: Optional[Chem.Mol] = None
_pattern_lock = threading.Lock()


def compile_pattern(pattern_text: str, substitutions: Dict[str, str]) -> Chem.Mol:
    """
    Compile a SMARTS pattern after applying text substitutions.

    Raises:
        ValueError: If RDKit cannot parse the pattern
    """
    query = Chem.MolFromSmarts(pattern_text, replacements=substitutions)
    if query is None:
        raise ValueError(f"Invalid SMARTS pattern: {pattern_text}")
    return query


def symmetrization_pattern() -> Chem.Mol:
    """Return the process-wide terminal-group pattern, compiling it on first use."""
    global _pattern
    if _pattern is None:
        with _pattern_lock:
            if _pattern is None:
                _pattern = compile_pattern(
                    SYMMETRIZATION_SMARTS, SYMMETRIZATION_REPLACEMENTS
                )
    return _pattern


class TerminalGroupSymmetrizer:
    """Makes terminal O/N pairs on a shared neighbor indistinguishable to matchers.

    Carboxylates, amidinium and similar groups are drawn with one single and
    one double bond (and often a charge on one end), so a matcher only finds
    the labeling given by the input atom order. Clearing the charge and turning
    the bond into SINGLE_OR_DOUBLE lets both labelings match.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def find_terminal_atoms(self, graph: MolecularGraph) -> List[Tuple[int, int]]:
        """Return (terminal_atom, neighbor) pairs matching the pattern."""
        mol = to_rdkit_mol(graph)
        matches = mol.GetSubstructMatches(symmetrization_pattern())
        return [(match[0], match[1]) for match in matches]

    def symmetrize(self, graph: MolecularGraph) -> MolecularGraph:
        """
        Return a symmetrized copy of ``graph``'s topology.

        The input graph is not modified and the copy has no conformations.
        """
        query = graph.copy_topology()
        matches = self.find_terminal_atoms(query)
        for terminal, neighbor in matches:
            query.atoms[terminal].formal_charge = 0
            bond = query.get_bond(terminal, neighbor)
            if bond is None:
                raise RuntimeError(
                    f"No bond between atoms {terminal} and {neighbor}"
                )
            bond.bond_type = BondType.SINGLE_OR_DOUBLE

        if matches:
            self.logger.debug(
                f"Symmetrized {len(matches)} terminal atoms in {graph.name or 'probe'}"
            )
        return query
