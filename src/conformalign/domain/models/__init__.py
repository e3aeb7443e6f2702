"""Domain models."""

from .atom import Atom
from .bond import Bond, BondType
from .conformation import Conformation
from .molecular_graph import MolecularGraph
from .alignment_result import AlignmentResult, Correspondence, Transform

__all__ = [
    "Atom",
    "Bond",
    "BondType",
    "Conformation",
    "MolecularGraph",
    "AlignmentResult",
    "Correspondence",
    "Transform",
]
