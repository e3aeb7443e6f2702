"""Domain models, interfaces and numerical kernels."""

from .models.molecular_graph import MolecularGraph
from .models.conformation import Conformation
from .models.alignment_result import AlignmentResult, Transform
from .interfaces.correspondence_oracle import CorrespondenceOracle, MatchOptions
from .implementations.networkx_isomorphism_oracle import NetworkXIsomorphismOracle
from .implementations.rdkit_substructure_oracle import RDKitSubstructureOracle
from .interfaces.conformation_store import ConformationStore

__all__ = [
    "MolecularGraph",
    "Conformation",
    "AlignmentResult",
    "Transform",
    "CorrespondenceOracle",
    "MatchOptions",
    "NetworkXIsomorphismOracle",
    "RDKitSubstructureOracle",
    "ConformationStore",
]
