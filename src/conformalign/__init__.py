"""Best-fit rigid superposition and RMSD of molecular conformations."""

from .config import AlignmentConfig
from .domain.exceptions import (
    AlignmentError,
    DimensionMismatch,
    InvalidConformationId,
    NoCorrespondenceFound,
)
from .domain import (
    CorrespondenceOracle,
    MatchOptions,
    NetworkXIsomorphismOracle,
    RDKitSubstructureOracle,
)
from .domain.implementations.rmsd_evaluator import score_correspondence
from .domain.implementations.svd_point_aligner import align_points
from .domain.models import (
    AlignmentResult,
    Atom,
    Bond,
    BondType,
    Conformation,
    MolecularGraph,
    Transform,
)
from .services import (
    BestCorrespondenceSearch,
    CorrespondenceProvider,
    MultiConformerAligner,
)

__all__ = [
    "AlignmentConfig",
    "AlignmentError",
    "DimensionMismatch",
    "InvalidConformationId",
    "NoCorrespondenceFound",
    "CorrespondenceOracle",
    "MatchOptions",
    "NetworkXIsomorphismOracle",
    "RDKitSubstructureOracle",
    "score_correspondence",
    "align_points",
    "AlignmentResult",
    "Atom",
    "Bond",
    "BondType",
    "Conformation",
    "MolecularGraph",
    "Transform",
    "BestCorrespondenceSearch",
    "CorrespondenceProvider",
    "MultiConformerAligner",
]
