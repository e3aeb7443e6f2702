"""Services combining correspondence search and superposition."""

from .correspondence_provider import CorrespondenceProvider
from .best_correspondence_search import BestCorrespondenceSearch
from .multi_conformer_aligner import MultiConformerAligner

__all__ = [
    "CorrespondenceProvider",
    "BestCorrespondenceSearch",
    "MultiConformerAligner",
]
