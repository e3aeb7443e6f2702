"""Interface for structures that own several conformations."""

from abc import ABC, abstractmethod
from typing import Hashable, List

from ..models.conformation import Conformation


class ConformationStore(ABC):
    """Abstract access to the conformations of one structure."""

    @abstractmethod
    def get_conformation(self, conf_id: Hashable) -> Conformation:
        """
        Retrieve a conformation by id.

        Raises:
            InvalidConformationId: If the id is not stored
        """
        pass

    @abstractmethod
    def num_conformations(self) -> int:
        """Number of stored conformations."""
        pass

    @abstractmethod
    def conformation_ids(self) -> List[Hashable]:
        """Conformation ids in insertion order."""
        pass
