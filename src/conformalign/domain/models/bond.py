#!/usr/bin/env python3
# src/conformalign/domain/models/bond.py

"""
Domain model representing a chemical bond between atoms.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import FrozenSet


class BondType(Enum):
    """Enumeration of possible bond types."""

    SINGLE = auto()
    DOUBLE = auto()
    TRIPLE = auto()
    AROMATIC = auto()
    # Query type: matches either a single or a double bond
    SINGLE_OR_DOUBLE = auto()
    UNKNOWN = auto()

    def accepted_types(self) -> FrozenSet["BondType"]:
        """Concrete bond types this type matches when used in a query."""
        if self is BondType.SINGLE_OR_DOUBLE:
            return frozenset({BondType.SINGLE, BondType.DOUBLE})
        return frozenset({self})


@dataclass
class Bond:
    """Represents a chemical bond between two atoms."""

    atom1_id: int
    atom2_id: int
    bond_type: BondType = BondType.SINGLE

    def involves(self, atom_id: int) -> bool:
        return atom_id in (self.atom1_id, self.atom2_id)

    def other(self, atom_id: int) -> int:
        """Return the partner of ``atom_id`` in this bond."""
        return self.atom2_id if atom_id == self.atom1_id else self.atom1_id
