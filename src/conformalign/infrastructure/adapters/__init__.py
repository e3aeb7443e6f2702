"""Adapters for external libraries."""

from .rdkit_adapter import from_rdkit_mol, to_rdkit_mol, write_conformations

__all__ = [
    "from_rdkit_mol",
    "to_rdkit_mol",
    "write_conformations",
]
