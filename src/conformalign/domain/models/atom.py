#!/usr/bin/env python3
# src/conformalign/domain/models/atom.py

"""
Domain model representing a labeled atom in a molecular structure.
"""

from dataclasses import dataclass


@dataclass
class Atom:
    """Represents an atom; its position lives in each Conformation."""

    atom_id: int
    element: str
    formal_charge: int = 0
    atom_name: str = ""
