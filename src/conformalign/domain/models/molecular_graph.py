#!/usr/bin/env python3
# src/conformalign/domain/models/molecular_graph.py

"""
Domain model representing a molecular structure as a graph with conformations.
"""

import copy
from collections import OrderedDict
from typing import Dict, Hashable, List, Optional, Sequence

import networkx as nx
import numpy as np

from ..exceptions import InvalidConformationId
from ..interfaces.conformation_store import ConformationStore
from .atom import Atom
from .bond import Bond
from .conformation import Conformation


class MolecularGraph(ConformationStore):
    """Graph representation of a molecular structure and its conformations."""

    def __init__(
        self,
        atoms: List[Atom],
        bonds: List[Bond],
        name: str = "",
        conformations: Optional[Sequence[Conformation]] = None,
    ):
        """
        Initialize a MolecularGraph.

        Args:
            atoms: List of Atom objects, atom_id equal to list position
            bonds: List of Bond objects
            name: Optional structure name used in log messages
            conformations: Optional initial conformations, kept in order
        """
        self.atoms = atoms
        self.bonds = bonds
        self.name = name
        self._conformations: Dict[Hashable, Conformation] = OrderedDict()
        for conformation in conformations or []:
            self.add_conformation(conformation)

    @property
    def num_atoms(self) -> int:
        return len(self.atoms)

    def add_conformation(self, conformation: Conformation) -> Hashable:
        """Store a conformation; ids must be unique within the structure."""
        if conformation.num_atoms != self.num_atoms:
            raise ValueError(
                f"Conformation has {conformation.num_atoms} atoms, "
                f"structure has {self.num_atoms}"
            )
        if conformation.conf_id in self._conformations:
            raise ValueError(f"Duplicate conformation id {conformation.conf_id!r}")
        self._conformations[conformation.conf_id] = conformation
        return conformation.conf_id

    def get_conformation(self, conf_id: Optional[Hashable] = None) -> Conformation:
        """Return the conformation with ``conf_id``, or the first one if None."""
        if conf_id is None:
            if not self._conformations:
                raise InvalidConformationId(conf_id)
            return next(iter(self._conformations.values()))
        try:
            return self._conformations[conf_id]
        except KeyError:
            raise InvalidConformationId(conf_id) from None

    def num_conformations(self) -> int:
        return len(self._conformations)

    def conformation_ids(self) -> List[Hashable]:
        return list(self._conformations)

    def get_coordinates(self, conf_id: Optional[Hashable] = None) -> np.ndarray:
        """Get coordinates of all atoms in a conformation.

        Returns:
            numpy array of shape (n_atoms, 3) containing xyz coordinates
        """
        return self.get_conformation(conf_id).get_coordinates()

    def get_bond(self, atom1_id: int, atom2_id: int) -> Optional[Bond]:
        for bond in self.bonds:
            if bond.involves(atom1_id) and bond.other(atom1_id) == atom2_id:
                return bond
        return None

    def copy_topology(self) -> "MolecularGraph":
        """Copy atoms and bonds without conformations, for use as a match query."""
        return MolecularGraph(
            copy.deepcopy(self.atoms), copy.deepcopy(self.bonds), name=self.name
        )

    def to_networkx(self) -> nx.Graph:
        """Convert to a NetworkX graph with element, charge and bond attributes."""
        G = nx.Graph()

        for atom in self.atoms:
            G.add_node(
                atom.atom_id,
                element=atom.element,
                formal_charge=atom.formal_charge,
                name=atom.atom_name,
            )

        for bond in self.bonds:
            G.add_edge(
                bond.atom1_id,
                bond.atom2_id,
                bond_type=bond.bond_type,
                accepted=bond.bond_type.accepted_types(),
            )

        return G

    def __repr__(self) -> str:
        return (
            f"MolecularGraph(name={self.name!r}, atoms={self.num_atoms}, "
            f"bonds={len(self.bonds)}, conformations={self.num_conformations()})"
        )
