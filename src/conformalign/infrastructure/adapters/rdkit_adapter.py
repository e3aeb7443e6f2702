"""Adapter between MolecularGraph and RDKit molecules."""

import logging
from typing import Dict

from rdkit import Chem
from rdkit.Geometry import Point3D

from ...domain.models.atom import Atom
from ...domain.models.bond import Bond, BondType
from ...domain.models.conformation import Conformation
from ...domain.models.molecular_graph import MolecularGraph

logger = logging.getLogger(__name__)

_FROM_RDKIT: Dict[Chem.BondType, BondType] = {
    Chem.BondType.SINGLE: BondType.SINGLE,
    Chem.BondType.DOUBLE: BondType.DOUBLE,
    Chem.BondType.TRIPLE: BondType.TRIPLE,
    Chem.BondType.AROMATIC: BondType.AROMATIC,
}
_TO_RDKIT = {value: key for key, value in _FROM_RDKIT.items()}

# Matches either a single or a double bond
SINGLE_OR_DOUBLE_SMARTS = "-,="


def from_rdkit_mol(mol: Chem.Mol) -> MolecularGraph:
    """
    Build a MolecularGraph from an RDKit molecule.

    Atom order, formal charges, bond orders, every conformer (in RDKit's
    storage order, keyed by conformer id) and the ``_Name`` property are kept.
    """
    atoms = [
        Atom(
            atom_id=atom.GetIdx(),
            element=atom.GetSymbol(),
            formal_charge=atom.GetFormalCharge(),
            atom_name=atom.GetPropsAsDict().get("_TriposAtomName", ""),
        )
        for atom in mol.GetAtoms()
    ]
    bonds = [
        Bond(
            bond.GetBeginAtomIdx(),
            bond.GetEndAtomIdx(),
            _FROM_RDKIT.get(bond.GetBondType(), BondType.UNKNOWN),
        )
        for bond in mol.GetBonds()
    ]
    name = mol.GetProp("_Name") if mol.HasProp("_Name") else ""

    graph = MolecularGraph(atoms, bonds, name=name)
    for conf in mol.GetConformers():
        graph.add_conformation(Conformation(conf.GetId(), conf.GetPositions()))
    return graph


def to_rdkit_mol(graph: MolecularGraph) -> Chem.Mol:
    """
    Convert a MolecularGraph to an RDKit molecule usable in substructure searches.

    SINGLE_OR_DOUBLE bonds become query bonds, so the result can act as a
    query. Hydrogens are only present if they are atoms of the graph.

    Raises:
        ValueError: If an element symbol is not recognised by RDKit
    """
    mol = Chem.RWMol()
    for atom in graph.atoms:
        try:
            rdatom = Chem.Atom(atom.element.capitalize())
        except (RuntimeError, ValueError) as e:
            raise ValueError(f"Unknown element {atom.element!r}: {e}") from e
        rdatom.SetFormalCharge(atom.formal_charge)
        rdatom.SetNoImplicit(True)
        rdatom.SetNumExplicitHs(0)
        mol.AddAtom(rdatom)

    query_bond = Chem.BondFromSmarts(SINGLE_OR_DOUBLE_SMARTS)
    for bond in graph.bonds:
        if bond.bond_type is BondType.SINGLE_OR_DOUBLE:
            mol.AddBond(bond.atom1_id, bond.atom2_id, Chem.BondType.SINGLE)
            idx = mol.GetBondBetweenAtoms(bond.atom1_id, bond.atom2_id).GetIdx()
            mol.ReplaceBond(idx, query_bond)
        else:
            mol.AddBond(
                bond.atom1_id,
                bond.atom2_id,
                _TO_RDKIT.get(bond.bond_type, Chem.BondType.UNSPECIFIED),
            )

    result = mol.GetMol()
    result.UpdatePropertyCache(strict=False)
    Chem.FastFindRings(result)
    if graph.name:
        result.SetProp("_Name", graph.name)
    logger.debug(f"Converted {graph!r} to RDKit molecule")
    return result


def write_conformations(graph: MolecularGraph, mol: Chem.Mol) -> None:
    """Copy the coordinates of every graph conformation onto ``mol``'s conformers."""
    for conf_id in graph.conformation_ids():
        conf = mol.GetConformer(conf_id)
        coords = graph.get_coordinates(conf_id)
        for i, (x, y, z) in enumerate(coords):
            conf.SetAtomPosition(i, Point3D(float(x), float(y), float(z)))
