import numpy as np
import pytest

from conformalign.domain.interfaces.correspondence_oracle import CorrespondenceOracle
from conformalign.domain.models.atom import Atom
from conformalign.domain.models.bond import Bond, BondType
from conformalign.domain.models.conformation import Conformation
from conformalign.domain.models.molecular_graph import MolecularGraph

# Asymmetric acetate: methyl C, carboxyl C, O (double), O- (single)
ACETATE_COORDS = np.array(
    [
        [0.0, 0.0, 0.0],
        [1.5, 0.0, 0.0],
        [2.2, 1.1, 0.0],
        [2.7, -0.9, 0.9],
    ]
)

# Acetate with the two oxygens mirrored across the C-C axis
SYMMETRIC_ACETATE_COORDS = np.array(
    [
        [0.0, 0.0, 0.0],
        [1.5, 0.0, 0.0],
        [2.2, 1.1, 0.0],
        [2.2, -1.1, 0.0],
    ]
)


def rotation_matrix(axis, angle):
    """Proper rotation about ``axis`` by ``angle`` radians (Rodrigues)."""
    axis = np.asarray(axis, dtype=float)
    axis = axis / np.linalg.norm(axis)
    K = np.array(
        [
            [0.0, -axis[2], axis[1]],
            [axis[2], 0.0, -axis[0]],
            [-axis[1], axis[0], 0.0],
        ]
    )
    return np.eye(3) + np.sin(angle) * K + (1 - np.cos(angle)) * np.dot(K, K)


def make_acetate(coords, name="acetate", conf_id=0):
    atoms = [
        Atom(0, "C", atom_name="C1"),
        Atom(1, "C", atom_name="C2"),
        Atom(2, "O", atom_name="O1"),
        Atom(3, "O", formal_charge=-1, atom_name="O2"),
    ]
    bonds = [
        Bond(0, 1, BondType.SINGLE),
        Bond(1, 2, BondType.DOUBLE),
        Bond(1, 3, BondType.SINGLE),
    ]
    return MolecularGraph(atoms, bonds, name=name, conformations=[Conformation(conf_id, coords)])


def make_point_cloud(coords, name="points", conf_ids=(0,)):
    """Unbonded carbon atoms; every id in ``conf_ids`` gets a copy of ``coords``."""
    coords = np.asarray(coords, dtype=float)
    atoms = [Atom(i, "C") for i in range(len(coords))]
    return MolecularGraph(
        atoms,
        [],
        name=name,
        conformations=[Conformation(conf_id, coords) for conf_id in conf_ids],
    )


class FixedOracle(CorrespondenceOracle):
    """Oracle double returning a fixed list of correspondences."""

    def __init__(self, matches):
        self.matches = matches
        self.calls = []

    def match(self, reference, probe, options):
        self.calls.append((reference, probe, options))
        return [list(m) for m in self.matches]


@pytest.fixture
def tetrahedron():
    return np.array(
        [
            [0.0, 0.0, 0.0],
            [1.2, 0.1, -0.3],
            [-0.4, 1.5, 0.2],
            [0.3, -0.2, 1.8],
        ]
    )


@pytest.fixture
def point_cloud():
    rng = np.random.RandomState(7)
    return rng.uniform(-3.0, 3.0, size=(8, 3))
