import networkx as nx
import numpy as np
import pytest

from conformalign.domain.exceptions import InvalidConformationId
from conformalign.domain.models.alignment_result import Transform
from conformalign.domain.models.bond import BondType
from conformalign.domain.models.conformation import Conformation

from conftest import ACETATE_COORDS, make_acetate, rotation_matrix


def test_conformation_is_index_addressable():
    conf = Conformation("c0", ACETATE_COORDS)

    assert len(conf) == 4
    assert np.array_equal(conf[2], ACETATE_COORDS[2])
    conf[2][0] = 99.0
    assert conf[2][0] == ACETATE_COORDS[2][0]


def test_conformation_rejects_bad_shapes():
    with pytest.raises(ValueError):
        Conformation(0, [[1.0, 2.0]])
    conf = Conformation(0, ACETATE_COORDS)
    with pytest.raises(ValueError):
        conf.set_coordinates(ACETATE_COORDS[:2])


def test_apply_transform_in_place():
    conf = Conformation(0, ACETATE_COORDS)
    R = rotation_matrix([0.0, 0.0, 1.0], np.pi / 2)
    transform = Transform(rotation=R, translation=np.array([1.0, 0.0, 0.0]))

    conf.apply_transform(transform)

    assert np.allclose(conf[1], [1.0, 1.5, 0.0])
    matrix = transform.as_matrix()
    assert np.allclose(matrix[:3, :3], R)
    assert np.allclose(matrix[:3, 3], [1.0, 0.0, 0.0])


def test_graph_stores_conformations_in_insertion_order():
    graph = make_acetate(ACETATE_COORDS, conf_id="b")
    graph.add_conformation(Conformation("a", ACETATE_COORDS + 1.0))

    assert graph.conformation_ids() == ["b", "a"]
    assert graph.num_conformations() == 2
    assert graph.get_conformation().conf_id == "b"
    with pytest.raises(ValueError):
        graph.add_conformation(Conformation("a", ACETATE_COORDS))
    with pytest.raises(ValueError):
        graph.add_conformation(Conformation("c", ACETATE_COORDS[:3]))
    with pytest.raises(InvalidConformationId):
        graph.get_conformation("missing")


def test_to_networkx_carries_match_attributes():
    graph = make_acetate(ACETATE_COORDS)
    graph.get_bond(1, 3).bond_type = BondType.SINGLE_OR_DOUBLE

    G = graph.to_networkx()

    assert isinstance(G, nx.Graph)
    assert G.nodes[3]["formal_charge"] == -1
    assert G.edges[1, 2]["accepted"] == frozenset({BondType.DOUBLE})
    assert G.edges[1, 3]["accepted"] == frozenset({BondType.SINGLE, BondType.DOUBLE})


def test_copy_topology_is_independent():
    graph = make_acetate(ACETATE_COORDS)

    copy = graph.copy_topology()
    copy.atoms[3].formal_charge = 0

    assert graph.atoms[3].formal_charge == -1
    assert copy.num_conformations() == 0
