import logging

import pytest

from conformalign.domain.exceptions import NoCorrespondenceFound
from conformalign.domain.implementations.networkx_isomorphism_oracle import (
    NetworkXIsomorphismOracle,
)
from conformalign.domain.implementations.rdkit_substructure_oracle import (
    RDKitSubstructureOracle,
)
from conformalign.domain.implementations.terminal_group_symmetrizer import (
    TerminalGroupSymmetrizer,
    symmetrization_pattern,
)
from conformalign.domain.models.bond import BondType
from conformalign.services.correspondence_provider import CorrespondenceProvider

from conftest import (
    ACETATE_COORDS,
    FixedOracle,
    make_acetate,
    make_point_cloud,
)


def test_explicit_map_is_single_candidate():
    oracle = FixedOracle([[(0, 0)]])
    provider = CorrespondenceProvider(oracle=oracle)
    graph = make_acetate(ACETATE_COORDS)

    candidates = provider.candidates(graph, graph, atom_map=[(0, 1), (1, 0)])

    assert candidates == [[(0, 1), (1, 0)]]
    assert oracle.calls == []


def test_explicit_map_list_is_kept_in_order():
    provider = CorrespondenceProvider(oracle=FixedOracle([]))
    graph = make_acetate(ACETATE_COORDS)
    maps = [[(0, 0), (1, 1)], [(0, 1), (1, 0)]]

    assert provider.candidates(graph, graph, atom_map=maps) == maps


def test_empty_explicit_map_raises():
    provider = CorrespondenceProvider(oracle=FixedOracle([]))
    graph = make_acetate(ACETATE_COORDS)

    with pytest.raises(NoCorrespondenceFound):
        provider.candidates(graph, graph, atom_map=[])


def test_oracle_options_and_order():
    matches = [[(0, 1), (1, 0)], [(0, 0), (1, 1)]]
    oracle = FixedOracle(matches)
    provider = CorrespondenceProvider(oracle=oracle)
    graph = make_point_cloud([[0, 0, 0], [1, 0, 0]])

    candidates = provider.candidates(graph, graph, max_matches=17, symmetrize=False)

    assert candidates == matches
    _, _, options = oracle.calls[0]
    assert options.allow_recursive_patterns
    assert not options.use_stereochemistry
    assert not options.allow_query_vs_query_matches
    assert not options.uniquify
    assert options.max_matches == 17


def test_no_oracle_match_raises():
    provider = CorrespondenceProvider(oracle=FixedOracle([]))
    graph = make_point_cloud([[0, 0, 0]])

    with pytest.raises(NoCorrespondenceFound):
        provider.candidates(graph, graph, symmetrize=False)


def test_large_candidate_count_warns(caplog):
    oracle = FixedOracle([[(0, 0)]] * 3)
    provider = CorrespondenceProvider(oracle=oracle, warning_threshold=2)
    graph = make_point_cloud([[0, 0, 0]], name="crowded")

    with caplog.at_level(logging.WARNING):
        candidates = provider.candidates(graph, graph, symmetrize=False)

    assert len(candidates) == 3
    assert any("crowded" in record.message for record in caplog.records)


def test_warning_fires_at_the_threshold_for_unnamed_structures(caplog):
    oracle = FixedOracle([[(0, 0)]] * 2)
    provider = CorrespondenceProvider(oracle=oracle, warning_threshold=2)
    graph = make_point_cloud([[0, 0, 0]], name="")

    with caplog.at_level(logging.WARNING):
        provider.candidates(graph, graph, symmetrize=False)

    warnings = [r.message for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "<unnamed>" in warnings[0]


def test_explicit_map_indices_are_validated():
    provider = CorrespondenceProvider(oracle=FixedOracle([]))
    graph = make_acetate(ACETATE_COORDS)

    with pytest.raises(ValueError, match="Probe index -1"):
        provider.candidates(graph, graph, atom_map=[(-1, 3), (0, 0)])
    with pytest.raises(ValueError, match="Reference index 4"):
        provider.candidates(graph, graph, atom_map=[(0, 4)])
    with pytest.raises(ValueError, match="more than once"):
        provider.candidates(graph, graph, atom_map=[(0, 0), (0, 1), (0, 2)])
    with pytest.raises(ValueError, match="more than once"):
        provider.first_match(graph, graph, atom_map=[(1, 0), (1, 1)])


def test_oracles_are_exported():
    import conformalign

    assert conformalign.NetworkXIsomorphismOracle is NetworkXIsomorphismOracle
    assert conformalign.RDKitSubstructureOracle is RDKitSubstructureOracle
    assert issubclass(NetworkXIsomorphismOracle, conformalign.CorrespondenceOracle)


def test_symmetrization_pattern_is_cached():
    assert symmetrization_pattern() is symmetrization_pattern()


def test_symmetrizer_relaxes_carboxylate():
    graph = make_acetate(ACETATE_COORDS)

    query = TerminalGroupSymmetrizer().symmetrize(graph)

    assert [atom.formal_charge for atom in query.atoms] == [0, 0, 0, 0]
    assert query.get_bond(1, 2).bond_type is BondType.SINGLE_OR_DOUBLE
    assert query.get_bond(1, 3).bond_type is BondType.SINGLE_OR_DOUBLE
    assert query.get_bond(0, 1).bond_type is BondType.SINGLE
    # The input is untouched
    assert graph.atoms[3].formal_charge == -1
    assert graph.get_bond(1, 2).bond_type is BondType.DOUBLE
    assert query.num_conformations() == 0


@pytest.mark.parametrize(
    "oracle_cls", [NetworkXIsomorphismOracle, RDKitSubstructureOracle]
)
def test_symmetrization_yields_both_labelings(oracle_cls):
    provider = CorrespondenceProvider(oracle=oracle_cls())
    graph = make_acetate(ACETATE_COORDS)

    plain = provider.candidates(graph, graph, symmetrize=False)
    relaxed = provider.candidates(graph, graph, symmetrize=True)

    assert plain == [[(0, 0), (1, 1), (2, 2), (3, 3)]]
    assert len(relaxed) >= 2
    assert sorted(map(sorted, relaxed)) == [
        [(0, 0), (1, 1), (2, 2), (3, 3)],
        [(0, 0), (1, 1), (2, 3), (3, 2)],
    ]


def test_first_match_uses_unique_single_match():
    oracle = FixedOracle([[(0, 0), (1, 1)]])
    provider = CorrespondenceProvider(oracle=oracle)
    graph = make_point_cloud([[0, 0, 0], [1, 0, 0]])

    assert provider.first_match(graph, graph) == [(0, 0), (1, 1)]
    _, query, options = oracle.calls[0]
    assert query is graph
    assert options.uniquify
    assert options.allow_query_vs_query_matches
    assert options.max_matches == 1
