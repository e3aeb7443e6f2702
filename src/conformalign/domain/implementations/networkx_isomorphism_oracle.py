"""Correspondence oracle backed by NetworkX subgraph monomorphism."""

import logging
from typing import List

import networkx as nx

from ..interfaces.correspondence_oracle import CorrespondenceOracle, MatchOptions
from ..models.alignment_result import Correspondence
from ..models.bond import BondType
from ..models.molecular_graph import MolecularGraph


class NetworkXIsomorphismOracle(CorrespondenceOracle):
    """Finds embeddings of the probe in the reference with VF2.

    Atoms match on element; a charged probe atom also requires the same
    charge. Bonds match when the reference bond type is one the probe bond
    accepts, so SINGLE_OR_DOUBLE probe bonds match either order.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def match(
        self, reference: MolecularGraph, probe: MolecularGraph, options: MatchOptions
    ) -> List[Correspondence]:
        ref_graph = reference.to_networkx()
        probe_graph = probe.to_networkx()

        def node_match(ref_node, probe_node):
            if ref_node["element"].upper() != probe_node["element"].upper():
                return False
            charge = probe_node["formal_charge"]
            return charge == 0 or charge == ref_node["formal_charge"]

        def edge_match(ref_edge, probe_edge):
            ref_type = ref_edge["bond_type"]
            if (
                ref_type is BondType.SINGLE_OR_DOUBLE
                and not options.allow_query_vs_query_matches
            ):
                return False
            return bool(ref_edge["accepted"] & probe_edge["accepted"])

        matcher = nx.isomorphism.GraphMatcher(
            ref_graph, probe_graph, node_match=node_match, edge_match=edge_match
        )

        matches: List[Correspondence] = []
        seen = set()
        # VF2 mappings are reference node -> probe node
        for mapping in matcher.subgraph_monomorphisms_iter():
            if options.uniquify:
                key = frozenset(mapping)
                if key in seen:
                    continue
                seen.add(key)
            matches.append(
                sorted((probe_id, ref_id) for ref_id, probe_id in mapping.items())
            )
            if len(matches) >= options.max_matches:
                break

        self.logger.debug(f"VF2 returned {len(matches)} matches")
        return matches
