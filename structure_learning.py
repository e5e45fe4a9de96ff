"""Greedy structure search that ranks attribute pairs by conditional entropy.

Every pair of attributes is oriented toward the direction with the lower
conditional entropy, the resulting candidate edges are grouped by the node
whose degree is capped, and each group is consumed greedily, strongest
(lowest entropy) first. Two variants share the pipeline:

* ``bounded="parents"``: each child accepts at most ``max_degree`` parents,
  and a parent that already has ``max_degree`` children is skipped.
* ``bounded="children"``: each parent accepts at most ``max_degree`` children,
  and a child that already has ``max_degree`` parents is skipped.

The search does not prevent directed cycles; ``check_cycles=True`` only
reports one if the finished network contains it.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import networkx as nx

from bn_errors import ExternalGraphViolation
from bn_graph import BayesNetGraph
from contingency import CandidateEdge, build_contingency_tables, evaluate_tables
from search_configs import CHILDREN, PARENTS, validate_config

logger = logging.getLogger(__name__)

#gains this close to the threshold count as no dependency (float noise on independent pairs)
GAIN_TOLERANCE = 1e-9


@dataclass
class SearchResult:
    bounded: str
    max_degree: int
    edges: List[CandidateEdge] = field(default_factory=list)
    cycle: Optional[List[Tuple[int, int]]] = None

    def edge_list(self) -> List[Tuple[int, int]]:
        """Accepted (parent, child) pairs in acceptance order."""
        return [e.as_tuple() for e in self.edges]

    def rules(self, names: Sequence[str]) -> List[str]:
        return [f"{names[e.parent]} -> {names[e.child]}" for e in self.edges]


def _bounded_node(edge: CandidateEdge, bounded: str) -> int:
    return edge.child if bounded == PARENTS else edge.parent


def _other_node(edge: CandidateEdge, bounded: str) -> int:
    return edge.parent if bounded == PARENTS else edge.child


def rank_candidates(candidates, n_nodes: int, bounded: str = PARENTS,
                    min_information_gain: Optional[float] = 0.0) -> List[List[CandidateEdge]]:
    """Group candidates by their bounded node, each group ascending by (entropy, other node).

    Candidates whose information gain does not exceed ``min_information_gain``
    are left out; pass None to rank all of them.
    """
    ranking = [[] for _ in range(n_nodes)]
    dropped = 0
    for edge in candidates:
        if min_information_gain is not None and edge.gain <= min_information_gain + GAIN_TOLERANCE:
            dropped += 1
            continue
        ranking[_bounded_node(edge, bounded)].append(edge)
    for group in ranking:
        group.sort(key=lambda e: (e.entropy, _other_node(e, bounded)))
    logger.info("ranked %d candidate edges (%d below the gain threshold)",
                sum(len(g) for g in ranking), dropped)
    return ranking


def _rejection(graph, edge: CandidateEdge, bounded: str, accepted: int, max_degree: int) -> Optional[str]:
    """Why ``edge`` cannot be added right now, or None if it can."""
    if accepted >= max_degree:
        return "bounded node is full"
    if edge.parent == edge.child:
        return "self loop"
    if bounded == PARENTS:
        if graph.child_count(edge.parent) >= max_degree:
            return f"parent already has {max_degree} children"
    elif graph.parent_count(edge.child) >= max_degree:
        return f"child already has {max_degree} parents"
    if graph.has_parent(edge.child, edge.parent):
        return "edge already present"
    return None


def apply_edge(graph, edge: CandidateEdge):
    """Register ``edge.parent`` as a parent of ``edge.child`` on the graph."""
    try:
        graph.add_parent(edge.child, edge.parent)
    except ExternalGraphViolation:
        raise
    except (ValueError, KeyError) as exc:
        raise ExternalGraphViolation(
            f"graph refused edge {edge.parent} -> {edge.child}: {exc}") from exc


def assign_edges(graph, ranking: List[List[CandidateEdge]], bounded: str,
                 max_degree: int) -> List[CandidateEdge]:
    """Walk nodes in index order and greedily accept each node's best candidates.

    Accepted edges go into the graph at once, so later admission checks see them.
    """
    accepted_edges = []
    for node, group in enumerate(ranking):
        accepted = 0
        for edge in group:
            reason = _rejection(graph, edge, bounded, accepted, max_degree)
            if reason is not None:
                logger.debug("skip %d -> %d (H=%.4f): %s",
                             edge.parent, edge.child, edge.entropy, reason)
                continue
            apply_edge(graph, edge)
            accepted += 1
            accepted_edges.append(edge)
        logger.debug("node %d: accepted %d of %d candidates", node, accepted, len(group))
    return accepted_edges


def _find_cycle(graph, n_nodes: int) -> Optional[List[Tuple[int, int]]]:
    finder = getattr(graph, "find_cycle", None)
    if finder is not None:
        return finder()
    #graphs that only answer has_parent: rebuild the edge set first
    dag = nx.DiGraph()
    dag.add_nodes_from(range(n_nodes))
    dag.add_edges_from((u, v) for v in range(n_nodes) for u in range(n_nodes)
                       if u != v and graph.has_parent(v, u))
    try:
        return list(nx.find_cycle(dag))
    except nx.NetworkXNoCycle:
        return None


def search(graph, dataset, max_degree: int, bounded: str = PARENTS,
           check_cycles: bool = False,
           min_information_gain: Optional[float] = 0.0) -> SearchResult:
    """Propose edges for ``graph`` from ``dataset`` and add them to it.

    Raises InvalidConfiguration before touching anything, InvalidDataset while
    counting, and ExternalGraphViolation if the graph refuses an admitted edge
    (edges added before that stay in the graph).
    """
    validate_config(max_degree, bounded, min_information_gain)

    tables = build_contingency_tables(dataset)
    candidates = evaluate_tables(tables)
    ranking = rank_candidates(candidates, dataset.attribute_count(), bounded,
                              min_information_gain)

    result = SearchResult(bounded, int(max_degree))
    result.edges = assign_edges(graph, ranking, bounded, int(max_degree))
    logger.info("accepted %d edges with at most %d %s per node",
                len(result.edges), max_degree, bounded)

    if check_cycles:
        result.cycle = _find_cycle(graph, dataset.attribute_count())
        if result.cycle is not None:
            logger.warning("network contains a directed cycle: %s", result.cycle)
    return result


def best_parents(graph, dataset, max_parents: int, **kwargs) -> SearchResult:
    return search(graph, dataset, max_parents, bounded=PARENTS, **kwargs)


def best_children(graph, dataset, max_children: int, **kwargs) -> SearchResult:
    return search(graph, dataset, max_children, bounded=CHILDREN, **kwargs)


def learn_structure(dataset, max_degree: int = 3, bounded: str = PARENTS, **kwargs):
    """Run a search on an empty network over the dataset's attributes."""
    graph = BayesNetGraph.for_dataset(dataset)
    result = search(graph, dataset, max_degree, bounded=bounded, **kwargs)
    return graph, result
