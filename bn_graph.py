from typing import Iterable, List, Optional, Sequence, Tuple

import networkx as nx

from bn_errors import ExternalGraphViolation


class BayesNetGraph:
    """Parent sets of a Bayesian network over attributes 0..n-1, stored in a networkx DiGraph.

    An edge u -> v means u is a parent of v. This is the graph a structure
    search queries and mutates; it outlives the search.
    """

    def __init__(self, n_nodes: int, names: Optional[Sequence[str]] = None):
        if names is None:
            names = [str(i) for i in range(n_nodes)]
        if len(names) != n_nodes:
            raise ValueError(f"{n_nodes} nodes but {len(names)} names")
        self.names: List[str] = [str(n) for n in names]
        self.dag = nx.DiGraph()
        self.dag.add_nodes_from(range(n_nodes))

    @classmethod
    def for_dataset(cls, dataset) -> "BayesNetGraph":
        names = getattr(dataset, "names", None)
        return cls(dataset.attribute_count(), names)

    @classmethod
    def from_edges(cls, n_nodes: int, edges: Iterable[Tuple[int, int]],
                   names: Optional[Sequence[str]] = None) -> "BayesNetGraph":
        graph = cls(n_nodes, names)
        for parent, child in edges:
            graph.add_parent(child, parent)
        return graph

    def __len__(self):
        return self.dag.number_of_nodes()

    def _require(self, node: int):
        if node not in self.dag:
            raise ExternalGraphViolation(f"node {node} is not in the network")

    def parents(self, node: int) -> List[int]:
        self._require(node)
        return sorted(self.dag.predecessors(node))

    def children(self, node: int) -> List[int]:
        self._require(node)
        return sorted(self.dag.successors(node))

    def parent_count(self, node: int) -> int:
        self._require(node)
        return self.dag.in_degree(node)

    def child_count(self, node: int) -> int:
        self._require(node)
        return self.dag.out_degree(node)

    def has_parent(self, child: int, parent: int) -> bool:
        self._require(child)
        self._require(parent)
        return self.dag.has_edge(parent, child)

    def add_parent(self, child: int, parent: int):
        self._require(child)
        self._require(parent)
        if parent == child:
            raise ExternalGraphViolation(f"node {child} cannot be its own parent")
        if self.dag.has_edge(parent, child):
            raise ExternalGraphViolation(f"{parent} is already a parent of {child}")
        self.dag.add_edge(parent, child)

    def edges(self) -> List[Tuple[int, int]]:
        return sorted(self.dag.edges())

    def parent_map(self) -> dict:
        """child name -> list of parent names."""
        return {self.names[v]: [self.names[u] for u in self.parents(v)] for v in self.dag.nodes}

    def find_cycle(self) -> Optional[List[Tuple[int, int]]]:
        """First directed cycle as a list of edges, or None if the network is acyclic."""
        try:
            cycle = nx.find_cycle(self.dag)
        except nx.NetworkXNoCycle:
            return None
        return [(u, v) for u, v in cycle]

    def named_dag(self) -> nx.DiGraph:
        return nx.relabel_nodes(self.dag, dict(enumerate(self.names)), copy=True)
