from typing import Dict, FrozenSet, Iterable, Optional, Tuple

import torch


class DirectedGraph:
    """
    Immutable directed graph keeping, for every node, the set of its
    in-neighbors (sources of edges pointing into it).
    """
    def __init__(self, edges: Iterable[Tuple[int, int]] = (), nodes: Iterable[int] = ()):
        preds: Dict[int, set] = {int(u): set() for u in nodes}
        num_edges = 0
        for src, dst in edges:
            src, dst = int(src), int(dst)
            preds.setdefault(src, set())
            bucket = preds.setdefault(dst, set())
            if src not in bucket:
                bucket.add(src)
                num_edges += 1
        self._preds: Dict[int, FrozenSet[int]] = {u: frozenset(p) for u, p in preds.items()}
        self._num_edges = num_edges

    @classmethod
    def from_edges(cls, edges: Iterable[Tuple[int, int]], nodes: Iterable[int] = ()) -> "DirectedGraph":
        return cls(edges, nodes)

    @classmethod
    def from_edge_index(cls, edge_index: torch.Tensor, num_nodes: Optional[int] = None) -> "DirectedGraph":
        """edge_index: [2, E] COO, row 0 = source, row 1 = target (PyG convention)."""
        if edge_index.dim() != 2 or edge_index.size(0) != 2:
            raise ValueError(f"edge_index must have shape [2, E], got {tuple(edge_index.shape)}")
        src, dst = edge_index.detach().cpu().tolist()
        nodes = range(num_nodes) if num_nodes is not None else ()
        return cls(zip(src, dst), nodes)

    def in_neighbors(self, node_id: int) -> FrozenSet[int]:
        return self._preds.get(node_id, frozenset())

    def in_degree(self, node_id: int) -> int:
        return len(self.in_neighbors(node_id))

    def max_in_degree(self) -> int:
        return max((len(p) for p in self._preds.values()), default=0)

    @property
    def nodes(self):
        return list(self._preds)

    @property
    def num_nodes(self) -> int:
        return len(self._preds)

    @property
    def num_edges(self) -> int:
        return self._num_edges

    def __contains__(self, node_id) -> bool:
        return node_id in self._preds

    def __repr__(self) -> str:
        return f"DirectedGraph(num_nodes={self.num_nodes}, num_edges={self.num_edges})"
