from dataclasses import dataclass, field
from typing import List

import torch
from torch_geometric.data import Data

from .graph import DirectedGraph


def _mask_to_nodes(mask) -> List[int]:
    if mask is None:
        return []
    return mask.nonzero(as_tuple=True)[0].tolist()


@dataclass
class NodeDataset:
    graph: DirectedGraph
    x: torch.Tensor
    y: torch.Tensor
    train_nodes: List[int] = field(default_factory=list)
    val_nodes: List[int] = field(default_factory=list)
    test_nodes: List[int] = field(default_factory=list)

    @property
    def num_features(self) -> int:
        return self.x.size(-1)

    @property
    def num_classes(self) -> int:
        return int(self.y.max().item()) + 1 if self.y.numel() else 0

    @classmethod
    def from_pyg(cls, data: Data) -> "NodeDataset":
        graph = DirectedGraph.from_edge_index(data.edge_index, num_nodes=data.num_nodes)
        return cls(
            graph=graph,
            x=data.x.float(),
            y=data.y.view(-1).long(),
            train_nodes=_mask_to_nodes(getattr(data, "train_mask", None)),
            val_nodes=_mask_to_nodes(getattr(data, "val_mask", None)),
            test_nodes=_mask_to_nodes(getattr(data, "test_mask", None)),
        )

    @classmethod
    def load(cls, pt_path: str) -> "NodeDataset":
        data = torch.load(pt_path, weights_only=False)
        if isinstance(data, (list, tuple)):
            data = data[0]
        return cls.from_pyg(data)
