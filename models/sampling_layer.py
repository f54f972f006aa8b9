from typing import List, Optional, Sequence, Tuple, Union

import torch
import torch.nn as nn

from utils.sampling import flatten_groups, index_map, sample_neighbors, unique_union

from .activations import Activation
from .aggregator import Aggregator, AggregatorMode
from .errors import EmptyDependencySetError
from .features import GraphLike, RawFeatures


class SamplingLayer(nn.Module):
    """
    Sample-and-aggregate step of one GraphSAGE layer.

    For every target node, samples at most `k` in-neighbors, pulls hidden
    vectors for the deduplicated union of targets and sampled neighbors from
    `source` (the previous layer, or raw features at the input layer), and
    combines each target with its aggregated neighbors.

    Output width is `dim_h` for GCN aggregation and `2 * dim_h` otherwise.
    """
    def __init__(self, source: nn.Module, k: Optional[int], mode: Union[AggregatorMode, str],
                 activation: Union[str, Activation] = "relu"):
        super().__init__()
        self.source = source
        self.k = k
        self.dim_h = source.dim_out
        self.aggregator = Aggregator(mode, self.dim_h, activation)
        # default neighbor vector for nodes without in-edges
        self.register_buffer("z", torch.zeros(self.dim_h))

    @property
    def mode(self) -> AggregatorMode:
        return self.aggregator.mode

    @property
    def dim_out(self) -> int:
        return 2 * self.dim_h if self.mode.concat_self else self.dim_h

    def sample(self, graph: GraphLike, node_list: Sequence[int],
               generator: Optional[torch.Generator] = None) -> Tuple[List[List[int]], List[int]]:
        """Returns the per-target sampled neighbors and the union this layer depends on."""
        sampled = [sample_neighbors(graph.in_neighbors(u), self.k, generator) for u in node_list]
        unique_nodes = unique_union(node_list, sampled)
        if not unique_nodes:
            raise EmptyDependencySetError("Layer has no nodes to compute, target list is empty")
        return sampled, unique_nodes

    def forward(self, graph: GraphLike, node_list: Sequence[int], features: RawFeatures,
                generator: Optional[torch.Generator] = None) -> torch.Tensor:
        sampled, unique_nodes = self.sample(graph, node_list, generator)
        u2i = index_map(unique_nodes)

        h0 = self.source(graph, unique_nodes, features, generator)
        device = h0.device
        self_h = h0[torch.tensor([u2i[u] for u in node_list], dtype=torch.long, device=device)]

        if self.mode is AggregatorMode.GCN:
            groups = [[u, *nbrs] for u, nbrs in zip(node_list, sampled)]
            rows, segs = flatten_groups(groups, u2i)
            return self.aggregator(h0[rows.to(device)], segs.to(device), len(node_list))

        n = len(node_list)
        hn = self.z.expand(n, -1)
        rows, segs = flatten_groups(sampled, u2i)
        if rows.numel() > 0:
            agg = self.aggregator(h0[rows.to(device)], segs.to(device), n)
            has_nbrs = torch.tensor([len(nbrs) > 0 for nbrs in sampled], device=device)
            hn = torch.where(has_nbrs.unsqueeze(-1), agg, hn)
        return torch.cat([self_h, hn], dim=-1)

    def extra_repr(self) -> str:
        return f"k={'uncapped' if self.k is None else self.k}, dim_h={self.dim_h}"
