"""
Neighbor aggregation rules.

Every rule reduces a group of same-width vectors to one vector. The batched
entry point (`forward`) reduces many groups at once with a segment scatter,
`aggregate` handles a single group.
"""

from enum import Enum
from typing import Optional, Sequence, Union

import torch
import torch.nn as nn
from torch_geometric.utils import scatter

from .activations import Activation, resolve_activation
from .errors import EmptyDependencySetError, InvalidAggregatorMode


class AggregatorMode(str, Enum):
    MEAN = "SAGE_Mean"
    SUM = "SAGE_Sum"
    MAX = "SAGE_Max"
    MAX_POOLING = "SAGE_MaxPooling"
    GCN = "SAGE_GCN"

    @classmethod
    def parse(cls, value: Union["AggregatorMode", str]) -> "AggregatorMode":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for mode in cls:
                if value == mode.value:
                    return mode
            alias = _ALIASES.get(value.strip().lower().replace("_", "-"))
            if alias is not None:
                return alias
        raise InvalidAggregatorMode(
            f"Unknown aggregator mode {value!r}, expected one of {[m.value for m in cls]}"
        )

    @property
    def concat_self(self) -> bool:
        """GCN folds self into the neighbor mean, the others concatenate [self, agg]."""
        return self is not AggregatorMode.GCN


_ALIASES = {
    "mean": AggregatorMode.MEAN,
    "sum": AggregatorMode.SUM,
    "max": AggregatorMode.MAX,
    "max-pooling": AggregatorMode.MAX_POOLING,
    "maxpooling": AggregatorMode.MAX_POOLING,
    "maxpool": AggregatorMode.MAX_POOLING,
    "pool": AggregatorMode.MAX_POOLING,
    "gcn": AggregatorMode.GCN,
    "graph-convolution-mean": AggregatorMode.GCN,
}

_REDUCE = {
    AggregatorMode.MEAN: "mean",
    AggregatorMode.GCN: "mean",
    AggregatorMode.SUM: "sum",
    AggregatorMode.MAX: "max",
    AggregatorMode.MAX_POOLING: "max",
}


class Aggregator(nn.Module):
    def __init__(self, mode: Union[AggregatorMode, str], dim_h: int, activation: Union[str, Activation] = "relu"):
        super().__init__()
        self.mode = AggregatorMode.parse(mode)
        self.dim_h = dim_h
        self.pool = None
        self.act = None
        # only max-pooling carries trainable state
        if self.mode is AggregatorMode.MAX_POOLING:
            self.pool = nn.Linear(dim_h, dim_h)
            self.act = resolve_activation(activation)

    def transform(self, h: torch.Tensor) -> torch.Tensor:
        if self.pool is None:
            return h
        return self.act(self.pool(h))

    def forward(self, h: torch.Tensor, index: torch.Tensor, dim_size: int) -> torch.Tensor:
        """
        h: [N, dim_h] grouped vectors
        index: [N] group id of every row
        returns: [dim_size, dim_h], groups without rows are left at zero
        """
        return scatter(self.transform(h), index, dim=0, dim_size=dim_size, reduce=_REDUCE[self.mode])

    def aggregate(self, vectors: Union[torch.Tensor, Sequence[torch.Tensor]]) -> torch.Tensor:
        if isinstance(vectors, torch.Tensor):
            h = vectors
        else:
            if len(vectors) == 0:
                raise EmptyDependencySetError("Cannot aggregate an empty set of vectors")
            h = torch.stack([torch.as_tensor(v, dtype=torch.float32) for v in vectors])
        if h.size(0) == 0:
            raise EmptyDependencySetError("Cannot aggregate an empty set of vectors")
        index = torch.zeros(h.size(0), dtype=torch.long, device=h.device)
        return self.forward(h, index, 1)[0]

    def extra_repr(self) -> str:
        return f"mode={self.mode.value}, dim_h={self.dim_h}"
