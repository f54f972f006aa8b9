from collections.abc import Mapping
from typing import Callable, Optional, Protocol, Sequence, Set, Union

import torch
import torch.nn as nn

from .errors import DimensionMismatchError


class GraphLike(Protocol):
    def in_neighbors(self, node_id: int) -> Set[int]:
        ...


class RawFeatures:
    """
    Per-call raw feature lookup. Accepts a 2-D tensor whose rows are indexed
    by node id, an object with `lookup(node_id)`, a mapping `{node_id: vector}`
    or a plain callable `node_id -> vector`.
    """
    def __init__(self, source: Union[torch.Tensor, Mapping[int, Sequence[float]], Callable[[int], Sequence[float]]]):
        self.matrix: Optional[torch.Tensor] = None
        if isinstance(source, torch.Tensor):
            if source.dim() != 2:
                raise DimensionMismatchError(f"Feature matrix must be 2-D, got shape {tuple(source.shape)}")
            self.matrix = source
            self.fn = None
        elif callable(getattr(source, "lookup", None)):
            self.fn = source.lookup
        elif isinstance(source, Mapping):
            self.fn = source.__getitem__
        elif callable(source):
            self.fn = source
        else:
            raise TypeError(f"Unsupported feature source: {type(source).__name__}")

    @classmethod
    def wrap(cls, features) -> "RawFeatures":
        return features if isinstance(features, cls) else cls(features)

    def lookup(self, node_id: int) -> torch.Tensor:
        if self.matrix is not None:
            return self.matrix[node_id].float()
        return torch.as_tensor(self.fn(node_id), dtype=torch.float32)

    def gather(self, node_ids: Sequence[int]) -> torch.Tensor:
        if self.matrix is not None:
            idx = torch.tensor(list(node_ids), dtype=torch.long, device=self.matrix.device)
            return self.matrix.index_select(0, idx).float()
        rows = [self.lookup(u) for u in node_ids]
        if len({tuple(r.shape) for r in rows}) > 1:
            raise DimensionMismatchError("Raw feature vectors have inconsistent widths")
        return torch.stack(rows)


class InputFeatures(nn.Module):
    """Feature source of the innermost layer: reads raw features, checks width."""
    def __init__(self, dim_in: int):
        super().__init__()
        self.dim_out = dim_in

    def forward(self, graph: GraphLike, node_ids: Sequence[int], features: RawFeatures,
                generator: Optional[torch.Generator] = None) -> torch.Tensor:
        h = features.gather(node_ids)
        if h.dim() != 2 or h.size(-1) != self.dim_out:
            raise DimensionMismatchError(
                f"Raw features have width {h.size(-1) if h.dim() else 0}, expected {self.dim_out}"
            )
        return h

    def extra_repr(self) -> str:
        return f"dim_in={self.dim_out}"
