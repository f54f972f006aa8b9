from typing import Optional, Sequence, Union

import torch
import torch.nn as nn

from .activations import Activation, resolve_activation
from .errors import DimensionMismatchError
from .features import GraphLike, RawFeatures
from .sampling_layer import SamplingLayer


class Projection(nn.Module):
    """
    Affine map + nonlinearity applied row-wise to a SamplingLayer's output.

    Has the same call signature as a feature source, so the next layer can
    use it as its child.
    """
    def __init__(self, layer: SamplingLayer, dim_out: int, activation: Union[str, Activation] = "relu"):
        super().__init__()
        self.layer = layer
        self.linear = nn.Linear(layer.dim_out, dim_out)
        self.act = resolve_activation(activation)

    @property
    def dim_in(self) -> int:
        return self.linear.in_features

    @property
    def dim_out(self) -> int:
        return self.linear.out_features

    def project(self, h: torch.Tensor) -> torch.Tensor:
        if h.size(-1) != self.dim_in:
            raise DimensionMismatchError(f"Projection expects width {self.dim_in}, got {h.size(-1)}")
        return self.act(self.linear(h))

    def forward(self, graph: GraphLike, node_list: Sequence[int], features: RawFeatures,
                generator: Optional[torch.Generator] = None) -> torch.Tensor:
        return self.project(self.layer(graph, node_list, features, generator))
