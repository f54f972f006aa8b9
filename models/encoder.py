from typing import List, Optional, Sequence, Union

import torch
import torch.nn as nn

from utils.logger import get_logger

from .activations import Activation, resolve_activation
from .aggregator import AggregatorMode
from .errors import ConfigurationError
from .features import GraphLike, InputFeatures, RawFeatures
from .projection import Projection
from .sampling_layer import SamplingLayer

logger = get_logger("graphsage")

UNCAPPED = "uncapped"


def _check_dim(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")
    return value


def _parse_cap(cap) -> Optional[int]:
    if cap is None or cap == UNCAPPED:
        return None
    if isinstance(cap, bool) or not isinstance(cap, int) or cap <= 0:
        raise ConfigurationError(f"Sample cap must be a positive integer or {UNCAPPED!r}, got {cap!r}")
    return cap


class GraphSAGEEncoder(nn.Module):
    """
    Stack of (SamplingLayer, Projection) pairs, each layer reading the
    previous Projection as its feature source.

    forward(graph, target_nodes, features) -> [len(target_nodes), dim_out]
    """
    def __init__(self, head: Projection):
        super().__init__()
        self.head = head

    @property
    def projections(self) -> List[Projection]:
        """Projections from the input layer outwards."""
        chain = []
        node = self.head
        while isinstance(node, Projection):
            chain.append(node)
            node = node.layer.source
        return chain[::-1]

    @property
    def depth(self) -> int:
        return len(self.projections)

    @property
    def dim_in(self) -> int:
        return self.projections[0].layer.dim_h

    @property
    def dim_out(self) -> int:
        return self.head.dim_out

    def forward(self, graph: GraphLike, target_nodes: Sequence[int], features,
                generator: Optional[torch.Generator] = None) -> torch.Tensor:
        return self.head(graph, list(target_nodes), RawFeatures.wrap(features), generator)


def build_encoder(
    dim_in: int,
    dim_out: int,
    dim_h: int,
    layer_modes: Sequence[Union[AggregatorMode, str]],
    sample_caps: Optional[Sequence[Union[int, str, None]]] = None,
    activation: Union[str, Activation] = "relu",
) -> GraphSAGEEncoder:
    """
    Args:
        dim_in: raw node feature width
        dim_out: embedding width
        dim_h: hidden width between layers
        layer_modes: aggregation mode of every layer, innermost first
        sample_caps: max sampled in-neighbors per layer, None / "uncapped" for all
        activation: nonlinearity of projections and pooling aggregators

    Returns:
        encoder mapping (graph, target nodes, raw features) to node embeddings
    """
    layer_modes = list(layer_modes)
    if not layer_modes:
        raise ConfigurationError("At least one layer is required")
    if sample_caps is None:
        sample_caps = [None] * len(layer_modes)
    sample_caps = list(sample_caps)
    if len(sample_caps) != len(layer_modes):
        raise ConfigurationError(
            f"Got {len(layer_modes)} layer modes but {len(sample_caps)} sample caps"
        )

    dim_in = _check_dim("dim_in", dim_in)
    dim_out = _check_dim("dim_out", dim_out)
    dim_h = _check_dim("dim_h", dim_h)
    caps = [_parse_cap(c) for c in sample_caps]
    modes = [AggregatorMode.parse(m) for m in layer_modes]
    resolve_activation(activation)

    depth = len(modes)
    source: nn.Module = InputFeatures(dim_in)
    for i, (mode, k) in enumerate(zip(modes, caps)):
        width = dim_out if i == depth - 1 else dim_h
        layer = SamplingLayer(source, k, mode, activation)
        source = Projection(layer, width, activation)
        logger.debug(
            f"layer {i + 1}/{depth}: mode={mode.value} k={'uncapped' if k is None else k} "
            f"{layer.dim_h}->{layer.dim_out}->{width}"
        )

    return GraphSAGEEncoder(source)
