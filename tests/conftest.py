import pytest
import torch

from graphdata.graph import DirectedGraph


@pytest.fixture
def triangle_graph():
    # in-neighbors of 1 = {2, 3}; 2 and 3 have none
    return DirectedGraph.from_edges([(2, 1), (3, 1)])


@pytest.fixture
def triangle_features():
    feats = {1: [1.0, 0.0], 2: [0.0, 1.0], 3: [0.0, 2.0]}
    return lambda u: feats[u]


@pytest.fixture
def star_graph():
    # node 0 has in-neighbors 1..8, every leaf has node 0 as in-neighbor
    edges = [(i, 0) for i in range(1, 9)] + [(0, i) for i in range(1, 9)]
    return DirectedGraph.from_edges(edges)


@pytest.fixture
def star_features():
    g = torch.Generator().manual_seed(0)
    return torch.randn(9, 4, generator=g)


@pytest.fixture
def set_identity():
    return _set_identity


def _set_identity(linear):
    with torch.no_grad():
        linear.weight.copy_(torch.eye(linear.out_features, linear.in_features))
        linear.bias.zero_()
