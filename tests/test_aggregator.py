import pytest
import torch

from models.aggregator import Aggregator, AggregatorMode
from models.errors import ConfigurationError, EmptyDependencySetError, InvalidAggregatorMode


@pytest.mark.parametrize("name, mode", [
    ("SAGE_Mean", AggregatorMode.MEAN),
    ("mean", AggregatorMode.MEAN),
    ("sum", AggregatorMode.SUM),
    ("Max", AggregatorMode.MAX),
    ("max-pooling", AggregatorMode.MAX_POOLING),
    ("max_pooling", AggregatorMode.MAX_POOLING),
    ("SAGE_GCN", AggregatorMode.GCN),
    ("graph-convolution-mean", AggregatorMode.GCN),
    (AggregatorMode.SUM, AggregatorMode.SUM),
])
def test_parse_mode(name, mode):
    assert AggregatorMode.parse(name) is mode


@pytest.mark.parametrize("bad", ["median", "", None, 3])
def test_unknown_mode_rejected(bad):
    with pytest.raises(InvalidAggregatorMode):
        Aggregator(bad, 4)
    assert issubclass(InvalidAggregatorMode, ConfigurationError)


def test_equal_vectors():
    v = torch.tensor([1.5, -2.0, 0.25])
    vectors = [v.clone() for _ in range(4)]
    assert torch.equal(Aggregator("mean", 3).aggregate(vectors), v)
    assert torch.equal(Aggregator("sum", 3).aggregate(vectors), 4 * v)
    assert torch.equal(Aggregator("max", 3).aggregate(vectors), v)


def test_elementwise_rules():
    h = torch.tensor([[1.0, -4.0], [3.0, -2.0]])
    assert torch.allclose(Aggregator("mean", 2).aggregate(h), torch.tensor([2.0, -3.0]))
    assert torch.allclose(Aggregator("sum", 2).aggregate(h), torch.tensor([4.0, -6.0]))
    assert torch.allclose(Aggregator("max", 2).aggregate(h), torch.tensor([3.0, -2.0]))
    assert torch.allclose(Aggregator("gcn", 2).aggregate(h), torch.tensor([2.0, -3.0]))


def test_only_max_pooling_has_parameters():
    for mode in ("mean", "sum", "max", "gcn"):
        assert len(list(Aggregator(mode, 4).parameters())) == 0
    pool = Aggregator("max-pooling", 4)
    assert sum(p.numel() for p in pool.parameters()) == 4 * 4 + 4


def test_max_pooling_transforms_before_max():
    agg = Aggregator("max-pooling", 2, activation="identity")
    with torch.no_grad():
        agg.pool.weight.copy_(-torch.eye(2))
        agg.pool.bias.zero_()
    h = torch.tensor([[1.0, -4.0], [3.0, -2.0]])
    assert torch.allclose(agg.aggregate(h), torch.tensor([-1.0, 4.0]))


def test_batched_groups():
    agg = Aggregator("mean", 2)
    h = torch.tensor([[1.0, 1.0], [3.0, 3.0], [5.0, 0.0]])
    index = torch.tensor([0, 0, 2])
    out = agg(h, index, 3)
    assert out.shape == (3, 2)
    assert torch.allclose(out[0], torch.tensor([2.0, 2.0]))
    assert torch.allclose(out[1], torch.zeros(2))
    assert torch.allclose(out[2], torch.tensor([5.0, 0.0]))


def test_empty_input_rejected():
    with pytest.raises(EmptyDependencySetError):
        Aggregator("mean", 2).aggregate([])
    with pytest.raises(EmptyDependencySetError):
        Aggregator("mean", 2).aggregate(torch.empty(0, 2))
