import torch

from configs import Config
from graphdata.graph import DirectedGraph
from graphdata.graph_dataset import NodeDataset
from models import NodeClassifier, build_encoder
from trainers.evaluator import evaluate
from trainers.trainer import Trainer
from utils.logger import get_logger
from utils.metrics import compute_metrics
from utils.seed import set_seed


def _two_communities():
    # nodes 0..9 and 10..19, dense inside, one bridge
    edges = []
    for block in (range(0, 10), range(10, 20)):
        for u in block:
            for v in block:
                if u != v and (u + v) % 3 == 0:
                    edges.append((u, v))
    edges.append((9, 10))
    graph = DirectedGraph.from_edges(edges, nodes=range(20))
    y = torch.tensor([0] * 10 + [1] * 10)
    x = torch.randn(20, 6) * 0.1
    x[:10, 0] += 1.0
    x[10:, 1] += 1.0
    nodes = list(range(20))
    return NodeDataset(graph, x, y, train_nodes=nodes[::2], val_nodes=nodes[1::2], test_nodes=nodes[1::2])


def test_fit_reduces_loss(tmp_path):
    generator = set_seed(0)
    ds = _two_communities()
    encoder = build_encoder(ds.num_features, 8, 16, ["mean", "mean"], [4, 4])
    model = NodeClassifier(encoder, ds.num_classes, dropout=0.0)
    logger = get_logger("test-trainer", str(tmp_path / "train.log"))

    trainer = Trainer(model, torch.device("cpu"), logger, lr=1e-2, weight_decay=0.0)
    state = trainer.fit(ds, epochs=40, generator=generator)

    assert len(state.train_losses) == 40
    assert state.train_losses[-1] < state.train_losses[0]
    assert state.best_state is not None and 1 <= state.best_epoch <= 40
    assert (tmp_path / "train.log").exists()

    loss, metrics = evaluate(model, ds, ds.test_nodes, torch.device("cpu"), generator)
    assert loss >= 0.0
    assert set(metrics) == {"acc", "precision", "recall", "f1"}


def test_compute_metrics():
    m = compute_metrics([0, 1, 2, 2], [0, 1, 2, 1])
    assert m["acc"] == 0.75
    assert 0.0 < m["f1"] < 1.0


def test_seed_returns_reproducible_generator():
    a = torch.randperm(10, generator=set_seed(5))
    b = torch.randperm(10, generator=set_seed(5))
    assert torch.equal(a, b)


def test_config_defaults_build_an_encoder(tmp_path):
    cfg = Config(data_dir=str(tmp_path / "data"), log_dir=str(tmp_path / "logs"))
    cfg.ensure_dirs()
    assert (tmp_path / "logs").is_dir()
    encoder = build_encoder(10, cfg.embedding_dim, cfg.hidden_dim, cfg.layer_modes, cfg.sample_caps, cfg.activation)
    assert encoder.depth == len(cfg.layer_modes)
    assert encoder.dim_out == cfg.embedding_dim


def test_logger_format_and_no_duplicate_handlers(tmp_path):
    log_file = str(tmp_path / "run.log")
    logger = get_logger("test-format", log_file)
    again = get_logger("test-format", log_file)
    assert again is logger
    assert len(logger.handlers) == 2
    for h in logger.handlers:
        assert h.formatter._fmt == "[%(asctime)s] %(levelname)s - %(message)s"
