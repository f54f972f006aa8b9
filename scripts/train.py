import os
import torch
from torch_geometric.datasets import Planetoid

from configs import Config
from graphdata import NodeDataset
from models import NodeClassifier, build_encoder
from trainers.evaluator import evaluate
from trainers.trainer import Trainer
from utils.logger import get_logger
from utils.seed import set_seed


def main():
    cfg = Config()
    cfg.ensure_dirs()
    generator = set_seed(cfg.seed)

    logger = get_logger("train", os.path.join(cfg.log_dir, "train.log"))

    device = torch.device(cfg.device if torch.cuda.is_available() else "cpu")
    logger.info(f"Device: {device}")

    # 1. Load data
    logger.info(f"Loading {cfg.dataset_name}...")
    pyg = Planetoid(os.path.join(cfg.data_dir, "Planetoid"), cfg.dataset_name)
    dataset = NodeDataset.from_pyg(pyg[0])
    logger.info(
        f"{dataset.graph} | features={dataset.num_features} classes={dataset.num_classes} | "
        f"train={len(dataset.train_nodes)} val={len(dataset.val_nodes)} test={len(dataset.test_nodes)}"
    )

    # 2. Model
    encoder = build_encoder(
        dim_in=dataset.num_features,
        dim_out=cfg.embedding_dim,
        dim_h=cfg.hidden_dim,
        layer_modes=cfg.layer_modes,
        sample_caps=cfg.sample_caps,
        activation=cfg.activation,
    )
    model = NodeClassifier(encoder, dataset.num_classes, dropout=cfg.dropout).to(device)

    # 3. Train
    trainer = Trainer(
        model=model,
        device=device,
        logger=logger,
        lr=cfg.lr,
        weight_decay=cfg.weight_decay,
        grad_clip=cfg.grad_clip
    )
    logger.info("Start training...")
    trainer.fit(dataset, epochs=cfg.epochs, generator=generator)

    # 4. Test
    test_loss, test_metrics = evaluate(model, dataset, dataset.test_nodes, device, generator)
    logger.info(
        f"[TEST] loss={test_loss:.4f} "
        f"acc={test_metrics['acc']:.4f} f1={test_metrics['f1']:.4f} "
        f"prec={test_metrics['precision']:.4f} rec={test_metrics['recall']:.4f}"
    )


if __name__ == "__main__":
    main()
