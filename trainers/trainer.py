import copy
import torch
import torch.nn.functional as F
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from graphdata.graph_dataset import NodeDataset
from trainers.evaluator import evaluate


@dataclass
class TrainState:
    best_f1: float = -1.0
    best_epoch: int = 0
    best_state: Optional[Dict[str, torch.Tensor]] = None
    train_losses: List[float] = field(default_factory=list)


class Trainer:
    """Full-batch node classification: one optimizer step per epoch over all training nodes."""
    def __init__(self, model, device, logger, lr=1e-2, weight_decay=5e-4, grad_clip=2.0):
        self.model = model
        self.device = device
        self.logger = logger
        self.grad_clip = grad_clip
        self.optimizer = torch.optim.AdamW(model.parameters(), lr=lr, weight_decay=weight_decay)

    def fit(self, dataset: NodeDataset, epochs: int,
            generator: Optional[torch.Generator] = None, restore_best: bool = True) -> TrainState:
        if not dataset.train_nodes:
            raise ValueError("Dataset has no training nodes")
        state = TrainState()

        x = dataset.x.to(self.device)
        train_nodes = list(dataset.train_nodes)
        y = dataset.y.to(self.device)[torch.tensor(train_nodes, dtype=torch.long, device=self.device)]

        for epoch in range(1, epochs + 1):
            self.model.train()
            self.optimizer.zero_grad()

            logits = self.model(dataset.graph, train_nodes, x, generator)
            loss = F.cross_entropy(logits, y)

            loss.backward()
            torch.nn.utils.clip_grad_norm_(self.model.parameters(), self.grad_clip)
            self.optimizer.step()

            train_loss = float(loss.item())
            state.train_losses.append(train_loss)

            if not dataset.val_nodes:
                self.logger.info(f"Epoch {epoch}/{epochs} | train_loss={train_loss:.4f}")
                continue

            val_loss, val_metrics = evaluate(self.model, dataset, dataset.val_nodes, self.device, generator)
            self.logger.info(
                f"Epoch {epoch}/{epochs} | "
                f"train_loss={train_loss:.4f} | val_loss={val_loss:.4f} | "
                f"acc={val_metrics['acc']:.4f} f1={val_metrics['f1']:.4f} "
                f"prec={val_metrics['precision']:.4f} rec={val_metrics['recall']:.4f}"
            )

            if val_metrics["f1"] > state.best_f1:
                state.best_f1 = val_metrics["f1"]
                state.best_epoch = epoch
                # kept in memory only
                state.best_state = copy.deepcopy(self.model.state_dict())

        if restore_best and state.best_state is not None:
            self.model.load_state_dict(state.best_state)
            self.logger.info(f"Restored weights from epoch {state.best_epoch} (best_f1={state.best_f1:.4f})")

        return state
