import torch
import torch.nn.functional as F
from typing import Dict, List, Optional, Sequence, Tuple

from graphdata.graph_dataset import NodeDataset
from utils.metrics import compute_metrics


@torch.no_grad()
def evaluate(model, dataset: NodeDataset, nodes: Sequence[int], device,
             generator: Optional[torch.Generator] = None) -> Tuple[float, Dict[str, float]]:
    model.eval()
    nodes = list(nodes)
    x = dataset.x.to(device)
    y = dataset.y.to(device)[torch.tensor(nodes, dtype=torch.long, device=device)]

    logits = model(dataset.graph, nodes, x, generator)
    loss = F.cross_entropy(logits, y)

    ys: List[int] = y.detach().cpu().tolist()
    preds: List[int] = logits.argmax(dim=1).detach().cpu().tolist()
    return float(loss.item()), compute_metrics(ys, preds)
