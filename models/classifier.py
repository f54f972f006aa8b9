from typing import Optional, Sequence

import torch
import torch.nn as nn

from .encoder import GraphSAGEEncoder
from .features import GraphLike


class NodeClassifier(nn.Module):
    def __init__(self, encoder: GraphSAGEEncoder, num_classes: int, dropout: float = 0.5):
        super().__init__()
        self.encoder = encoder
        self.head = nn.Sequential(
            nn.Dropout(dropout),
            nn.Linear(encoder.dim_out, num_classes),
        )

    def embed(self, graph: GraphLike, nodes: Sequence[int], features,
              generator: Optional[torch.Generator] = None) -> torch.Tensor:
        return self.encoder(graph, nodes, features, generator)

    def forward(self, graph: GraphLike, nodes: Sequence[int], features,
                generator: Optional[torch.Generator] = None) -> torch.Tensor:
        return self.head(self.embed(graph, nodes, features, generator))
