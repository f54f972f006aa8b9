from dataclasses import dataclass, field
from typing import List, Optional, Union
import os


def _project_path(*parts: str) -> str:
    return os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), *parts)


@dataclass
class Config:
    # Paths
    project_root: str = field(default_factory=_project_path)
    data_dir: str = field(default_factory=lambda: _project_path("data"))
    log_dir: str = field(default_factory=lambda: _project_path("logs"))

    # Dataset (torch_geometric Planetoid name)
    dataset_name: str = "Cora"
    seed: int = 42

    # Encoder
    hidden_dim: int = 128
    embedding_dim: int = 64
    # innermost layer first
    layer_modes: List[str] = field(default_factory=lambda: ["SAGE_Mean", "SAGE_Mean"])
    sample_caps: List[Optional[Union[int, str]]] = field(default_factory=lambda: [25, 10])
    activation: str = "relu"
    dropout: float = 0.5

    # Training
    device: str = "cuda"
    lr: float = 1e-2
    weight_decay: float = 5e-4
    epochs: int = 50
    grad_clip: float = 2.0

    def ensure_dirs(self):
        os.makedirs(self.data_dir, exist_ok=True)
        os.makedirs(self.log_dir, exist_ok=True)
