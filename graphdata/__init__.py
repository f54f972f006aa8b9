from .graph import DirectedGraph
from .graph_dataset import NodeDataset
