from .aggregator import Aggregator, AggregatorMode
from .classifier import NodeClassifier
from .encoder import GraphSAGEEncoder, build_encoder
from .errors import (
    ConfigurationError,
    DimensionMismatchError,
    EmptyDependencySetError,
    GraphSAGEError,
    InvalidAggregatorMode,
)
from .features import InputFeatures, RawFeatures
from .projection import Projection
from .sampling_layer import SamplingLayer
