class GraphSAGEError(Exception):
    """Base class for encoder errors."""


class ConfigurationError(GraphSAGEError, ValueError):
    """Malformed encoder construction arguments."""


class InvalidAggregatorMode(ConfigurationError):
    pass


class EmptyDependencySetError(GraphSAGEError, ValueError):
    """A layer was asked for representations of an empty node set."""


class DimensionMismatchError(GraphSAGEError, ValueError):
    pass
