from typing import Callable, Union

import torch
import torch.nn.functional as F

from .errors import ConfigurationError

Activation = Callable[[torch.Tensor], torch.Tensor]


def _identity(x: torch.Tensor) -> torch.Tensor:
    return x


ACTIVATIONS = {
    "relu": F.relu,
    "leaky_relu": F.leaky_relu,
    "elu": F.elu,
    "tanh": torch.tanh,
    "sigmoid": torch.sigmoid,
    "identity": _identity,
}


def resolve_activation(act: Union[str, Activation, None]) -> Activation:
    if act is None:
        return _identity
    if callable(act):
        return act
    try:
        return ACTIVATIONS[act.lower()]
    except (KeyError, AttributeError):
        raise ConfigurationError(f"Unknown activation: {act!r}") from None
