"""Activation functions applied by feed-forward layers to their weighted sums.

Each function is stateless and works both on python floats and on tensors, in
which case it is applied element-wise. The derivative is taken with respect to
the weighted sum, not to the activated output.
"""

import math
from abc import ABC, abstractmethod
from typing import Dict, Type, Union

import torch
from torch import Tensor

Value = Union[float, Tensor]


class ActivationFunction(ABC):
    """Base class for activation functions.
    This class is not meant to be instantiated directly.
    """

    name: str = ""

    @abstractmethod
    def function(self, x: Value) -> Value:
        """Return the activated value."""

    @abstractmethod
    def derivative(self, x: Value) -> Value:
        """Return the derivative of the function at the weighted sum x."""

    def __call__(self, x: Value) -> Value:
        return self.function(x)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Sigmoid(ActivationFunction):
    """Logistic sigmoid, the default for feed-forward layers."""

    name = "sigmoid"

    def function(self, x: Value) -> Value:
        if isinstance(x, Tensor):
            return torch.sigmoid(x)
        if x < 0:
            z = math.exp(x)
            return z / (1.0 + z)
        return 1.0 / (1.0 + math.exp(-x))

    def derivative(self, x: Value) -> Value:
        y = self.function(x)
        return y * (1.0 - y)


class TANH(ActivationFunction):
    """Hyperbolic tangent."""

    name = "tanh"

    def function(self, x: Value) -> Value:
        if isinstance(x, Tensor):
            return torch.tanh(x)
        return math.tanh(x)

    def derivative(self, x: Value) -> Value:
        y = self.function(x)
        return 1.0 - y * y


class Linear(ActivationFunction):
    """Identity, the weighted sum passes through unchanged."""

    name = "linear"

    def function(self, x: Value) -> Value:
        return x

    def derivative(self, x: Value) -> Value:
        if isinstance(x, Tensor):
            return torch.ones_like(x)
        return 1.0


_functions: Dict[str, Type[ActivationFunction]] = {f.name: f for f in (Sigmoid, TANH, Linear)}


def activation_function(name: str) -> ActivationFunction:
    """
    Create an activation function by name. The name is normalized to lowercase
    before the lookup.

    Args:
        name (str): The name of the activation function, e.g. "sigmoid".

    Returns:
        ActivationFunction: A new instance of the matching function.

    Raises:
        ValueError: If no activation function has that name.
    """
    normalized_name = name.lower()
    if normalized_name not in _functions:
        raise ValueError(f"Unknown activation function: {name}. Available: {sorted(_functions)}")
    return _functions[normalized_name]()


__all__ = ["ActivationFunction", "Sigmoid", "TANH", "Linear", "activation_function"]
