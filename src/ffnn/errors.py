"""Exceptions raised by layers when a structural operation cannot proceed."""


class NeuralNetworkError(Exception):
    """Base class for all layer errors."""


class MatrixValidationError(NeuralNetworkError, ValueError):
    """A weight matrix does not have the shape a layer requires."""


class PatternSizeError(NeuralNetworkError, ValueError):
    """An input pattern does not match the number of neurons of a layer."""


class NeuronIndexError(NeuralNetworkError, IndexError):
    """A neuron index is outside the layer."""


class TopologyError(NeuralNetworkError, RuntimeError):
    """The layer is not linked or allocated well enough for the operation."""
