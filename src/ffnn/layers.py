"""Layers of a feed-forward network.

A layer owns the weight matrix that connects it to the next layer. The matrix has
one row per neuron of the layer plus a last row of thresholds, which is multiplied
by a constant input of 1 so it acts as a bias. Layers hold weak references to their
neighbours; the chain itself is owned by whoever built it.
"""

import logging
import operator
import weakref
from typing import Optional, Sequence, Union

import torch
from torch import Tensor, nn

from ffnn import parameters, utils
from ffnn.activations import ActivationFunction, activation_function
from ffnn.errors import MatrixValidationError, NeuronIndexError, PatternSizeError, TopologyError
from ffnn.settings import config

logger = logging.getLogger(__name__)

Pattern = Union[Tensor, Sequence[float]]


# -------------------------------------------------------------------------------------------
class BasicLayer(nn.Module):
    """Node of the layer chain holding the fire vector and the weight matrix."""

    def __init__(self, neuron_count: int):
        super().__init__()
        if isinstance(neuron_count, bool):
            raise ValueError(f"neuron_count must be a positive integer, got {neuron_count}")
        try:
            neuron_count = operator.index(neuron_count)
        except TypeError as e:
            raise ValueError(f"neuron_count must be a positive integer, got {neuron_count}") from e
        if neuron_count < 1:
            raise ValueError(f"neuron_count must be a positive integer, got {neuron_count}")

        self._next: Optional[weakref.ref] = None
        self._previous: Optional[weakref.ref] = None
        zeros = torch.zeros(neuron_count, dtype=config.torch_dtype, device=config.device)
        self.register_buffer("fire", zeros)
        self.register_buffer("matrix", None)  # Allocated once the next layer is known

    @property
    def neuron_count(self) -> int:
        """Number of neurons, excluding the threshold."""
        return self.fire.shape[0]

    @property
    def next(self) -> Optional["BasicLayer"]:
        return self._next() if self._next is not None else None

    @property
    def previous(self) -> Optional["BasicLayer"]:
        return self._previous() if self._previous is not None else None

    @property
    def matrix_size(self) -> int:
        """Number of weights and thresholds held by the matrix."""
        return 0 if self.matrix is None else self.matrix.numel()

    # -----------------------------------------------------------------------------------
    def set_next(self, layer: "BasicLayer") -> None:
        """Link the next layer, allocating a zero matrix if this layer has none yet.

        An existing matrix is never resized, even if it no longer fits the new layer.
        """
        self._next = weakref.ref(layer)
        if not self.has_matrix():
            self.ensure_matrix()

    def set_previous(self, layer: "BasicLayer") -> None:
        self._previous = weakref.ref(layer)

    def has_matrix(self) -> bool:
        return self.matrix is not None

    def ensure_matrix(self) -> Tensor:
        """
        Return the weight matrix, allocating it filled with zeros when missing.

        The new matrix has one row per neuron plus the threshold row, and one column
        per neuron of the next layer.

        Raises:
            TopologyError: If there is no matrix and no next layer to size it.
        """
        if self.matrix is not None:
            return self.matrix
        if self.next is None:
            raise TopologyError("Cannot allocate a weight matrix without a next layer")

        shape = (self.neuron_count + 1, self.next.neuron_count)
        logger.debug("Allocating %sx%s weight matrix for %r", *shape, self)
        self.set_matrix(torch.zeros(shape, dtype=config.torch_dtype, device=config.device))
        return self.matrix

    def set_matrix(self, matrix: Union[Tensor, Sequence[Sequence[float]]]) -> None:
        """
        Assign a new weight and threshold matrix to this layer.

        The fire vector is replaced by a zero vector with one entry per matrix row
        except the threshold row. Nothing changes if the matrix is rejected.

        Raises:
            MatrixValidationError: If the matrix is not numeric, not 2-D, or has fewer
                than 2 rows.
        """
        try:
            matrix = torch.as_tensor(matrix, dtype=config.torch_dtype, device=config.device)
        except (TypeError, ValueError) as e:
            raise MatrixValidationError(f"Weight matrix cannot be converted to a tensor: {e}") from e
        if matrix.ndim != 2:
            raise MatrixValidationError(f"Weight matrix must be 2-D, got shape {tuple(matrix.shape)}")
        if matrix.shape[0] < 2:
            raise MatrixValidationError("Weight matrix includes threshold values, and must have at least 2 rows.")

        logger.debug("Assigning %sx%s weight matrix to %r", *matrix.shape, self)
        self.fire = torch.zeros(matrix.shape[0] - 1, dtype=config.torch_dtype, device=config.device)
        self.matrix = matrix

    # -----------------------------------------------------------------------------------
    def set_fire(self, pattern: Pattern) -> None:
        """Copy a pattern into the fire vector, which must have the same length."""
        values = utils.as_vector(pattern)
        if values.shape[0] != self.neuron_count:
            raise PatternSizeError(f"Pattern has {values.shape[0]} values, layer has {self.neuron_count} neurons")
        self.fire.copy_(values)

    def get_fire(self, index: int) -> float:
        self._check_neuron(index)
        return self.fire[index].item()

    def set_fire_value(self, index: int, value: float) -> None:
        self._check_neuron(index)
        self.fire[index] = value

    def _check_neuron(self, index: int) -> None:
        if not 0 <= index < self.neuron_count:
            raise NeuronIndexError(f"Neuron {index} out of range for layer with {self.neuron_count} neurons")

    # -----------------------------------------------------------------------------------
    def is_input(self) -> bool:
        return self.previous is None

    def is_output(self) -> bool:
        return self.next is None

    def is_hidden(self) -> bool:
        return self.previous is not None and self.next is not None

    def reset(self, generator: Optional[torch.Generator] = None) -> None:
        """
        Randomize the weights and thresholds in the configured range.

        Args:
            generator: Optional torch generator for reproducible values.

        Raises:
            TopologyError: If the layer has no matrix.
        """
        if self.matrix is None:
            raise TopologyError("Cannot reset a layer without a weight matrix")

        low, high = parameters.layer.weight_min, parameters.layer.weight_max
        values = torch.rand(self.matrix.shape, generator=generator, dtype=self.matrix.dtype)
        self.matrix.copy_(values * (high - low) + low)

    def extra_repr(self) -> str:
        return f"neuron_count={self.neuron_count}"


# -------------------------------------------------------------------------------------------
class FeedforwardLayer(BasicLayer):
    """
    One layer of a feed-forward network: input, hidden or output depending on
    where it sits in the chain.

    The layer computes, for every neuron of the next layer, the dot product of the
    matching matrix column with its fire values followed by a constant 1, and
    applies its activation function to the sum. By default the activation function
    is taken from the layer parameters, which is the sigmoid.

    Args:
        neuron_count: Number of neurons in this layer.
        activation_function: Function applied to the weighted sums.

    Example:
        >>> a, b = FeedforwardLayer(2), FeedforwardLayer(1)
        >>> a.set_next(b)
        >>> b.set_previous(a)
        >>> a.compute([1.0, 2.0])  # Returns a.fire, b.fire holds the result
    """

    def __init__(self, neuron_count: int, activation_function: Optional[ActivationFunction] = None):
        super().__init__(neuron_count)
        if activation_function is None:
            activation_function = _default_activation()
        self._activation_function = activation_function

    @property
    def activation_function(self) -> ActivationFunction:
        return self._activation_function

    # -----------------------------------------------------------------------------------
    def forward(self, pattern: Optional[Pattern] = None) -> Tensor:
        """
        Propagate a pattern, or the current fire values, through the weight matrix.

        Nothing is written to this layer or its neighbours; the result has one value
        per matrix column.

        Raises:
            TopologyError: If the layer has no matrix.
            PatternSizeError: If the pattern length differs from the neuron count.
        """
        if self.matrix is None:
            raise TopologyError("Cannot propagate through a layer without a weight matrix")

        inputs = self.fire
        if pattern is not None:
            inputs = utils.as_vector(pattern)
            if inputs.shape[0] != self.neuron_count:
                raise PatternSizeError(f"Pattern has {inputs.shape[0]} values, layer has {self.neuron_count} neurons")

        # The trailing 1 multiplies the threshold row so it is just added
        augmented = torch.cat((inputs, inputs.new_ones(1)))
        return self.activation_function(augmented @ self.matrix)

    def compute(self, pattern: Optional[Pattern] = None) -> Tensor:
        """
        Load the pattern into this layer and write the propagated values into the
        fire vector of the next layer.

        Args:
            pattern: Values for this layer's neurons. When None the current fire
                values are used.

        Returns:
            Tensor: This layer's own fire vector, i.e. the input it propagated. The
            output is read from the next layer.

        Raises:
            PatternSizeError: If the pattern length differs from the neuron count.
            TopologyError: If there is a next layer but no matrix, or the matrix has
                fewer columns than the next layer has neurons.
        """
        if pattern is not None:
            self.set_fire(pattern)

        next_layer = self.next
        if next_layer is None:
            return self.fire

        if self.matrix is None:
            raise TopologyError("Cannot compute a layer without a weight matrix")
        if self.matrix.shape[1] < next_layer.neuron_count:
            raise TopologyError(
                f"Weight matrix has {self.matrix.shape[1]} columns, next layer has {next_layer.neuron_count} neurons"
            )

        outputs = self.forward()
        next_layer.fire.copy_(outputs[: next_layer.neuron_count])
        return self.fire

    # -----------------------------------------------------------------------------------
    def prune(self, neuron: int) -> None:
        """
        Remove one neuron from this layer, along with its weights in both layers.

        The index counts neurons from zero, which is also the row of the neuron in
        this layer's matrix and the column feeding it in the previous layer's matrix.
        Both matrices are checked before either is replaced. Assigning the pruned
        matrices resets the fire vectors of both layers; a layer without a matrix
        just drops the neuron's fire value.

        Raises:
            NeuronIndexError: If the neuron does not exist.
            TopologyError: If it is the only neuron of the layer, or the previous
                matrix has no column for it.
        """
        self._check_neuron(neuron)
        if self.neuron_count == 1:
            raise TopologyError("Cannot prune the only neuron of a layer")

        previous = self.previous
        previous_matrix = None
        if previous is not None and previous.has_matrix():
            if neuron >= previous.matrix.shape[1]:
                raise TopologyError(f"Previous layer matrix has no column {neuron}")
            previous_matrix = utils.delete_col(previous.matrix, neuron)

        logger.debug("Pruning neuron %s from %r", neuron, self)
        if self.has_matrix():
            self.set_matrix(utils.delete_row(self.matrix, neuron))
        else:
            self.fire = torch.cat((self.fire[:neuron], self.fire[neuron + 1 :]))

        if previous_matrix is not None:
            previous.set_matrix(previous_matrix)

    def clone_structure(self) -> "FeedforwardLayer":
        """Return a layer with the same neuron count and activation function,
        without matrix, fire values or links."""
        return FeedforwardLayer(self.neuron_count, self.activation_function)

    def extra_repr(self) -> str:
        return f"neuron_count={self.neuron_count}, activation={self.activation_function!r}"


def _default_activation() -> ActivationFunction:
    return activation_function(parameters.layer.activation_function)


__all__ = ["BasicLayer", "FeedforwardLayer"]
