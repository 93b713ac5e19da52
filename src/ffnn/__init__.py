"""Feed-forward neural network layers.

This library provides the layer unit of a feed-forward multilayer network: a weight
matrix with a threshold row, forward propagation through an activation function,
neuron pruning and linkage into a chain of layers.
"""

from ffnn import activations, errors, parameters, utils
from ffnn.activations import TANH, ActivationFunction, Linear, Sigmoid, activation_function
from ffnn.errors import MatrixValidationError, NeuralNetworkError, NeuronIndexError, PatternSizeError, TopologyError
from ffnn.layers import BasicLayer, FeedforwardLayer
from ffnn.settings import config
from ffnn.topology import link
