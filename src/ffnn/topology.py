"""Helpers to wire layers into a chain."""

from ffnn.errors import TopologyError
from ffnn.layers import BasicLayer


def link(*layers: BasicLayer) -> None:
    """
    Link the layers in the given order and make sure every layer that feeds
    another one has a weight matrix.

    The caller keeps ownership of the layers; the links are weak references.

    Args:
        *layers (BasicLayer): The layers from input to output.

    Raises:
        ValueError: If fewer than two layers are given.
    """
    if len(layers) < 2:
        raise ValueError(f"At least two layers are needed to build a chain, got {len(layers)}")

    for source, target in zip(layers, layers[1:]):
        if source is target:
            raise TopologyError("A layer cannot be linked to itself")
        source.set_next(target)
        target.set_previous(source)
