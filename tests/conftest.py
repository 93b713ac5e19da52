import numpy as np
import pytest
import torch

from ffnn import FeedforwardLayer, link


@pytest.fixture(autouse=True)
def set_random_seed():
    """Set a random seed for reproducibility in tests."""
    np.random.seed(42)
    torch.manual_seed(42)


@pytest.fixture()
def layers():
    """Fixture providing an unlinked 2-3-1 chain of sigmoid layers."""
    return FeedforwardLayer(2), FeedforwardLayer(3), FeedforwardLayer(1)


@pytest.fixture()
def chain(layers):
    """Fixture providing the 2-3-1 layers linked with randomized matrices."""
    link(*layers)
    for layer in layers[:-1]:
        layer.reset()
    return layers
