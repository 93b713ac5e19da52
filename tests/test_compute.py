"""Tests for forward propagation."""

import math

import pytest
import torch
from numpy.testing import assert_allclose

from ffnn import FeedforwardLayer, Linear, PatternSizeError, TopologyError


def sigmoid(x: float) -> float:
    return 1.0 / (1.0 + math.exp(-x))


@pytest.fixture()
def pair():
    """Fixture providing a 2 -> 2 sigmoid pair with known weights and thresholds."""
    a, b = FeedforwardLayer(2), FeedforwardLayer(2)
    a.set_next(b)
    b.set_previous(a)
    a.set_matrix([[0.5, -1.0], [2.0, 0.25], [0.1, -0.3]])
    return a, b


class TestCompute:
    """Test suite for the compute contract."""

    def test_example_scenario(self):
        """Test that a unit weight and no threshold gives sigmoid of the first input."""
        a, b = FeedforwardLayer(2), FeedforwardLayer(1)
        a.set_next(b)
        a.set_matrix([[1.0, 0.0], [0.0, 1.0], [0.0, 0.0]])
        a.compute([1.0, 2.0])
        assert_allclose(b.fire.numpy(), [0.7311], 1e-4)

    @pytest.mark.parametrize("x0, x1", [(1.0, -2.0), (0.0, 0.0), (3.0, 0.5)])
    def test_weighted_sum_with_threshold(self, pair, x0, x1):
        """Test each output against the activation of its column dot product."""
        a, b = pair
        a.compute([x0, x1])
        desired = [
            sigmoid(x0 * 0.5 + x1 * 2.0 + 0.1),
            sigmoid(x0 * -1.0 + x1 * 0.25 - 0.3),
        ]
        assert_allclose(b.fire.numpy(), desired, 1e-9)

    def test_returns_own_fire(self, pair):
        """Test that the input is returned while the output lands in the next layer."""
        a, b = pair
        result = a.compute([1.0, -2.0])
        assert result is a.fire
        assert result.tolist() == [1.0, -2.0]
        assert b.fire.tolist() != [0.0, 0.0]

    def test_without_pattern_uses_fire(self, pair):
        """Test that the current fire values are propagated when no pattern is given."""
        a, b = pair
        a.set_fire([1.0, -2.0])
        a.compute()
        expected = b.fire.clone()
        b.fire.zero_()
        a.compute([1.0, -2.0])
        assert torch.equal(b.fire, expected)

    def test_next_fire_written_in_place(self, pair):
        a, b = pair
        fire = b.fire
        a.compute([1.0, 1.0])
        assert b.fire is fire

    def test_chain(self, chain):
        """Test that an orchestrator can walk the chain layer by layer."""
        a, b, c = chain
        a.compute([0.2, 0.8])
        b.compute()
        assert torch.allclose(c.fire, b.forward())
        assert 0.0 < c.get_fire(0) < 1.0

    def test_output_layer(self):
        """Test that a layer without next only loads the pattern."""
        layer = FeedforwardLayer(2)
        result = layer.compute([0.5, 0.6])
        assert result.tolist() == [0.5, 0.6]

    def test_pattern_size(self, pair):
        a, b = pair
        with pytest.raises(PatternSizeError):
            a.compute([1.0, 2.0, 3.0])
        with pytest.raises(ValueError):
            a.compute([1.0])
        assert b.fire.tolist() == [0.0, 0.0]

    def test_matrix_too_narrow(self):
        """Test that a matrix kept from an earlier topology is detected."""
        a, b = FeedforwardLayer(2), FeedforwardLayer(3)
        a.set_matrix(torch.ones(3, 1))
        a.set_next(b)
        with pytest.raises(TopologyError, match="columns"):
            a.compute([1.0, 1.0])

    def test_linear_activation(self):
        a, b = FeedforwardLayer(1, Linear()), FeedforwardLayer(1)
        a.set_next(b)
        a.set_matrix([[3.0], [-1.0]])
        a.compute([2.0])
        assert b.get_fire(0) == 5.0

    def test_nan_propagates(self, pair):
        a, b = pair
        a.compute([float("nan"), 0.0])
        assert torch.isnan(b.fire).all()


class TestForward:
    """Test suite for pure propagation."""

    def test_matches_compute(self, pair):
        a, b = pair
        output = a([1.0, -2.0])
        a.compute([1.0, -2.0])
        assert torch.equal(output, b.fire)

    def test_no_side_effects(self, pair):
        a, b = pair
        a.forward([1.0, -2.0])
        assert a.fire.tolist() == [0.0, 0.0]
        assert b.fire.tolist() == [0.0, 0.0]

    def test_one_value_per_column(self):
        layer = FeedforwardLayer(2)
        layer.set_matrix(torch.zeros(3, 4))
        assert_allclose(layer.forward([1.0, 1.0]).numpy(), [0.5] * 4)

    def test_without_matrix(self):
        with pytest.raises(TopologyError):
            FeedforwardLayer(2).forward([1.0, 1.0])

    def test_pattern_size(self, pair):
        a, _ = pair
        with pytest.raises(PatternSizeError):
            a.forward([1.0])
