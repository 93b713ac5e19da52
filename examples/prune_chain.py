"""
Forward pass and pruning on a small chain of layers.

Builds a chain of sigmoid layers with random weights, propagates a pattern layer
by layer, prunes one hidden neuron and propagates the same pattern again.

Usage:
    python examples/prune_chain.py [--sizes "[2,4,1]"] [--neuron 0] [--seed 42]
"""

import logging
from typing import List

import torch
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ffnn import FeedforwardLayer, link


# -------------------------------------------------------------------------------------------
class Experiment(BaseSettings):
    """Configuration settings for the pruning example."""

    model_config = SettingsConfigDict(extra="forbid", cli_parse_args=True)

    sizes: List[int] = Field([2, 4, 1], description="Neurons per layer, from input to output")
    neuron: int = Field(0, ge=0, description="Neuron of the first hidden layer to prune")
    seed: int = Field(42, description="Seed for the weight initialization")

    @model_validator(mode="after")
    def check_sizes(self) -> "Experiment":
        if len(self.sizes) < 3:
            raise ValueError("At least one hidden layer is needed to prune")
        return self


# -------------------------------------------------------------------------------------------
def propagate(layers: List[FeedforwardLayer], pattern: List[float]) -> torch.Tensor:
    """Walk the chain and return the fire values of the output layer."""
    layers[0].compute(pattern)
    for layer in layers[1:-1]:
        layer.compute()
    return layers[-1].fire


# -------------------------------------------------------------------------------------------
def main(experiment: Experiment) -> None:
    """Run the forward pass before and after pruning."""
    generator = torch.Generator().manual_seed(experiment.seed)
    layers = [FeedforwardLayer(n) for n in experiment.sizes]
    link(*layers)
    for layer in layers[:-1]:
        layer.reset(generator)

    pattern = torch.rand(experiment.sizes[0], generator=generator, dtype=torch.float64).tolist()
    print(f"Output before pruning: {propagate(layers, pattern).tolist()}")

    layers[1].prune(experiment.neuron)
    print(f"Hidden layer after pruning: {layers[1]}")
    print(f"Output after pruning: {propagate(layers, pattern).tolist()}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    logging.getLogger("ffnn").setLevel(logging.DEBUG)
    main(Experiment())
