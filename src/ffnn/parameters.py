"""Parameter definitions for feed-forward layers."""

from pathlib import Path
from typing import Dict, Optional, Union

import tomli
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ffnn.settings import config


class Activation(BaseModel):
    """Parameters for an activation function."""

    model_config = ConfigDict(extra="forbid")
    description: str = Field(..., description="Description of the activation function")


class Layer(BaseModel):
    """Default parameters for a feed-forward layer."""

    model_config = ConfigDict(extra="forbid")
    description: Optional[str] = Field(None, description="Optional description of the layer")
    activation_function: str = Field("sigmoid", description="Activation function used when none is given")
    weight_min: float = Field(-1.0, description="Lower bound for randomized weights and thresholds")
    weight_max: float = Field(1.0, description="Upper bound for randomized weights and thresholds")

    @model_validator(mode="after")
    def check_weight_range(self) -> "Layer":
        if self.weight_min >= self.weight_max:
            raise ValueError(f"weight_min ({self.weight_min}) must be lower than weight_max ({self.weight_max})")
        return self


class Parameters(BaseModel):
    """Parameters for the feed-forward layer library."""

    model_config = ConfigDict(extra="forbid")
    activations: Dict[str, Activation] = Field(default_factory=dict, description="Activation descriptions by name")
    layer: Layer = Field(default_factory=Layer, description="Defaults applied to new layers")


def load_parameters(file_path: Union[str, Path]) -> Parameters:
    if isinstance(file_path, str):
        file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Parameters file not found: {file_path}")

    with open(file_path, "rb") as f:
        try:
            data = tomli.load(f)
        except tomli.TOMLDecodeError as e:
            raise ValueError(f"Error parsing TOML file {file_path}: {e}") from e

    try:
        return Parameters.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid parameters in {file_path}: {e}") from e


_parameters = load_parameters(config.parameters_file)
activations = _parameters.activations
layer = _parameters.layer


__all__ = ["Activation", "Layer", "Parameters", "load_parameters", "activations", "layer"]
