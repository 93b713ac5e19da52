import importlib.resources
import logging

import torch
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for the feed-forward layer library."""

    model_config = SettingsConfigDict(env_prefix="FFNN_")

    parameters_file: str = Field(
        str(importlib.resources.files("ffnn").joinpath("config", "parameters.toml")),
        description="Path to the TOML file containing layer parameters located inside the package.",
    )
    device: str = Field("cpu", description="Torch device where weight matrices and fire vectors are allocated.")
    dtype: str = Field("float64", description="Torch floating point type used for weights and activations.")
    log_level: str = Field("WARNING", description="Level of the package logger.")

    @property
    def torch_dtype(self) -> torch.dtype:
        """Return the configured dtype as a torch object."""
        return getattr(torch, self.dtype)


config = Settings()
logging.getLogger("ffnn").setLevel(config.log_level.upper())
