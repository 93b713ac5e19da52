from typing import Sequence, Union

import torch
from torch import Tensor

from ffnn.settings import config


def as_vector(values: Union[Tensor, Sequence[float]]) -> Tensor:
    """
    Convert a pattern into a 1-D tensor using the configured dtype and device.

    Args:
        values (Union[Tensor, Sequence[float]]): The values to convert.

    Returns:
        Tensor: A 1-D tensor holding the values.

    Raises:
        ValueError: If the values cannot be viewed as a vector.
    """
    vector = torch.as_tensor(values, dtype=config.torch_dtype, device=config.device)
    if vector.ndim != 1:
        raise ValueError(f"Expected a 1-D pattern, got shape {tuple(vector.shape)}")
    return vector


def delete_row(matrix: Tensor, row: int) -> Tensor:
    """
    Return a copy of the matrix without the given row.

    Args:
        matrix (Tensor): A 2-D tensor.
        row (int): Zero based index of the row to remove.

    Returns:
        Tensor: A new tensor with one row less.

    Raises:
        IndexError: If the row does not exist.
    """
    if not 0 <= row < matrix.shape[0]:
        raise IndexError(f"Row {row} out of range for matrix with {matrix.shape[0]} rows")
    return torch.cat((matrix[:row], matrix[row + 1 :]), dim=0)


def delete_col(matrix: Tensor, col: int) -> Tensor:
    """
    Return a copy of the matrix without the given column.

    Args:
        matrix (Tensor): A 2-D tensor.
        col (int): Zero based index of the column to remove.

    Returns:
        Tensor: A new tensor with one column less.

    Raises:
        IndexError: If the column does not exist.
    """
    if not 0 <= col < matrix.shape[1]:
        raise IndexError(f"Column {col} out of range for matrix with {matrix.shape[1]} columns")
    return torch.cat((matrix[:, :col], matrix[:, col + 1 :]), dim=1)
