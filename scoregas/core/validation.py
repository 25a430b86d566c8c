# scoregas/core/validation.py

"""
Validation utilities for observed series.

Models accept lists, NumPy arrays and Pandas Series. The helpers here turn any
of them into a contiguous one-dimensional float64 array, rejecting inputs the
filter cannot process, and keep the Pandas index so that results can be
returned aligned with the caller's data.
"""

from typing import Optional, Tuple

import numpy as np
import pandas as pd

from scoregas.core.exceptions import raise_data_error
from scoregas.core.types import SeriesData


def validate_series(data: SeriesData,
                    min_length: int = 1,
                    data_name: str = "series") -> Tuple[np.ndarray, Optional[pd.Index]]:
    """Validate an observed series and convert it to a float64 array.

    The input is never modified; a new array is always returned.

    Args:
        data: Observed series
        min_length: Minimum required number of observations
        data_name: Name of the data for error messages

    Returns:
        Tuple[np.ndarray, Optional[pd.Index]]: The validated values and the
            index of the input if it was a Pandas Series

    Raises:
        TypeError: If data is None or a DataFrame
        DataError: If data is not one-dimensional, too short, non-numeric or
            contains NaN or infinite values
    """
    if data is None:
        raise TypeError(f"{data_name} cannot be None")
    if isinstance(data, pd.DataFrame):
        raise TypeError(f"{data_name} must be one-dimensional, got a DataFrame")

    index = data.index if isinstance(data, pd.Series) else None

    try:
        values = np.array(data, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise_data_error(
            f"{data_name} could not be converted to floating point values",
            data_name=data_name,
            issue="non-numeric values",
            details=str(e)
        )

    if values.ndim != 1:
        raise_data_error(
            f"{data_name} must be one-dimensional, got shape {values.shape}",
            data_name=data_name,
            issue=f"invalid shape {values.shape}"
        )

    if values.shape[0] < min_length:
        raise_data_error(
            f"{data_name} is too short (length {values.shape[0]}), "
            f"minimum required length is {min_length}",
            data_name=data_name,
            issue=f"insufficient length: {values.shape[0]} < {min_length}"
        )

    bad = ~np.isfinite(values)
    if bad.any():
        first = int(np.argmax(bad))
        raise_data_error(
            f"{data_name} contains NaN or infinite values",
            data_name=data_name,
            issue="non-finite values",
            index=first
        )

    return values, index
