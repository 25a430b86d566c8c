# scoregas/core/types.py
"""
Shared type aliases for scoregas.
"""

from typing import Literal, Sequence, Union

import numpy as np
import pandas as pd

# Observed series accepted by the models
SeriesData = Union[Sequence[float], np.ndarray, pd.Series]

# Initial parameter values accepted by model constructors
ParameterValues = Union[Sequence[float], np.ndarray]

# Score scaling methods
ScalingMethod = Literal["unit", "inverse", "inverse_sqrt"]

SCALING_METHODS = ("unit", "inverse", "inverse_sqrt")

# Random state accepted by simulation routines
RandomState = Union[None, int, np.random.Generator]
