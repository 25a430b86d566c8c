# scoregas/core/results.py
"""
Result containers for score-driven models.

This module defines the objects returned by filtering and estimation:

- :class:`TimeVaryingPath` holds the filtered time-varying parameter, one value
  per observation, optionally aligned with the caller's Pandas index.
- :class:`GASFilterResult` bundles the path with the per-step log-densities
  and scaled scores produced by one filtering pass.
- :class:`GASFitResult` stores the outcome of an estimation run.

All containers are created once and not modified afterwards.
"""

import warnings
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional

import numpy as np
import pandas as pd

from scoregas.core.exceptions import ConvergenceWarning
from scoregas.core.parameters import ParameterVector, parameter_table

if TYPE_CHECKING:
    from scoregas.models.gas.base import GASModel


@dataclass(frozen=True)
class TimeVaryingPath:
    """Filtered time-varying parameter values, one per observation.

    Attributes:
        values: Filtered state at each time step (read-only array)
        name: Name of the time-varying parameter
        index: Pandas index of the observed series, if it had one
    """

    values: np.ndarray
    name: str = "log_scale"
    index: Optional[pd.Index] = None

    def __post_init__(self) -> None:
        values = np.array(self.values, dtype=np.float64)
        values.setflags(write=False)
        object.__setattr__(self, "values", values)
        if self.index is not None and len(self.index) != len(values):
            raise ValueError(
                f"Index length ({len(self.index)}) doesn't match path length ({len(values)})"
            )

    def __len__(self) -> int:
        return self.values.shape[0]

    def __getitem__(self, item: Any) -> Any:
        return self.values[item]

    def __array__(self, dtype: Any = None, copy: Any = None) -> np.ndarray:
        return np.array(self.values, dtype=dtype)

    @property
    def scale(self) -> np.ndarray:
        """Scale implied by the log-scale path, ``exp(values)``."""
        return np.exp(self.values)

    def to_series(self) -> pd.Series:
        """The path as a Pandas Series, using the original index when available."""
        return pd.Series(np.array(self.values), index=self.index, name=self.name)


@dataclass(frozen=True)
class GASFilterResult:
    """Output of one complete filtering pass.

    Attributes:
        path: Filtered time-varying parameter
        log_densities: Conditional log-density of each observation
        scores: Scaled score that drove each state update
        loglikelihood: Sum of the per-step log-densities
        next_state: One-step-ahead state after the last observation
    """

    path: TimeVaryingPath
    log_densities: np.ndarray
    scores: np.ndarray
    loglikelihood: float
    next_state: float

    def __len__(self) -> int:
        return len(self.path)


@dataclass
class GASFitResult:
    """Result container for score-driven model estimation.

    Attributes:
        model_name: Name of the model
        parameters: Estimated parameters
        loglikelihood: Log-likelihood at the estimate
        logposterior: Log-posterior at the estimate
        aic: Akaike Information Criterion
        bic: Bayesian Information Criterion
        num_obs: Number of observations used in estimation
        convergence: Whether the optimizer reported success
        iterations: Number of optimizer iterations
        method: Optimization method that produced the estimate
        model: Model instance carrying the estimated parameters
        optimization_result: Full optimizer result object
    """

    model_name: str
    parameters: ParameterVector
    loglikelihood: float
    logposterior: float
    aic: float
    bic: float
    num_obs: int
    convergence: bool = True
    iterations: int = 0
    method: str = ""
    model: Optional["GASModel"] = field(default=None, repr=False)
    optimization_result: Optional[Any] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if not self.convergence:
            warnings.warn(
                f"Model {self.model_name} did not converge after {self.iterations} iterations.",
                ConvergenceWarning
            )

    def summary(self) -> str:
        """Generate a text summary of the estimation results.

        Returns:
            str: A formatted summary
        """
        header = f"Model: {self.model_name}\n"
        header += "=" * (len(header) - 1) + "\n\n"
        header += f"Number of observations: {self.num_obs}\n"
        header += f"Method: {self.method}\n"
        header += f"Convergence: {'Yes' if self.convergence else 'No'}\n"
        header += f"Iterations: {self.iterations}\n\n"

        params = "Parameter Estimates:\n" + parameter_table(self.parameters) + "\n\n"

        fit_stats = "Model Fit:\n"
        fit_stats += "-" * 30 + "\n"
        fit_stats += f"Log-likelihood: {self.loglikelihood:.6f}\n"
        fit_stats += f"Log-posterior: {self.logposterior:.6f}\n"
        fit_stats += f"AIC: {self.aic:.6f}\n"
        fit_stats += f"BIC: {self.bic:.6f}\n"
        fit_stats += "-" * 30 + "\n"

        return header + params + fit_stats

    def to_dict(self) -> Dict[str, Any]:
        """Convert the result object to a dictionary."""
        return {
            "model_name": self.model_name,
            "parameters": self.parameters.to_dict(),
            "loglikelihood": self.loglikelihood,
            "logposterior": self.logposterior,
            "aic": self.aic,
            "bic": self.bic,
            "num_obs": self.num_obs,
            "convergence": self.convergence,
            "iterations": self.iterations,
            "method": self.method,
        }
