"""
Beta-t-EGARCH model.

The observation is ``y_t = exp(lambda_t) * eps_t`` with ``eps_t`` drawn from a
Student's t distribution with ``nu`` degrees of freedom. The log-scale
``lambda_t`` is driven by the score of the t density, which is a bounded
transformation of a Beta-distributed variable; extreme observations therefore
move the scale much less than in a Gaussian EGARCH model.

Parameters, in order: ``omega`` (intercept), ``phi`` (persistence, in
(-1, 1)), ``kappa`` (score loading, positive) and ``nu`` (degrees of freedom,
greater than 2).
"""

import logging
from typing import Sequence, Tuple

import numpy as np

from scoregas.core.parameters import ParameterSpec, interval, lower_bounded, positive, real
from scoregas.models.gas._core import beta_t_log_density, beta_t_score
from scoregas.models.gas.base import GASModel
from scoregas.models.gas.registry import register_model

logger = logging.getLogger("scoregas.models.gas.beta_t_egarch")

_NU = 3


@register_model("BetaTEGARCH")
class BetaTEGARCH(GASModel):
    """Beta-t-EGARCH: score-driven log-scale with Student's t innovations."""

    name = "BetaTEGARCH"

    @classmethod
    def parameter_specs(cls) -> Tuple[ParameterSpec, ...]:
        return (
            ParameterSpec("omega", real(), 0.0, "Intercept of the log-scale recursion"),
            ParameterSpec("phi", interval(-1.0, 1.0), 0.95, "Persistence of the log-scale"),
            ParameterSpec("kappa", positive(), 0.05, "Loading on the scaled score"),
            ParameterSpec("nu", lower_bounded(2.0), 10.0, "Degrees of freedom"),
        )

    def log_density(self, y: float, state: float, params: Sequence[float]) -> float:
        return beta_t_log_density(y, state, params[_NU])

    def score(self, y: float, state: float, params: Sequence[float]) -> float:
        return beta_t_score(y, state, params[_NU])

    def information(self, state: float, params: Sequence[float]) -> float:
        """Fisher information of the log-scale, ``2 nu / (nu + 3)``."""
        nu = params[_NU]
        return 2.0 * nu / (nu + 3.0)

    def _draw_innovations(self,
                          n: int,
                          params: Sequence[float],
                          rng: np.random.Generator) -> np.ndarray:
        return rng.standard_t(params[_NU], size=n)
