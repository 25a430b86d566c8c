"""
Beta-generalized-t-EGARCH model.

Extends :mod:`scoregas.models.gas.beta_t_egarch` by drawing the innovation
from the generalized t distribution, whose density is proportional to

    (1 + |eps|^upsilon / nu) ** (-(nu + 1) / upsilon)

The extra power parameter ``upsilon`` controls the shape of the centre of the
distribution independently of the tails; ``upsilon = 2`` recovers the
Student's t and therefore the Beta-t-EGARCH model.
"""

import logging
from typing import Sequence, Tuple

import numpy as np

from scoregas.core.parameters import ParameterSpec, interval, lower_bounded, positive, real
from scoregas.models.gas._core import gen_t_log_density, gen_t_score
from scoregas.models.gas.base import GASModel
from scoregas.models.gas.registry import register_model

logger = logging.getLogger("scoregas.models.gas.beta_gen_t_egarch")

_NU = 3
_UPSILON = 4


@register_model("BetaGenTEGARCH")
class BetaGenTEGARCH(GASModel):
    """Beta-generalized-t-EGARCH: score-driven log-scale with generalized t innovations."""

    name = "BetaGenTEGARCH"

    @classmethod
    def parameter_specs(cls) -> Tuple[ParameterSpec, ...]:
        return (
            ParameterSpec("omega", real(), 0.0, "Intercept of the log-scale recursion"),
            ParameterSpec("phi", interval(-1.0, 1.0), 0.95, "Persistence of the log-scale"),
            ParameterSpec("kappa", positive(), 0.05, "Loading on the scaled score"),
            ParameterSpec("nu", lower_bounded(2.0), 10.0, "Tail parameter"),
            ParameterSpec("upsilon", positive(), 2.0, "Power parameter"),
        )

    def log_density(self, y: float, state: float, params: Sequence[float]) -> float:
        return gen_t_log_density(y, state, params[_NU], params[_UPSILON])

    def score(self, y: float, state: float, params: Sequence[float]) -> float:
        return gen_t_score(y, state, params[_NU], params[_UPSILON])

    def information(self, state: float, params: Sequence[float]) -> float:
        """Fisher information of the log-scale, ``upsilon nu / (nu + upsilon + 1)``."""
        nu, upsilon = params[_NU], params[_UPSILON]
        return upsilon * nu / (nu + upsilon + 1.0)

    def _draw_innovations(self,
                          n: int,
                          params: Sequence[float],
                          rng: np.random.Generator) -> np.ndarray:
        # |eps|^upsilon / nu = g1 / g2 with g1 ~ Gamma(1/upsilon), g2 ~ Gamma(nu/upsilon)
        nu, upsilon = params[_NU], params[_UPSILON]
        g1 = rng.standard_gamma(1.0 / upsilon, size=n)
        g2 = rng.standard_gamma(nu / upsilon, size=n)
        magnitude = (nu * g1 / g2) ** (1.0 / upsilon)
        sign = np.where(rng.random(n) < 0.5, -1.0, 1.0)
        return sign * magnitude
