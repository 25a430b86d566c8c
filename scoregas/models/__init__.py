"""
scoregas models.

Available models (build any of them by name with :func:`build_model`):

- ``"BetaTEGARCH"``: Beta-t-EGARCH, parameters omega, phi, kappa, nu
- ``"BetaGenTEGARCH"``: Beta-generalized-t-EGARCH, parameters omega, phi,
  kappa, nu, upsilon

Priors for Bayesian estimation are in :mod:`scoregas.models.priors`.
"""

import logging

from .priors import (
    Prior,
    FlatPrior,
    NormalPrior,
    StudentTPrior,
    GammaPrior,
    InverseGammaPrior,
    BetaPrior,
    UniformPrior,
    make_prior,
    PriorStack,
)
from .gas import (
    GASModel,
    BetaTEGARCH,
    BetaGenTEGARCH,
    register_model,
    available_models,
    build_model,
)

logger = logging.getLogger("scoregas.models")

__all__ = [
    'Prior', 'FlatPrior', 'NormalPrior', 'StudentTPrior', 'GammaPrior',
    'InverseGammaPrior', 'BetaPrior', 'UniformPrior', 'make_prior', 'PriorStack',
    'GASModel', 'BetaTEGARCH', 'BetaGenTEGARCH',
    'register_model', 'available_models', 'build_model',
]
