"""
Prior distributions for Bayesian estimation of score-driven models.

Individual priors live in :mod:`scoregas.models.priors.base`; they are
combined positionally into a :class:`PriorStack` that is attached to a model
at construction.
"""

import logging

from .base import (
    Prior,
    FlatPrior,
    NormalPrior,
    StudentTPrior,
    GammaPrior,
    InverseGammaPrior,
    BetaPrior,
    UniformPrior,
    PRIOR_FAMILIES,
    make_prior,
)
from .stack import PriorStack

logger = logging.getLogger("scoregas.models.priors")

__all__ = [
    'Prior', 'FlatPrior', 'NormalPrior', 'StudentTPrior', 'GammaPrior',
    'InverseGammaPrior', 'BetaPrior', 'UniformPrior', 'PRIOR_FAMILIES',
    'make_prior', 'PriorStack',
]
