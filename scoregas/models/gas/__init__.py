"""
Score-driven (GAS) volatility models.

Importing this package registers the concrete models with the registry, so
they can be built by name with :func:`build_model`:

- BetaTEGARCH: log-scale driven by the score of a Student's t density
- BetaGenTEGARCH: log-scale driven by the score of a generalized t density
"""

import logging

from .base import GASModel
from .registry import (
    MODEL_REGISTRY,
    register_model,
    available_models,
    get_model_class,
    build_model,
)
from .beta_t_egarch import BetaTEGARCH
from .beta_gen_t_egarch import BetaGenTEGARCH

logger = logging.getLogger("scoregas.models.gas")

__all__ = [
    'GASModel',
    'MODEL_REGISTRY', 'register_model', 'available_models', 'get_model_class', 'build_model',
    'BetaTEGARCH', 'BetaGenTEGARCH',
]
