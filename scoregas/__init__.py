# scoregas/__init__.py
"""
scoregas - Score-driven volatility models for Python

Generalized Autoregressive Score (GAS) models let a time-varying parameter
evolve with the score of the observation density. This package provides:

- A shared score-driven filter with likelihood and posterior evaluation,
  maximum likelihood / MAP estimation and simulation
- Beta-t-EGARCH and Beta-generalized-t-EGARCH volatility models
- Constrained parameter vectors with transforms to unconstrained space
- Prior distributions combined into per-parameter prior stacks
- A registry for building models by name

Example:
    >>> import scoregas
    >>> model = scoregas.build_model("BetaTEGARCH")
    >>> model.filtered_path([1.0, -0.5, 2.0, 0.3, -1.2])
"""

import logging
from typing import Union

# Set up package-wide logger; handlers are configured from the logging
# configuration section
logger = logging.getLogger("scoregas")

from .version import __version__, __title__, __description__, __license__

from . import core
from . import models

from .core import (
    GASError,
    DomainError,
    InvalidHyperparameterError,
    ConstructionError,
    ShapeMismatchError,
    UnknownModelError,
    NumericDomainError,
    DataError,
    ConvergenceError,
    ConfigurationError,
    ConvergenceWarning,
    ParameterSpec,
    ParameterVector,
    TimeVaryingPath,
    GASFilterResult,
    GASFitResult,
    get_config,
    set_config,
    reset_config,
    initialize_config,
)
from .models import (
    GASModel,
    BetaTEGARCH,
    BetaGenTEGARCH,
    PriorStack,
    make_prior,
    available_models,
    build_model,
    register_model,
)

initialize_config()


def get_version() -> str:
    """
    Get the current version of scoregas.

    Returns:
        str: Version string
    """
    return __version__


def set_log_level(level: Union[int, str]) -> None:
    """
    Set the logging level of the scoregas logger.

    Args:
        level: Logging level (e.g., logging.DEBUG or "DEBUG")
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())
    logger.setLevel(level)
    logger.debug(f"Log level set to {logging.getLevelName(level)}")


__all__ = [
    '__version__', 'get_version', 'set_log_level',
    'core', 'models',
    'GASError', 'DomainError', 'InvalidHyperparameterError', 'ConstructionError',
    'ShapeMismatchError', 'UnknownModelError', 'NumericDomainError', 'DataError',
    'ConvergenceError', 'ConfigurationError', 'ConvergenceWarning',
    'ParameterSpec', 'ParameterVector', 'TimeVaryingPath', 'GASFilterResult', 'GASFitResult',
    'get_config', 'set_config', 'reset_config', 'initialize_config',
    'GASModel', 'BetaTEGARCH', 'BetaGenTEGARCH', 'PriorStack', 'make_prior',
    'available_models', 'build_model', 'register_model',
]
