"""
scoregas core module.

Foundations shared by every model: the exception hierarchy, constrained
parameter containers, result objects, input validation and configuration.
"""

import logging

logger = logging.getLogger("scoregas.core")

from .exceptions import (
    GASError,
    ParameterError,
    DomainError,
    InvalidHyperparameterError,
    ModelSpecificationError,
    ConstructionError,
    ShapeMismatchError,
    UnknownModelError,
    NumericError,
    NumericDomainError,
    DataError,
    EstimationError,
    ConvergenceError,
    ConfigurationError,
    GASWarning,
    ConvergenceWarning,
)

from .parameters import (
    Domain,
    ParameterSpec,
    ParameterVector,
    real,
    positive,
    lower_bounded,
    interval,
)

from .results import (
    TimeVaryingPath,
    GASFilterResult,
    GASFitResult,
)

from .validation import validate_series

from .config import (
    get_config,
    set_config,
    reset_config,
    initialize_config,
    ConfigManager,
)

__all__ = [
    'GASError', 'ParameterError', 'DomainError', 'InvalidHyperparameterError',
    'ModelSpecificationError', 'ConstructionError', 'ShapeMismatchError',
    'UnknownModelError', 'NumericError', 'NumericDomainError', 'DataError',
    'EstimationError', 'ConvergenceError', 'ConfigurationError',
    'GASWarning', 'ConvergenceWarning',
    'Domain', 'ParameterSpec', 'ParameterVector',
    'real', 'positive', 'lower_bounded', 'interval',
    'TimeVaryingPath', 'GASFilterResult', 'GASFitResult',
    'validate_series',
    'get_config', 'set_config', 'reset_config', 'initialize_config', 'ConfigManager',
]
