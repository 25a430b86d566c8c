"""
Registry mapping model names to model classes.

Concrete models register themselves under a stable name with the
:func:`register_model` decorator when their module is imported, which
happens once when :mod:`scoregas.models.gas` is loaded. ``MODEL_REGISTRY``
is a read-only view of the table; new models are added only through the
decorator. :func:`build_model` looks a name up and constructs the model;
an unknown name always raises instead of returning a placeholder.
"""

import logging
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional, Type, Union

from scoregas.core.exceptions import ModelSpecificationError, UnknownModelError
from scoregas.core.parameters import ParameterVector
from scoregas.core.types import ParameterValues
from scoregas.models.gas.base import GASModel
from scoregas.models.priors.stack import PriorStack

logger = logging.getLogger("scoregas.models.gas.registry")

_REGISTRY: Dict[str, Type[GASModel]] = {}

# Read-only view; register_model is the only writer
MODEL_REGISTRY: Mapping[str, Type[GASModel]] = MappingProxyType(_REGISTRY)


def register_model(name: str) -> Callable[[Type[GASModel]], Type[GASModel]]:
    """Decorator registering a model class under ``name``.

    Example:
        @register_model("BetaTEGARCH")
        class BetaTEGARCH(GASModel):
            ...

    Raises:
        ModelSpecificationError: If ``name`` is already registered or the
            class is not a GASModel
    """
    def decorator(cls: Type[GASModel]) -> Type[GASModel]:
        if not (isinstance(cls, type) and issubclass(cls, GASModel)):
            raise ModelSpecificationError(
                f"Only GASModel subclasses can be registered, got {cls!r}",
                model_type=name
            )
        if name in _REGISTRY:
            raise ModelSpecificationError(
                f"A model named '{name}' is already registered",
                model_type=name,
                details=f"Registered by {_REGISTRY[name].__module__}"
            )
        _REGISTRY[name] = cls
        logger.debug(f"Registered model '{name}'")
        return cls
    return decorator


def available_models() -> List[str]:
    """Names of all registered models, sorted."""
    return sorted(_REGISTRY)


def get_model_class(name: str) -> Type[GASModel]:
    """Model class registered under ``name``.

    Raises:
        UnknownModelError: If no model is registered under ``name``
    """
    try:
        return _REGISTRY[name]
    except (KeyError, TypeError):
        raise UnknownModelError(name, valid_options=available_models()) from None


def build_model(name: str,
                init_params: Optional[Union[ParameterValues, ParameterVector]] = None,
                prior_stack: Optional[PriorStack] = None,
                **options) -> GASModel:
    """Construct a registered model by name.

    Covers the three construction shapes: name only (default parameters and
    priors), name with initial parameters (default priors), and name with
    both initial parameters and priors.

    Args:
        name: Registered model name, e.g. "BetaTEGARCH"
        init_params: Initial parameter values; model defaults if None
        prior_stack: Priors over the parameters; model defaults if None
        **options: Further model options such as ``scaling``

    Returns:
        GASModel: The constructed model

    Raises:
        UnknownModelError: If no model is registered under ``name``
        ConstructionError: If ``init_params`` has the wrong length
        ShapeMismatchError: If ``prior_stack`` has the wrong slot count
    """
    cls = get_model_class(name)
    logger.debug(f"Building model '{name}'")
    return cls(init_params=init_params, prior_stack=prior_stack, **options)
