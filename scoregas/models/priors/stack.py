"""
Ordered collections of independent priors.

A :class:`PriorStack` holds one slot per model parameter. Slots are matched
to parameters by position, so the stack must be built in parameter order. A
slot holding ``None`` or a :class:`FlatPrior` contributes nothing to the
log-density or its gradient.
"""

import logging
from typing import Iterator, List, Optional, Sequence, Union

import numpy as np

from scoregas.core.exceptions import InvalidHyperparameterError, ShapeMismatchError
from scoregas.core.parameters import ParameterVector
from scoregas.models.priors.base import FlatPrior, Prior

logger = logging.getLogger("scoregas.models.priors.stack")


class PriorStack:
    """Positional stack of independent priors, one slot per parameter.

    Args:
        priors: Sequence of priors; ``None`` entries are flat slots

    Raises:
        InvalidHyperparameterError: If a slot is neither a Prior nor None
    """

    def __init__(self, priors: Sequence[Optional[Prior]]) -> None:
        slots = []
        for position, prior in enumerate(priors):
            if prior is not None and not isinstance(prior, Prior):
                raise InvalidHyperparameterError(
                    f"Prior slot {position} must be a Prior or None, got {type(prior).__name__}",
                    context={"Slot": position}
                )
            slots.append(prior)
        self._slots = tuple(slots)

    @classmethod
    def flat(cls, n: int) -> "PriorStack":
        """All-flat stack with ``n`` slots."""
        return cls([FlatPrior() for _ in range(n)])

    @property
    def slots(self) -> tuple:
        return self._slots

    @property
    def is_flat(self) -> bool:
        """Whether every slot is empty or flat."""
        return all(prior is None or prior.is_flat for prior in self._slots)

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self) -> Iterator[Optional[Prior]]:
        return iter(self._slots)

    def __getitem__(self, position: int) -> Optional[Prior]:
        return self._slots[position]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PriorStack):
            return NotImplemented
        return self._slots == other._slots

    def __repr__(self) -> str:
        return f"PriorStack({list(self._slots)!r})"

    def attach(self, n_params: int, model_type: Optional[str] = None) -> "PriorStack":
        """Check that the stack fits a model with ``n_params`` parameters.

        Args:
            n_params: Number of parameters of the owning model
            model_type: Name of the owning model, for error messages

        Returns:
            PriorStack: self

        Raises:
            ShapeMismatchError: If the slot count differs from ``n_params``
        """
        if len(self) != n_params:
            raise ShapeMismatchError(
                f"Prior stack has {len(self)} slots but the model has {n_params} parameters",
                model_type=model_type,
                expected_shape=n_params,
                actual_shape=len(self),
                parameter="prior_stack"
            )
        return self

    def _values(self, parameters: Union[ParameterVector, Sequence[float], np.ndarray]) -> List[float]:
        if isinstance(parameters, ParameterVector):
            values = parameters.to_array()
        else:
            values = np.asarray(parameters, dtype=np.float64)
        if values.ndim != 1 or values.shape[0] != len(self):
            raise ShapeMismatchError(
                f"Prior stack has {len(self)} slots but {values.size} parameter values were given",
                expected_shape=len(self),
                actual_shape=int(values.size),
                parameter="parameters"
            )
        return values.tolist()

    def log_density(self, parameters: Union[ParameterVector, Sequence[float], np.ndarray]) -> float:
        """Joint log-density of the parameters under the stack.

        Args:
            parameters: Parameter vector or plain values, in slot order

        Returns:
            float: Sum of the slot log-densities; ``-inf`` if any value lies
                outside its prior's support

        Raises:
            ShapeMismatchError: If the number of values differs from the
                slot count
        """
        total = 0.0
        for prior, value in zip(self._slots, self._values(parameters)):
            if prior is not None:
                total += prior.log_density(value)
        return total

    def gradient(self, parameters: Union[ParameterVector, Sequence[float], np.ndarray]) -> np.ndarray:
        """Gradient of :meth:`log_density` with respect to each parameter.

        Returns:
            np.ndarray: One entry per slot, 0 for flat slots
        """
        values = self._values(parameters)
        grad = np.zeros(len(self), dtype=np.float64)
        for i, (prior, value) in enumerate(zip(self._slots, values)):
            if prior is not None:
                grad[i] = prior.gradient(value)
        return grad
