# scoregas/core/parameters.py

"""
Parameter containers and transformation infrastructure for scoregas.

A score-driven model owns a fixed, ordered set of static parameters. Each
parameter is described by a :class:`ParameterSpec` that names it, declares its
valid :class:`Domain` and supplies a default value. The :class:`ParameterVector`
holds the current values, validates every assignment against the declared
domains, and maps the whole vector to and from an unconstrained space so that
general-purpose optimizers can operate without boundary constraints.

The parameter count and order are fixed when the vector is created; bulk
assignments must supply exactly one value per parameter.
"""

import math
from dataclasses import dataclass
from typing import (
    Dict, Iterator, List, Literal, Optional, Sequence, Union
)
import numpy as np
from scipy import special

from scoregas.core.exceptions import DomainError, raise_domain_error


DomainKind = Literal["real", "positive", "lower_bounded", "interval"]


# Parameter transformation functions

def transform_positive(value: float) -> float:
    """Transform a positive parameter to unconstrained space using log.

    Args:
        value: Positive parameter value

    Returns:
        float: Transformed parameter in unconstrained space
    """
    return math.log(value)


def inverse_transform_positive(value: float) -> float:
    """Transform a parameter from unconstrained space to positive space using exp.

    Args:
        value: Parameter value in unconstrained space

    Returns:
        float: Positive parameter value
    """
    return math.exp(value) if value < 709.0 else math.inf


def transform_interval(value: float, lower: float, upper: float) -> float:
    """Transform an interval-valued parameter to unconstrained space.

    The value is rescaled to the unit interval and mapped with the logit.

    Args:
        value: Parameter value in (lower, upper)
        lower: Lower bound of the interval
        upper: Upper bound of the interval

    Returns:
        float: Transformed parameter in unconstrained space
    """
    return float(special.logit((value - lower) / (upper - lower)))


def inverse_transform_interval(value: float, lower: float, upper: float) -> float:
    """Transform a parameter from unconstrained space to the interval (lower, upper).

    Args:
        value: Parameter value in unconstrained space
        lower: Lower bound of the interval
        upper: Upper bound of the interval

    Returns:
        float: Parameter value in (lower, upper)
    """
    return lower + (upper - lower) * float(special.expit(value))


@dataclass(frozen=True)
class Domain:
    """Valid domain of a single real-valued parameter.

    All bounded domains are open: a value equal to a bound is rejected.

    Attributes:
        kind: One of "real", "positive", "lower_bounded" or "interval"
        lower: Lower bound (for "lower_bounded" and "interval")
        upper: Upper bound (for "interval")
    """

    kind: DomainKind = "real"
    lower: Optional[float] = None
    upper: Optional[float] = None

    def __post_init__(self) -> None:
        if self.kind == "positive":
            object.__setattr__(self, "lower", 0.0)
        if self.kind in ("lower_bounded", "interval") and self.lower is None:
            raise ValueError(f"Domain of kind '{self.kind}' requires a lower bound")
        if self.kind == "interval":
            if self.upper is None or not self.upper > self.lower:
                raise ValueError(
                    f"Interval domain requires upper > lower, got ({self.lower}, {self.upper})"
                )

    def contains(self, value: float) -> bool:
        """Check whether a value lies strictly inside the domain."""
        if not np.isfinite(value):
            return False
        if self.kind == "real":
            return True
        if self.kind in ("positive", "lower_bounded"):
            return value > self.lower
        return self.lower < value < self.upper

    def to_unconstrained(self, value: float) -> float:
        """Map a value from the domain to the real line."""
        if self.kind == "real":
            return float(value)
        if self.kind in ("positive", "lower_bounded"):
            return transform_positive(value - self.lower)
        return transform_interval(value, self.lower, self.upper)

    def from_unconstrained(self, value: float) -> float:
        """Map a value from the real line back into the domain."""
        if self.kind == "real":
            return float(value)
        if self.kind in ("positive", "lower_bounded"):
            return self.lower + inverse_transform_positive(value)
        return inverse_transform_interval(value, self.lower, self.upper)

    def describe(self) -> str:
        """Human readable description used in error messages."""
        if self.kind == "real":
            return "(-inf, inf)"
        if self.kind in ("positive", "lower_bounded"):
            return f"({self.lower}, inf)"
        return f"({self.lower}, {self.upper})"


def real() -> Domain:
    """Unconstrained real domain."""
    return Domain("real")


def positive() -> Domain:
    """Strictly positive domain."""
    return Domain("positive")


def lower_bounded(lower: float) -> Domain:
    """Domain of values strictly greater than ``lower``."""
    return Domain("lower_bounded", lower=lower)


def interval(lower: float, upper: float) -> Domain:
    """Open interval domain ``(lower, upper)``."""
    return Domain("interval", lower=lower, upper=upper)


@dataclass(frozen=True)
class ParameterSpec:
    """Declaration of one static model parameter.

    Attributes:
        name: Parameter name
        domain: Valid domain of the parameter
        default: Default value used when no initial value is supplied
        description: Short description shown in summaries
    """

    name: str
    domain: Domain
    default: float
    description: str = ""

    def __post_init__(self) -> None:
        if not self.domain.contains(self.default):
            raise ValueError(
                f"Default value {self.default} of parameter '{self.name}' "
                f"lies outside its domain {self.domain.describe()}"
            )


class ParameterVector:
    """Fixed-size, named, ordered collection of constrained parameters.

    Values are validated against each parameter's domain on every assignment.
    The vector can be mapped to an unconstrained array with
    :meth:`to_unconstrained` and restored with :meth:`from_unconstrained`;
    the two are exact inverses up to floating-point rounding.

    Attributes:
        specs: Parameter declarations, in order
    """

    def __init__(self,
                 specs: Sequence[ParameterSpec],
                 values: Optional[Union[Sequence[float], np.ndarray]] = None) -> None:
        """Initialize the parameter vector.

        Args:
            specs: Parameter declarations, in order
            values: Initial values; the declared defaults are used if omitted

        Raises:
            DomainError: If a value lies outside its domain or the number of
                values does not match the number of parameters
        """
        self._specs = tuple(specs)
        names = [spec.name for spec in self._specs]
        if len(set(names)) != len(names):
            raise ValueError(f"Parameter names must be unique, got {names}")
        self._index = {name: i for i, name in enumerate(names)}
        self._values = np.array([spec.default for spec in self._specs], dtype=np.float64)
        if values is not None:
            self.set_values(values)

    @property
    def specs(self) -> tuple:
        """Parameter declarations, in order."""
        return self._specs

    @property
    def names(self) -> List[str]:
        """Parameter names, in order."""
        return [spec.name for spec in self._specs]

    def __len__(self) -> int:
        return len(self._specs)

    def __iter__(self) -> Iterator[float]:
        return iter(self._values.tolist())

    def __getitem__(self, key: Union[int, str]) -> float:
        return self.get(key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParameterVector):
            return NotImplemented
        return self._specs == other._specs and np.array_equal(self._values, other._values)

    def index_of(self, name: str) -> int:
        """Position of the parameter called ``name``.

        Raises:
            KeyError: If there is no such parameter
        """
        try:
            return self._index[name]
        except KeyError:
            raise KeyError(
                f"Unknown parameter '{name}'. Available parameters: {self.names}"
            ) from None

    def _resolve(self, key: Union[int, str]) -> int:
        if isinstance(key, str):
            return self.index_of(key)
        index = int(key)
        if not -len(self) <= index < len(self):
            raise IndexError(f"Parameter index {key} out of range for {len(self)} parameters")
        return index % len(self)

    def get(self, key: Union[int, str]) -> float:
        """Current value of a parameter, looked up by position or name."""
        return float(self._values[self._resolve(key)])

    def set(self, key: Union[int, str], value: float) -> "ParameterVector":
        """Assign a single parameter after validating it against its domain.

        Args:
            key: Position or name of the parameter
            value: New value

        Returns:
            ParameterVector: self

        Raises:
            DomainError: If the value lies outside the parameter's domain
        """
        index = self._resolve(key)
        spec = self._specs[index]
        value = float(value)
        if not spec.domain.contains(value):
            raise_domain_error(
                f"Value {value} for parameter '{spec.name}' lies outside its domain",
                param_name=spec.name,
                param_value=value,
                constraint=spec.domain.describe(),
                context={"Index": index}
            )
        self._values[index] = value
        return self

    def _check_length(self, values: np.ndarray, operation: str) -> None:
        if values.ndim != 1 or values.shape[0] != len(self):
            raise DomainError(
                f"{operation} requires exactly {len(self)} values, got shape {values.shape}",
                expected_length=len(self),
                actual_length=int(values.size)
            )

    def set_values(self, values: Union[Sequence[float], np.ndarray]) -> "ParameterVector":
        """Assign all parameters at once.

        The assignment is atomic: if any value is invalid no value is changed.

        Raises:
            DomainError: If the length is wrong or any value is out of domain
        """
        values = np.asarray(values, dtype=np.float64)
        self._check_length(values, "Bulk assignment")
        for spec, value in zip(self._specs, values):
            if not spec.domain.contains(value):
                raise_domain_error(
                    f"Value {value} for parameter '{spec.name}' lies outside its domain",
                    param_name=spec.name,
                    param_value=float(value),
                    constraint=spec.domain.describe(),
                    context={"Index": self._index[spec.name]}
                )
        self._values = values.copy()
        return self

    def to_array(self) -> np.ndarray:
        """Copy of the current values as a float64 array."""
        return self._values.copy()

    def to_dict(self) -> Dict[str, float]:
        """Mapping of parameter names to current values."""
        return {spec.name: float(v) for spec, v in zip(self._specs, self._values)}

    def to_unconstrained(self) -> np.ndarray:
        """Transform the current values to unconstrained space.

        Returns:
            np.ndarray: Unconstrained representation, one entry per parameter
        """
        return np.array(
            [spec.domain.to_unconstrained(v) for spec, v in zip(self._specs, self._values)],
            dtype=np.float64
        )

    def from_unconstrained(self, array: Union[Sequence[float], np.ndarray]) -> "ParameterVector":
        """Set the values from an unconstrained array.

        Args:
            array: Unconstrained representation, one entry per parameter

        Returns:
            ParameterVector: self

        Raises:
            DomainError: If the length is wrong or an entry maps outside its
                domain after numerical saturation (for example a logistic
                transform rounding to a bound)
        """
        array = np.asarray(array, dtype=np.float64)
        self._check_length(array, "Inverse transformation")
        constrained = [spec.domain.from_unconstrained(z) for spec, z in zip(self._specs, array)]
        return self.set_values(constrained)

    def copy(self) -> "ParameterVector":
        """Independent copy with the same declarations and values."""
        return ParameterVector(self._specs, self._values)

    def __repr__(self) -> str:
        items = ", ".join(f"{name}={value:.6g}" for name, value in self.to_dict().items())
        return f"ParameterVector({items})"


def parameter_table(parameters: ParameterVector) -> str:
    """Format parameters as a fixed-width text table.

    Args:
        parameters: Parameter vector to format

    Returns:
        str: Table with one row per parameter
    """
    lines = [f"{'Parameter':<12} {'Value':>14} {'Domain':>20}", "-" * 48]
    for spec, value in zip(parameters.specs, parameters):
        lines.append(f"{spec.name:<12} {value:>14.6f} {spec.domain.describe():>20}")
    return "\n".join(lines)
