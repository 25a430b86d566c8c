'''
Prior distribution families for Bayesian score-driven models.

Each prior describes the belief about one static model parameter. A prior
owns a family tag and its hyperparameters, validates the hyperparameters when
it is constructed, and evaluates the log-density and its derivative at a
parameter value. Log-densities are evaluated with ``scipy.stats``; gradients
are closed-form.

Conventions shared by every family:

- Outside the family's support the log-density is ``-inf`` and the gradient
  is 0.
- The :class:`FlatPrior` is improper: it contributes 0 to the log-density and
  0 to the gradient everywhere. An empty slot in a prior stack behaves the
  same way.
'''

import abc
import logging
import math
from typing import Any, ClassVar, Dict, Optional, Type

import numpy as np
from scipy import stats

from scoregas.core.exceptions import InvalidHyperparameterError

logger = logging.getLogger("scoregas.models.priors.base")


def _check_finite(family: str, name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value):
        raise InvalidHyperparameterError(
            f"Hyperparameter {name} of the {family} prior must be finite, got {value}",
            family=family,
            param_name=name,
            param_value=value,
            constraint="finite"
        )
    return value


def _check_positive(family: str, name: str, value: float) -> float:
    value = _check_finite(family, name, value)
    if value <= 0:
        raise InvalidHyperparameterError(
            f"Hyperparameter {name} of the {family} prior must be positive, got {value}",
            family=family,
            param_name=name,
            param_value=value,
            constraint="> 0"
        )
    return value


class Prior(abc.ABC):
    """Base class for prior distributions over a single parameter.

    Subclasses declare a ``family`` tag, validate their hyperparameters in
    ``__init__`` and implement :meth:`gradient`. Proper priors also build a
    frozen ``scipy.stats`` distribution used by :meth:`log_density`.

    Attributes:
        family: Distribution family tag
    """

    family: ClassVar[str] = "prior"

    def __init__(self, **hyperparameters: float) -> None:
        self._hyperparameters = dict(hyperparameters)
        self._dist = self._build_distribution()

    @property
    def hyperparameters(self) -> Dict[str, float]:
        """Hyperparameter values keyed by name."""
        return dict(self._hyperparameters)

    @property
    def is_flat(self) -> bool:
        """Whether the prior is improper and contributes nothing."""
        return False

    def _build_distribution(self) -> Optional[Any]:
        """Frozen ``scipy.stats`` distribution for this prior, if any."""
        return None

    def in_support(self, x: float) -> bool:
        """Whether ``x`` lies in the support of the prior."""
        return math.isfinite(x)

    def log_density(self, x: float) -> float:
        """Log-density of the prior at ``x``.

        Args:
            x: Parameter value

        Returns:
            float: Log-density, ``-inf`` outside the support
        """
        x = float(x)
        if not self.in_support(x):
            return -np.inf
        return float(self._dist.logpdf(x))

    @abc.abstractmethod
    def gradient(self, x: float) -> float:
        """Derivative of the log-density with respect to the parameter.

        Args:
            x: Parameter value

        Returns:
            float: Derivative, 0 outside the support
        """
        raise NotImplementedError("gradient must be implemented by subclass")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Prior):
            return NotImplemented
        return self.family == other.family and self._hyperparameters == other._hyperparameters

    def __hash__(self) -> int:
        return hash((self.family, tuple(sorted(self._hyperparameters.items()))))

    def __repr__(self) -> str:
        items = ", ".join(f"{k}={v!r}" for k, v in self._hyperparameters.items())
        return f"{type(self).__name__}({items})"


class FlatPrior(Prior):
    """Improper flat prior: log-density 0 and gradient 0 everywhere."""

    family = "flat"

    @property
    def is_flat(self) -> bool:
        return True

    def log_density(self, x: float) -> float:
        return 0.0

    def gradient(self, x: float) -> float:
        return 0.0


class NormalPrior(Prior):
    """Normal prior with mean ``mean`` and standard deviation ``sd``."""

    family = "normal"

    def __init__(self, mean: float = 0.0, sd: float = 1.0) -> None:
        mean = _check_finite(self.family, "mean", mean)
        sd = _check_positive(self.family, "sd", sd)
        super().__init__(mean=mean, sd=sd)

    def _build_distribution(self) -> Any:
        return stats.norm(loc=self._hyperparameters["mean"], scale=self._hyperparameters["sd"])

    def gradient(self, x: float) -> float:
        x = float(x)
        if not self.in_support(x):
            return 0.0
        mean, sd = self._hyperparameters["mean"], self._hyperparameters["sd"]
        return -(x - mean) / (sd * sd)


class StudentTPrior(Prior):
    """Student's t prior with ``df`` degrees of freedom, location and scale."""

    family = "student_t"

    def __init__(self, df: float = 3.0, loc: float = 0.0, scale: float = 1.0) -> None:
        df = _check_positive(self.family, "df", df)
        loc = _check_finite(self.family, "loc", loc)
        scale = _check_positive(self.family, "scale", scale)
        super().__init__(df=df, loc=loc, scale=scale)

    def _build_distribution(self) -> Any:
        h = self._hyperparameters
        return stats.t(df=h["df"], loc=h["loc"], scale=h["scale"])

    def gradient(self, x: float) -> float:
        x = float(x)
        if not self.in_support(x):
            return 0.0
        h = self._hyperparameters
        z = (x - h["loc"]) / h["scale"]
        return -(h["df"] + 1.0) * z / (h["scale"] * (h["df"] + z * z))


class GammaPrior(Prior):
    """Gamma prior with shape ``shape`` and rate ``rate`` on (0, inf)."""

    family = "gamma"

    def __init__(self, shape: float = 2.0, rate: float = 1.0) -> None:
        shape = _check_positive(self.family, "shape", shape)
        rate = _check_positive(self.family, "rate", rate)
        super().__init__(shape=shape, rate=rate)

    def _build_distribution(self) -> Any:
        h = self._hyperparameters
        return stats.gamma(a=h["shape"], scale=1.0 / h["rate"])

    def in_support(self, x: float) -> bool:
        return math.isfinite(x) and x > 0

    def gradient(self, x: float) -> float:
        x = float(x)
        if not self.in_support(x):
            return 0.0
        h = self._hyperparameters
        return (h["shape"] - 1.0) / x - h["rate"]


class InverseGammaPrior(Prior):
    """Inverse gamma prior with shape ``shape`` and scale ``scale`` on (0, inf)."""

    family = "inverse_gamma"

    def __init__(self, shape: float = 2.0, scale: float = 1.0) -> None:
        shape = _check_positive(self.family, "shape", shape)
        scale = _check_positive(self.family, "scale", scale)
        super().__init__(shape=shape, scale=scale)

    def _build_distribution(self) -> Any:
        h = self._hyperparameters
        return stats.invgamma(a=h["shape"], scale=h["scale"])

    def in_support(self, x: float) -> bool:
        return math.isfinite(x) and x > 0

    def gradient(self, x: float) -> float:
        x = float(x)
        if not self.in_support(x):
            return 0.0
        h = self._hyperparameters
        return -(h["shape"] + 1.0) / x + h["scale"] / (x * x)


class BetaPrior(Prior):
    """Beta prior with shape parameters ``a`` and ``b`` on (0, 1)."""

    family = "beta"

    def __init__(self, a: float = 1.0, b: float = 1.0) -> None:
        a = _check_positive(self.family, "a", a)
        b = _check_positive(self.family, "b", b)
        super().__init__(a=a, b=b)

    def _build_distribution(self) -> Any:
        return stats.beta(a=self._hyperparameters["a"], b=self._hyperparameters["b"])

    def in_support(self, x: float) -> bool:
        return math.isfinite(x) and 0 < x < 1

    def gradient(self, x: float) -> float:
        x = float(x)
        if not self.in_support(x):
            return 0.0
        h = self._hyperparameters
        return (h["a"] - 1.0) / x - (h["b"] - 1.0) / (1.0 - x)


class UniformPrior(Prior):
    """Uniform prior on the closed interval [``lower``, ``upper``]."""

    family = "uniform"

    def __init__(self, lower: float = 0.0, upper: float = 1.0) -> None:
        lower = _check_finite(self.family, "lower", lower)
        upper = _check_finite(self.family, "upper", upper)
        if not upper > lower:
            raise InvalidHyperparameterError(
                f"Uniform prior requires upper > lower, got lower={lower}, upper={upper}",
                family=self.family,
                param_name="upper",
                param_value=upper,
                constraint=f"> {lower}"
            )
        super().__init__(lower=lower, upper=upper)

    def _build_distribution(self) -> Any:
        h = self._hyperparameters
        return stats.uniform(loc=h["lower"], scale=h["upper"] - h["lower"])

    def in_support(self, x: float) -> bool:
        h = self._hyperparameters
        return math.isfinite(x) and h["lower"] <= x <= h["upper"]

    def gradient(self, x: float) -> float:
        return 0.0


PRIOR_FAMILIES: Dict[str, Type[Prior]] = {
    cls.family: cls
    for cls in (FlatPrior, NormalPrior, StudentTPrior, GammaPrior,
                InverseGammaPrior, BetaPrior, UniformPrior)
}


def make_prior(family: str, **hyperparameters: float) -> Prior:
    """Build a prior from its family tag.

    Args:
        family: Family tag, e.g. ``"normal"`` or ``"gamma"``
        **hyperparameters: Hyperparameters of the family

    Returns:
        Prior: The constructed prior

    Raises:
        InvalidHyperparameterError: If the family is unknown, a hyperparameter
            name is not accepted by the family or a value is invalid
    """
    try:
        cls = PRIOR_FAMILIES[family]
    except KeyError:
        raise InvalidHyperparameterError(
            f"Unknown prior family '{family}'",
            family=family,
            details=f"Available families: {sorted(PRIOR_FAMILIES)}"
        ) from None
    try:
        return cls(**hyperparameters)
    except TypeError as e:
        raise InvalidHyperparameterError(
            f"Invalid hyperparameters for the {family} prior: {sorted(hyperparameters)}",
            family=family,
            details=str(e)
        ) from e
