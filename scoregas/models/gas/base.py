'''
Abstract base class for score-driven (GAS) models.

A Generalized Autoregressive Score model lets a time-varying parameter
``lambda_t`` evolve with the score of the conditional density of the
observations:

    lambda_{t+1} = omega + phi * lambda_t + kappa * s_t

where ``s_t`` is the score of log p(y_t | lambda_t) with respect to
``lambda_t``, optionally rescaled by the Fisher information. The filtering
pass, likelihood and posterior assembly, estimation and simulation are
implemented once in :class:`GASModel`. A concrete model supplies only its
parameter declarations, the conditional log-density and its score, and
optionally the information used for scaling, the initial state and the
default priors.

Models are immutable once constructed. Every query recomputes the filtered
path from the static parameters and the series it is given; estimation
returns a new model instead of modifying the one it was called on.
'''

import abc
import logging
import math
from typing import Any, ClassVar, Dict, List, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd
from scipy import optimize

from scoregas.core.config import get_config
from scoregas.core.exceptions import (
    ConstructionError, ConvergenceError, DomainError, ModelSpecificationError,
    NumericDomainError
)
from scoregas.core.parameters import ParameterSpec, ParameterVector
from scoregas.core.results import GASFilterResult, GASFitResult, TimeVaryingPath
from scoregas.core.types import (
    SCALING_METHODS, ParameterValues, RandomState, ScalingMethod, SeriesData
)
from scoregas.core.validation import validate_series
from scoregas.models.priors.stack import PriorStack

logger = logging.getLogger("scoregas.models.gas.base")


class GASModel(abc.ABC):
    """Abstract base class for score-driven models with a scalar time-varying parameter.

    Subclasses implement :meth:`parameter_specs`, :meth:`log_density`,
    :meth:`score` and :meth:`_draw_innovations`. They may override
    :meth:`information`, :meth:`initial_state` and :meth:`default_prior_stack`.

    The static parameters named by ``intercept_name``, ``persistence_name``
    and ``score_coefficient_name`` drive the shared recursion.

    Attributes:
        name: Registered model name
        state_name: Name of the time-varying parameter
    """

    name: ClassVar[str] = "GAS"
    state_name: ClassVar[str] = "log_scale"

    intercept_name: ClassVar[str] = "omega"
    persistence_name: ClassVar[str] = "phi"
    score_coefficient_name: ClassVar[str] = "kappa"

    def __init__(self,
                 init_params: Optional[Union[ParameterValues, ParameterVector]] = None,
                 prior_stack: Optional[PriorStack] = None,
                 scaling: Optional[ScalingMethod] = None) -> None:
        """Initialize the model.

        Args:
            init_params: Initial values of the static parameters, in
                declaration order; the declared defaults are used if omitted
            prior_stack: Priors over the static parameters, one slot per
                parameter; the model's default stack is used if omitted
            scaling: Score scaling, one of "unit", "inverse" or
                "inverse_sqrt"; the configured default is used if omitted

        Raises:
            ConstructionError: If ``init_params`` has the wrong length
            ShapeMismatchError: If ``prior_stack`` has the wrong slot count
            DomainError: If an initial value lies outside its domain
            ModelSpecificationError: If ``scaling`` is not a known method
        """
        specs = tuple(self.parameter_specs())
        self._parameters = self._build_parameters(specs, init_params)

        if prior_stack is None:
            prior_stack = self.default_prior_stack()
        elif not isinstance(prior_stack, PriorStack):
            prior_stack = PriorStack(prior_stack)
        self._prior_stack = prior_stack.attach(len(specs), model_type=self.name)

        if scaling is None:
            scaling = get_config("models", "default_scaling")
        if scaling not in SCALING_METHODS:
            raise ModelSpecificationError(
                f"Unknown score scaling '{scaling}'",
                model_type=self.name,
                parameter="scaling",
                valid_options=list(SCALING_METHODS)
            )
        self._scaling = scaling

        self._coef_index = (
            self._parameters.index_of(self.intercept_name),
            self._parameters.index_of(self.persistence_name),
            self._parameters.index_of(self.score_coefficient_name),
        )

        logger.debug(f"Constructed {self.name} with {self._parameters!r}, scaling={scaling}")

    def _build_parameters(self,
                          specs: Tuple[ParameterSpec, ...],
                          init_params: Optional[Union[ParameterValues, ParameterVector]]
                          ) -> ParameterVector:
        if init_params is None:
            return ParameterVector(specs)
        if isinstance(init_params, ParameterVector):
            if init_params.specs != specs:
                raise ConstructionError(
                    f"{self.name} requires parameters {[s.name for s in specs]}, "
                    f"got {init_params.names}",
                    model_type=self.name,
                    expected_shape=len(specs),
                    actual_shape=len(init_params),
                    parameter="init_params"
                )
            return init_params.copy()

        values = np.asarray(init_params, dtype=np.float64)
        if values.ndim != 1 or values.shape[0] != len(specs):
            raise ConstructionError(
                f"{self.name} requires {len(specs)} initial parameters, got shape {values.shape}",
                model_type=self.name,
                expected_shape=len(specs),
                actual_shape=values.shape,
                parameter="init_params",
                details=f"Parameter order: {[s.name for s in specs]}"
            )
        return ParameterVector(specs, values)

    # Capabilities supplied by concrete models

    @classmethod
    @abc.abstractmethod
    def parameter_specs(cls) -> Tuple[ParameterSpec, ...]:
        """Declarations of the static parameters, in order.

        Returns:
            Tuple[ParameterSpec, ...]: Parameter declarations

        Raises:
            NotImplementedError: If not implemented by subclass
        """
        raise NotImplementedError("parameter_specs must be implemented by subclass")

    @abc.abstractmethod
    def log_density(self, y: float, state: float, params: Sequence[float]) -> float:
        """Conditional log-density of one observation.

        Args:
            y: Observation
            state: Time-varying parameter at the observation
            params: Static parameter values, in declaration order

        Returns:
            float: log p(y | state)

        Raises:
            NotImplementedError: If not implemented by subclass
        """
        raise NotImplementedError("log_density must be implemented by subclass")

    @abc.abstractmethod
    def score(self, y: float, state: float, params: Sequence[float]) -> float:
        """Derivative of :meth:`log_density` with respect to the state.

        Args:
            y: Observation
            state: Time-varying parameter at the observation
            params: Static parameter values, in declaration order

        Returns:
            float: Unscaled score

        Raises:
            NotImplementedError: If not implemented by subclass
        """
        raise NotImplementedError("score must be implemented by subclass")

    @abc.abstractmethod
    def _draw_innovations(self,
                          n: int,
                          params: Sequence[float],
                          rng: np.random.Generator) -> np.ndarray:
        """Draw ``n`` standardized innovations for simulation.

        Raises:
            NotImplementedError: If not implemented by subclass
        """
        raise NotImplementedError("_draw_innovations must be implemented by subclass")

    def information(self, state: float, params: Sequence[float]) -> float:
        """Fisher information of the state, used to scale the score.

        The default of 1.0 leaves the score unchanged under every scaling.

        Args:
            state: Time-varying parameter
            params: Static parameter values, in declaration order

        Returns:
            float: Fisher information
        """
        return 1.0

    def initial_state(self, params: Sequence[float]) -> float:
        """Starting value of the time-varying parameter.

        The unconditional mean ``omega / (1 - phi)`` of the stationary
        recursion.

        Args:
            params: Static parameter values, in declaration order

        Returns:
            float: Initial state
        """
        i_omega, i_phi, _ = self._coef_index
        return params[i_omega] / (1.0 - params[i_phi])

    def default_prior_stack(self) -> PriorStack:
        """Priors used when none are supplied: flat on every parameter."""
        return PriorStack.flat(len(self._parameters))

    # Properties

    @property
    def parameters(self) -> ParameterVector:
        """Copy of the static parameters."""
        return self._parameters.copy()

    @property
    def prior_stack(self) -> PriorStack:
        """Priors attached to the static parameters."""
        return self._prior_stack

    @property
    def scaling(self) -> str:
        """Score scaling method."""
        return self._scaling

    @property
    def n_params(self) -> int:
        """Number of static parameters."""
        return len(self._parameters)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._parameters!r}, scaling='{self._scaling}')"

    # Shared recursion

    def scale_score(self, score: float, state: float, params: Sequence[float]) -> float:
        """Rescale a score according to the model's scaling method.

        Args:
            score: Unscaled score
            state: Time-varying parameter
            params: Static parameter values, in declaration order

        Returns:
            float: ``score``, ``score / I`` or ``score / sqrt(I)``
        """
        if self._scaling == "unit":
            return score
        info = self.information(state, params)
        if self._scaling == "inverse":
            return score / info
        return score / math.sqrt(info)

    def _transition(self, state: float, scaled_score: float, params: Sequence[float]) -> float:
        i_omega, i_phi, i_kappa = self._coef_index
        return params[i_omega] + params[i_phi] * state + params[i_kappa] * scaled_score

    def _check_state(self, state: float, step: int, max_abs_state: float, operation: str) -> None:
        if not math.isfinite(state) or abs(state) > max_abs_state:
            raise NumericDomainError(
                f"{self.state_name} left its valid domain at step {step}",
                step=step,
                value=state,
                operation=operation,
                details=f"|{self.state_name}| must be finite and at most {max_abs_state}"
            )

    def _filter(self,
                values: np.ndarray,
                index: Optional[pd.Index],
                params: List[float]) -> GASFilterResult:
        max_abs_state = get_config("numerical", "max_abs_state")
        n = values.shape[0]
        path = np.empty(n, dtype=np.float64)
        log_densities = np.empty(n, dtype=np.float64)
        scores = np.empty(n, dtype=np.float64)

        state = self.initial_state(params)
        for t in range(n):
            self._check_state(state, t, max_abs_state, "filter")
            y = float(values[t])
            log_density = self.log_density(y, state, params)
            if not math.isfinite(log_density):
                raise NumericDomainError(
                    f"Log-density is not finite at step {t}",
                    step=t,
                    value=log_density,
                    operation="filter"
                )
            scaled = self.scale_score(self.score(y, state, params), state, params)
            path[t] = state
            log_densities[t] = log_density
            scores[t] = scaled
            state = self._transition(state, scaled, params)

        # next_state is reported unchecked, it feeds no density
        return GASFilterResult(
            path=TimeVaryingPath(path, name=self.state_name, index=index),
            log_densities=log_densities,
            scores=scores,
            loglikelihood=float(np.sum(log_densities)),
            next_state=state
        )

    # Queries

    def filter(self, series: SeriesData) -> GASFilterResult:
        """Run the score-driven filter over an observed series.

        Args:
            series: Observed series (list, array or Pandas Series)

        Returns:
            GASFilterResult: Filtered path, per-step log-densities and scaled
                scores, log-likelihood and one-step-ahead state

        Raises:
            DataError: If the series is empty, not one-dimensional or not finite
            NumericDomainError: If the state or a log-density stops being finite
                or representable
        """
        values, index = validate_series(series)
        return self._filter(values, index, self._parameters.to_array().tolist())

    def log_likelihood(self, series: SeriesData) -> float:
        """Log-likelihood of the series under the current parameters."""
        return self.filter(series).loglikelihood

    def filtered_path(self, series: SeriesData) -> TimeVaryingPath:
        """Filtered time-varying parameter, one value per observation."""
        return self.filter(series).path

    def log_posterior(self, series: SeriesData) -> float:
        """Log-likelihood plus the log-density of the attached priors.

        With flat priors this equals :meth:`log_likelihood`.
        """
        return self.log_likelihood(series) + self._prior_stack.log_density(self._parameters)

    # Estimation

    def _objective(self, unconstrained: np.ndarray, values: np.ndarray, penalty: float) -> float:
        try:
            candidate = self._parameters.copy().from_unconstrained(unconstrained)
            params = candidate.to_array().tolist()
            value = -(self._filter(values, None, params).loglikelihood
                      + self._prior_stack.log_density(params))
        except (DomainError, NumericDomainError) as e:
            logger.debug(f"Penalised objective evaluation: {e.message}")
            return penalty
        if not math.isfinite(value):
            return penalty
        return value

    def objective(self, unconstrained: ParameterValues, series: SeriesData) -> float:
        """Negative log-posterior as a function of unconstrained parameters.

        Infeasible points return the configured penalty instead of raising,
        so that optimizers can step back from them.

        Args:
            unconstrained: Parameters in unconstrained space
            series: Observed series

        Returns:
            float: Negative log-posterior, or the penalty value
        """
        values, _ = validate_series(series)
        return self._objective(np.asarray(unconstrained, dtype=np.float64), values,
                               get_config("numerical", "penalty_value"))

    def fit(self,
            series: SeriesData,
            method: Optional[str] = None,
            options: Optional[Dict[str, Any]] = None) -> GASFitResult:
        """Estimate the static parameters by maximizing the log-posterior.

        With the default flat priors this is maximum likelihood. The
        optimization runs in unconstrained space starting from the current
        parameters. If the first method does not converge, the configured
        fallback methods are tried in turn and the best solution is kept.
        The model itself is not modified.

        Args:
            series: Observed series
            method: scipy.optimize.minimize method; configured default if None
            options: Additional options for the optimizer

        Returns:
            GASFitResult: Estimation results, including a new model carrying
                the estimated parameters

        Raises:
            DataError: If the series is invalid or too short
            ConvergenceError: If no method reached a feasible point
        """
        values, _ = validate_series(series, min_length=self.n_params + 1)

        method = method or get_config("numerical", "optimization_method")
        penalty = get_config("numerical", "penalty_value")
        methods = [method] + [m for m in get_config("numerical", "fallback_methods") if m != method]

        opts = {"maxiter": get_config("numerical", "max_iterations"), "disp": False}
        if options:
            opts.update(options)
        tol = get_config("numerical", "optimization_tol")

        start = self._parameters.to_unconstrained()
        logger.debug(f"Fitting {self.name} to {values.shape[0]} observations with {method}")

        best = None
        best_method = method
        for attempt in methods:
            result = optimize.minimize(
                self._objective, start, args=(values, penalty),
                method=attempt, tol=tol, options=opts
            )
            feasible = np.isfinite(result.fun) and result.fun < penalty
            if feasible and (best is None or result.fun < best.fun):
                best, best_method = result, attempt
            if feasible and result.success:
                break
            logger.info(f"{attempt} did not converge for {self.name}: {result.message}")

        if best is None:
            raise ConvergenceError(
                f"No optimizer reached a feasible point for {self.name}",
                model_type=self.name,
                estimation_method=", ".join(methods),
                iterations=int(result.get("nit", 0)),
                final_value=float(result.fun)
            )

        fitted_params = self._parameters.copy().from_unconstrained(best.x)
        fitted = self.with_parameters(fitted_params)
        loglikelihood = fitted.log_likelihood(values)
        logposterior = loglikelihood + self._prior_stack.log_density(fitted_params)

        k = self.n_params
        n = values.shape[0]
        logger.debug(f"Fitted {self.name} with {best_method}: loglikelihood={loglikelihood:.6f}")

        return GASFitResult(
            model_name=self.name,
            parameters=fitted_params,
            loglikelihood=loglikelihood,
            logposterior=logposterior,
            aic=-2 * loglikelihood + 2 * k,
            bic=-2 * loglikelihood + k * np.log(n),
            num_obs=n,
            convergence=bool(best.success),
            iterations=int(best.get("nit", 0)),
            method=best_method,
            model=fitted,
            optimization_result=best
        )

    # Simulation and construction helpers

    def simulate(self,
                 n_periods: int,
                 burn: Optional[int] = None,
                 random_state: RandomState = None) -> Tuple[np.ndarray, TimeVaryingPath]:
        """Simulate a series from the model.

        Observations are drawn as ``exp(state) * eps`` and the state is
        updated with the same recursion used for filtering.

        Args:
            n_periods: Number of periods to return
            burn: Number of initial periods to discard; configured default if None
            random_state: Seed or random number generator

        Returns:
            Tuple[np.ndarray, TimeVaryingPath]: Simulated series and the
                state path that generated it

        Raises:
            ValueError: If ``n_periods`` is not positive or ``burn`` is negative
            NumericDomainError: If the simulated state leaves its domain
        """
        if n_periods <= 0:
            raise ValueError(f"n_periods must be positive, got {n_periods}")
        if burn is None:
            burn = get_config("models", "default_burn")
        if burn < 0:
            raise ValueError(f"burn must be non-negative, got {burn}")

        if isinstance(random_state, np.random.Generator):
            rng = random_state
        else:
            rng = np.random.default_rng(random_state)

        max_abs_state = get_config("numerical", "max_abs_state")
        params = self._parameters.to_array().tolist()
        total = n_periods + burn
        innovations = self._draw_innovations(total, params, rng)

        series = np.empty(total, dtype=np.float64)
        path = np.empty(total, dtype=np.float64)
        state = self.initial_state(params)
        for t in range(total):
            self._check_state(state, t, max_abs_state, "simulate")
            y = math.exp(state) * innovations[t]
            series[t] = y
            path[t] = state
            scaled = self.scale_score(self.score(y, state, params), state, params)
            state = self._transition(state, scaled, params)

        return series[burn:], TimeVaryingPath(path[burn:], name=self.state_name)

    def with_parameters(self, values: Union[ParameterValues, ParameterVector]) -> "GASModel":
        """New model of the same type with different static parameters.

        The priors and scaling are carried over.

        Args:
            values: New parameter values, in declaration order

        Returns:
            GASModel: The new model
        """
        return type(self)(init_params=values, prior_stack=self._prior_stack, scaling=self._scaling)
