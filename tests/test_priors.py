'''
Tests for prior distributions and prior stacks.

Log-densities are cross-checked against scipy.stats and gradients against
central finite differences.
'''

import numpy as np
import pytest
from scipy import stats

from scoregas.core.exceptions import (
    ConstructionError, InvalidHyperparameterError, ShapeMismatchError
)
from scoregas.core.parameters import ParameterVector
from scoregas.models.gas import BetaTEGARCH
from scoregas.models.priors import (
    BetaPrior, FlatPrior, GammaPrior, InverseGammaPrior, NormalPrior, PriorStack,
    StudentTPrior, UniformPrior, make_prior
)


def numerical_derivative(f, x, h=1e-6):
    return (f(x + h) - f(x - h)) / (2 * h)


PRIORS_AND_POINTS = [
    (NormalPrior(mean=0.5, sd=2.0), [-3.0, 0.0, 0.5, 4.0]),
    (StudentTPrior(df=4.0, loc=1.0, scale=0.5), [-2.0, 0.7, 1.0, 3.0]),
    (GammaPrior(shape=3.0, rate=2.0), [0.1, 1.0, 2.5]),
    (InverseGammaPrior(shape=2.5, scale=1.5), [0.2, 1.0, 4.0]),
    (BetaPrior(a=20.0, b=1.5), [0.1, 0.5, 0.95]),
    (UniformPrior(lower=-1.0, upper=3.0), [-0.5, 0.0, 2.9]),
]


# ---- Log-densities ----

def test_log_density_matches_scipy():
    x = 0.3
    np.testing.assert_allclose(NormalPrior(0.5, 2.0).log_density(x),
                               stats.norm.logpdf(x, loc=0.5, scale=2.0))
    np.testing.assert_allclose(StudentTPrior(4.0, 1.0, 0.5).log_density(x),
                               stats.t.logpdf(x, 4.0, loc=1.0, scale=0.5))
    np.testing.assert_allclose(GammaPrior(3.0, 2.0).log_density(x),
                               stats.gamma.logpdf(x, 3.0, scale=0.5))
    np.testing.assert_allclose(InverseGammaPrior(2.5, 1.5).log_density(x),
                               stats.invgamma.logpdf(x, 2.5, scale=1.5))
    np.testing.assert_allclose(BetaPrior(2.0, 3.0).log_density(x),
                               stats.beta.logpdf(x, 2.0, 3.0))
    np.testing.assert_allclose(UniformPrior(-1.0, 3.0).log_density(x), -np.log(4.0))


def test_outside_support():
    for prior, x in [(GammaPrior(), -1.0), (InverseGammaPrior(), 0.0),
                     (BetaPrior(), 1.5), (UniformPrior(0.0, 1.0), 2.0)]:
        assert prior.log_density(x) == -np.inf
        assert prior.gradient(x) == 0.0


def test_flat_prior():
    prior = FlatPrior()
    assert prior.is_flat
    assert prior.log_density(1e6) == 0.0
    assert prior.gradient(-3.0) == 0.0


# ---- Gradients ----

@pytest.mark.parametrize("prior, points", PRIORS_AND_POINTS)
def test_gradient_matches_finite_difference(prior, points):
    for x in points:
        expected = numerical_derivative(prior.log_density, x)
        np.testing.assert_allclose(prior.gradient(x), expected, rtol=1e-5, atol=1e-6)


# ---- Hyperparameter validation ----

@pytest.mark.parametrize("factory", [
    lambda: NormalPrior(mean=0.0, sd=0.0),
    lambda: NormalPrior(mean=np.nan, sd=1.0),
    lambda: StudentTPrior(df=-1.0),
    lambda: GammaPrior(shape=0.0, rate=1.0),
    lambda: GammaPrior(shape=1.0, rate=-2.0),
    lambda: InverseGammaPrior(shape=1.0, scale=np.inf),
    lambda: BetaPrior(a=0.0, b=1.0),
    lambda: UniformPrior(lower=1.0, upper=1.0),
])
def test_invalid_hyperparameters(factory):
    with pytest.raises(InvalidHyperparameterError):
        factory()


def test_invalid_hyperparameter_context():
    with pytest.raises(InvalidHyperparameterError) as excinfo:
        GammaPrior(shape=2.0, rate=0.0)
    assert excinfo.value.family == "gamma"
    assert excinfo.value.param_name == "rate"


def test_make_prior():
    prior = make_prior("normal", mean=1.0, sd=0.5)
    assert prior == NormalPrior(1.0, 0.5)
    assert make_prior("flat").is_flat

    with pytest.raises(InvalidHyperparameterError):
        make_prior("cauchy", loc=0.0)
    with pytest.raises(InvalidHyperparameterError):
        make_prior("normal", location=0.0)
    with pytest.raises(InvalidHyperparameterError):
        make_prior("beta", a=-1.0, b=1.0)


# ---- Prior stacks ----

def test_stack_sums_slot_densities():
    stack = PriorStack([NormalPrior(0.0, 1.0), None, GammaPrior(2.0, 10.0), FlatPrior()])
    values = [0.2, 0.9, 0.1, 8.0]
    expected = stats.norm.logpdf(0.2) + stats.gamma.logpdf(0.1, 2.0, scale=0.1)
    np.testing.assert_allclose(stack.log_density(values), expected)

    params = ParameterVector(BetaTEGARCH.parameter_specs(), values)
    assert stack.log_density(params) == stack.log_density(values)


def test_stack_gradient():
    stack = PriorStack([NormalPrior(0.0, 1.0), None, GammaPrior(2.0, 10.0), FlatPrior()])
    grad = stack.gradient([0.2, 0.9, 0.1, 8.0])
    assert grad.shape == (4,)
    np.testing.assert_allclose(grad, [-0.2, 0.0, 1.0 / 0.1 - 10.0, 0.0])


def test_flat_stack():
    stack = PriorStack.flat(5)
    assert len(stack) == 5
    assert stack.is_flat
    assert stack.log_density(np.arange(5.0)) == 0.0
    np.testing.assert_array_equal(stack.gradient(np.arange(5.0)), np.zeros(5))
    assert PriorStack([None, None]).is_flat


def test_stack_attach():
    stack = PriorStack.flat(4)
    assert stack.attach(4) is stack
    with pytest.raises(ShapeMismatchError) as excinfo:
        stack.attach(5, model_type="BetaGenTEGARCH")
    assert excinfo.value.expected_shape == 5
    assert excinfo.value.actual_shape == 4
    assert isinstance(excinfo.value, ConstructionError)


def test_stack_value_length_mismatch():
    with pytest.raises(ShapeMismatchError):
        PriorStack.flat(4).log_density([1.0, 2.0])


def test_stack_rejects_non_prior():
    with pytest.raises(InvalidHyperparameterError):
        PriorStack([NormalPrior(), "normal"])
