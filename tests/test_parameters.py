'''
Tests for constrained parameter containers.

Covers domain checks, single and bulk assignment, the transformation to and
from unconstrained space, and the error context carried by DomainError.
'''

import numpy as np
import pytest
from hypothesis import given, settings, strategies as st

from scoregas.core.exceptions import DomainError
from scoregas.core.parameters import (
    Domain, ParameterSpec, ParameterVector, interval, lower_bounded, parameter_table,
    positive, real
)
from scoregas.models.gas import BetaGenTEGARCH, BetaTEGARCH
from tests.conftest import beta_t_param_strategy, gen_t_param_strategy


@pytest.fixture
def specs():
    return (
        ParameterSpec("omega", real(), 0.0),
        ParameterSpec("phi", interval(-1.0, 1.0), 0.9),
        ParameterSpec("kappa", positive(), 0.1),
        ParameterSpec("nu", lower_bounded(2.0), 8.0),
    )


# ---- Domains ----

def test_domain_contains():
    """Bounded domains are open and reject non-finite values."""
    assert real().contains(-1e300)
    assert not real().contains(np.nan)
    assert not real().contains(np.inf)

    assert positive().contains(1e-12)
    assert not positive().contains(0.0)

    assert lower_bounded(2.0).contains(2.0001)
    assert not lower_bounded(2.0).contains(2.0)

    assert interval(-1.0, 1.0).contains(0.999)
    assert not interval(-1.0, 1.0).contains(1.0)
    assert not interval(-1.0, 1.0).contains(-1.0)


def test_domain_requires_bounds():
    with pytest.raises(ValueError):
        Domain("interval", lower=1.0, upper=1.0)
    with pytest.raises(ValueError):
        Domain("lower_bounded")


def test_spec_rejects_default_outside_domain():
    with pytest.raises(ValueError):
        ParameterSpec("kappa", positive(), -1.0)


# ---- Access and assignment ----

def test_defaults_and_access(specs):
    params = ParameterVector(specs)
    assert len(params) == 4
    assert params.names == ["omega", "phi", "kappa", "nu"]
    assert params.get(1) == 0.9
    assert params["nu"] == 8.0
    assert params[-1] == 8.0
    assert params.to_dict() == {"omega": 0.0, "phi": 0.9, "kappa": 0.1, "nu": 8.0}


def test_set_validates_domain(specs):
    params = ParameterVector(specs)
    params.set("phi", 0.5)
    assert params["phi"] == 0.5

    with pytest.raises(DomainError) as excinfo:
        params.set(2, -0.1)
    assert excinfo.value.param_name == "kappa"
    assert excinfo.value.param_value == -0.1
    assert "kappa" in str(excinfo.value)
    assert params["kappa"] == 0.1


def test_unknown_name_and_index(specs):
    params = ParameterVector(specs)
    with pytest.raises(KeyError):
        params.get("sigma")
    with pytest.raises(IndexError):
        params.get(4)


def test_bulk_assignment_is_atomic(specs):
    params = ParameterVector(specs)
    with pytest.raises(DomainError):
        params.set_values([1.0, 0.5, 0.2, 1.5])
    np.testing.assert_array_equal(params.to_array(), [0.0, 0.9, 0.1, 8.0])


def test_bulk_assignment_length_mismatch(specs):
    params = ParameterVector(specs)
    with pytest.raises(DomainError) as excinfo:
        params.set_values([0.0, 0.5, 0.2])
    assert excinfo.value.expected_length == 4
    assert excinfo.value.actual_length == 3

    with pytest.raises(DomainError):
        params.from_unconstrained(np.zeros(5))


def test_to_array_returns_copy(specs):
    params = ParameterVector(specs)
    values = params.to_array()
    values[0] = 100.0
    assert params["omega"] == 0.0


def test_copy_is_independent(specs):
    params = ParameterVector(specs)
    other = params.copy()
    other.set("omega", 1.0)
    assert params["omega"] == 0.0
    assert other != params


# ---- Transformations ----

def test_known_transform_values(specs):
    params = ParameterVector(specs, [0.5, 0.0, 1.0, 3.0])
    np.testing.assert_allclose(params.to_unconstrained(), [0.5, 0.0, 0.0, 0.0], atol=1e-15)


def test_from_unconstrained_returns_self(specs):
    params = ParameterVector(specs)
    assert params.from_unconstrained(np.zeros(4)) is params
    np.testing.assert_allclose(params.to_array(), [0.0, 0.0, 1.0, 3.0])


def test_saturated_transform_raises(specs):
    params = ParameterVector(specs)
    with pytest.raises(DomainError):
        params.from_unconstrained([0.0, 1000.0, 0.0, 0.0])


@given(beta_t_param_strategy())
@settings(max_examples=100, deadline=None)
def test_round_trip_beta_t(values):
    params = ParameterVector(BetaTEGARCH.parameter_specs(), values)
    restored = params.copy().from_unconstrained(params.to_unconstrained())
    np.testing.assert_allclose(restored.to_array(), values, rtol=1e-10, atol=1e-10)


@given(gen_t_param_strategy())
@settings(max_examples=100, deadline=None)
def test_round_trip_gen_t(values):
    params = ParameterVector(BetaGenTEGARCH.parameter_specs(), values)
    restored = params.copy().from_unconstrained(params.to_unconstrained())
    np.testing.assert_allclose(restored.to_array(), values, rtol=1e-10, atol=1e-10)


@given(st.lists(st.floats(min_value=-20.0, max_value=20.0), min_size=4, max_size=4))
@settings(max_examples=100, deadline=None)
def test_unconstrained_maps_into_domain(z):
    params = ParameterVector(BetaTEGARCH.parameter_specs())
    params.from_unconstrained(z)
    for spec, value in zip(params.specs, params):
        assert spec.domain.contains(value)


def test_parameter_table(specs):
    table = parameter_table(ParameterVector(specs))
    assert "omega" in table
    assert "(2.0, inf)" in table
    assert len(table.splitlines()) == 6
