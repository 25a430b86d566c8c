'''
Tests for building models by name.
'''

import numpy as np
import pytest
from hypothesis import given, settings, strategies as st

from scoregas.core.exceptions import (
    ConstructionError, DomainError, ModelSpecificationError, ShapeMismatchError,
    UnknownModelError
)
from scoregas.models.gas import registry
from scoregas.models.gas import (
    MODEL_REGISTRY, BetaGenTEGARCH, BetaTEGARCH, GASModel, available_models,
    build_model, get_model_class, register_model
)
from scoregas.models.priors import NormalPrior, PriorStack


ARITY = {"BetaTEGARCH": 4, "BetaGenTEGARCH": 5}


def test_available_models():
    assert available_models() == ["BetaGenTEGARCH", "BetaTEGARCH"]
    assert MODEL_REGISTRY["BetaTEGARCH"] is BetaTEGARCH
    assert get_model_class("BetaGenTEGARCH") is BetaGenTEGARCH


@pytest.mark.parametrize("name", sorted(ARITY))
def test_build_by_name_only(name):
    model = build_model(name)
    assert isinstance(model, GASModel)
    assert model.name == name
    assert model.n_params == ARITY[name]
    assert len(model.parameters) == ARITY[name]
    assert len(model.prior_stack) == ARITY[name]
    assert model.prior_stack.is_flat


def test_build_with_initial_parameters():
    model = build_model("BetaTEGARCH", [0.1, 0.5, 0.2, 4.0])
    np.testing.assert_array_equal(model.parameters.to_array(), [0.1, 0.5, 0.2, 4.0])
    assert model.prior_stack.is_flat


def test_build_with_parameters_and_priors():
    priors = PriorStack([NormalPrior(), None, None, None, None])
    model = build_model("BetaGenTEGARCH", [0.1, 0.5, 0.2, 4.0, 1.2], priors)
    assert model.prior_stack is priors
    assert model.parameters["upsilon"] == 1.2


def test_build_passes_options():
    assert build_model("BetaTEGARCH", scaling="inverse").scaling == "inverse"


@pytest.mark.parametrize("name", ["Unknown", "betategarch", "", "GARCH"])
def test_unknown_name(name):
    with pytest.raises(UnknownModelError) as excinfo:
        build_model(name)
    assert excinfo.value.model_name == name
    assert f"'{name}'" in str(excinfo.value)
    assert "documentation" in str(excinfo.value)
    assert excinfo.value.valid_options == ["BetaGenTEGARCH", "BetaTEGARCH"]


@given(st.text(max_size=20).filter(lambda s: s not in ARITY))
@settings(max_examples=50, deadline=None)
def test_unsupported_names_never_build(name):
    with pytest.raises(UnknownModelError):
        build_model(name)


@pytest.mark.parametrize("name, values", [
    ("BetaTEGARCH", [0.0, 0.9, 0.1]),
    ("BetaTEGARCH", [0.0, 0.9, 0.1, 8.0, 2.0]),
    ("BetaGenTEGARCH", [0.0, 0.9, 0.1, 8.0]),
    ("BetaGenTEGARCH", np.zeros((5, 1))),
])
def test_wrong_parameter_length(name, values):
    with pytest.raises(ConstructionError) as excinfo:
        build_model(name, values)
    assert excinfo.value.expected_shape == ARITY[name]
    assert not isinstance(excinfo.value, ShapeMismatchError)


def test_out_of_domain_parameters():
    with pytest.raises(DomainError):
        build_model("BetaTEGARCH", [0.0, 1.5, 0.1, 8.0])


@pytest.mark.parametrize("name, slots", [
    ("BetaTEGARCH", 5),
    ("BetaGenTEGARCH", 4),
    ("BetaGenTEGARCH", 0),
])
def test_prior_slot_mismatch(name, slots):
    with pytest.raises(ShapeMismatchError) as excinfo:
        build_model(name, None, PriorStack.flat(slots))
    assert excinfo.value.expected_shape == ARITY[name]
    assert excinfo.value.actual_shape == slots


def test_duplicate_registration_rejected():
    with pytest.raises(ModelSpecificationError):
        @register_model("BetaTEGARCH")
        class Duplicate(BetaTEGARCH):
            pass
    assert MODEL_REGISTRY["BetaTEGARCH"] is BetaTEGARCH


def test_only_models_can_be_registered():
    with pytest.raises(ModelSpecificationError):
        register_model("NotAModel")(dict)
    assert "NotAModel" not in MODEL_REGISTRY


def test_registering_a_new_model(monkeypatch):
    monkeypatch.setattr(registry, "_REGISTRY", dict(registry._REGISTRY))

    @register_model("ScaledBetaTEGARCH")
    class ScaledBetaTEGARCH(BetaTEGARCH):
        name = "ScaledBetaTEGARCH"

    model = build_model("ScaledBetaTEGARCH", scaling="inverse")
    assert isinstance(model, ScaledBetaTEGARCH)
    assert "ScaledBetaTEGARCH" in available_models()


def test_registry_view_is_read_only():
    with pytest.raises(TypeError):
        MODEL_REGISTRY["Other"] = BetaTEGARCH
    with pytest.raises(TypeError):
        del MODEL_REGISTRY["BetaTEGARCH"]
    assert available_models() == ["BetaGenTEGARCH", "BetaTEGARCH"]
