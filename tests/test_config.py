'''
Tests for the configuration system.
'''

import logging

import pytest

from scoregas.core.config import (
    ConfigManager, get_config, get_config_manager, reset_config, set_config
)
from scoregas.core.exceptions import ConfigurationError


def test_defaults():
    assert get_config("numerical", "max_abs_state") == 500.0
    assert get_config("numerical", "penalty_value") == 1e10
    assert get_config("numerical", "optimization_method") == "BFGS"
    assert get_config("numerical", "fallback_methods") == ["Nelder-Mead", "Powell"]
    assert get_config("models", "default_scaling") == "unit"
    assert get_config("models", "default_burn") == 500
    assert get_config("logging", "log_level") == "WARNING"


@pytest.mark.parametrize("option", ["not_an_option", "max_abs_stat"])
def test_unknown_option_raises(option):
    with pytest.raises(ConfigurationError) as excinfo:
        get_config("numerical", option)
    assert excinfo.value.option == option


def test_set_and_reset():
    set_config("numerical", "max_iterations", 50)
    assert get_config("numerical", "max_iterations") == 50
    assert get_config_manager().get_modified_options() == {"numerical.max_iterations": 50}

    reset_config("numerical", "max_iterations")
    assert get_config("numerical", "max_iterations") == 1000
    assert get_config_manager().get_modified_options() == {}


def test_reset_section():
    set_config("models", "default_burn", 10)
    set_config("numerical", "penalty_value", 1e5)
    reset_config("models")
    assert get_config("models", "default_burn") == 500
    assert get_config("numerical", "penalty_value") == 1e5


@pytest.mark.parametrize("section, option, value", [
    ("numerical", "max_abs_state", -1.0),
    ("numerical", "max_iterations", 0),
    ("numerical", "fallback_methods", "Powell"),
    ("models", "default_scaling", "hessian"),
    ("models", "default_burn", -5),
    ("logging", "log_level", "VERBOSE"),
])
def test_invalid_values(section, option, value):
    with pytest.raises(ConfigurationError) as excinfo:
        set_config(section, option, value)
    assert excinfo.value.option == option


def test_unknown_section_and_option():
    with pytest.raises(ConfigurationError):
        get_config("plotting", "style")
    with pytest.raises(ConfigurationError):
        set_config("numerical", "step_size", 0.1)


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SCOREGAS_NUMERICAL_MAX_ABS_STATE", "250")
    monkeypatch.setenv("SCOREGAS_NUMERICAL_FALLBACK_METHODS", "Powell, CG")
    monkeypatch.setenv("SCOREGAS_MODELS_DEFAULT_SCALING", "inverse")
    monkeypatch.setenv("SCOREGAS_LOGGING_CONSOLE_LOGGING", "false")

    manager = ConfigManager()
    manager.initialize()
    assert manager.get("numerical", "max_abs_state") == 250.0
    assert manager.get("numerical", "fallback_methods") == ["Powell", "CG"]
    assert manager.get("models", "default_scaling") == "inverse"
    assert manager.get("logging", "console_logging") is False
    reset_config()


def test_invalid_environment_override(monkeypatch):
    monkeypatch.setenv("SCOREGAS_MODELS_DEFAULT_SCALING", "hessian")
    with pytest.raises(ConfigurationError):
        ConfigManager().initialize()
    reset_config()


def test_log_level_applies_to_package_logger():
    set_config("logging", "log_level", "DEBUG")
    assert logging.getLogger("scoregas").level == logging.DEBUG
    reset_config()
    assert logging.getLogger("scoregas").level == logging.WARNING


def test_to_dict():
    config = get_config_manager().to_dict()
    assert set(config) == {"numerical", "models", "logging"}
    assert config["models"]["default_scaling"] == "unit"
