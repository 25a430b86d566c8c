'''
Configuration management for scoregas.

Settings are grouped into dataclass sections. The effective value of an
option is resolved in layers:

1. Defaults built into the dataclasses below
2. Environment variables named ``SCOREGAS_<SECTION>_<OPTION>``
3. Runtime modifications made with :func:`set_config`

Models read the numerical and model sections when they are used, so runtime
changes apply to existing instances as well as new ones.
'''

import logging
import os
from dataclasses import dataclass, field, fields, asdict
from enum import Enum
from typing import Any, Dict, List, Optional

from .exceptions import ConfigurationError
from .types import SCALING_METHODS

# Set up module-level logger
logger = logging.getLogger("scoregas.core.config")

CONFIG_ENV_PREFIX = "SCOREGAS_"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigSection(Enum):
    """Enumeration of configuration sections."""
    NUMERICAL = "numerical"
    MODELS = "models"
    LOGGING = "logging"


@dataclass
class NumericalConfig:
    """
    Numerical settings for filtering and estimation.

    Attributes:
        max_abs_state: Largest admissible absolute value of the time-varying
            log-scale; larger values raise NumericDomainError
        penalty_value: Objective value returned at infeasible parameters
        optimization_method: Default scipy.optimize.minimize method
        fallback_methods: Methods tried in turn when the default fails
        max_iterations: Maximum number of optimizer iterations
        optimization_tol: Optimizer convergence tolerance
    """
    max_abs_state: float = 500.0
    penalty_value: float = 1e10
    optimization_method: str = "BFGS"
    fallback_methods: List[str] = field(default_factory=lambda: ["Nelder-Mead", "Powell"])
    max_iterations: int = 1000
    optimization_tol: float = 1e-8


@dataclass
class ModelsConfig:
    """
    Model defaults.

    Attributes:
        default_scaling: Score scaling used when a model is built without one
        default_burn: Burn-in length discarded by simulations
    """
    default_scaling: str = "unit"
    default_burn: int = 500


@dataclass
class LoggingConfig:
    """
    Logging settings for the ``scoregas`` logger.

    Attributes:
        log_level: Level of the package logger
        log_format: Format string for log messages
        console_logging: Whether to attach a console handler
    """
    log_level: str = "WARNING"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    console_logging: bool = True


@dataclass
class GASConfig:
    """
    Complete configuration.

    Attributes:
        numerical: Numerical settings
        models: Model defaults
        logging: Logging settings
    """
    numerical: NumericalConfig = field(default_factory=NumericalConfig)
    models: ModelsConfig = field(default_factory=ModelsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class ConfigManager:
    """
    Configuration manager holding the active :class:`GASConfig`.

    Attributes:
        _config: The current configuration object
        _initialized: Whether environment overrides have been applied
        _modified_keys: Options changed at runtime, as (section, option) pairs
    """

    def __init__(self) -> None:
        self._config = GASConfig()
        self._initialized = False
        self._modified_keys = set()

    def initialize(self) -> None:
        """
        Apply environment overrides, validate the result and set up logging.

        Calling this more than once has no effect.
        """
        if self._initialized:
            return
        self._apply_env_overrides()
        self._validate_config()
        self._setup_logging()
        self._initialized = True

    def _apply_env_overrides(self) -> None:
        """
        Apply ``SCOREGAS_<SECTION>_<OPTION>`` environment variables.
        """
        for env_var, value in os.environ.items():
            if not env_var.startswith(CONFIG_ENV_PREFIX):
                continue

            key = env_var[len(CONFIG_ENV_PREFIX):]
            parts = key.lower().split('_', 1)
            if len(parts) != 2:
                continue

            section, option = parts
            try:
                ConfigSection(section)
            except ValueError:
                continue

            section_obj = getattr(self._config, section)
            if not hasattr(section_obj, option):
                continue

            try:
                setattr(section_obj, option, self._coerce(getattr(section_obj, option), value))
                logger.debug(f"Applied environment override: {env_var}={value}")
            except ValueError as e:
                logger.warning(f"Failed to apply environment override {env_var}: {e}")

    @staticmethod
    def _coerce(current_value: Any, value: str) -> Any:
        """Convert an environment string to the type of the current value."""
        if isinstance(current_value, bool):
            return value.lower() in ('true', 'yes', '1', 'y')
        if isinstance(current_value, int):
            return int(value)
        if isinstance(current_value, float):
            return float(value)
        if isinstance(current_value, list):
            return [item.strip() for item in value.split(',') if item.strip()]
        return value

    def _setup_logging(self) -> None:
        """
        Configure the ``scoregas`` logger from the logging section.
        """
        package_logger = logging.getLogger("scoregas")

        for handler in package_logger.handlers[:]:
            package_logger.removeHandler(handler)

        package_logger.setLevel(getattr(logging, self._config.logging.log_level))

        if self._config.logging.console_logging:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(logging.Formatter(fmt=self._config.logging.log_format))
            package_logger.addHandler(console_handler)

    def _validate_config(self) -> None:
        """
        Validate every option against its constraint.

        Raises:
            ConfigurationError: If an option has an invalid value
        """
        for section in ConfigSection:
            section_obj = getattr(self._config, section.value)
            for f in fields(section_obj):
                self._validate_option(section.value, f.name, getattr(section_obj, f.name))

    def _validate_option(self, section: str, option: str, value: Any) -> None:
        """
        Validate a single option.

        Raises:
            ConfigurationError: If the value violates the option's constraint
        """
        problem = None
        if option in ("max_abs_state", "penalty_value", "optimization_tol"):
            if not isinstance(value, (int, float)) or isinstance(value, bool) or value <= 0:
                problem = "must be a positive number"
        elif option in ("max_iterations",):
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                problem = "must be a positive integer"
        elif option == "default_burn":
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                problem = "must be a non-negative integer"
        elif option == "default_scaling":
            if value not in SCALING_METHODS:
                problem = f"must be one of {list(SCALING_METHODS)}"
        elif option == "log_level":
            if value not in LOG_LEVELS:
                problem = f"must be one of {list(LOG_LEVELS)}"
        elif option == "fallback_methods":
            if not isinstance(value, list) or not all(isinstance(m, str) for m in value):
                problem = "must be a list of method names"

        if problem:
            raise ConfigurationError(
                f"Invalid value for {section}.{option}: {problem}",
                section=section,
                option=option,
                value=value
            )

    def _section(self, section: str) -> Any:
        try:
            ConfigSection(section)
        except ValueError:
            raise ConfigurationError(
                f"Unknown configuration section '{section}'",
                section=section,
                details=f"Valid sections: {[s.value for s in ConfigSection]}"
            ) from None
        return getattr(self._config, section)

    def get(self, section: str, option: str) -> Any:
        """
        Get a configuration value.

        Args:
            section: Section name
            option: Option name

        Returns:
            Any: The option value

        Raises:
            ConfigurationError: If the section or option does not exist
        """
        self.initialize()
        section_obj = self._section(section)
        if not hasattr(section_obj, option):
            raise ConfigurationError(
                f"Unknown configuration option '{section}.{option}'",
                section=section,
                option=option
            )
        return getattr(section_obj, option)

    def set(self, section: str, option: str, value: Any) -> None:
        """
        Set a configuration value at runtime.

        Raises:
            ConfigurationError: If the section or option does not exist or the
                value is invalid
        """
        self.initialize()
        section_obj = self._section(section)
        if not hasattr(section_obj, option):
            raise ConfigurationError(
                f"Unknown configuration option '{section}.{option}'",
                section=section,
                option=option
            )
        self._validate_option(section, option, value)
        setattr(section_obj, option, value)
        self._modified_keys.add((section, option))
        logger.debug(f"Configuration option {section}.{option} set to {value!r}")

        if section == ConfigSection.LOGGING.value:
            self._setup_logging()

    def reset(self, section: Optional[str] = None, option: Optional[str] = None) -> None:
        """
        Reset configuration values to their defaults.

        Args:
            section: Section to reset; all sections if None
            option: Option to reset within ``section``; whole section if None

        Raises:
            ConfigurationError: If the section or option does not exist
        """
        defaults = GASConfig()
        if section is None:
            self._config = defaults
            self._modified_keys.clear()
        else:
            section_obj = self._section(section)
            default_section = getattr(defaults, section)
            if option is None:
                setattr(self._config, section, default_section)
                self._modified_keys = {k for k in self._modified_keys if k[0] != section}
            else:
                if not hasattr(section_obj, option):
                    raise ConfigurationError(
                        f"Unknown configuration option '{section}.{option}'",
                        section=section,
                        option=option
                    )
                setattr(section_obj, option, getattr(default_section, option))
                self._modified_keys.discard((section, option))
        self._setup_logging()

    def get_modified_options(self) -> Dict[str, Any]:
        """
        Options that were changed at runtime, keyed by ``section.option``.
        """
        return {
            f"{section}.{option}": getattr(getattr(self._config, section), option)
            for section, option in sorted(self._modified_keys)
        }

    def to_dict(self) -> Dict[str, Any]:
        """
        The complete configuration as a nested dictionary.
        """
        return asdict(self._config)


_config_manager = ConfigManager()


def initialize_config() -> None:
    """
    Initialize the configuration system.
    """
    _config_manager.initialize()


def get_config(section: str, option: str) -> Any:
    """
    Get a configuration value.

    Args:
        section: Section name
        option: Option name

    Returns:
        Any: The option value

    Raises:
        ConfigurationError: If the section or option does not exist
    """
    return _config_manager.get(section, option)


def set_config(section: str, option: str, value: Any) -> None:
    """
    Set a configuration value.

    Args:
        section: Section name
        option: Option name
        value: New value
    """
    _config_manager.set(section, option, value)


def reset_config(section: Optional[str] = None, option: Optional[str] = None) -> None:
    """
    Reset configuration values to their defaults.

    Args:
        section: Section to reset; all sections if None
        option: Option to reset within ``section``; whole section if None
    """
    _config_manager.reset(section, option)


def get_config_manager() -> ConfigManager:
    """
    The process-wide configuration manager.
    """
    return _config_manager
