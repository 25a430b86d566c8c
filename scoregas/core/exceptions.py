'''
Custom exception classes for scoregas.

This module defines the exception hierarchy used throughout the package. Every
error carries a primary message, optional details and a context dictionary
that is rendered into the final message, so that a failure can be diagnosed
from the message alone: the offending model name, the expected and actual
shapes, or the offending value and the filtering step where it appeared.

The hierarchy groups errors by category (parameters, model specification,
numerics, data, estimation) with specialised subclasses for the concrete
failure modes of score-driven models.
'''

from typing import Any, Dict, List, Optional, Tuple, Union
import inspect
import numpy as np
from pathlib import Path


class GASError(Exception):
    """Base exception class for all scoregas errors.

    Attributes:
        message: The error message
        details: Additional details about the error
        context: Dictionary containing contextual information about the error
    """

    def __init__(self,
                 message: str,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        """Initialize the GASError.

        Args:
            message: The primary error message
            details: Additional details about the error
            context: Dictionary containing contextual information about the error
        """
        self.message = message
        self.details = details
        self.context = context or {}

        full_message = message
        if details:
            full_message += f"\n\nDetails: {details}"

        if self.context:
            context_str = "\n".join(f"  {k}: {v}" for k, v in self.context.items())
            full_message += f"\n\nContext:\n{context_str}"

        # Add caller information for better debugging
        frame = inspect.currentframe()
        if frame:
            try:
                frame = frame.f_back
                # Skip the __init__ frames of subclasses
                while frame and frame.f_code.co_name == "__init__":
                    frame = frame.f_back
                if frame:
                    caller_info = inspect.getframeinfo(frame)
                    full_message += f"\n\nLocation: {Path(caller_info.filename).name}:{caller_info.lineno}"
            finally:
                del frame

        super().__init__(full_message)


class ParameterError(GASError):
    """Exception raised for errors related to model parameters.

    Attributes:
        param_name: The name of the parameter that caused the error
        param_value: The invalid parameter value
        constraint: Description of the constraint that was violated
    """

    def __init__(self,
                 message: str,
                 param_name: Optional[str] = None,
                 param_value: Optional[Any] = None,
                 constraint: Optional[str] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        self.param_name = param_name
        self.param_value = param_value
        self.constraint = constraint

        context_dict = context or {}
        if param_name:
            context_dict["Parameter"] = param_name
        if param_value is not None:
            context_dict["Value"] = param_value
        if constraint:
            context_dict["Constraint"] = constraint

        super().__init__(message, details, context_dict)


class DomainError(ParameterError):
    """Exception raised when a parameter value lies outside its declared domain.

    Also raised by bulk operations on a parameter vector when the supplied
    array does not have one entry per parameter.

    Attributes:
        expected_length: Number of parameters expected by a bulk operation
        actual_length: Number of values actually supplied
    """

    def __init__(self,
                 message: str,
                 param_name: Optional[str] = None,
                 param_value: Optional[Any] = None,
                 constraint: Optional[str] = None,
                 expected_length: Optional[int] = None,
                 actual_length: Optional[int] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        self.expected_length = expected_length
        self.actual_length = actual_length

        context_dict = context or {}
        if expected_length is not None:
            context_dict["Expected Length"] = expected_length
        if actual_length is not None:
            context_dict["Actual Length"] = actual_length

        super().__init__(message, param_name, param_value, constraint, details, context_dict)


class InvalidHyperparameterError(ParameterError):
    """Exception raised when a prior's hyperparameters are outside their valid domain.

    Attributes:
        family: The prior family tag
    """

    def __init__(self,
                 message: str,
                 family: Optional[str] = None,
                 param_name: Optional[str] = None,
                 param_value: Optional[Any] = None,
                 constraint: Optional[str] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        self.family = family

        context_dict = context or {}
        if family:
            context_dict["Prior Family"] = family

        super().__init__(message, param_name, param_value, constraint, details, context_dict)


class ModelSpecificationError(GASError):
    """Exception raised for errors in model specification.

    Attributes:
        model_type: The type of model being specified
        parameter: The parameter or component that is incorrectly specified
        valid_options: List of valid options for the parameter
    """

    def __init__(self,
                 message: str,
                 model_type: Optional[str] = None,
                 parameter: Optional[str] = None,
                 valid_options: Optional[List[Any]] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        self.model_type = model_type
        self.parameter = parameter
        self.valid_options = valid_options

        context_dict = context or {}
        if model_type:
            context_dict["Model Type"] = model_type
        if parameter:
            context_dict["Parameter"] = parameter
        if valid_options:
            context_dict["Valid Options"] = valid_options

        super().__init__(message, details, context_dict)


class ConstructionError(ModelSpecificationError):
    """Exception raised when supplied parameters or priors do not fit a model.

    Attributes:
        expected_shape: The shape the model requires
        actual_shape: The shape that was supplied
    """

    def __init__(self,
                 message: str,
                 model_type: Optional[str] = None,
                 expected_shape: Optional[Union[Tuple[int, ...], int]] = None,
                 actual_shape: Optional[Union[Tuple[int, ...], int]] = None,
                 parameter: Optional[str] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        self.expected_shape = expected_shape
        self.actual_shape = actual_shape

        context_dict = context or {}
        if expected_shape is not None:
            context_dict["Expected Shape"] = expected_shape
        if actual_shape is not None:
            context_dict["Actual Shape"] = actual_shape

        super().__init__(message, model_type, parameter, None, details, context_dict)


class ShapeMismatchError(ConstructionError):
    """Exception raised when a prior stack's slot count differs from the parameter count."""
    pass


class UnknownModelError(ModelSpecificationError):
    """Exception raised when a model name is not present in the registry.

    Attributes:
        model_name: The name that was looked up
    """

    def __init__(self,
                 model_name: str,
                 valid_options: Optional[List[str]] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        self.model_name = model_name
        message = (
            f"Unknown model '{model_name}'. Specify an implemented model; "
            f"see the documentation of scoregas.models for available models."
        )
        super().__init__(message, model_type=model_name, valid_options=valid_options,
                         details=details, context=context)


class NumericError(GASError):
    """Exception raised for numerical computation errors.

    Attributes:
        operation: The operation that caused the error
        values: The values that caused the error
        error_type: The type of numerical error (e.g., "overflow", "domain")
    """

    def __init__(self,
                 message: str,
                 operation: Optional[str] = None,
                 values: Optional[Any] = None,
                 error_type: Optional[str] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        self.operation = operation
        self.values = values
        self.error_type = error_type

        context_dict = context or {}
        if operation:
            context_dict["Operation"] = operation
        if values is not None:
            if isinstance(values, np.ndarray) and values.size > 10:
                context_dict["Values"] = f"Array with shape {values.shape}"
            else:
                context_dict["Values"] = values
        if error_type:
            context_dict["Error Type"] = error_type

        super().__init__(message, details, context_dict)


class NumericDomainError(NumericError):
    """Exception raised when the time-varying parameter leaves its valid domain.

    Attributes:
        step: Index of the observation at which the violation was detected
        value: The offending state (or log-density) value
    """

    def __init__(self,
                 message: str,
                 step: Optional[int] = None,
                 value: Optional[float] = None,
                 operation: Optional[str] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        self.step = step
        self.value = value

        context_dict = context or {}
        if step is not None:
            context_dict["Step"] = step
        if value is not None:
            context_dict["Offending Value"] = value

        super().__init__(message, operation=operation, error_type="domain",
                         details=details, context=context_dict)


class DataError(GASError):
    """Exception raised for errors related to the observed series.

    Attributes:
        data_name: The name of the data that caused the error
        issue: Description of the issue with the data
        index: The index or location where the issue was detected
    """

    def __init__(self,
                 message: str,
                 data_name: Optional[str] = None,
                 issue: Optional[str] = None,
                 index: Optional[Union[int, Tuple[int, ...], str]] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        self.data_name = data_name
        self.issue = issue
        self.index = index

        context_dict = context or {}
        if data_name:
            context_dict["Data"] = data_name
        if issue:
            context_dict["Issue"] = issue
        if index is not None:
            context_dict["Index"] = index

        super().__init__(message, details, context_dict)


class EstimationError(GASError):
    """Exception raised for errors during model estimation.

    Attributes:
        model_type: The type of model being estimated
        estimation_method: The estimation method being used
        issue: Description of the issue that occurred during estimation
    """

    def __init__(self,
                 message: str,
                 model_type: Optional[str] = None,
                 estimation_method: Optional[str] = None,
                 issue: Optional[str] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        self.model_type = model_type
        self.estimation_method = estimation_method
        self.issue = issue

        context_dict = context or {}
        if model_type:
            context_dict["Model Type"] = model_type
        if estimation_method:
            context_dict["Estimation Method"] = estimation_method
        if issue:
            context_dict["Issue"] = issue

        super().__init__(message, details, context_dict)


class ConvergenceError(EstimationError):
    """Exception raised when no optimizer produced a usable solution.

    Attributes:
        iterations: The number of iterations performed before failure
        final_value: The final objective function value
    """

    def __init__(self,
                 message: str,
                 model_type: Optional[str] = None,
                 estimation_method: Optional[str] = None,
                 iterations: Optional[int] = None,
                 final_value: Optional[float] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        self.iterations = iterations
        self.final_value = final_value

        context_dict = context or {}
        if iterations is not None:
            context_dict["Iterations"] = iterations
        if final_value is not None:
            context_dict["Final Value"] = final_value

        super().__init__(message, model_type, estimation_method, None, details, context_dict)


class ConfigurationError(GASError):
    """Exception raised for errors in configuration.

    Attributes:
        section: The configuration section
        option: The configuration option that caused the error
        value: The invalid value
    """

    def __init__(self,
                 message: str,
                 section: Optional[str] = None,
                 option: Optional[str] = None,
                 value: Optional[Any] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        self.section = section
        self.option = option
        self.value = value

        context_dict = context or {}
        if section:
            context_dict["Section"] = section
        if option:
            context_dict["Option"] = option
        if value is not None:
            context_dict["Value"] = value

        super().__init__(message, details, context_dict)


class GASWarning(Warning):
    """Base warning class for scoregas warnings."""
    pass


class ConvergenceWarning(GASWarning):
    """Warning issued when an optimizer stops without reporting success."""
    pass


def raise_domain_error(message: str,
                       param_name: Optional[str] = None,
                       param_value: Optional[Any] = None,
                       constraint: Optional[str] = None,
                       **kwargs: Any) -> None:
    """Raise a DomainError with the given information.

    Raises:
        DomainError: Always
    """
    raise DomainError(message, param_name=param_name, param_value=param_value,
                      constraint=constraint, **kwargs)


def raise_data_error(message: str,
                     data_name: Optional[str] = None,
                     issue: Optional[str] = None,
                     index: Optional[Union[int, Tuple[int, ...], str]] = None,
                     details: Optional[str] = None) -> None:
    """Raise a DataError with the given information.

    Raises:
        DataError: Always
    """
    raise DataError(message, data_name=data_name, issue=issue, index=index, details=details)
