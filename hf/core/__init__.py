"""Core types shared by every layer."""

from .config import ConfigurationError, HotfixInputs, load_inputs
from .errors import ErrorCode
from .result import Err, Ok, Result

__all__ = [
    # config
    "ConfigurationError",
    "HotfixInputs",
    "load_inputs",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
]
