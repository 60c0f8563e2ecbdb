"""Core domain types and logic."""

from .config import ConfigError, Settings, load_settings, resolve_settings
from .errors import ErrorCode
from .result import Err, Ok, Result, is_err, is_ok

__all__ = [
    # config
    "ConfigError",
    "Settings",
    "load_settings",
    "resolve_settings",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
]
