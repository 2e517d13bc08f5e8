"""Core utilities package"""

from .config import settings, get_settings
from .logging import setup_logging, get_logger, get_context_logger, request_id_var
from .errors import (
    PolycheckError,
    AnswerParseError,
    UnsupportedAnswerTypeError,
    GradingError,
    register_error_handlers,
)

__all__ = [
    "settings",
    "get_settings",
    "setup_logging",
    "get_logger",
    "get_context_logger",
    "request_id_var",
    "PolycheckError",
    "AnswerParseError",
    "UnsupportedAnswerTypeError",
    "GradingError",
    "register_error_handlers",
]
