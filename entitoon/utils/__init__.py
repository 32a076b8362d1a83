"""Utilities package for EntiToon."""

from .errors import EntiToonError, ErrorCategory, ConfigurationError, InputError
from .logging_config import setup_logging, get_logger
