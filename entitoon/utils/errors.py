from enum import Enum


class ErrorCategory(str, Enum):
    SYSTEM = "system"
    CONFIGURATION = "configuration"
    INPUT = "input"


class EntiToonError(Exception):
    """Custom exception for EntiToon with a category."""

    def __init__(self, message: str, category: ErrorCategory = ErrorCategory.SYSTEM):
        super().__init__(message)
        self.message = message
        self.category = category

    def to_dict(self):
        return {"error": self.message, "category": self.category.value}


class ConfigurationError(EntiToonError):
    """Raised when a configuration file cannot be read or written."""

    def __init__(self, message: str):
        super().__init__(message, ErrorCategory.CONFIGURATION)


class InputError(EntiToonError):
    """Raised when conversion input cannot be read or decoded."""

    def __init__(self, message: str):
        super().__init__(message, ErrorCategory.INPUT)
