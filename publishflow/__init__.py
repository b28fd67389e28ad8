"""Interactive publishing for git repositories and npm / JSR packages."""

__version__ = "0.1.0"
__author__ = "Emasoft"

from publishflow.exceptions import (
    ConfigurationError,
    ErrorCode,
    PromptCancelled,
    PublishError,
)
from publishflow.result import Err, Ok, Result

__all__ = [
    "__version__",
    "ErrorCode",
    "PublishError",
    "PromptCancelled",
    "ConfigurationError",
    "Ok",
    "Err",
    "Result",
]
