"""
Custom exceptions for extension-tips.

Exception Hierarchy:
    ExtensionTipsError (base)
    ├── ConfigError (configuration loading/validation failures)
    └── StorageError (persisted state could not be written or read)

Example:
    >>> from extension_tips.core.exceptions import StorageError
    >>> try:
    ...     raise StorageError("Disk full", path="/tmp/state.json")
    ... except StorageError as e:
    ...     print(f"{e} ({e.context})")
"""


class ExtensionTipsError(Exception):
    """
    Base exception for all extension-tips errors.

    Attributes:
        message: Human-readable error message
        context: Optional dictionary of additional context
    """

    def __init__(self, message: str, **context: object) -> None:
        """
        Initialize an error with message and context.

        Args:
            message: Human-readable error message
            **context: Additional context as keyword arguments
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """Return string representation of the error."""
        return self.message


class ConfigError(ExtensionTipsError):
    """Raised when the merged configuration fails validation."""


class StorageError(ExtensionTipsError):
    """
    Raised when a key-value store cannot persist or load its state.

    The engine treats this as best-effort: the in-memory state stays
    correct for the current process even when durability fails.
    """


__all__ = [
    "ConfigError",
    "ExtensionTipsError",
    "StorageError",
]
