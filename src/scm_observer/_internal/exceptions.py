"""Exception types raised by the observer contract.

Each failure mode of the discovery callbacks maps to one class here. The
narrow classes also derive from the matching builtin so producers that only
know about ``ValueError`` or ``RuntimeError`` still catch them.
"""

from typing import Optional


class ObserverError(Exception):
    """Base class for all custom exceptions in scm_observer."""

    pass


class InvalidArgumentError(ObserverError, ValueError):
    """Raised when an operation receives an argument the observer rejects.

    Covers a project name that was already observed, an attribute key outside
    the vocabulary, and an attribute key that was already set.

    Attributes:
        key: Attribute key involved, if any.
        project_name: Project name involved, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        key: Optional[str] = None,
        project_name: Optional[str] = None,
    ) -> None:
        self.key = key
        self.project_name = project_name
        super().__init__(message)


class AttributeTypeError(ObserverError, TypeError):
    """Raised when an attribute value does not match the type its key expects.

    Attributes:
        key: Attribute key that was being set.
        expected: Human readable description of the expected type.
    """

    def __init__(self, key: str, expected: str, value: object) -> None:
        self.key = key
        self.expected = expected
        super().__init__(
            f"Attribute '{key}' expects {expected}, got {type(value).__name__}"
        )


class InvalidStateError(ObserverError, RuntimeError):
    """Raised when a project observer is used after it was completed."""

    pass


class DiscoveryCancelledError(ObserverError):
    """Raised when finishing a project was interrupted.

    Navigators must propagate this and stop enumerating; the project that was
    being completed is not reliably recorded.
    """

    def __init__(self, project_name: str, message: Optional[str] = None) -> None:
        self.project_name = project_name
        super().__init__(message or f"Discovery cancelled while completing '{project_name}'")


class ConfigError(ObserverError):
    """Exception raised for configuration errors.

    This includes errors such as:
    - Invalid configuration format
    - Unknown attribute type names
    - File access errors
    """

    pass


__all__ = [
    "ObserverError",
    "InvalidArgumentError",
    "AttributeTypeError",
    "InvalidStateError",
    "DiscoveryCancelledError",
    "ConfigError",
]
