"""Exception types raised by the resource pipeline"""


class MdsiteError(Exception):
    """Base exception for all mdsite errors."""


class DataTypeError(MdsiteError, TypeError):
    """Raised when a resource is given data that is not a key-value mapping."""


class MissingDestinationError(MdsiteError, RuntimeError):
    """Raised when writing a resource that has no computed destination."""


class InvalidDateError(MdsiteError, ValueError):
    """Raised when a date value cannot be parsed."""
