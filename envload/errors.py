"""
Errors raised while populating a record.
All of them derive from EnvLoadError so callers can catch a single type.
"""


class EnvLoadError(Exception):
    """Base class for every error raised by a Loader."""


class InvalidTargetError(EnvLoadError, TypeError):
    """Raised when the target is not a mutable dataclass instance."""

    def __init__(self, target: object = None, message: str = "must be a mutable dataclass instance"):
        self.target = target
        super().__init__(message)


class NilTargetError(EnvLoadError, ValueError):
    """Raised when the target is None."""

    def __init__(self):
        super().__init__("the target should not be None")


class MissingRequiredError(EnvLoadError):
    """Raised when a non-optional field has no value in the lookup source."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'missing required environment variable "{name}"')


class ConversionError(EnvLoadError):
    """Raised when a found value cannot be converted to the field's type."""

    def __init__(self, field: str, cause: BaseException):
        self.field = field
        self.cause = cause
        super().__init__(f'error reading "{field}": {cause}')
