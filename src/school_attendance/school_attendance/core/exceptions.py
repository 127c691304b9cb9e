class DomainError(Exception):
    """Base exception for the attendance domain."""


class ValidationError(DomainError):
    """Raised when boundary input (date, month, status) cannot be parsed."""


class CaptureError(DomainError):
    """Raised when a single capture source fails to start or read."""


class CaptureUnavailableError(CaptureError):
    """Raised when no capture source could be started."""


class DecodeError(DomainError):
    """Raised when an uploaded image cannot be read as an image."""
