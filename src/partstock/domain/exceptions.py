"""Domain-level exceptions.

All errors raised by the core derive from DomainException so the sale
workflow and the CLI can catch them uniformly and show a readable message.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """User input or a business rule was rejected."""


class InvalidTransition(ValidationError):
    """A stock status transition is not legal for this part."""


class EntityNotFoundError(DomainException):
    """A requested part does not exist (or is no longer cached)."""


class DataContractViolation(DomainException):
    """A record received from the backend breaks the part data contract."""


class CacheDesync(DomainException):
    """The inventory cache no longer holds the part being updated."""


class TransportError(DomainException):
    """The backend was unreachable or answered with a non-2xx status."""


class AuthenticationRequired(DomainException):
    """A mutating request was attempted without a bearer token."""
