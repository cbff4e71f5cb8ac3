"""Domain errors raised by the service layer.

Routes translate these into HTTP responses; services never import FastAPI.
"""


class NotFoundError(LookupError):
    """A row does not exist or is not visible to the caller."""


class ValidationError(ValueError):
    """Input is well-formed JSON but breaks a domain rule."""


class ConflictError(ValueError):
    """The operation would duplicate an existing row."""


class AuthError(Exception):
    """Credentials or token rejected."""
