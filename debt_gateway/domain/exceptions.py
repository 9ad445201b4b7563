"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    status_code = 500


class ClientInputError(DomainException):
    """Request parameters are missing or malformed"""

    status_code = 400


class AuthenticationError(DomainException):
    """Credentials did not match any user"""

    status_code = 403


class NotFoundError(DomainException):
    """Requested entity does not exist"""

    status_code = 404


class StoreError(DomainException):
    """Record store rejected the operation or is unavailable"""

    status_code = 500


class ConfigurationError(DomainException):
    """Service cannot start with the current settings"""

    pass
