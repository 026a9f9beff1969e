# app/domain/errors.py


class ConfigurationError(RuntimeError):
    """Required configuration is missing at startup."""


class ServiceError(Exception):
    """Base class for failures reported through a ServiceResult."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    status_code = 400


class InvalidStatus(ValidationError):
    pass


class EmptyCart(ServiceError):
    status_code = 400


class InvalidState(ServiceError):
    status_code = 400


class NotFound(ServiceError):
    status_code = 404


class Unauthorized(ServiceError):
    status_code = 401


class Forbidden(ServiceError):
    status_code = 403


class Conflict(ServiceError):
    status_code = 409


class ExternalServiceError(ServiceError):
    status_code = 502
