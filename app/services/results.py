# app/services/results.py
import functools
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from azure.core.exceptions import AzureError, ResourceNotFoundError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.domain.errors import (
    Conflict,
    ExternalServiceError,
    NotFound,
    ServiceError,
)
from app.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    Outcome of a public service operation.
    Callers check `success` and show `message` to the end user; `error`
    carries the taxonomy exception on failure and `value` the payload on
    success.
    """

    success: bool
    message: str
    error: ServiceError | None = None
    value: T | None = None

    @classmethod
    def ok(cls, message: str, value: T | None = None) -> "ServiceResult[T]":
        return cls(success=True, message=message, value=value)

    @classmethod
    def fail(cls, error: ServiceError) -> "ServiceResult[T]":
        return cls(success=False, message=error.message, error=error)


def translate_exception(exc: Exception, failure_prefix: str) -> ServiceError:
    if isinstance(exc, ServiceError):
        return exc
    if isinstance(exc, IntegrityError):
        return Conflict(f"{failure_prefix}: {exc.orig}")
    if isinstance(exc, ResourceNotFoundError):
        return NotFound(f"{failure_prefix}: resource not found")
    if isinstance(exc, (SQLAlchemyError, AzureError)):
        return ExternalServiceError(f"{failure_prefix}: {exc}")
    return ExternalServiceError(f"{failure_prefix}: {exc}")


def service_boundary(failure_prefix: str) -> Callable:
    """
    Wraps a service method that returns a ServiceResult.

    Any exception raised inside is turned into a failed result. When the
    service owns a SQLAlchemy session (`self.db`) it is rolled back first.
    """

    def decorator(func: Callable[..., ServiceResult]) -> Callable[..., ServiceResult]:
        @functools.wraps(func)
        def wrapper(self, *args: Any, **kwargs: Any) -> ServiceResult:
            try:
                return func(self, *args, **kwargs)
            except Exception as exc:
                db = getattr(self, "db", None)
                if db is not None:
                    db.rollback()
                error = translate_exception(exc, failure_prefix)
                if isinstance(exc, ServiceError):
                    logger.info(f"{func.__qualname__} rejected: {error.message}")
                else:
                    logger.error(
                        f"{func.__qualname__} failed: {exc!r}", exc_info=True
                    )
                return ServiceResult.fail(error)

        return wrapper

    return decorator
