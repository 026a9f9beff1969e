# app/api/deps.py
from typing import TypeVar

from fastapi import Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.data.models.user import UserModel
from app.domain.errors import ServiceError
from app.services.auth_service import AuthService
from app.services.results import ServiceResult
from app.storage.clients import StorageGateway

T = TypeVar("T")


def get_storage(request: Request) -> StorageGateway:
    return request.app.state.storage


def unwrap(result: ServiceResult[T]) -> T:
    """Zwraca wartosc albo rzuca HTTPException z kodem z bledu."""
    if result.success:
        return result.value
    status_code = result.error.status_code if result.error else 500
    raise HTTPException(status_code=status_code, detail=result.message)


def raise_for_error(error: ServiceError):
    raise HTTPException(status_code=error.status_code, detail=error.message)


def require_admin(
    admin_user_id: int = Query(...),
    db: Session = Depends(get_db),
) -> UserModel:
    try:
        return AuthService(db).require_admin(admin_user_id)
    except ServiceError as e:
        raise_for_error(e)
