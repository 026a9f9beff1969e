from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.deps import require_admin, unwrap
from app.data.database import get_db
from app.domain.schemas import (
    AdminCreateIn,
    CustomerRead,
    LoginIn,
    LoginOut,
    RegisterIn,
    UserRead,
)
from app.services.auth_service import AuthService

router = APIRouter(tags=["users"])


@router.post("/auth/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterIn, db: Session = Depends(get_db)):
    service = AuthService(db)
    user = unwrap(service.register_customer(payload))
    return UserRead.model_validate(user)


@router.post("/auth/login", response_model=LoginOut)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    service = AuthService(db)
    result = unwrap(service.login(payload.email, payload.password))
    return LoginOut.model_validate(result)


@router.post(
    "/auth/admins",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_admin(payload: AdminCreateIn, db: Session = Depends(get_db)):
    service = AuthService(db)
    user = unwrap(
        service.create_admin(
            payload.email, payload.password, payload.first_name, payload.last_name
        )
    )
    return UserRead.model_validate(user)


@router.get("/users/{user_id}", response_model=UserRead)
def get_user(user_id: int, db: Session = Depends(get_db)):
    user = AuthService(db).get_user(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return UserRead.model_validate(user)


@router.get("/users/{user_id}/customer", response_model=CustomerRead)
def get_customer(user_id: int, db: Session = Depends(get_db)):
    customer = AuthService(db).get_customer_by_user(user_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    return CustomerRead.model_validate(customer)
