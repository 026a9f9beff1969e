from dataclasses import dataclass

from passlib.context import CryptContext
from sqlalchemy.orm import Session

from app.data.models.cart import CartModel
from app.data.models.customer import CustomerModel
from app.data.models.user import ROLE_ADMIN, ROLE_CUSTOMER, UserModel, utcnow
from app.domain.errors import Conflict, Forbidden, NotFound, Unauthorized
from app.domain.schemas import RegisterIn
from app.repos.user_repo import UserRepo
from app.services.results import ServiceResult, service_boundary
from app.utils.logging import get_logger

logger = get_logger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


@dataclass
class LoginResult:
    user: UserModel
    customer: CustomerModel | None


class AuthService:
    """Rejestracja, logowanie i konta administratorow."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepo(db)

    def _unique_username(self, email: str) -> str:
        base = email.split("@")[0]
        username = base
        counter = 1
        while self.repo.username_exists(username):
            username = f"{base}{counter}"
            counter += 1
        return username

    @service_boundary("Registration failed")
    def register_customer(self, payload: RegisterIn) -> ServiceResult[UserModel]:
        """
        User, Customer i pusty koszyk w jednej transakcji.
        Blad na dowolnym kroku cofa wszystkie trzy.
        """
        if self.repo.email_exists(payload.email):
            raise Conflict("Email is already registered")

        user = self.repo.add_user(
            UserModel(
                username=self._unique_username(payload.email),
                email=payload.email,
                password_hash=pwd_context.hash(payload.password),
                role=ROLE_CUSTOMER,
                is_active=True,
                created_date=utcnow(),
            )
        )

        customer = self.repo.add_customer(
            CustomerModel(
                user_id=user.id,
                first_name=(payload.first_name or "").strip() or "Customer",
                last_name=(payload.last_name or "").strip() or "User",
                phone_number=payload.phone_number,
                address=payload.address,
                city=payload.city,
                postal_code=payload.postal_code,
                country=payload.country,
            )
        )

        now = utcnow()
        self.db.add(CartModel(customer_id=customer.id, created_date=now, updated_date=now))
        self.db.commit()

        logger.info(f"Registered user {user.id} ({user.username}) with customer {customer.id}")
        return ServiceResult.ok("Registration successful", user)

    @service_boundary("Login failed")
    def login(self, email: str, password: str) -> ServiceResult[LoginResult]:
        user = self.repo.get_user_by_email(email, active_only=True)

        if not user or not pwd_context.verify(password, user.password_hash):
            logger.info(f"Failed login for {email}")
            raise Unauthorized("Invalid email or password")

        user.last_login_date = utcnow()
        self.db.commit()

        customer = None
        if user.role == ROLE_CUSTOMER:
            customer = self.repo.get_customer_by_user(user.id)

        logger.info(f"User {user.id} logged in")
        return ServiceResult.ok("Login successful", LoginResult(user=user, customer=customer))

    @service_boundary("Failed to create admin")
    def create_admin(
        self, email: str, password: str, first_name: str, last_name: str
    ) -> ServiceResult[UserModel]:
        if self.repo.email_exists(email):
            raise Conflict("Email is already registered")

        user = self.repo.add_user(
            UserModel(
                username=email.split("@")[0] + "_admin",
                email=email,
                password_hash=pwd_context.hash(password),
                role=ROLE_ADMIN,
                is_active=True,
                created_date=utcnow(),
            )
        )
        self.repo.add_customer(
            CustomerModel(user_id=user.id, first_name=first_name, last_name=last_name)
        )
        self.db.commit()

        logger.info(f"Admin {user.id} created")
        return ServiceResult.ok("Admin created successfully", user)

    def get_user(self, user_id: int) -> UserModel | None:
        return self.repo.get_user(user_id)

    def get_customer_by_user(self, user_id: int) -> CustomerModel | None:
        return self.repo.get_customer_by_user(user_id)

    def require_admin(self, user_id: int) -> UserModel:
        user = self.repo.get_user(user_id)
        if not user or not user.is_active:
            raise NotFound("User not found")
        if user.role != ROLE_ADMIN:
            raise Forbidden("Administrator role required")
        return user

    def require_customer(self, customer_id: int) -> CustomerModel:
        customer = self.repo.get_customer(customer_id)
        if not customer:
            raise NotFound("Customer not found")
        return customer
