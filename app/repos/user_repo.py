from sqlalchemy import select
from sqlalchemy.orm import Session

from app.data.models.customer import CustomerModel
from app.data.models.user import UserModel


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def get_user_by_email(self, email: str, active_only: bool = False) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.email == email)
        if active_only:
            stmt = stmt.where(UserModel.is_active.is_(True))
        return self.db.execute(stmt).scalar_one_or_none()

    def email_exists(self, email: str) -> bool:
        return self.get_user_by_email(email) is not None

    def username_exists(self, username: str) -> bool:
        stmt = select(UserModel.id).where(UserModel.username == username)
        return self.db.execute(stmt).first() is not None

    def add_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.flush()
        return user

    def add_customer(self, customer: CustomerModel) -> CustomerModel:
        self.db.add(customer)
        self.db.flush()
        return customer

    def get_customer(self, customer_id: int) -> CustomerModel | None:
        return self.db.get(CustomerModel, customer_id)

    def get_customer_by_user(self, user_id: int) -> CustomerModel | None:
        return self.db.execute(
            select(CustomerModel).where(CustomerModel.user_id == user_id)
        ).scalar_one_or_none()
