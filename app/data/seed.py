# app/data/seed.py
import os

from app.data.database import SessionLocal, init_db
from app.services.auth_service import AuthService
from app.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


def seed():
    """Zaklada pierwszego administratora z ADMIN_EMAIL / ADMIN_PASSWORD."""
    email = os.getenv("ADMIN_EMAIL")
    password = os.getenv("ADMIN_PASSWORD")
    if not email or not password:
        logger.info("ADMIN_EMAIL/ADMIN_PASSWORD not set, nothing to seed")
        return

    init_db()
    db = SessionLocal()
    try:
        result = AuthService(db).create_admin(
            email,
            password,
            os.getenv("ADMIN_FIRST_NAME", "Store"),
            os.getenv("ADMIN_LAST_NAME", "Admin"),
        )
        logger.info(f"Seed admin {email}: {result.message}")
    finally:
        db.close()


if __name__ == "__main__":
    configure_logging()
    seed()
