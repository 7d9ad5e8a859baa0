"""Database initialization and demo data seeding."""

import logging
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy import func, select

from bank_api.infrastructure.database.base_model import BaseModel
from bank_api.infrastructure.database.models.user_model import UserModel
from bank_api.infrastructure.database.session import db_session, engine
from bank_api.infrastructure.security.password_hasher import PasswordHasher
from bank_api.services.user_service import generate_account_number

logger = logging.getLogger(__name__)


DEMO_USERS = (
    {
        "first_name": "John",
        "last_name": "Doe",
        "email": "john.doe@example.com",
        "password": "password123",
        "phone_number": "+1234567890",
        "balance": Decimal("1000.00"),
        "age_days": 10,
    },
    {
        "first_name": "Jane",
        "last_name": "Smith",
        "email": "jane.smith@example.com",
        "password": "password123",
        "phone_number": "+1987654321",
        "balance": Decimal("2500.50"),
        "age_days": 5,
    },
    {
        "first_name": "Admin",
        "last_name": "User",
        "email": "admin@crudbank.com",
        "password": "admin123",
        "phone_number": "+1555000000",
        "balance": Decimal("10000.00"),
        "age_days": 30,
    },
)


def create_schema() -> None:
    """Create all database tables."""
    BaseModel.metadata.create_all(bind=engine)


def seed_demo_users() -> int:
    """
    Insert the demo accounts when the users table is empty.

    Returns the number of rows inserted (0 when data already exists).
    """
    with db_session() as session:
        existing = session.execute(select(func.count(UserModel.id))).scalar_one()
        if existing:
            return 0

        now = datetime.now(tz=timezone.utc).replace(tzinfo=None)
        used: set[str] = set()
        for data in DEMO_USERS:
            account_number = generate_account_number()
            while account_number in used:
                account_number = generate_account_number()
            used.add(account_number)

            session.add(
                UserModel(
                    first_name=data["first_name"],
                    last_name=data["last_name"],
                    email=data["email"],
                    password_hash=PasswordHasher.hash_password(data["password"]),
                    phone_number=data["phone_number"],
                    account_number=account_number,
                    balance=data["balance"],
                    created_at=now - timedelta(days=data["age_days"]),
                    updated_at=None,
                    is_active=True,
                )
            )

    logger.info("Seeded %d demo users", len(DEMO_USERS))
    return len(DEMO_USERS)


def init_db(*, seed: bool = False) -> None:
    try:
        create_schema()
        if seed:
            seed_demo_users()
    except Exception:
        logger.exception("Database initialization failed")
        raise
    logger.info("Database initialized")
