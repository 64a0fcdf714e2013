import logging
from typing import List

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

import models.index  # noqa: F401  registers every table on Base.metadata
from config.database import Base, engine, SessionLocal
from config.settings import settings
from api.user.user_model import User, UserRole
from api.user.user_service import get_user_by_email, hash_password

logger = logging.getLogger(__name__)


def init_db(bind: Engine = None) -> None:
    """Create any missing tables. Existing tables are left alone."""
    Base.metadata.create_all(bind=bind or engine)


def _demo_accounts():
    return [
        (settings.DEMO_ADMIN_EMAIL, settings.DEMO_ADMIN_PASSWORD, settings.DEMO_ADMIN_NAME, UserRole.admin),
        (settings.DEMO_VOLUNTEER_EMAIL, settings.DEMO_VOLUNTEER_PASSWORD, settings.DEMO_VOLUNTEER_NAME, UserRole.volunteer),
    ]


def seed_demo_accounts(db: Session) -> List[str]:
    """Create the demo admin and volunteer if absent; returns the emails created."""
    created = []
    for email, password, name, role in _demo_accounts():
        if get_user_by_email(db, email):
            continue
        db.add(User(email=email.lower(), name=name, password=hash_password(password), role=role))
        created.append(email)

    if created:
        db.commit()
        logger.info("seeded demo accounts: %s", ", ".join(created))
    return created


if __name__ == "__main__":
    from config.logging_config import setup_logging

    setup_logging()
    init_db()
    if settings.SEED_DEMO_ACCOUNTS:
        session = SessionLocal()
        try:
            seed_demo_accounts(session)
        finally:
            session.close()
    logger.info("database initialized")
