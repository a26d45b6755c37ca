"""Seed the admin account from configuration if it is not present."""
import logging

from app.api.deps import get_password_hash
from app.config import settings
from app.models.user import User, UserRole

logger = logging.getLogger(__name__)


async def seed_admin():
    if not settings.admin_password:
        logger.info("ADMIN_PASSWORD not set; skipping admin seed.")
        return
    existing = await User.find_one(User.email == settings.admin_email)
    if existing:
        return
    await User(
        email=settings.admin_email,
        hashed_password=get_password_hash(settings.admin_password),
        role=UserRole.ADMIN,
        full_name=settings.admin_full_name,
    ).insert()
    logger.info(f"Seeded admin user {settings.admin_email}")
