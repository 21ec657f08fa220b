from __future__ import annotations

import logging
from typing import Tuple

from sqlalchemy.exc import SQLAlchemyError

from models import UserRole

logger = logging.getLogger(__name__)


def login(store, username: str, password: str, role: UserRole) -> bool:
    """True iff a user row matches username, password and role exactly."""
    role = UserRole(role)
    try:
        ok = store.validate_user(username, password, role) is not None
    except SQLAlchemyError as e:
        logger.warning("login lookup for %r failed: %s", username, e)
        return False
    logger.info("login %s for %r as %s", "ok" if ok else "rejected", username, role.display)
    return ok


def register(store, username: str, password: str, role: UserRole) -> Tuple[bool, str]:
    role = UserRole(role)
    try:
        if store.get_user_by_username(username) is not None:
            return (False, "Username already exists.")
        store.insert_user(username, password, role)
    except SQLAlchemyError as e:
        logger.warning("registration of %r failed: %s", username, e)
        return (False, f"Registration error: {e}")

    logger.info("registered %r as %s", username, role.display)
    if role is UserRole.ADMIN:
        return (True, "Admin registered successfully!")
    return (True, "Registered successfully!")
