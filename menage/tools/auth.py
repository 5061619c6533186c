"""
Mock authentication session.

In production, this reads the session held by the hosted auth provider.
Reservations are accepted from anonymous visitors; a signed-in user's id
is attached when one is available.
"""

import logging
from typing import Optional, TypedDict

logger = logging.getLogger(__name__)


class Session(TypedDict):
    user_id: str
    email: str


_session: Optional[Session] = None


def get_current_session() -> Optional[Session]:
    """Return the active session, or None for an anonymous visitor."""
    return _session


def sign_in(user_id: str, email: str = "") -> Session:
    global _session
    _session = {"user_id": user_id, "email": email}
    logger.info("Signed in user %s", user_id)
    return _session


def sign_out() -> None:
    global _session
    _session = None


def reset() -> None:
    """Drop the session. Used by test fixtures for isolation."""
    sign_out()
