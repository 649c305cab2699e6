"""Role resolution.

Two modes:
  * no signed-in user: the admin PIN unlocks ``admin``, anything else is
    ``employee``
  * signed-in user: the session token is verified by the store, then the
    role comes from ``users/{uid}``; only an explicit ``employee`` profile is
    restricted, and a failed lookup falls back to ``admin``

A token the store cannot verify is ignored, leaving the PIN mode.
"""

import hmac
import logging

from pydantic import ValidationError

from clearview.core.enums import Role
from clearview.models.user import AccessContext, UserProfile
from clearview.services.store import USERS, DocumentStore, StoreError

logger = logging.getLogger(__name__)


def check_pin(pin: str | None, configured_pin: str) -> bool:
    """Constant-time PIN comparison (whitespace-trimmed)."""
    if not pin:
        return False
    return hmac.compare_digest(pin.strip().encode(), configured_pin.strip().encode())


def role_for_pin(pin: str | None, configured_pin: str) -> Role:
    return Role.ADMIN if check_pin(pin, configured_pin) else Role.EMPLOYEE


def role_for_user(store: DocumentStore, user_id: str) -> Role:
    """Role from the user's profile document."""
    try:
        profile = store.get(USERS, user_id)
    except StoreError as e:
        logger.warning(f"Failed to load user role for {user_id}: {e}")
        return Role.ADMIN
    if profile is None:
        return Role.ADMIN
    try:
        user = UserProfile.model_validate({**profile, "id": user_id})
    except ValidationError:
        logger.warning(f"Ignoring malformed profile for {user_id}")
        return Role.ADMIN
    return Role.EMPLOYEE if user.role == Role.EMPLOYEE.value else Role.ADMIN


def bearer_token(authorization: str | None) -> str | None:
    """Token from an ``Authorization: Bearer <token>`` header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def resolve_access(
    store: DocumentStore,
    configured_pin: str,
    pin: str | None = None,
    token: str | None = None,
) -> AccessContext:
    if token:
        user_id = store.verify_token(token)
        if user_id:
            return AccessContext(role=role_for_user(store, user_id), user_id=user_id)
        logger.warning("Ignoring unverified session token")
    return AccessContext(role=role_for_pin(pin, configured_pin))
