"""
Identity Service - account creation, login and profile maintenance.

The row store has no unique constraint on Email, so uniqueness is enforced
here with a lookup before the insert. Two signups for the same address that
arrive at the same moment can both pass the lookup; this race is known and
accepted.

Every method returns UserOut (or nothing), never a User, so the password
hash cannot leave this layer.
"""

import logging
from typing import Any, Optional

from app.core.config import settings
from app.core.errors import (
    AuthenticationError,
    ConflictError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from app.core.security import hash_password, verify_password
from app.environments.base import RowStoreError
from app.models.user import User, normalize_email, parse_user_id
from app.repositories.user_repository import UserRepository
from app.schemas.user import UserOut


logger = logging.getLogger("gateway.services.identity")

INVALID_CREDENTIALS = "Invalid email or password"

# Profile attributes a user may change themselves
EDITABLE_PROFILE_FIELDS = ("name", "company", "avatar_url")


def _require_user_id(user_id: Any) -> int:
    parsed = parse_user_id(user_id)
    if parsed is None:
        raise ValidationError("User id is required")
    return parsed


class IdentityService:
    """
    Orchestrates signup, login and profile changes.

    Usage:
        service = IdentityService(UserRepository(BaserowClient()))
        profile = await service.signup(name="Ana", email="ana@acme.com", password="secret1")
    """

    def __init__(self, users: UserRepository):
        self.users = users

    async def signup(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
        company: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> UserOut:
        """
        Create an account.

        Raises:
            ValidationError: name, email or password missing
            ConflictError: email already registered (any casing)
            InternalError: hashing or row store failure
        """
        email = normalize_email(email or "")
        if not (name and name.strip()) or not email or not password:
            raise ValidationError("Name, email and password are required")

        try:
            existing = await self.users.get_by_email(email)
        except RowStoreError as e:
            raise InternalError("Could not create account") from e

        if existing:
            raise ConflictError("This email is already registered")

        password_hash = hash_password(password)

        try:
            user = await self.users.create(
                name=name,
                email=email,
                password_hash=password_hash,
                company=company,
                phone=phone,
            )
        except RowStoreError as e:
            raise InternalError("Could not create account") from e

        logger.info(f"Signup completed for user {user.id}")
        return UserOut.from_user(user)

    async def login(self, email: Optional[str], password: Optional[str]) -> UserOut:
        """
        Check credentials and return the profile.

        Unknown email, account without a password and wrong password all
        raise the same AuthenticationError, so responses can't be used to
        find out which emails exist.
        """
        email = normalize_email(email or "")
        if not email or not password:
            raise ValidationError("Email and password are required")

        try:
            user = await self.users.get_by_email(email)
        except RowStoreError as e:
            raise InternalError("Could not log in") from e

        if user is None or not user.password_hash:
            raise AuthenticationError(INVALID_CREDENTIALS)

        if not verify_password(password, user.password_hash):
            logger.info(f"Failed login for user {user.id}")
            raise AuthenticationError(INVALID_CREDENTIALS)

        return UserOut.from_user(user)

    async def change_password(self, user_id: Any, new_password: Optional[str]) -> None:
        """
        Replace the password hash. Nothing else on the row is touched.

        Raises:
            ValidationError: missing user id or password, or password shorter
                than MIN_PASSWORD_LENGTH
        """
        row_id = parse_user_id(user_id)
        if row_id is None or not new_password:
            raise ValidationError("User id and new password are required")

        if len(new_password) < settings.MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters"
            )

        password_hash = hash_password(new_password)

        try:
            await self.users.update(row_id, password_hash=password_hash)
        except RowStoreError as e:
            raise InternalError("Could not update password. Please try again.") from e

        logger.info(f"Password changed for user {row_id}")

    async def update_profile(self, user_id: Any, fields: dict) -> UserOut:
        """
        Update any of name, company, avatar_url.

        Keys outside that set are dropped before anything is written.

        Raises:
            ValidationError: no editable field was supplied
        """
        row_id = _require_user_id(user_id)
        changes = {key: value for key, value in fields.items() if key in EDITABLE_PROFILE_FIELDS}

        if not changes:
            raise ValidationError("No data to update")

        try:
            user = await self.users.update(row_id, **changes)
        except RowStoreError as e:
            raise InternalError("Could not update profile") from e

        return UserOut.from_user(user)

    async def get_profile(self, user_id: Any) -> UserOut:
        """
        Raises:
            NotFoundError: no user with that id
        """
        row_id = _require_user_id(user_id)

        try:
            user: Optional[User] = await self.users.get_by_id(row_id)
        except RowStoreError as e:
            raise InternalError("Could not fetch user profile") from e

        if user is None:
            raise NotFoundError("User not found")

        return UserOut.from_user(user)
