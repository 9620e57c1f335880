"""User authentication service."""

import logging
import time
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.db import transaction
from django.contrib.auth import get_user_model
from django.utils import timezone

from .exceptions import (
    InvalidCredentialsError,
    InactiveAccountError,
    RoleMismatchError,
    ProfileUnavailableError,
)

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def authenticate_user(*, email: str, password: str, role: Optional[str] = None) -> User:
    """
    Authenticate user with email and password.

    Uses select_for_update() to prevent race conditions when updating last_login.

    Args:
        email: User's email
        password: User's password
        role: Expected role of the login entry point (student/business), optional

    Returns:
        Authenticated User instance

    Raises:
        InvalidCredentialsError: If credentials are invalid
        InactiveAccountError: If account is deactivated
        RoleMismatchError: If role is given and differs from the stored role
    """
    try:
        user = (
            User.objects
            .select_for_update()
            .get(email__iexact=email)
        )
    except User.DoesNotExist:
        raise InvalidCredentialsError("Invalid email or password")

    if not user.check_password(password):
        raise InvalidCredentialsError("Invalid email or password")

    if not user.is_active:
        raise InactiveAccountError("Account is deactivated")

    if role and user.role != role:
        raise RoleMismatchError(
            f"This account is registered as a {user.role}. Please select the correct login type."
        )

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])

    return user


def load_user_profile(
    *,
    user_id: UUID,
    attempts: Optional[int] = None,
    backoff: Optional[float] = None
) -> User:
    """
    Fetch a user profile, polling a bounded number of times.

    The profile may not be readable yet right after sign-up on a replica,
    so the lookup is retried with a fixed pause between attempts.

    Args:
        user_id: User's ID
        attempts: Number of lookups (defaults to PROFILE_FETCH_ATTEMPTS)
        backoff: Seconds to wait between lookups (defaults to PROFILE_FETCH_BACKOFF)

    Returns:
        Active User instance

    Raises:
        ProfileUnavailableError: If no lookup succeeded
    """
    attempts = attempts if attempts is not None else settings.PROFILE_FETCH_ATTEMPTS
    backoff = backoff if backoff is not None else settings.PROFILE_FETCH_BACKOFF

    for attempt in range(1, attempts + 1):
        user = User.objects.filter(id=user_id, is_active=True).first()
        if user is not None:
            return user

        logger.debug("Profile %s not available (attempt %d/%d)", user_id, attempt, attempts)
        if attempt < attempts and backoff:
            time.sleep(backoff)

    logger.error("Failed to load profile %s after %d attempts", user_id, attempts)
    raise ProfileUnavailableError("Unable to load user data. Please refresh and try again.")
