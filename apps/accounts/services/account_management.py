"""Account management service."""

import logging

from django.db import transaction
from django.contrib.auth import get_user_model
from uuid import UUID

from .exceptions import PasswordConfirmationError, UserNotFoundError
from .user_registration import validate_password_length

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def update_user_profile(*, user_id: UUID, name: str) -> User:
    """
    Update the editable profile fields of a user.

    A blank name leaves the profile untouched.

    Raises:
        UserNotFoundError: If user does not exist
    """
    try:
        user = User.objects.select_for_update().get(id=user_id)
    except User.DoesNotExist:
        raise UserNotFoundError("User not found")

    name = (name or '').strip()
    if name and name != user.name:
        user.name = name
        user.save(update_fields=['name', 'updated_at'])

    return user


@transaction.atomic
def change_password(*, user_id: UUID, current_password: str, new_password: str) -> None:
    """
    Change a user's password after re-checking the current one.

    Raises:
        UserNotFoundError: If user does not exist
        PasswordConfirmationError: If current password is incorrect
        WeakPasswordError: If new password is too short
    """
    try:
        user = (
            User.objects
            .select_for_update()
            .get(id=user_id)
        )
    except User.DoesNotExist:
        raise UserNotFoundError("User not found")

    if not user.check_password(current_password):
        raise PasswordConfirmationError("Incorrect password. Please try again.")

    validate_password_length(new_password)

    user.set_password(new_password)
    user.save(update_fields=['password', 'updated_at'])
    logger.info("Password changed for user %s", user.id)
