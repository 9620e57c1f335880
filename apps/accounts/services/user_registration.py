"""User registration service."""

import logging

from django.conf import settings
from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from apps.accounts.models import UserRole
from .exceptions import (
    UserRegistrationError,
    InstitutionalEmailRequiredError,
    WeakPasswordError,
)

User = get_user_model()

logger = logging.getLogger(__name__)


def is_institutional_email(email: str) -> bool:
    """Check whether an address belongs to the student email domain."""
    return email.lower().endswith(settings.STUDENT_EMAIL_DOMAIN.lower())


def validate_password_length(password: str) -> None:
    """
    Enforce the minimum password length shared by sign-up and password change.

    Raises:
        WeakPasswordError: If password is shorter than MIN_PASSWORD_LENGTH
    """
    minimum = settings.MIN_PASSWORD_LENGTH
    if not password or len(password) < minimum:
        raise WeakPasswordError(f"Password must be at least {minimum} characters long")


def _create_account(*, email: str, password: str, name: str, **extra_fields) -> User:
    if User.objects.filter(email__iexact=email).exists():
        raise UserRegistrationError("This email is already registered. Please sign in instead.")

    try:
        user = User.objects.create_user(
            email=email,
            password=password,
            name=name,
            **extra_fields
        )
    except IntegrityError:
        raise UserRegistrationError("This email is already registered. Please sign in instead.")

    logger.info("Registered %s account %s", user.role, user.id)
    return user


@transaction.atomic
def register_student(*, email: str, password: str, name: str = "") -> User:
    """
    Register a student account.

    Students must sign up with their institutional address; the address is
    stored as the institutional email and the account is verified.

    Args:
        email: Student's institutional email address
        password: Plain password (will be hashed)
        name: Optional display name

    Returns:
        Created User instance

    Raises:
        InstitutionalEmailRequiredError: If email is outside the student domain
        WeakPasswordError: If password is too short
        UserRegistrationError: If the email is already registered
    """
    if not is_institutional_email(email):
        raise InstitutionalEmailRequiredError(
            f"Please use your institutional email address ({settings.STUDENT_EMAIL_DOMAIN})"
        )

    validate_password_length(password)

    return _create_account(
        email=email,
        password=password,
        name=name,
        role=UserRole.STUDENT,
        verified=True,
        institutional_email=email,
    )


@transaction.atomic
def register_business(*, email: str, password: str, name: str = "") -> User:
    """
    Register a business account.

    Business accounts start unverified; the business profile itself is
    created separately during business setup.

    Raises:
        WeakPasswordError: If password is too short
        UserRegistrationError: If the email is already registered
    """
    validate_password_length(password)

    return _create_account(
        email=email,
        password=password,
        name=name,
        role=UserRole.BUSINESS,
        verified=False,
    )
