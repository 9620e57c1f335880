"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    UserRegistrationError,
    InstitutionalEmailRequiredError,
    WeakPasswordError,
    InvalidCredentialsError,
    InactiveAccountError,
    RoleMismatchError,
    UserNotFoundError,
    ProfileUnavailableError,
    PasswordConfirmationError,
)
from .user_registration import (
    register_student,
    register_business,
    is_institutional_email,
    validate_password_length,
)
from .user_authentication import authenticate_user, load_user_profile
from .account_management import update_user_profile, change_password

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'UserRegistrationError',
    'InstitutionalEmailRequiredError',
    'WeakPasswordError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'RoleMismatchError',
    'UserNotFoundError',
    'ProfileUnavailableError',
    'PasswordConfirmationError',
    # Services
    'register_student',
    'register_business',
    'is_institutional_email',
    'validate_password_length',
    'authenticate_user',
    'load_user_profile',
    'update_user_profile',
    'change_password',
]
