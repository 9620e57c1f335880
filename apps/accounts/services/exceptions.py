"""Domain-specific exceptions for accounts services."""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class UserRegistrationError(AccountsServiceError):
    """Raised when user registration fails."""
    pass


class InstitutionalEmailRequiredError(UserRegistrationError):
    """Raised when a student signs up without an institutional address."""
    pass


class WeakPasswordError(AccountsServiceError):
    """Raised when a password is shorter than the configured minimum."""
    pass


class InvalidCredentialsError(AccountsServiceError):
    """Raised when authentication credentials are invalid."""
    pass


class InactiveAccountError(AccountsServiceError):
    """Raised when account is deactivated."""
    pass


class RoleMismatchError(AccountsServiceError):
    """Raised when an account signs in through the other role's entry point."""
    pass


class UserNotFoundError(AccountsServiceError):
    """Raised when user does not exist."""
    pass


class ProfileUnavailableError(AccountsServiceError):
    """Raised when the user profile could not be loaded after all retries."""
    pass


class PasswordConfirmationError(AccountsServiceError):
    """Raised when password confirmation fails."""
    pass
