"""Domain-specific exceptions for businesses services."""


class BusinessesServiceError(Exception):
    """Base exception for businesses services."""
    pass


class BusinessNotFoundError(BusinessesServiceError):
    """Raised when business does not exist or is inactive."""
    pass


class BusinessAlreadyExistsError(BusinessesServiceError):
    """Raised when the owner already has a business profile."""
    pass


class DuplicateBusinessError(BusinessesServiceError):
    """Raised when an identical business (name and address) is already listed."""
    pass


class InvalidBusinessDataError(BusinessesServiceError):
    """Raised when required business fields are missing or invalid."""
    pass


class UnauthorizedBusinessActionError(BusinessesServiceError):
    """Raised when a user modifies a business they do not own."""
    pass


class ExternalReviewNotFoundError(BusinessesServiceError):
    """Raised when an external review link does not exist."""
    pass
