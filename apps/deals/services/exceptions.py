"""Domain exceptions for deals app."""


class DealsServiceError(Exception):
    """Base exception for all deals service errors."""
    pass


class DealNotFoundError(DealsServiceError):
    """Deal does not exist or is inaccessible."""
    pass


class InvalidDealError(DealsServiceError):
    """Deal data is missing a required field or has an invalid value."""
    pass


class InvalidDateRangeError(InvalidDealError):
    """End date is before start date."""
    pass


class InvalidSortError(DealsServiceError):
    """Unknown sort option for deal listing."""
    pass


class UnauthorizedDealActionError(DealsServiceError):
    """User cannot modify this deal."""
    pass


class BusinessProfileRequiredError(DealsServiceError):
    """Business account has no business profile yet."""
    pass
