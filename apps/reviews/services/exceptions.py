"""Domain exceptions for reviews app."""


class ReviewsServiceError(Exception):
    """Base exception for all reviews service errors."""
    pass


class ReviewNotFoundError(ReviewsServiceError):
    """Review does not exist or is inaccessible."""
    pass


class DuplicateReviewError(ReviewsServiceError):
    """User already reviewed this business."""
    pass


class InvalidRatingError(ReviewsServiceError):
    """Rating must be between 1 and 5."""
    pass


class BusinessNotFoundError(ReviewsServiceError):
    """Business does not exist or is inactive."""
    pass


class UnauthorizedReviewActionError(ReviewsServiceError):
    """User cannot write or modify this review."""
    pass
