"""
Reviews services - Business logic layer.

This package contains all business operations for the reviews app:
- Review CRUD operations
- Business rating aggregation
"""

from .review_management import (
    create_review,
    get_review_by_id,
    update_review,
    delete_review,
    get_business_reviews,
    get_user_review,
    get_user_reviews,
)

from .rating_aggregation import (
    update_business_rating,
    get_top_rated_businesses,
)

from .exceptions import (
    ReviewsServiceError,
    ReviewNotFoundError,
    DuplicateReviewError,
    InvalidRatingError,
    BusinessNotFoundError,
    UnauthorizedReviewActionError,
)

__all__ = [
    # Review Management Services
    'create_review',
    'get_review_by_id',
    'update_review',
    'delete_review',
    'get_business_reviews',
    'get_user_review',
    'get_user_reviews',
    # Rating Aggregation
    'update_business_rating',
    'get_top_rated_businesses',
    # Exceptions
    'ReviewsServiceError',
    'ReviewNotFoundError',
    'DuplicateReviewError',
    'InvalidRatingError',
    'BusinessNotFoundError',
    'UnauthorizedReviewActionError',
]
