"""Review management service - CRUD operations for reviews."""

import logging

from django.db import transaction, IntegrityError
from django.db.models import QuerySet
from uuid import UUID
from typing import Optional

from apps.accounts.models import User, UserRole
from apps.businesses.models import Business
from apps.reviews.models import Review
from .exceptions import (
    ReviewNotFoundError,
    DuplicateReviewError,
    InvalidRatingError,
    BusinessNotFoundError,
    UnauthorizedReviewActionError,
)
from .rating_aggregation import update_business_rating

logger = logging.getLogger(__name__)


def _validate_rating(rating: int) -> None:
    if not (1 <= rating <= 5):
        raise InvalidRatingError("Rating must be between 1 and 5")


@transaction.atomic
def create_review(
    *,
    author: User,
    business_id: UUID,
    rating: int,
    comment: str = ''
) -> Review:
    """
    Create a new review for a business.

    This operation:
    1. Checks the author is a student
    2. Validates rating range
    3. Validates the business exists and is active
    4. Checks for duplicate review (author, business)
    5. Creates the review and recomputes the business rating

    Args:
        author: Student writing the review
        business_id: UUID of business being reviewed
        rating: Star rating (1-5)
        comment: Written review

    Returns:
        Created Review instance

    Raises:
        UnauthorizedReviewActionError: If author is not a student
        InvalidRatingError: If rating not in 1-5 range
        BusinessNotFoundError: If business doesn't exist or inactive
        DuplicateReviewError: If user already reviewed this business
    """
    if author.role != UserRole.STUDENT:
        raise UnauthorizedReviewActionError("Only students can write reviews")

    _validate_rating(rating)

    try:
        business = Business.objects.get(id=business_id, is_active=True)
    except Business.DoesNotExist:
        raise BusinessNotFoundError("Business not found or inactive")

    if Review.objects.filter(author=author, business=business).exists():
        raise DuplicateReviewError(
            "You have already reviewed this business. Please update your existing review instead."
        )

    try:
        with transaction.atomic():
            review = Review.objects.create(
                business=business,
                author=author,
                rating=rating,
                comment=(comment or '').strip(),
            )
    except IntegrityError:
        raise DuplicateReviewError("You have already reviewed this business")

    update_business_rating(business_id=business.id)

    logger.info("User %s reviewed business %s (%s stars)", author.id, business.id, rating)
    return review


def get_review_by_id(*, review_id: UUID) -> Review:
    """
    Retrieve a review by ID.

    Raises:
        ReviewNotFoundError: If review doesn't exist
    """
    try:
        return Review.objects.select_related('author', 'business').get(id=review_id)
    except Review.DoesNotExist:
        raise ReviewNotFoundError("Review not found")


def _get_own_review_for_update(review_id: UUID, user: User, action: str) -> Review:
    try:
        review = (
            Review.objects
            .select_for_update()
            .get(id=review_id)
        )
    except Review.DoesNotExist:
        raise ReviewNotFoundError("Review not found")

    if review.author_id != user.id:
        raise UnauthorizedReviewActionError(f"You can only {action} your own reviews")

    return review


@transaction.atomic
def update_review(
    *,
    review_id: UUID,
    user: User,
    rating: Optional[int] = None,
    comment: Optional[str] = None
) -> Review:
    """
    Update an existing review and recompute the business rating.

    Only the review author can update their review. Business and author
    cannot be changed.

    Raises:
        ReviewNotFoundError: If review doesn't exist
        UnauthorizedReviewActionError: If user is not the author
        InvalidRatingError: If rating not in 1-5 range
    """
    review = _get_own_review_for_update(review_id, user, 'update')

    if rating is not None:
        _validate_rating(rating)
        review.rating = rating
    if comment is not None:
        review.comment = comment.strip()

    review.save()
    update_business_rating(business_id=review.business_id)

    return review


@transaction.atomic
def delete_review(*, review_id: UUID, user: User) -> None:
    """
    Delete a review and recompute the business rating.

    Raises:
        ReviewNotFoundError: If review doesn't exist
        UnauthorizedReviewActionError: If user is not the author
    """
    review = _get_own_review_for_update(review_id, user, 'delete')
    business_id = review.business_id

    review.delete()
    update_business_rating(business_id=business_id)

    logger.info("User %s deleted review of business %s", user.id, business_id)


def get_business_reviews(*, business_id: UUID) -> QuerySet[Review]:
    """All reviews of a business, newest first."""
    return (
        Review.objects
        .filter(business_id=business_id)
        .select_related('author')
        .order_by('-created_at')
    )


def get_user_review(*, business_id: UUID, user: User) -> Optional[Review]:
    """The user's review of a business, or None if they haven't written one."""
    return (
        Review.objects
        .filter(business_id=business_id, author=user)
        .select_related('business')
        .first()
    )


def get_user_reviews(*, user: User) -> QuerySet[Review]:
    """All reviews written by a user, newest first."""
    return (
        Review.objects
        .filter(author=user)
        .select_related('business')
        .order_by('-created_at')
    )
