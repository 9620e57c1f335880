"""External review links (Google, Yelp, ...) shown on a business profile."""

import logging

from decimal import Decimal
from django.db import transaction
from uuid import UUID
from typing import Optional

from apps.accounts.models import User
from apps.businesses.models import Business, ExternalReview, ReviewPlatform
from .exceptions import (
    BusinessNotFoundError,
    ExternalReviewNotFoundError,
    InvalidBusinessDataError,
    UnauthorizedBusinessActionError,
)

logger = logging.getLogger(__name__)


@transaction.atomic
def add_external_review(
    *,
    business_id: UUID,
    user: User,
    platform: str,
    rating: Decimal,
    platform_name: str = '',
    review_count: Optional[int] = None,
    review_url: str = '',
    business_place_id: str = ''
) -> ExternalReview:
    """
    Attach an external review summary to a business.

    The numbers are entered by the owner; nothing is fetched from the platform.

    Raises:
        BusinessNotFoundError: If business doesn't exist
        UnauthorizedBusinessActionError: If user is not the owner
        InvalidBusinessDataError: If platform or rating is invalid
    """
    try:
        business = Business.objects.get(id=business_id)
    except Business.DoesNotExist:
        raise BusinessNotFoundError("Business not found")

    if not business.is_owned_by(user):
        raise UnauthorizedBusinessActionError("You can only manage reviews of your own business")

    if platform not in ReviewPlatform.values:
        raise InvalidBusinessDataError(f"Unknown review platform: {platform}")

    rating = Decimal(str(rating))
    if not (Decimal('0') <= rating <= Decimal('5')):
        raise InvalidBusinessDataError("Rating must be between 0 and 5")

    external_review = ExternalReview.objects.create(
        business=business,
        platform=platform,
        platform_name=platform_name or ReviewPlatform(platform).label,
        rating=rating,
        review_count=review_count,
        review_url=review_url,
        business_place_id=business_place_id,
    )

    logger.info("Added %s review link to business %s", platform, business.id)
    return external_review


@transaction.atomic
def remove_external_review(*, external_review_id: UUID, user: User) -> None:
    """
    Remove an external review link.

    Raises:
        ExternalReviewNotFoundError: If the link doesn't exist
        UnauthorizedBusinessActionError: If user is not the business owner
    """
    try:
        external_review = ExternalReview.objects.select_related('business').get(id=external_review_id)
    except ExternalReview.DoesNotExist:
        raise ExternalReviewNotFoundError("External review not found")

    if not external_review.business.is_owned_by(user):
        raise UnauthorizedBusinessActionError("You can only manage reviews of your own business")

    external_review.delete()
