"""Rating aggregation service with concurrency protection."""

import logging

from django.db import transaction
from django.db.models import Avg, Count
from decimal import Decimal, ROUND_HALF_UP
from uuid import UUID

from apps.businesses.models import Business
from .exceptions import BusinessNotFoundError

logger = logging.getLogger(__name__)


@transaction.atomic
def update_business_rating(*, business_id: UUID) -> Business:
    """
    Recalculate and store a business's rating from its reviews.

    The rating is the arithmetic mean of all current reviews, rounded to
    two decimals, and review_count their number. Without reviews both are 0.
    Uses select_for_update() so concurrent review writes serialize here.

    Args:
        business_id: Business UUID

    Returns:
        Updated Business instance

    Raises:
        BusinessNotFoundError: If business doesn't exist
    """
    try:
        business = (
            Business.objects
            .select_for_update()
            .get(id=business_id)
        )
    except Business.DoesNotExist:
        raise BusinessNotFoundError(f"Business {business_id} not found")

    aggregates = business.reviews.aggregate(
        avg=Avg('rating'),
        count=Count('id')
    )

    if aggregates['count']:
        average = Decimal(str(aggregates['avg'])).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
    else:
        average = Decimal('0.00')

    business.rating = average
    business.review_count = aggregates['count']
    business.save(update_fields=['rating', 'review_count', 'updated_at'])

    logger.debug("Business %s rating is now %s over %s reviews", business.id, average, business.review_count)
    return business


def get_top_rated_businesses(*, limit: int = 10, min_reviews: int = 1):
    """
    Get top-rated active businesses with a minimum review count.

    Args:
        limit: Number of businesses to return
        min_reviews: Minimum number of reviews required

    Returns:
        QuerySet of top-rated businesses
    """
    return (
        Business.objects
        .filter(is_active=True, review_count__gte=min_reviews)
        .order_by('-rating', '-review_count')[:limit]
    )
