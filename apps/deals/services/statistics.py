"""Statistics service - dashboard roll-ups and savings estimates."""

import logging
import re

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from django.conf import settings
from django.db import DatabaseError
from django.db.models import Sum
from django.utils import timezone

from apps.accounts.models import User
from apps.businesses.models import Business
from apps.deals.models import Deal, DealRedemption, Favorite

logger = logging.getLogger(__name__)

DOLLAR_PATTERN = re.compile(r'\$\s*(\d+(?:\.\d{1,2})?)')
PERCENT_PATTERN = re.compile(r'(\d+(?:\.\d+)?)\s*%')
BUY_GET_PATTERN = re.compile(
    r"\bbuy\s+\S+\s+(?:\S+\s+)?get\s+\S+|\bbogo\b|\bb\d+g\d+\b",
    re.IGNORECASE,
)

CENTS = Decimal('0.01')


def estimate_deal_savings(discount: str) -> Decimal:
    """
    Estimate the dollar value of a free-text discount.

    Rules, first match wins:
    - a dollar amount ("$5 off") is taken literally
    - a percentage ("20% off") is applied to the average basket
    - "buy X get Y" offers (also "BOGO", "B2G1") are worth half a basket
    - anything else gets the flat default estimate

    Example:
        >>> estimate_deal_savings('20% off any pizza')
        Decimal('5.00')
        >>> estimate_deal_savings('Buy 1 Get 1 Free')
        Decimal('12.50')
    """
    basket = settings.SAVINGS_AVERAGE_BASKET
    text = discount or ''

    match = DOLLAR_PATTERN.search(text)
    if match:
        return Decimal(match.group(1)).quantize(CENTS, rounding=ROUND_HALF_UP)

    match = PERCENT_PATTERN.search(text)
    if match:
        percent = Decimal(match.group(1))
        return (basket * percent / Decimal('100')).quantize(CENTS, rounding=ROUND_HALF_UP)

    if BUY_GET_PATTERN.search(text):
        return (basket / Decimal('2')).quantize(CENTS, rounding=ROUND_HALF_UP)

    return settings.SAVINGS_DEFAULT_ESTIMATE.quantize(CENTS, rounding=ROUND_HALF_UP)


def estimate_total_savings(deals: Iterable[Deal]) -> Decimal:
    """Sum savings estimates over a set of deals; each deal counts once."""
    seen = set()
    total = Decimal('0.00')
    for deal in deals:
        if deal.id in seen:
            continue
        seen.add(deal.id)
        total += estimate_deal_savings(deal.discount)
    return total


def count_deal_redemptions(deal: Deal) -> int:
    """Authoritative redemption count from the redemption records."""
    return DealRedemption.objects.filter(deal_id=deal.id).count()


def get_business_statistics(*, business: Business) -> dict:
    """
    Roll up dashboard statistics for a business.

    Redemptions are counted from redemption records per deal. If counting
    fails for a deal, that deal's stored counter is used instead so one bad
    query does not fail the whole dashboard.

    Returns:
        Dictionary with:
        - total_deals: int
        - active_deals: int
        - seasonal_deals: int - active seasonal deals
        - total_views: int
        - total_redemptions: int
        - conversion_rate: float - redemptions per 100 views (0 without views)

    Example:
        >>> stats = get_business_statistics(business=business)
        >>> stats['conversion_rate']
        12.5
    """
    deals = list(Deal.objects.filter(business=business))

    total_views = sum(deal.view_count or 0 for deal in deals)

    total_redemptions = 0
    for deal in deals:
        try:
            total_redemptions += count_deal_redemptions(deal)
        except DatabaseError:
            logger.warning(
                "Redemption count failed for deal %s, using stored counter",
                deal.id,
                exc_info=True,
            )
            total_redemptions += deal.redemption_count or 0

    if total_views:
        conversion_rate = round(total_redemptions / total_views * 100, 2)
    else:
        conversion_rate = 0.0

    return {
        'total_deals': len(deals),
        'active_deals': sum(1 for deal in deals if deal.is_active),
        'seasonal_deals': sum(1 for deal in deals if deal.is_active and deal.is_seasonal),
        'total_views': total_views,
        'total_redemptions': total_redemptions,
        'conversion_rate': conversion_rate,
    }


def get_student_statistics(*, user: User) -> dict:
    """
    Roll up dashboard statistics for a student.

    Returns:
        Dictionary with:
        - saved_count: int - saved deals
        - redeemed_count: int - redemption records
        - active_deals: int - deals currently published
        - estimated_savings: Decimal - savings over the distinct redeemed deals
    """
    redeemed_deals = Deal.objects.filter(redemptions__user=user).distinct()

    return {
        'saved_count': Favorite.objects.filter(user=user).count(),
        'redeemed_count': DealRedemption.objects.filter(user=user).count(),
        'active_deals': Deal.objects.filter(is_active=True).count(),
        'estimated_savings': estimate_total_savings(redeemed_deals),
    }


def get_ending_soon_deals(*, business: Business, limit: int = 3) -> list[Deal]:
    """Active deals of a business that have not ended yet, soonest end first."""
    return list(
        Deal.objects
        .filter(business=business, is_active=True, end_date__gt=timezone.now())
        .order_by('end_date')[:limit]
    )


def get_platform_totals() -> dict:
    """Site-wide counters for the landing page."""
    totals = Deal.objects.filter(is_active=True).aggregate(
        views=Sum('view_count'),
        redemptions=Sum('redemption_count'),
    )
    return {
        'active_deals': Deal.objects.filter(is_active=True).count(),
        'active_businesses': Business.objects.filter(is_active=True).count(),
        'total_views': totals['views'] or 0,
        'total_redemptions': totals['redemptions'] or 0,
    }
