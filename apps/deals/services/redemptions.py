"""Redemption service - recording that a student used a deal."""

import logging

from django.db import transaction
from django.db.models import QuerySet
from uuid import UUID

from apps.accounts.models import User
from apps.deals.models import Deal, DealRedemption
from .exceptions import DealNotFoundError

logger = logging.getLogger(__name__)


def redeem_deal(*, user: User, deal_id: UUID, qr_code: str = '') -> DealRedemption:
    """
    Record a redemption and bump the deal's redemption counter.

    Redemptions are append-only and not unique per user: redeeming the same
    deal twice records two redemptions. The counter update is a separate
    read-modify-write after the insert, so concurrent redemptions may
    leave the stored counter behind the true count.

    Args:
        user: Student redeeming the deal
        deal_id: UUID of deal
        qr_code: Optional QR payload shown to the cashier

    Returns:
        Created DealRedemption instance

    Raises:
        DealNotFoundError: If deal doesn't exist
    """
    if not Deal.objects.filter(id=deal_id).exists():
        raise DealNotFoundError("Deal not found")

    with transaction.atomic():
        redemption = DealRedemption.objects.create(
            user=user,
            deal_id=deal_id,
            qr_code=qr_code,
        )

    deal = Deal.objects.filter(id=deal_id).only('id', 'redemption_count').first()
    if deal is not None:
        Deal.objects.filter(id=deal_id).update(redemption_count=deal.redemption_count + 1)

    logger.info("User %s redeemed deal %s", user.id, deal_id)
    return redemption


def get_user_redemptions(*, user: User) -> QuerySet[DealRedemption]:
    """A user's redemptions, newest first."""
    return (
        DealRedemption.objects
        .filter(user=user)
        .select_related('deal', 'deal__business')
        .order_by('-redeemed_at')
    )


def get_deal_redemptions(*, deal_id: UUID) -> QuerySet[DealRedemption]:
    """All redemptions of a deal, newest first."""
    return (
        DealRedemption.objects
        .filter(deal_id=deal_id)
        .select_related('user')
        .order_by('-redeemed_at')
    )


def has_user_redeemed(*, user: User, deal_id: UUID) -> bool:
    """Check whether the user has redeemed the deal at least once."""
    return DealRedemption.objects.filter(user=user, deal_id=deal_id).exists()
