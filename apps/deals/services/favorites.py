"""Favorite service - saving and un-saving deals."""

import logging

from django.db import transaction, IntegrityError
from django.db.models import QuerySet
from uuid import UUID

from apps.accounts.models import User
from apps.deals.models import Deal, Favorite
from .exceptions import DealNotFoundError

logger = logging.getLogger(__name__)


@transaction.atomic
def add_favorite(*, user: User, deal_id: UUID) -> tuple[Favorite, bool]:
    """
    Save a deal for a user.

    Idempotent: saving an already saved deal returns the existing record.

    Returns:
        Tuple of (favorite, created) where created is True if newly saved

    Raises:
        DealNotFoundError: If deal doesn't exist
    """
    if not Deal.objects.filter(id=deal_id).exists():
        raise DealNotFoundError("Deal not found")

    try:
        favorite, created = Favorite.objects.get_or_create(user=user, deal_id=deal_id)
    except IntegrityError:
        # Concurrent save of the same (user, deal) pair
        favorite, created = Favorite.objects.get(user=user, deal_id=deal_id), False

    if created:
        logger.debug("User %s saved deal %s", user.id, deal_id)
    return favorite, created


@transaction.atomic
def remove_favorite(*, user: User, deal_id: UUID) -> bool:
    """
    Un-save a deal. Idempotent.

    Returns:
        True if a favorite was removed, False if the deal was not saved
    """
    deleted, _ = Favorite.objects.filter(user=user, deal_id=deal_id).delete()
    return deleted > 0


def is_favorite(*, user: User, deal_id: UUID) -> bool:
    """Check whether the user has saved the deal."""
    return Favorite.objects.filter(user=user, deal_id=deal_id).exists()


@transaction.atomic
def toggle_favorite(*, user: User, deal_id: UUID) -> bool:
    """
    Flip the saved state of a deal.

    Returns:
        The new state: True if the deal is now saved

    Raises:
        DealNotFoundError: If saving a deal that doesn't exist
    """
    if remove_favorite(user=user, deal_id=deal_id):
        return False

    add_favorite(user=user, deal_id=deal_id)
    return True


def get_user_favorite_ids(*, user: User) -> list[UUID]:
    """IDs of the deals the user has saved, most recently saved first."""
    return list(
        Favorite.objects
        .filter(user=user)
        .order_by('-created_at')
        .values_list('deal_id', flat=True)
    )


def get_user_favorites(*, user: User) -> QuerySet[Deal]:
    """Deals the user has saved, most recently saved first."""
    return (
        Deal.objects
        .filter(favorites__user=user)
        .select_related('business')
        .order_by('-favorites__created_at')
    )
