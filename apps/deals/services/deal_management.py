"""Deal management service - CRUD operations for deals."""

import logging

from datetime import datetime
from django.db import transaction
from django.db.models import Q, QuerySet
from uuid import UUID
from typing import Optional

from apps.accounts.models import User
from apps.businesses.models import Business
from apps.deals.models import Deal, DealCategory, DealSort
from .exceptions import (
    DealNotFoundError,
    InvalidDealError,
    InvalidDateRangeError,
    InvalidSortError,
    UnauthorizedDealActionError,
    BusinessProfileRequiredError,
)

logger = logging.getLogger(__name__)

SORT_ORDERING = {
    DealSort.NEWEST: ['-created_at'],
    DealSort.POPULAR: ['-view_count', '-created_at'],
    DealSort.ENDING: ['end_date', '-created_at'],
}

# Optional text fields: a blank value clears the stored one
CLEARABLE_FIELDS = ('terms', 'image', 'seasonal_tag', 'coupon_code')


def _validate_date_range(start_date: datetime, end_date: datetime) -> None:
    if end_date < start_date:
        raise InvalidDateRangeError("End date must be after start date")


def _validate_category(category: str) -> None:
    if category not in DealCategory.values:
        raise InvalidDealError(f"Unknown category: {category}")


@transaction.atomic
def create_deal(
    *,
    business: Optional[Business],
    title: str,
    description: str,
    discount: str,
    category: str,
    start_date: Optional[datetime],
    end_date: Optional[datetime],
    is_active: bool = True,
    terms: str = '',
    image: str = '',
    is_seasonal: bool = False,
    seasonal_tag: str = '',
    coupon_code: str = ''
) -> Deal:
    """
    Create a new deal for a business.

    This operation:
    1. Validates the owning business is present
    2. Validates title, description, discount and category are not blank
    3. Validates both dates are given and end_date >= start_date
    4. Creates the deal with zeroed view and redemption counters

    The seasonal tag is only kept for seasonal deals.

    Args:
        business: Business publishing the deal
        title: Deal headline
        description: Deal details
        discount: Free-text discount offer ("20% off", "$5 off", "Buy 1 Get 1")
        category: One of DealCategory values
        start_date: Start of validity window
        end_date: End of validity window
        is_active: Whether the deal is published
        terms: Optional terms and conditions
        image: Optional image URL
        is_seasonal: Whether this is a seasonal promotion
        seasonal_tag: Label such as "Back to School"
        coupon_code: Optional code to show at checkout

    Returns:
        Created Deal instance

    Raises:
        InvalidDealError: If a required field is missing or category is unknown
        InvalidDateRangeError: If end_date is before start_date
    """
    if business is None:
        raise InvalidDealError("Business ID is required")

    for label, value in (
        ('Deal title', title),
        ('Deal description', description),
        ('Discount offer', discount),
    ):
        if not value or not value.strip():
            raise InvalidDealError(f"{label} is required")

    if not category:
        raise InvalidDealError("Category is required")
    _validate_category(category)

    if not start_date or not end_date:
        raise InvalidDealError("Start and end dates are required")
    _validate_date_range(start_date, end_date)

    deal = Deal.objects.create(
        business=business,
        title=title.strip(),
        description=description.strip(),
        discount=discount.strip(),
        category=category,
        start_date=start_date,
        end_date=end_date,
        is_active=is_active,
        terms=terms or '',
        image=image or '',
        is_seasonal=is_seasonal,
        seasonal_tag=(seasonal_tag or '') if is_seasonal else '',
        coupon_code=coupon_code or '',
        redemption_count=0,
        view_count=0,
    )

    logger.info("Business %s created deal %s", business.id, deal.id)
    return deal


@transaction.atomic
def create_deal_for_owner(*, owner: User, **deal_data) -> Deal:
    """
    Create a deal on behalf of the business owned by `owner`.

    Raises:
        BusinessProfileRequiredError: If the owner has no business profile
    """
    try:
        business = Business.objects.get(owner=owner)
    except Business.DoesNotExist:
        raise BusinessProfileRequiredError("Set up your business profile before posting deals")

    return create_deal(business=business, **deal_data)


def get_deal_by_id(*, deal_id: UUID) -> Deal:
    """
    Retrieve a deal by ID.

    Raises:
        DealNotFoundError: If deal doesn't exist
    """
    try:
        return Deal.objects.select_related('business').get(id=deal_id)
    except Deal.DoesNotExist:
        raise DealNotFoundError("Deal not found")


def _get_owned_deal_for_update(deal_id: UUID, user: User, action: str) -> Deal:
    try:
        deal = (
            Deal.objects
            .select_for_update()
            .select_related('business')
            .get(id=deal_id)
        )
    except Deal.DoesNotExist:
        raise DealNotFoundError("Deal not found")

    if not deal.business.is_owned_by(user):
        raise UnauthorizedDealActionError(f"You can only {action} your own deals")

    return deal


@transaction.atomic
def update_deal(
    *,
    deal_id: UUID,
    user: User,
    title: Optional[str] = None,
    description: Optional[str] = None,
    discount: Optional[str] = None,
    category: Optional[str] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    is_active: Optional[bool] = None,
    terms: Optional[str] = None,
    image: Optional[str] = None,
    is_seasonal: Optional[bool] = None,
    seasonal_tag: Optional[str] = None,
    coupon_code: Optional[str] = None
) -> Deal:
    """
    Update an existing deal.

    Only the owning business can update. Only provided (non-None) fields
    change; an empty string on an optional text field clears it. The
    validity window is re-checked against the resulting dates, and a deal
    that is not seasonal loses its seasonal tag.

    Raises:
        DealNotFoundError: If deal doesn't exist
        UnauthorizedDealActionError: If user does not own the deal's business
        InvalidDealError: If a required field is set blank or category is unknown
        InvalidDateRangeError: If the resulting end_date is before start_date
    """
    deal = _get_owned_deal_for_update(deal_id, user, 'update')

    for field, value in (('title', title), ('description', description), ('discount', discount)):
        if value is not None:
            if not value.strip():
                raise InvalidDealError(f"Deal {field} cannot be blank")
            setattr(deal, field, value.strip())

    if category is not None:
        _validate_category(category)
        deal.category = category

    if is_active is not None:
        deal.is_active = is_active
    if is_seasonal is not None:
        deal.is_seasonal = is_seasonal

    clearable = dict(zip(CLEARABLE_FIELDS, (terms, image, seasonal_tag, coupon_code)))
    for field, value in clearable.items():
        if value is not None:
            setattr(deal, field, value or '')

    if not deal.is_seasonal:
        deal.seasonal_tag = ''

    if start_date:
        deal.start_date = start_date
    if end_date:
        deal.end_date = end_date
    _validate_date_range(deal.start_date, deal.end_date)

    deal.save()
    logger.info("Updated deal %s", deal.id)
    return deal


@transaction.atomic
def delete_deal(*, deal_id: UUID, user: User) -> None:
    """
    Delete a deal. Favorites and redemptions of the deal go with it.

    Raises:
        DealNotFoundError: If deal doesn't exist
        UnauthorizedDealActionError: If user does not own the deal's business
    """
    deal = _get_owned_deal_for_update(deal_id, user, 'delete')
    deal.delete()
    logger.info("Deleted deal %s", deal_id)


def get_active_deals(
    *,
    category: Optional[str] = None,
    sort_by: str = DealSort.NEWEST
) -> QuerySet[Deal]:
    """
    List published deals.

    Args:
        category: Category filter; None or 'all' means every category
        sort_by: 'newest' (created desc), 'popular' (views desc) or
            'ending' (end date asc)

    Raises:
        InvalidSortError: If sort_by is not a known option
    """
    if sort_by not in SORT_ORDERING:
        raise InvalidSortError(
            f"Invalid sort: '{sort_by}'. Valid options: {', '.join(DealSort.values)}"
        )

    queryset = Deal.objects.filter(is_active=True).select_related('business')

    if category and category != 'all':
        queryset = queryset.filter(category=category)

    return queryset.order_by(*SORT_ORDERING[sort_by])


def get_business_deals(*, business_id: UUID) -> QuerySet[Deal]:
    """All deals of a business, active or not, newest first."""
    return (
        Deal.objects
        .filter(business_id=business_id)
        .select_related('business')
        .order_by('-created_at')
    )


def increment_deal_views(*, deal_id: UUID) -> None:
    """
    Count one view of a deal. A missing deal is ignored.

    Read-modify-write on the stored counter; concurrent views may be lost.
    """
    deal = Deal.objects.filter(id=deal_id).only('id', 'view_count').first()
    if deal is None:
        return

    Deal.objects.filter(id=deal_id).update(view_count=deal.view_count + 1)


def search_deals(*, search: str, category: Optional[str] = None) -> QuerySet[Deal]:
    """
    Case-insensitive substring search over active deals.

    Matches title, description, business name and discount text; newest first.
    """
    queryset = Deal.objects.filter(is_active=True).select_related('business')

    search = (search or '').strip()
    if search:
        queryset = queryset.filter(
            Q(title__icontains=search) |
            Q(description__icontains=search) |
            Q(business__name__icontains=search) |
            Q(discount__icontains=search)
        )

    if category and category != 'all':
        queryset = queryset.filter(category=category)

    return queryset.order_by('-created_at')
