"""Business management service - profile CRUD for business accounts."""

import logging

from django.db import transaction, IntegrityError
from django.db.models import QuerySet
from uuid import UUID
from typing import Optional

from apps.accounts.models import User, UserRole
from apps.businesses.models import Business, BusinessCategory
from .exceptions import (
    BusinessNotFoundError,
    BusinessAlreadyExistsError,
    DuplicateBusinessError,
    InvalidBusinessDataError,
    UnauthorizedBusinessActionError,
)

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ('name', 'description', 'address', 'phone')

UPDATABLE_FIELDS = (
    'name',
    'description',
    'category',
    'address',
    'phone',
    'website',
    'logo',
    'images',
    'is_active',
    'google_place_id',
    'yelp_business_id',
)


def _validate_category(category: str) -> None:
    if category not in BusinessCategory.values:
        raise InvalidBusinessDataError(f"Unknown category: {category}")


@transaction.atomic
def create_business(
    *,
    owner: User,
    name: str,
    description: str,
    category: str,
    address: str,
    phone: str,
    website: str = '',
    logo: str = '',
    images: Optional[list[str]] = None,
    google_place_id: str = '',
    yelp_business_id: str = '',
    is_active: bool = True
) -> Business:
    """
    Create the business profile for a business account.

    This operation:
    1. Checks the owner has the business role
    2. Checks the owner has no business yet (one business per owner)
    3. Validates required fields and category
    4. Rejects an exact duplicate listing (same normalized name and address)
    5. Creates the business with an empty rating

    Args:
        owner: Business account that will own the profile
        name: Business name
        description: Public description
        category: One of BusinessCategory values
        address: Street address
        phone: Contact phone
        website: Optional website URL
        logo: Optional logo image URL
        images: Optional list of image URLs
        google_place_id: Optional Google Places identifier
        yelp_business_id: Optional Yelp identifier
        is_active: Whether the business is listed publicly

    Returns:
        Created Business instance

    Raises:
        UnauthorizedBusinessActionError: If owner is not a business account
        BusinessAlreadyExistsError: If owner already has a business
        InvalidBusinessDataError: If a required field is blank or category is unknown
        DuplicateBusinessError: If an identical business already exists
    """
    if owner.role != UserRole.BUSINESS:
        raise UnauthorizedBusinessActionError("Only business accounts can create a business profile")

    if Business.objects.filter(owner=owner).exists():
        raise BusinessAlreadyExistsError("This account already has a business profile")

    values = {
        'name': name,
        'description': description,
        'address': address,
        'phone': phone,
    }
    for field in REQUIRED_FIELDS:
        if not (values[field] or '').strip():
            raise InvalidBusinessDataError(f"Business {field} is required")

    _validate_category(category)

    duplicate = Business.objects.filter(
        name_normalized=Business.normalize_string(name),
        address_normalized=Business.normalize_string(address),
    ).exists()
    if duplicate:
        raise DuplicateBusinessError("A business with this name and address is already listed")

    try:
        business = Business.objects.create(
            owner=owner,
            name=name.strip(),
            description=description.strip(),
            category=category,
            address=address.strip(),
            phone=phone.strip(),
            website=website,
            logo=logo,
            images=images or [],
            google_place_id=google_place_id,
            yelp_business_id=yelp_business_id,
            is_active=is_active,
        )
    except IntegrityError:
        raise BusinessAlreadyExistsError("This account already has a business profile")

    logger.info("Created business %s for owner %s", business.id, owner.id)
    return business


def get_business_by_id(*, business_id: UUID, include_inactive: bool = False) -> Business:
    """
    Retrieve a business by ID.

    Raises:
        BusinessNotFoundError: If business doesn't exist (or is inactive)
    """
    queryset = Business.objects.select_related('owner').prefetch_related('external_reviews')
    if not include_inactive:
        queryset = queryset.filter(is_active=True)

    try:
        return queryset.get(id=business_id)
    except Business.DoesNotExist:
        raise BusinessNotFoundError("Business not found")


def get_business_for_owner(*, owner: User) -> Business:
    """
    Retrieve the business owned by a user, active or not.

    Raises:
        BusinessNotFoundError: If the user has no business profile
    """
    try:
        return Business.objects.prefetch_related('external_reviews').get(owner=owner)
    except Business.DoesNotExist:
        raise BusinessNotFoundError("No business profile found")


def get_all_businesses(*, category: Optional[str] = None) -> QuerySet[Business]:
    """Return active businesses, newest first, optionally filtered by category."""
    queryset = Business.objects.filter(is_active=True)

    if category and category != 'all':
        queryset = queryset.filter(category=category)

    return queryset.order_by('-created_at')


@transaction.atomic
def update_business(*, business_id: UUID, user: User, **updates) -> Business:
    """
    Update a business profile.

    Only the owner can update. Fields passed as None are ignored, so partial
    form submissions never wipe existing values. Rating and review count
    are derived and cannot be set here.

    Raises:
        BusinessNotFoundError: If business doesn't exist
        UnauthorizedBusinessActionError: If user is not the owner
        InvalidBusinessDataError: If an unknown field, blank required field,
            or unknown category is given
    """
    try:
        business = Business.objects.select_for_update().get(id=business_id)
    except Business.DoesNotExist:
        raise BusinessNotFoundError("Business not found")

    if not business.is_owned_by(user):
        raise UnauthorizedBusinessActionError("You can only update your own business")

    unknown = set(updates) - set(UPDATABLE_FIELDS)
    if unknown:
        raise InvalidBusinessDataError(f"Cannot update fields: {', '.join(sorted(unknown))}")

    changed = []
    for field, value in updates.items():
        if value is None:
            continue
        if field in REQUIRED_FIELDS and not str(value).strip():
            raise InvalidBusinessDataError(f"Business {field} is required")
        if field == 'category':
            _validate_category(value)
        setattr(business, field, value)
        changed.append(field)

    if changed:
        business.save()
        logger.info("Updated business %s fields %s", business.id, changed)

    return business
