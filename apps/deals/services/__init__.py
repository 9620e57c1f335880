"""Services for deals business logic."""

from .exceptions import (
    DealsServiceError,
    DealNotFoundError,
    InvalidDealError,
    InvalidDateRangeError,
    InvalidSortError,
    UnauthorizedDealActionError,
    BusinessProfileRequiredError,
)
from .deal_management import (
    create_deal,
    create_deal_for_owner,
    get_deal_by_id,
    update_deal,
    delete_deal,
    get_active_deals,
    get_business_deals,
    increment_deal_views,
    search_deals,
)
from .favorites import (
    add_favorite,
    remove_favorite,
    is_favorite,
    toggle_favorite,
    get_user_favorite_ids,
    get_user_favorites,
)
from .redemptions import (
    redeem_deal,
    get_user_redemptions,
    get_deal_redemptions,
    has_user_redeemed,
)
from .statistics import (
    estimate_deal_savings,
    estimate_total_savings,
    get_business_statistics,
    get_student_statistics,
    get_ending_soon_deals,
    get_platform_totals,
)

__all__ = [
    # Exceptions
    'DealsServiceError',
    'DealNotFoundError',
    'InvalidDealError',
    'InvalidDateRangeError',
    'InvalidSortError',
    'UnauthorizedDealActionError',
    'BusinessProfileRequiredError',
    # Deal management
    'create_deal',
    'create_deal_for_owner',
    'get_deal_by_id',
    'update_deal',
    'delete_deal',
    'get_active_deals',
    'get_business_deals',
    'increment_deal_views',
    'search_deals',
    # Favorites
    'add_favorite',
    'remove_favorite',
    'is_favorite',
    'toggle_favorite',
    'get_user_favorite_ids',
    'get_user_favorites',
    # Redemptions
    'redeem_deal',
    'get_user_redemptions',
    'get_deal_redemptions',
    'has_user_redeemed',
    # Statistics
    'estimate_deal_savings',
    'estimate_total_savings',
    'get_business_statistics',
    'get_student_statistics',
    'get_ending_soon_deals',
    'get_platform_totals',
]
