"""
Businesses services - Business logic layer.

This package contains all business operations for the businesses app:
- Business profile CRUD
- Search and duplicate detection
- External review links
"""

from .business_management import (
    create_business,
    get_business_by_id,
    get_business_for_owner,
    get_all_businesses,
    update_business,
)

from .business_search import (
    search_businesses,
    find_potential_duplicates,
)

from .external_reviews import (
    add_external_review,
    remove_external_review,
)

from .exceptions import (
    BusinessesServiceError,
    BusinessNotFoundError,
    BusinessAlreadyExistsError,
    DuplicateBusinessError,
    InvalidBusinessDataError,
    UnauthorizedBusinessActionError,
    ExternalReviewNotFoundError,
)

__all__ = [
    # Business Management Services
    'create_business',
    'get_business_by_id',
    'get_business_for_owner',
    'get_all_businesses',
    'update_business',
    # Search Services
    'search_businesses',
    'find_potential_duplicates',
    # External Reviews
    'add_external_review',
    'remove_external_review',
    # Exceptions
    'BusinessesServiceError',
    'BusinessNotFoundError',
    'BusinessAlreadyExistsError',
    'DuplicateBusinessError',
    'InvalidBusinessDataError',
    'UnauthorizedBusinessActionError',
    'ExternalReviewNotFoundError',
]
