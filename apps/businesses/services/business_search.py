"""Business search and duplicate detection."""

from typing import List, Tuple

from django.db.models import Q, QuerySet
from fuzzywuzzy import fuzz

from ..models import Business


# Thresholds for fuzzy matching
EXACT_MATCH_THRESHOLD = 100
MEDIUM_SIMILARITY_THRESHOLD = 80


def search_businesses(*, search: str) -> QuerySet[Business]:
    """
    Case-insensitive substring search over active businesses.

    Matches name, description, category and address; newest first.
    """
    queryset = Business.objects.filter(is_active=True)

    search = (search or '').strip()
    if search:
        queryset = queryset.filter(
            Q(name__icontains=search) |
            Q(description__icontains=search) |
            Q(category__icontains=search) |
            Q(address__icontains=search)
        )

    return queryset.order_by('-created_at')


def find_potential_duplicates(
    *,
    name: str,
    address: str = '',
    threshold: int = MEDIUM_SIMILARITY_THRESHOLD
) -> List[Tuple[Business, int, str]]:
    """
    Find businesses that look like the one being set up.

    Args:
        name: Business name to check
        address: Street address to check (optional)
        threshold: Minimum similarity score (0-100)

    Returns:
        List of (business, similarity_score, match_type) tuples, best first.
        match_type: 'exact', 'fuzzy_name', 'fuzzy_both'
    """
    name_norm = Business.normalize_string(name)
    address_norm = Business.normalize_string(address)

    # Step 1: exact normalized match
    exact = Business.objects.filter(name_normalized=name_norm)
    if address_norm:
        exact = exact.filter(address_normalized=address_norm)

    candidates = [(business, EXACT_MATCH_THRESHOLD, 'exact') for business in exact]
    if candidates:
        return candidates

    # Step 2: fuzzy matching across all listings
    for business in Business.objects.exclude(name_normalized=name_norm):
        name_similarity = fuzz.ratio(name_norm, business.name_normalized)

        if address_norm:
            address_similarity = fuzz.ratio(address_norm, business.address_normalized)
            combined_score = int(name_similarity * 0.6 + address_similarity * 0.4)
            if combined_score >= threshold:
                candidates.append((business, combined_score, 'fuzzy_both'))
        elif name_similarity >= threshold:
            candidates.append((business, name_similarity, 'fuzzy_name'))

    candidates.sort(key=lambda item: item[1], reverse=True)
    return candidates
