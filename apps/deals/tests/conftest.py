import pytest
from datetime import timedelta
from django.utils import timezone
from apps.deals.models import Deal


@pytest.fixture
def deal_data():
    """Valid deal payload for the service layer."""
    now = timezone.now()
    return {
        'title': '$2 Off Any Coffee Drink',
        'description': 'Any coffee, latte or espresso drink.',
        'discount': '$2 Off',
        'category': 'food',
        'start_date': now,
        'end_date': now + timedelta(days=60),
    }


@pytest.fixture
def make_deal(db, business):
    """Factory for deals of the business fixture."""
    def _make_deal(**overrides):
        now = timezone.now()
        values = {
            'business': business,
            'title': 'Deal',
            'description': 'Description',
            'discount': '10% Off',
            'category': 'food',
            'start_date': now,
            'end_date': now + timedelta(days=10),
        }
        values.update(overrides)
        return Deal.objects.create(**values)
    return _make_deal


@pytest.fixture
def other_deal(db, other_business):
    """An active deal of the other business."""
    now = timezone.now()
    return Deal.objects.create(
        business=other_business,
        title='Free Pastry with Coffee',
        description='Buy any coffee, get a pastry.',
        discount='Free Pastry',
        category='food',
        start_date=now,
        end_date=now + timedelta(days=7),
    )
