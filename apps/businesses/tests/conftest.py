import pytest
from decimal import Decimal
from apps.accounts.models import User, UserRole
from apps.businesses.models import Business, ExternalReview


@pytest.fixture
def owner_without_business(db):
    """Business account that has not set up a profile yet."""
    return User.objects.create_user(
        email='new.owner@example.com',
        password='TestPass123!',
        name='New Owner',
        role=UserRole.BUSINESS,
    )


@pytest.fixture
def business_data():
    """Valid business setup payload."""
    return {
        'name': 'Arbutus Bookstore',
        'description': 'Textbooks, novels, and school supplies.',
        'category': 'retail',
        'address': '3456 Maiden Choice Ln, Arbutus, MD 21227',
        'phone': '(410) 555-0104',
    }


@pytest.fixture
def inactive_business(db, owner_without_business):
    """A deactivated business profile."""
    return Business.objects.create(
        owner=owner_without_business,
        name='Closed Diner',
        description='Closed for renovation.',
        category='food',
        address='1 Main St, Arbutus, MD 21227',
        phone='(410) 555-0199',
        is_active=False,
    )


@pytest.fixture
def external_review(db, business):
    """A Google review link on the business."""
    return ExternalReview.objects.create(
        business=business,
        platform='google',
        platform_name='Google',
        rating=Decimal('4.50'),
        review_count=120,
    )
