import pytest
from datetime import timedelta
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.businesses.models import Business
from apps.deals.models import Deal


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def student(db):
    """Create and return a verified student."""
    return User.objects.create_user(
        email='student@umbc.edu',
        password='TestPass123!',
        name='Test Student',
        role=UserRole.STUDENT,
        verified=True,
        institutional_email='student@umbc.edu',
    )


@pytest.fixture
def other_student(db):
    """Create and return another student."""
    return User.objects.create_user(
        email='other.student@umbc.edu',
        password='TestPass123!',
        name='Other Student',
        role=UserRole.STUDENT,
        verified=True,
        institutional_email='other.student@umbc.edu',
    )


@pytest.fixture
def business_user(db):
    """Create and return a business account."""
    return User.objects.create_user(
        email='owner@pizza.example.com',
        password='TestPass123!',
        name='Pizza Owner',
        role=UserRole.BUSINESS,
    )


@pytest.fixture
def other_business_user(db):
    """Create and return another business account."""
    return User.objects.create_user(
        email='owner@coffee.example.com',
        password='TestPass123!',
        name='Coffee Owner',
        role=UserRole.BUSINESS,
    )


@pytest.fixture
def student_client(student):
    """Return API client authenticated as the student."""
    return _client_for(student)


@pytest.fixture
def other_student_client(other_student):
    """Return API client authenticated as the other student."""
    return _client_for(other_student)


@pytest.fixture
def business_client(business_user):
    """Return API client authenticated as the business account."""
    return _client_for(business_user)


@pytest.fixture
def other_business_client(other_business_user):
    """Return API client authenticated as the other business account."""
    return _client_for(other_business_user)


@pytest.fixture
def business(db, business_user):
    """Create and return the business profile of business_user."""
    return Business.objects.create(
        owner=business_user,
        name='Arbutus Pizza & Subs',
        description='Pizza, subs and wings.',
        category='food',
        address='1234 Sulphur Spring Rd, Arbutus, MD 21227',
        phone='(410) 555-0101',
    )


@pytest.fixture
def other_business(db, other_business_user):
    """Create and return the business profile of other_business_user."""
    return Business.objects.create(
        owner=other_business_user,
        name='Campus Corner Coffee',
        description='Coffee and pastries.',
        category='food',
        address='5678 Wilkens Ave, Arbutus, MD 21227',
        phone='(410) 555-0102',
    )


@pytest.fixture
def deal(db, business):
    """Create and return an active deal valid for the next 30 days."""
    now = timezone.now()
    return Deal.objects.create(
        business=business,
        title='20% Off Large Pizzas',
        description='Show your student ID.',
        discount='20% Off',
        category='food',
        start_date=now,
        end_date=now + timedelta(days=30),
    )
