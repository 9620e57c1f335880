import pytest
from apps.accounts.models import User, UserRole


@pytest.fixture
def inactive_student(db):
    """Create and return a deactivated student."""
    return User.objects.create_user(
        email='inactive@umbc.edu',
        password='TestPass123!',
        name='Inactive Student',
        role=UserRole.STUDENT,
        is_active=False,
    )


@pytest.fixture
def student_payload():
    """Valid student sign-up payload."""
    return {
        'email': 'new.student@umbc.edu',
        'name': 'New Student',
        'password': 'secret1',
        'password_confirm': 'secret1',
    }


@pytest.fixture
def business_payload():
    """Valid business sign-up payload."""
    return {
        'email': 'hello@bookstore.example.com',
        'name': 'Arbutus Bookstore',
        'password': 'secret1',
        'password_confirm': 'secret1',
    }
