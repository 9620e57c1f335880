import pytest
from apps.accounts.models import User, UserRole
from apps.reviews.models import Review


@pytest.fixture
def review(db, student, business):
    """Create and return a review by the student."""
    return Review.objects.create(
        business=business,
        author=student,
        rating=5,
        comment='Best late-night slice near campus.',
    )


@pytest.fixture
def other_review(db, other_student, business):
    """Create and return a review by the other student."""
    return Review.objects.create(
        business=business,
        author=other_student,
        rating=3,
        comment='Good subs, slow delivery.',
    )


@pytest.fixture
def make_student(db):
    """Factory for extra student accounts."""
    def _make_student(handle):
        return User.objects.create_user(
            email=f'{handle}@umbc.edu',
            password='TestPass123!',
            role=UserRole.STUDENT,
            verified=True,
            institutional_email=f'{handle}@umbc.edu',
        )
    return _make_student
