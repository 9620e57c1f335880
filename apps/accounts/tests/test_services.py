"""
Service layer tests for accounts app.

Tests:
- Registration of students and businesses
- Authentication with role selection
- Bounded profile loading
- Profile edits and password change
"""

import pytest
from uuid import uuid4

from apps.accounts.models import User, UserRole
from apps.accounts.services import (
    register_student,
    register_business,
    is_institutional_email,
    authenticate_user,
    load_user_profile,
    update_user_profile,
    change_password,
    UserRegistrationError,
    InstitutionalEmailRequiredError,
    WeakPasswordError,
    InvalidCredentialsError,
    InactiveAccountError,
    RoleMismatchError,
    ProfileUnavailableError,
    PasswordConfirmationError,
    UserNotFoundError,
)


# ============================================================================
# REGISTRATION TESTS
# ============================================================================

@pytest.mark.django_db
class TestRegistration:

    def test_register_student_success(self):
        user = register_student(email='jane@umbc.edu', password='secret1', name='Jane')

        assert user.role == UserRole.STUDENT
        assert user.verified is True
        assert user.institutional_email == 'jane@umbc.edu'
        assert user.check_password('secret1')

    def test_register_student_requires_institutional_email(self):
        with pytest.raises(InstitutionalEmailRequiredError):
            register_student(email='jane@gmail.com', password='secret1')

        assert not User.objects.filter(email='jane@gmail.com').exists()

    def test_institutional_email_check_is_case_insensitive(self):
        assert is_institutional_email('Jane@UMBC.EDU')
        assert not is_institutional_email('jane@umbc.edu.example.com')

    def test_register_student_short_password(self):
        with pytest.raises(WeakPasswordError):
            register_student(email='jane@umbc.edu', password='12345')

    def test_register_business_success(self):
        user = register_business(email='shop@example.com', password='secret1', name='Shop')

        assert user.role == UserRole.BUSINESS
        assert user.verified is False
        assert user.institutional_email == ''

    def test_register_duplicate_email(self, student):
        with pytest.raises(UserRegistrationError) as exc:
            register_business(email=student.email, password='secret1')

        assert 'already registered' in str(exc.value)


# ============================================================================
# AUTHENTICATION TESTS
# ============================================================================

@pytest.mark.django_db
class TestAuthentication:

    def test_authenticate_success_updates_last_login(self, student):
        assert student.last_login is None

        user = authenticate_user(email=student.email, password='TestPass123!')

        assert user.id == student.id
        assert user.last_login is not None

    def test_authenticate_with_matching_role(self, business_user):
        user = authenticate_user(
            email=business_user.email,
            password='TestPass123!',
            role=UserRole.BUSINESS,
        )
        assert user.id == business_user.id

    def test_authenticate_role_mismatch(self, student):
        with pytest.raises(RoleMismatchError) as exc:
            authenticate_user(email=student.email, password='TestPass123!', role=UserRole.BUSINESS)

        assert 'registered as a student' in str(exc.value)

    def test_authenticate_wrong_password(self, student):
        with pytest.raises(InvalidCredentialsError):
            authenticate_user(email=student.email, password='wrong-password')

    def test_authenticate_unknown_email(self, db):
        with pytest.raises(InvalidCredentialsError):
            authenticate_user(email='nobody@umbc.edu', password='TestPass123!')

    def test_authenticate_inactive(self, inactive_student):
        with pytest.raises(InactiveAccountError):
            authenticate_user(email=inactive_student.email, password='TestPass123!')


@pytest.mark.django_db
class TestLoadUserProfile:

    def test_load_existing_profile(self, student):
        user = load_user_profile(user_id=student.id)
        assert user.id == student.id

    def test_load_missing_profile_gives_up(self, db):
        with pytest.raises(ProfileUnavailableError) as exc:
            load_user_profile(user_id=uuid4(), attempts=3, backoff=0)

        assert 'Unable to load user data' in str(exc.value)

    def test_load_inactive_profile_fails(self, inactive_student):
        with pytest.raises(ProfileUnavailableError):
            load_user_profile(user_id=inactive_student.id, attempts=1, backoff=0)

    def test_retries_are_bounded(self, db, monkeypatch):
        """Sleeps between attempts, never after the last one."""
        sleeps = []
        monkeypatch.setattr(
            'apps.accounts.services.user_authentication.time.sleep',
            lambda seconds: sleeps.append(seconds),
        )

        with pytest.raises(ProfileUnavailableError):
            load_user_profile(user_id=uuid4(), attempts=5, backoff=0.5)

        assert sleeps == [0.5, 0.5, 0.5, 0.5]


# ============================================================================
# ACCOUNT MANAGEMENT TESTS
# ============================================================================

@pytest.mark.django_db
class TestAccountManagement:

    def test_update_name(self, student):
        user = update_user_profile(user_id=student.id, name='  Renamed  ')
        assert user.name == 'Renamed'

    def test_blank_name_keeps_existing(self, student):
        user = update_user_profile(user_id=student.id, name='   ')
        assert user.name == 'Test Student'

    def test_update_unknown_user(self, db):
        with pytest.raises(UserNotFoundError):
            update_user_profile(user_id=uuid4(), name='Ghost')

    def test_change_password(self, student):
        change_password(user_id=student.id, current_password='TestPass123!', new_password='newsecret')

        student.refresh_from_db()
        assert student.check_password('newsecret')

    def test_change_password_wrong_current(self, student):
        with pytest.raises(PasswordConfirmationError):
            change_password(user_id=student.id, current_password='nope', new_password='newsecret')

        student.refresh_from_db()
        assert student.check_password('TestPass123!')

    def test_change_password_too_short(self, student):
        with pytest.raises(WeakPasswordError):
            change_password(user_id=student.id, current_password='TestPass123!', new_password='abc')
