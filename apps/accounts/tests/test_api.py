import pytest
from django.urls import reverse
from rest_framework import status
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole


# =============================================================================
# Registration Tests
# =============================================================================

@pytest.mark.django_db
class TestStudentRegistration:
    """Tests for POST /api/auth/register/student/"""

    def test_register_student_success(self, api_client, student_payload):
        url = reverse('users:register-student')
        response = api_client.post(url, student_payload)

        assert response.status_code == status.HTTP_201_CREATED
        assert 'access' in response.data['tokens']
        assert 'refresh' in response.data['tokens']
        assert response.data['user']['role'] == UserRole.STUDENT
        assert response.data['user']['verified'] is True

    def test_register_student_non_institutional_email(self, api_client, student_payload):
        url = reverse('users:register-student')
        student_payload['email'] = 'someone@gmail.com'
        response = api_client.post(url, student_payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert '@umbc.edu' in response.data['error']
        assert not User.objects.filter(email='someone@gmail.com').exists()

    def test_register_password_mismatch(self, api_client, student_payload):
        url = reverse('users:register-student')
        student_payload['password_confirm'] = 'different'
        response = api_client.post(url, student_payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'password_confirm' in response.data

    def test_register_short_password(self, api_client, student_payload):
        url = reverse('users:register-student')
        student_payload['password'] = student_payload['password_confirm'] = '123'
        response = api_client.post(url, student_payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'at least 6 characters' in response.data['error']

    def test_register_duplicate_email(self, api_client, student, student_payload):
        url = reverse('users:register-student')
        student_payload['email'] = student.email
        response = api_client.post(url, student_payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'already registered' in response.data['error']


@pytest.mark.django_db
class TestBusinessRegistration:
    """Tests for POST /api/auth/register/business/"""

    def test_register_business_success(self, api_client, business_payload):
        url = reverse('users:register-business')
        response = api_client.post(url, business_payload)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['user']['role'] == UserRole.BUSINESS
        assert response.data['user']['verified'] is False

    def test_register_business_any_domain(self, api_client, business_payload):
        url = reverse('users:register-business')
        business_payload['email'] = 'owner@gmail.com'
        response = api_client.post(url, business_payload)

        assert response.status_code == status.HTTP_201_CREATED


# =============================================================================
# Login / Logout Tests
# =============================================================================

@pytest.mark.django_db
class TestLogin:
    """Tests for POST /api/auth/login/"""

    def test_login_success(self, api_client, student):
        url = reverse('users:login')
        response = api_client.post(url, {'email': student.email, 'password': 'TestPass123!'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['message'] == 'Login successful'
        assert response.data['user']['email'] == student.email
        assert 'access' in response.data['tokens']

    def test_login_with_matching_role(self, api_client, business_user):
        url = reverse('users:login')
        response = api_client.post(url, {
            'email': business_user.email,
            'password': 'TestPass123!',
            'role': 'business',
        })

        assert response.status_code == status.HTTP_200_OK

    def test_login_role_mismatch(self, api_client, student):
        url = reverse('users:login')
        response = api_client.post(url, {
            'email': student.email,
            'password': 'TestPass123!',
            'role': 'business',
        })

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert 'registered as a student' in response.data['error']

    def test_login_wrong_password(self, api_client, student):
        url = reverse('users:login')
        response = api_client.post(url, {'email': student.email, 'password': 'wrong'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_inactive(self, api_client, inactive_student):
        url = reverse('users:login')
        response = api_client.post(url, {'email': inactive_student.email, 'password': 'TestPass123!'})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_login_missing_fields(self, api_client):
        url = reverse('users:login')
        response = api_client.post(url, {'email': 'student@umbc.edu'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestLogout:
    """Tests for POST /api/auth/logout/"""

    def test_logout_with_valid_token(self, student_client, student):
        url = reverse('users:logout')
        refresh = RefreshToken.for_user(student)
        response = student_client.post(url, {'refresh': str(refresh)})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['message'] == 'Logout successful'

    def test_logout_with_invalid_token(self, student_client):
        url = reverse('users:logout')
        response = student_client.post(url, {'refresh': 'not-a-token'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_logout_unauthenticated(self, api_client):
        url = reverse('users:logout')
        response = api_client.post(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Profile Tests
# =============================================================================

@pytest.mark.django_db
class TestProfile:

    def test_get_current_user(self, student_client, student):
        url = reverse('users:current-user')
        response = student_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['email'] == student.email
        assert response.data['role'] == UserRole.STUDENT

    def test_get_current_user_unauthenticated(self, api_client):
        url = reverse('users:current-user')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_update_profile(self, student_client, student):
        url = reverse('users:update-profile')
        response = student_client.patch(url, {'name': 'New Name'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['name'] == 'New Name'
        student.refresh_from_db()
        assert student.name == 'New Name'

    def test_change_password(self, student_client, student):
        url = reverse('users:change-password')
        response = student_client.post(url, {
            'current_password': 'TestPass123!',
            'new_password': 'brandnew',
            'new_password_confirm': 'brandnew',
        })

        assert response.status_code == status.HTTP_200_OK
        student.refresh_from_db()
        assert student.check_password('brandnew')

    def test_change_password_wrong_current(self, student_client):
        url = reverse('users:change-password')
        response = student_client.post(url, {
            'current_password': 'incorrect',
            'new_password': 'brandnew',
            'new_password_confirm': 'brandnew',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'Incorrect password' in response.data['error']

    def test_public_user_detail(self, student_client, other_student):
        url = reverse('users:user-detail', kwargs={'pk': other_student.id})
        response = student_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['display_name'] == 'Other Student'
        assert 'email' not in response.data
