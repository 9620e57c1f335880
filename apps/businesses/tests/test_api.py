import pytest
from decimal import Decimal
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.businesses.models import Business, ExternalReview
from apps.deals.models import DealRedemption, Deal
from apps.reviews.models import Review


@pytest.fixture
def new_owner_client(owner_without_business):
    client = APIClient()
    refresh = RefreshToken.for_user(owner_without_business)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


# =============================================================================
# Business List / Detail Tests
# =============================================================================

@pytest.mark.django_db
class TestBusinessList:
    """Tests for GET /api/businesses/"""

    def test_list_businesses_public(self, api_client, business, inactive_business):
        url = reverse('businesses:business-list')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        assert response.data['results'][0]['name'] == business.name

    def test_list_filter_by_category(self, api_client, business):
        url = reverse('businesses:business-list')
        response = api_client.get(url, {'category': 'health'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 0

    def test_list_search(self, api_client, business, other_business):
        url = reverse('businesses:business-list')
        response = api_client.get(url, {'search': 'coffee'})

        assert response.data['count'] == 1
        assert response.data['results'][0]['id'] == str(other_business.id)

    def test_search_action(self, api_client, business, other_business):
        url = reverse('businesses:business-search')
        response = api_client.get(url, {'q': 'sulphur'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1


@pytest.mark.django_db
class TestBusinessDetail:
    """Tests for GET /api/businesses/{id}/"""

    def test_retrieve_business(self, api_client, business, external_review):
        url = reverse('businesses:business-detail', kwargs={'pk': business.id})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['name'] == business.name
        assert len(response.data['external_reviews']) == 1

    def test_retrieve_inactive_hidden_from_public(self, api_client, inactive_business):
        url = reverse('businesses:business-detail', kwargs={'pk': inactive_business.id})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_retrieve_inactive_visible_to_owner(self, new_owner_client, inactive_business):
        url = reverse('businesses:business-detail', kwargs={'pk': inactive_business.id})
        response = new_owner_client.get(url)

        assert response.status_code == status.HTTP_200_OK


# =============================================================================
# Business Setup / Edit Tests
# =============================================================================

@pytest.mark.django_db
class TestBusinessCreate:
    """Tests for POST /api/businesses/"""

    def test_create_business(self, new_owner_client, owner_without_business, business_data):
        url = reverse('businesses:business-list')
        response = new_owner_client.post(url, business_data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['owner'] == owner_without_business.id
        assert Business.objects.filter(owner=owner_without_business).exists()

    def test_student_cannot_create(self, student_client, business_data):
        url = reverse('businesses:business-list')
        response = student_client.post(url, business_data, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_unauthenticated_cannot_create(self, api_client, business_data):
        url = reverse('businesses:business-list')
        response = api_client.post(url, business_data, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_second_business_rejected(self, business_client, business, business_data):
        url = reverse('businesses:business-list')
        response = business_client.post(url, business_data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'already has a business' in response.data['error']


@pytest.mark.django_db
class TestBusinessUpdate:
    """Tests for PATCH /api/businesses/{id}/"""

    def test_owner_updates(self, business_client, business):
        url = reverse('businesses:business-detail', kwargs={'pk': business.id})
        response = business_client.patch(url, {'phone': '(410) 555-9999'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        business.refresh_from_db()
        assert business.phone == '(410) 555-9999'
        assert business.name == 'Arbutus Pizza & Subs'

    def test_other_business_cannot_update(self, other_business_client, business):
        url = reverse('businesses:business-detail', kwargs={'pk': business.id})
        response = other_business_client.patch(url, {'name': 'Hijacked'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_mine(self, business_client, business):
        url = reverse('businesses:business-mine')
        response = business_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['id'] == str(business.id)

    def test_mine_without_profile(self, new_owner_client):
        url = reverse('businesses:business-mine')
        response = new_owner_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestCheckDuplicates:
    """Tests for POST /api/businesses/check-duplicates/"""

    def test_reports_similar_business(self, new_owner_client, business):
        url = reverse('businesses:business-check-duplicates')
        response = new_owner_client.post(url, {'name': 'Arbutus Pizza and Subs'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1
        assert response.data[0]['match_type'] == 'fuzzy_name'
        assert response.data[0]['business']['id'] == str(business.id)


# =============================================================================
# Nested Resource Tests
# =============================================================================

@pytest.mark.django_db
class TestBusinessNestedResources:

    def test_public_deals_exclude_inactive(self, api_client, business, deal):
        Deal.objects.filter(id=deal.id).update(is_active=False)
        url = reverse('businesses:business-deals', kwargs={'pk': business.id})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data == []

    def test_owner_sees_inactive_deals(self, business_client, business, deal):
        Deal.objects.filter(id=deal.id).update(is_active=False)
        url = reverse('businesses:business-deals', kwargs={'pk': business.id})
        response = business_client.get(url)

        assert len(response.data) == 1

    def test_deals_malformed_id(self, api_client):
        response = api_client.get('/api/businesses/not-a-uuid/deals/')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_reviews(self, api_client, business, student):
        Review.objects.create(business=business, author=student, rating=4, comment='Great crust')
        url = reverse('businesses:business-reviews', kwargs={'pk': business.id})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1
        assert response.data[0]['comment'] == 'Great crust'

    def test_statistics_for_owner(self, business_client, business, deal, student):
        Deal.objects.filter(id=deal.id).update(view_count=4)
        DealRedemption.objects.create(user=student, deal=deal)

        url = reverse('businesses:business-statistics', kwargs={'pk': business.id})
        response = business_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_deals'] == 1
        assert response.data['total_views'] == 4
        assert response.data['total_redemptions'] == 1
        assert response.data['conversion_rate'] == 25.0
        assert len(response.data['ending_soon']) == 1

    def test_statistics_not_owner(self, other_business_client, business):
        url = reverse('businesses:business-statistics', kwargs={'pk': business.id})
        response = other_business_client.get(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestExternalReviewLinks:

    def test_add_link(self, business_client, business):
        url = reverse('businesses:business-external-reviews', kwargs={'pk': business.id})
        response = business_client.post(url, {
            'platform': 'google',
            'rating': '4.60',
            'review_count': 210,
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['platform_name'] == 'Google'
        assert business.external_reviews.get().rating == Decimal('4.60')

    def test_add_link_not_owner(self, other_business_client, business):
        url = reverse('businesses:business-external-reviews', kwargs={'pk': business.id})
        response = other_business_client.post(url, {'platform': 'yelp', 'rating': '1.00'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_remove_link(self, business_client, external_review):
        url = reverse('businesses:remove-external-review', kwargs={'external_review_id': external_review.id})
        response = business_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not ExternalReview.objects.filter(id=external_review.id).exists()

    def test_remove_link_not_owner(self, other_business_client, external_review):
        url = reverse('businesses:remove-external-review', kwargs={'external_review_id': external_review.id})
        response = other_business_client.delete(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN
