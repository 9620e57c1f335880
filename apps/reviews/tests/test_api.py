import pytest
from decimal import Decimal
from django.urls import reverse
from rest_framework import status
from apps.reviews.models import Review


# =============================================================================
# Review List Tests
# =============================================================================

@pytest.mark.django_db
class TestReviewList:
    """Tests for GET /api/reviews/"""

    def test_list_reviews(self, api_client, review):
        """List all reviews (public endpoint)."""
        url = reverse('reviews:review-list')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert 'results' in response.data
        assert len(response.data['results']) == 1
        assert response.data['results'][0]['author']['display_name'] == 'Test Student'

    def test_filter_by_business(self, api_client, review, other_business):
        url = reverse('reviews:review-list')

        response = api_client.get(url, {'business': str(other_business.id)})
        assert len(response.data['results']) == 0

        response = api_client.get(url, {'business': str(review.business_id)})
        assert len(response.data['results']) == 1

    def test_filter_by_rating(self, api_client, review, other_review):
        url = reverse('reviews:review-list')
        response = api_client.get(url, {'rating': 3})

        assert len(response.data['results']) == 1
        assert response.data['results'][0]['rating'] == 3

    def test_filter_by_min_rating(self, api_client, review, other_review):
        url = reverse('reviews:review-list')
        response = api_client.get(url, {'min_rating': 4})

        assert len(response.data['results']) == 1
        assert response.data['results'][0]['rating'] == 5

    @pytest.mark.parametrize('params', [
        {'business': 'not-a-uuid'},
        {'author': '1234'},
        {'rating': 'abc'},
        {'min_rating': 'high'},
    ])
    def test_malformed_filter(self, api_client, review, params):
        url = reverse('reviews:review-list')
        response = api_client.get(url, params)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert list(params)[0] in response.data


# =============================================================================
# Review Create Tests
# =============================================================================

@pytest.mark.django_db
class TestReviewCreate:
    """Tests for POST /api/reviews/"""

    def test_student_creates_review(self, student_client, student, business):
        url = reverse('reviews:review-list')
        data = {'business': str(business.id), 'rating': 4, 'comment': 'Solid subs.'}

        response = student_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['rating'] == 4
        assert response.data['business_name'] == 'Arbutus Pizza & Subs'
        assert response.data['author']['id'] == str(student.id)

        business.refresh_from_db()
        assert business.rating == Decimal('4.00')
        assert business.review_count == 1

    def test_anonymous_cannot_review(self, api_client, business):
        url = reverse('reviews:review-list')
        response = api_client.post(url, {'business': str(business.id), 'rating': 4}, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_business_cannot_review(self, other_business_client, business):
        url = reverse('reviews:review-list')
        response = other_business_client.post(url, {'business': str(business.id), 'rating': 1}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert Review.objects.count() == 0

    def test_duplicate_review(self, student_client, review, business):
        url = reverse('reviews:review-list')
        response = student_client.post(url, {'business': str(business.id), 'rating': 1}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert Review.objects.count() == 1

    @pytest.mark.parametrize('rating', [0, 6])
    def test_invalid_rating(self, student_client, business, rating):
        url = reverse('reviews:review-list')
        response = student_client.post(url, {'business': str(business.id), 'rating': rating}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'rating' in response.data

    def test_inactive_business(self, student_client, business):
        business.is_active = False
        business.save()

        url = reverse('reviews:review-list')
        response = student_client.post(url, {'business': str(business.id), 'rating': 5}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# Review Update / Delete Tests
# =============================================================================

@pytest.mark.django_db
class TestReviewUpdateDelete:
    """Tests for PATCH/DELETE /api/reviews/{id}/"""

    def test_author_updates(self, student_client, review, business):
        url = reverse('reviews:review-detail', kwargs={'pk': review.id})
        response = student_client.patch(url, {'rating': 2}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['rating'] == 2
        assert response.data['business_name'] == 'Arbutus Pizza & Subs'

        business.refresh_from_db()
        assert business.rating == Decimal('2.00')

    def test_other_student_cannot_update(self, other_student_client, review):
        url = reverse('reviews:review-detail', kwargs={'pk': review.id})
        response = other_student_client.patch(url, {'rating': 1}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        review.refresh_from_db()
        assert review.rating == 5

    def test_author_deletes(self, student_client, review, business):
        url = reverse('reviews:review-detail', kwargs={'pk': review.id})
        response = student_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert Review.objects.count() == 0
        business.refresh_from_db()
        assert business.review_count == 0

    def test_other_student_cannot_delete(self, other_student_client, review):
        url = reverse('reviews:review-detail', kwargs={'pk': review.id})
        response = other_student_client.delete(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert Review.objects.filter(id=review.id).exists()


# =============================================================================
# Current User Review Tests
# =============================================================================

@pytest.mark.django_db
class TestMyReviews:
    """Tests for /api/reviews/my_reviews/ and /api/reviews/mine/"""

    def test_my_reviews(self, student_client, review, other_review):
        response = student_client.get(reverse('reviews:review-my-reviews'))

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data['results']) == 1
        assert response.data['results'][0]['id'] == str(review.id)

    def test_mine_for_business(self, student_client, review, business):
        response = student_client.get(reverse('reviews:review-mine'), {'business': str(business.id)})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['id'] == str(review.id)

    def test_mine_not_reviewed(self, other_student_client, business):
        response = other_student_client.get(reverse('reviews:review-mine'), {'business': str(business.id)})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_mine_requires_business(self, student_client):
        response = student_client.get(reverse('reviews:review-mine'))

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_business_reviews_endpoint(self, api_client, review, other_review, business):
        url = reverse('businesses:business-reviews', kwargs={'pk': business.id})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 2
