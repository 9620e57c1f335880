from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'reviews'

router = DefaultRouter()
router.register(r'', views.ReviewViewSet, basename='review')

urlpatterns = [
    # Review ViewSet routes (includes list, create, retrieve, update, destroy)
    # GET    /api/reviews/          - List all reviews (?business, ?author, ?rating, ?min_rating)
    # POST   /api/reviews/          - Create review (student)
    # GET    /api/reviews/{id}/     - Get review
    # PUT    /api/reviews/{id}/     - Update review (author)
    # PATCH  /api/reviews/{id}/     - Partial update (author)
    # DELETE /api/reviews/{id}/     - Delete review (author)

    # Custom review actions
    # GET    /api/reviews/my_reviews/          - Current user's reviews
    # GET    /api/reviews/mine/?business={id}  - Current user's review of a business

    path('', include(router.urls)),
]
