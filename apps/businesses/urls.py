from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'businesses'

router = DefaultRouter()
router.register(r'', views.BusinessViewSet, basename='business')

urlpatterns = [
    # Business ViewSet routes
    # GET    /api/businesses/                          - List active businesses (?category, ?search)
    # POST   /api/businesses/                          - Set up business profile (business)
    # GET    /api/businesses/{id}/                     - Business details
    # PATCH  /api/businesses/{id}/                     - Edit business (owner)

    # Custom actions
    # GET    /api/businesses/mine/                     - Own business profile
    # GET    /api/businesses/search/?q=                - Search businesses
    # POST   /api/businesses/check-duplicates/         - Fuzzy duplicate check
    # GET    /api/businesses/{id}/deals/               - Deals of a business
    # GET    /api/businesses/{id}/reviews/             - Reviews of a business
    # GET    /api/businesses/{id}/statistics/          - Dashboard statistics (owner)
    # POST   /api/businesses/{id}/external-reviews/    - Add external review link (owner)

    # Must come before the router so the empty prefix does not swallow it
    path(
        'external-reviews/<uuid:external_review_id>/',
        views.remove_external_review_link,
        name='remove-external-review'
    ),

    path('', include(router.urls)),
]
