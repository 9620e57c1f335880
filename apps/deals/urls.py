from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'deals'

router = DefaultRouter()
router.register(r'', views.DealViewSet, basename='deal')

urlpatterns = [
    # GET    /api/deals/                          - Browse active deals (?category, ?sort, ?search)
    # POST   /api/deals/                          - Post deal (business)
    # GET    /api/deals/{id}/                     - Deal details
    # PATCH  /api/deals/{id}/                     - Edit deal (owner)
    # DELETE /api/deals/{id}/                     - Delete deal (owner)

    # Custom actions
    # POST   /api/deals/{id}/view/                - Count a view
    # POST   /api/deals/{id}/favorite/            - Save deal (student)
    # DELETE /api/deals/{id}/favorite/            - Un-save deal (student)
    # POST   /api/deals/{id}/favorite/toggle/     - Toggle saved state (student)
    # POST   /api/deals/{id}/redeem/              - Redeem deal (student)
    # GET    /api/deals/{id}/redemptions/         - Redemptions of a deal (owner)
    # GET    /api/deals/favorites/                - Saved deals (student)
    # GET    /api/deals/redemptions/              - Redemption history (student)
    # GET    /api/deals/mine/                     - Own deals incl. inactive (business)
    # GET    /api/deals/dashboard/                - Dashboard statistics

    path('', include(router.urls)),
]
