from django.contrib import admin
from apps.deals.models import Deal, Favorite, DealRedemption


@admin.register(Deal)
class DealAdmin(admin.ModelAdmin):
    """Admin interface for Deals."""

    list_display = [
        'title',
        'business',
        'discount',
        'category',
        'start_date',
        'end_date',
        'is_active',
        'is_seasonal',
        'view_count',
        'redemption_count',
    ]
    list_filter = [
        'category',
        'is_active',
        'is_seasonal',
        'start_date',
        'end_date',
    ]
    search_fields = [
        'title',
        'description',
        'discount',
        'business__name',
    ]
    readonly_fields = [
        'view_count',
        'redemption_count',
        'created_at',
        'updated_at',
    ]
    raw_id_fields = ['business']
    date_hierarchy = 'created_at'


@admin.register(Favorite)
class FavoriteAdmin(admin.ModelAdmin):
    list_display = ['user', 'deal', 'created_at']
    search_fields = ['user__email', 'deal__title']
    raw_id_fields = ['user', 'deal']


@admin.register(DealRedemption)
class DealRedemptionAdmin(admin.ModelAdmin):
    """Redemptions are append-only; the admin only reads them."""

    list_display = ['user', 'deal', 'redeemed_at']
    list_filter = ['redeemed_at']
    search_fields = ['user__email', 'deal__title']
    readonly_fields = ['user', 'deal', 'redeemed_at', 'qr_code']

    def has_add_permission(self, request):
        return False
