from django.contrib import admin
from apps.businesses.models import Business, ExternalReview


class ExternalReviewInline(admin.TabularInline):
    """Inline admin for external review links."""
    model = ExternalReview
    extra = 0
    fields = [
        'platform',
        'platform_name',
        'rating',
        'review_count',
        'review_url',
    ]


@admin.register(Business)
class BusinessAdmin(admin.ModelAdmin):
    """Admin interface for Businesses."""

    list_display = [
        'name',
        'owner',
        'category',
        'rating',
        'review_count',
        'is_active',
        'created_at'
    ]
    list_filter = [
        'category',
        'is_active',
        'created_at'
    ]
    search_fields = [
        'name',
        'description',
        'address',
        'owner__email'
    ]
    readonly_fields = [
        'name_normalized',
        'address_normalized',
        'rating',
        'review_count',
        'created_at',
        'updated_at'
    ]
    raw_id_fields = ['owner']
    inlines = [ExternalReviewInline]
    actions = ['activate_businesses', 'deactivate_businesses']

    @admin.action(description='Activate selected businesses')
    def activate_businesses(self, request, queryset):
        updated = queryset.update(is_active=True)
        self.message_user(request, f'{updated} businesses activated.')

    @admin.action(description='Deactivate selected businesses')
    def deactivate_businesses(self, request, queryset):
        updated = queryset.update(is_active=False)
        self.message_user(request, f'{updated} businesses deactivated.')
