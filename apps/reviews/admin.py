from django.contrib import admin
from .models import Review
from .services import update_business_rating


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    """Admin interface for Reviews."""

    list_display = [
        'business',
        'author',
        'rating',
        'created_at'
    ]
    list_filter = [
        'rating',
        'created_at',
    ]
    search_fields = [
        'business__name',
        'author__email',
        'comment'
    ]
    readonly_fields = ['created_at', 'updated_at']
    raw_id_fields = ['business', 'author']
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    def save_model(self, request, obj, form, change):
        super().save_model(request, obj, form, change)
        update_business_rating(business_id=obj.business_id)

    def delete_model(self, request, obj):
        business_id = obj.business_id
        super().delete_model(request, obj)
        update_business_rating(business_id=business_id)
