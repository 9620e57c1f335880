from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Custom admin interface for User model.

    Provides user management including:
    - User listing with role and verification
    - Filtering by role and status
    - Bulk verification actions
    """

    list_display = [
        'email',
        'name',
        'role',
        'is_active_badge',
        'verified_badge',
        'created_at',
        'last_login',
    ]

    list_filter = [
        'role',
        'is_active',
        'is_staff',
        'verified',
        'created_at',
    ]

    search_fields = [
        'email',
        'name',
        'institutional_email',
    ]

    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    # Remove username field references from BaseUserAdmin
    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'name', 'role', 'password')
        }),
        ('Verification', {
            'fields': ('verified', 'institutional_email'),
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'name', 'role', 'password1', 'password2'),
        }),
    )

    readonly_fields = [
        'created_at',
        'updated_at',
        'last_login',
    ]

    filter_horizontal = ['groups', 'user_permissions']

    def is_active_badge(self, obj):
        """Display active status as colored badge."""
        if obj.is_active:
            return format_html(
                '<span style="background: #6B8E5E; color: white; padding: 3px 8px; '
                'border-radius: 10px; font-size: 11px;">Active</span>'
            )
        return format_html(
            '<span style="background: #B85C5C; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">Inactive</span>'
        )
    is_active_badge.short_description = 'Status'
    is_active_badge.admin_order_field = 'is_active'

    def verified_badge(self, obj):
        """Display verification status as colored badge."""
        if obj.verified:
            return format_html(
                '<span style="background: #6B8E5E; color: white; padding: 3px 8px; '
                'border-radius: 10px; font-size: 11px;">Verified</span>'
            )
        return format_html(
            '<span style="background: #E5C49A; color: #2C1810; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">Pending</span>'
        )
    verified_badge.short_description = 'Verified'
    verified_badge.admin_order_field = 'verified'

    actions = ['verify_users', 'unverify_users']

    @admin.action(description='Mark selected users as verified')
    def verify_users(self, request, queryset):
        count = queryset.update(verified=True)
        self.message_user(request, f'Verified {count} user(s).')

    @admin.action(description='Mark selected users as unverified')
    def unverify_users(self, request, queryset):
        count = queryset.update(verified=False)
        self.message_user(request, f'Unverified {count} user(s).')
