# ==========================================
# apps/accounts/admin.py
# ==========================================

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from .models import User, Profile


BADGE_STYLE = (
    '<span style="background: {}; color: {}; padding: 3px 8px; '
    'border-radius: 10px; font-size: 11px;">{}</span>'
)


class ProfileInline(admin.StackedInline):
    model = Profile
    can_delete = False
    readonly_fields = ['created_at', 'updated_at']


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin interface for Coupix accounts.

    Lists users with their coupon count and lets staff deactivate or
    anonymize accounts.
    """

    list_display = [
        'email',
        'display_name',
        'is_active_badge',
        'coupon_count',
        'created_at',
        'last_login',
    ]

    list_filter = [
        'is_active',
        'is_staff',
        'created_at',
    ]

    search_fields = [
        'email',
        'display_name',
    ]

    ordering = ['-created_at']
    inlines = [ProfileInline]

    # No username field on this model
    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'display_name', 'password')
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
        }),
        ('Preferences', {
            'fields': ('preferences',),
            'classes': ('collapse',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_login', 'gdpr_deleted_at'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'display_name', 'password1', 'password2'),
        }),
    )

    readonly_fields = [
        'created_at',
        'last_login',
        'gdpr_deleted_at',
    ]

    filter_horizontal = ['groups', 'user_permissions']

    def is_active_badge(self, obj):
        if obj.is_active:
            return format_html(BADGE_STYLE, '#6B8E5E', 'white', 'Active')
        return format_html(BADGE_STYLE, '#B85C5C', 'white', 'Inactive')
    is_active_badge.short_description = 'Status'
    is_active_badge.admin_order_field = 'is_active'

    def coupon_count(self, obj):
        return obj.coupons.count()
    coupon_count.short_description = 'Coupons'

    actions = [
        'deactivate_users',
        'anonymize_users',
    ]

    @admin.action(description='Deactivate selected users')
    def deactivate_users(self, request, queryset):
        """Deactivate selected users (superusers are skipped)."""
        safe_queryset = queryset.filter(is_superuser=False)
        count = safe_queryset.update(is_active=False)
        skipped = queryset.count() - count
        msg = f'Deactivated {count} user(s).'
        if skipped:
            msg += f' Skipped {skipped} superuser(s).'
        self.message_user(request, msg)

    @admin.action(description='GDPR: Anonymize selected users (IRREVERSIBLE)')
    def anonymize_users(self, request, queryset):
        """Anonymize selected non-staff users and drop their coupons."""
        safe_queryset = queryset.filter(is_superuser=False, is_staff=False)
        count = 0
        for user in safe_queryset:
            user.coupons.all().delete()
            user.anonymize()
            count += 1

        skipped = queryset.count() - count
        msg = f'Anonymized {count} user(s).'
        if skipped:
            msg += f' Skipped {skipped} staff/superuser(s).'
        self.message_user(request, msg)


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ['name', 'email', 'created_at', 'updated_at']
    search_fields = ['name', 'email']
    readonly_fields = ['user', 'created_at', 'updated_at']
