# ==========================================
# apps/coupons/admin.py
# ==========================================

from django.contrib import admin
from django.utils import timezone
from django.utils.html import format_html
from apps.coupons.models import Coupon, CouponStatus


STATUS_COLORS = {
    CouponStatus.ACTIVE: '#6B8E5E',
    CouponStatus.REDEEMED: '#7A7A7A',
    CouponStatus.EXPIRED: '#B85C5C',
}


@admin.register(Coupon)
class CouponAdmin(admin.ModelAdmin):
    """Admin interface for coupons."""

    list_display = [
        'store',
        'amount',
        'user',
        'expiry_date',
        'status_badge',
        'created_at',
    ]
    list_filter = [
        'is_redeemed',
        'expiry_date',
        'created_at',
    ]
    search_fields = [
        'store',
        'description',
        'coupon_code',
        'user__email',
    ]
    readonly_fields = ['id', 'created_at', 'updated_at']
    raw_id_fields = ['user']
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('id', 'user', 'store', 'amount', 'description')
        }),
        ('Redemption', {
            'fields': ('coupon_code', 'link', 'image_url', 'expiry_date', 'is_redeemed')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def status_badge(self, obj):
        status = obj.status
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            STATUS_COLORS[status],
            status.label,
        )
    status_badge.short_description = 'Status'

    actions = ['mark_redeemed']

    @admin.action(description='Mark selected coupons as redeemed')
    def mark_redeemed(self, request, queryset):
        # update() skips auto_now; bump updated_at so stale edits still conflict
        count = queryset.filter(is_redeemed=False).update(
            is_redeemed=True,
            updated_at=timezone.now(),
        )
        self.message_user(request, f'Marked {count} coupon(s) as redeemed.')
