from django.db import models
from django.utils import timezone
import uuid


OTHER_OPTION = 'Other'

# Presets offered by the coupon form; anything else goes through "Other"
STORE_OPTIONS = [
    'שופרסל',
    'ויקטורי',
    'BUYME',
    'עובדים בריא',
    'כללית',
    OTHER_OPTION,
]

AMOUNT_OPTIONS = ['15', '30', '40', '50', '100', '200', OTHER_OPTION]

# Largest value an integer column holds on every supported database
MAX_AMOUNT = 2147483647


class CouponStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    REDEEMED = 'redeemed', 'Redeemed'
    EXPIRED = 'expired', 'Expired'


class Coupon(models.Model):
    """A discount coupon owned by one user."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='coupons'
    )

    store = models.CharField(max_length=200)
    amount = models.PositiveIntegerField(default=0)
    description = models.TextField(blank=True)
    link = models.URLField(max_length=500, blank=True)
    image_url = models.CharField(max_length=500, blank=True)
    coupon_code = models.CharField(max_length=100, blank=True)
    expiry_date = models.DateField(null=True, blank=True)

    # One-way: set by redeem, never cleared through the API
    is_redeemed = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'coupons'
        indexes = [
            models.Index(fields=['user', 'created_at'], name='coupons_user_created_idx'),
            models.Index(fields=['user', 'is_redeemed'], name='coupons_user_redeemed_idx'),
            models.Index(fields=['expiry_date'], name='coupons_expiry_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.store} - {self.amount}"

    @property
    def is_expired(self):
        """A coupon stays valid through its expiry day."""
        if self.expiry_date is None:
            return False
        return self.expiry_date < timezone.localdate()

    @property
    def is_active(self):
        return not self.is_redeemed and not self.is_expired

    @property
    def status(self):
        if self.is_redeemed:
            return CouponStatus.REDEEMED
        if self.is_expired:
            return CouponStatus.EXPIRED
        return CouponStatus.ACTIVE

    @property
    def is_usable(self):
        """Whether the "use" action has anything to show (image or link)."""
        return not self.is_redeemed and bool(self.image_url or self.link)
