"""Coupon listing: status filter, search and sort."""

from typing import Optional

from django.db.models import CharField, F, Q, QuerySet
from django.db.models.functions import Cast
from django.contrib.auth import get_user_model
from django.utils import timezone

from ..models import Coupon

User = get_user_model()

STATUS_ALL = 'all'
STATUS_ACTIVE = 'active'
STATUS_INACTIVE = 'inactive'
STATUS_REDEEMED = 'redeemed'
STATUS_EXPIRED = 'expired'

STATUS_FILTERS = [
    STATUS_ALL,
    STATUS_ACTIVE,
    STATUS_INACTIVE,
    STATUS_REDEEMED,
    STATUS_EXPIRED,
]

ORDERING_FIELDS = ['created_at', 'store', 'amount', 'expiry_date']
DIRECTIONS = ['asc', 'desc']


def _expired_q(today) -> Q:
    return Q(expiry_date__isnull=False, expiry_date__lt=today)


def filter_by_status(queryset: QuerySet[Coupon], status: str) -> QuerySet[Coupon]:
    """
    Classify coupons.

    active = not redeemed and not past expiry
    inactive = redeemed or past expiry
    all = both
    """
    today = timezone.localdate()
    expired = _expired_q(today)

    if status == STATUS_ACTIVE:
        return queryset.filter(is_redeemed=False).exclude(expired)
    if status == STATUS_INACTIVE:
        return queryset.filter(Q(is_redeemed=True) | expired)
    if status == STATUS_REDEEMED:
        return queryset.filter(is_redeemed=True)
    if status == STATUS_EXPIRED:
        return queryset.filter(expired)
    return queryset


def search_coupons(queryset: QuerySet[Coupon], search: Optional[str]) -> QuerySet[Coupon]:
    """Case-insensitive match on store, description or amount."""
    if not search:
        return queryset

    return queryset.annotate(
        amount_text=Cast('amount', output_field=CharField())
    ).filter(
        Q(store__icontains=search) |
        Q(description__icontains=search) |
        Q(amount_text__icontains=search)
    )


def sort_coupons(
    queryset: QuerySet[Coupon],
    ordering: str = 'created_at',
    direction: str = 'desc'
) -> QuerySet[Coupon]:
    """
    Sort by one of ORDERING_FIELDS.

    Coupons without an expiry date count as never expiring, so they come
    last in ascending order and first in descending order.
    """
    if ordering not in ORDERING_FIELDS:
        ordering = 'created_at'

    if direction == 'asc':
        primary = F(ordering).asc(nulls_last=True)
    else:
        primary = F(ordering).desc(nulls_first=True)

    return queryset.order_by(primary, '-created_at')


def get_user_coupons(
    *,
    user: User,
    status: str = STATUS_ALL,
    search: Optional[str] = None,
    ordering: str = 'created_at',
    direction: str = 'desc'
) -> QuerySet[Coupon]:
    """
    Get user's coupons with optional filtering and sorting.

    Defaults return the full set, newest first.
    """
    queryset = Coupon.objects.filter(user=user)
    queryset = filter_by_status(queryset, status)
    queryset = search_coupons(queryset, search)
    return sort_coupons(queryset, ordering, direction)
