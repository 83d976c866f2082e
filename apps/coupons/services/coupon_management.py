"""Coupon CRUD operations service."""

import logging
from datetime import date, datetime
from uuid import UUID
from typing import Optional, Dict, Any

from django.db import transaction
from django.contrib.auth import get_user_model

from ..models import Coupon
from .exceptions import CouponNotFoundError, CouponConflictError

User = get_user_model()

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = [
    'store',
    'amount',
    'description',
    'link',
    'image_url',
    'coupon_code',
    'expiry_date',
]


def _locked_coupon(coupon_id: UUID, user: User) -> Coupon:
    try:
        return (
            Coupon.objects
            .select_for_update()
            .get(id=coupon_id, user=user)
        )
    except Coupon.DoesNotExist:
        raise CouponNotFoundError(f"Coupon {coupon_id} not found")


@transaction.atomic
def create_coupon(
    *,
    user: User,
    store: str,
    amount: int,
    description: str = '',
    link: str = '',
    image_url: str = '',
    coupon_code: str = '',
    expiry_date: Optional[date] = None
) -> Coupon:
    """
    Create a coupon owned by user.

    New coupons always start unredeemed.

    Args:
        user: Owner of the coupon
        store: Store name
        amount: Coupon value
        description: Free text
        link: External link to the offer
        image_url: URL of an uploaded coupon image
        coupon_code: Redemption code
        expiry_date: Last day the coupon can be used

    Returns:
        Created Coupon instance
    """
    coupon = Coupon.objects.create(
        user=user,
        store=store,
        amount=amount,
        description=description or '',
        link=link or '',
        image_url=image_url or '',
        coupon_code=coupon_code or '',
        expiry_date=expiry_date,
        is_redeemed=False,
    )

    logger.info("User %s created coupon %s", user.id, coupon.id)
    return coupon


@transaction.atomic
def update_coupon(
    *,
    coupon_id: UUID,
    user: User,
    data: Dict[str, Any],
    expected_updated_at: Optional[datetime] = None
) -> Coupon:
    """
    Update an existing coupon.

    Args:
        coupon_id: Coupon UUID
        user: Owner performing the update
        data: Fields to update (unknown keys are ignored)
        expected_updated_at: updated_at the caller last saw; when given and
            the stored row differs, nothing is written

    Returns:
        Updated Coupon instance

    Raises:
        CouponNotFoundError: If coupon doesn't exist or isn't owned by user
        CouponConflictError: If the coupon changed since expected_updated_at
    """
    coupon = _locked_coupon(coupon_id, user)

    if expected_updated_at is not None and coupon.updated_at != expected_updated_at:
        logger.warning("Stale update rejected for coupon %s", coupon.id)
        raise CouponConflictError(
            "This coupon was changed elsewhere. Reload it and try again."
        )

    for field, value in data.items():
        if field in EDITABLE_FIELDS:
            setattr(coupon, field, value)

    coupon.save()

    logger.info("User %s updated coupon %s", user.id, coupon.id)
    return coupon


@transaction.atomic
def redeem_coupon(*, coupon_id: UUID, user: User) -> Coupon:
    """
    Mark a coupon as redeemed.

    Redeeming an already redeemed coupon is a no-op.

    Raises:
        CouponNotFoundError: If coupon doesn't exist or isn't owned by user
    """
    coupon = _locked_coupon(coupon_id, user)

    if coupon.is_redeemed:
        return coupon

    coupon.is_redeemed = True
    coupon.save(update_fields=['is_redeemed', 'updated_at'])

    logger.info("User %s redeemed coupon %s", user.id, coupon.id)
    return coupon


@transaction.atomic
def delete_coupon(*, coupon_id: UUID, user: User) -> None:
    """
    Permanently delete a coupon.

    Raises:
        CouponNotFoundError: If coupon doesn't exist or isn't owned by user
    """
    coupon = _locked_coupon(coupon_id, user)
    coupon.delete()

    logger.info("User %s deleted coupon %s", user.id, coupon_id)


def get_coupon_by_id(*, coupon_id: UUID, user: User) -> Coupon:
    """
    Get one of user's coupons.

    Raises:
        CouponNotFoundError: If coupon doesn't exist or isn't owned by user
    """
    try:
        return Coupon.objects.get(id=coupon_id, user=user)
    except Coupon.DoesNotExist:
        raise CouponNotFoundError(f"Coupon {coupon_id} not found")
