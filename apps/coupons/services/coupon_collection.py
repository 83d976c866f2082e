"""In-memory view of one user's coupons kept in step with the database."""

import logging
from typing import Callable, List, Optional
from uuid import UUID

from django.contrib.auth import get_user_model
from django.db import DatabaseError

from apps.accounts.services import ensure_user_profile, AccountsServiceError

from ..models import Coupon
from .coupon_management import (
    create_coupon,
    update_coupon,
    redeem_coupon,
    delete_coupon,
)
from .coupon_search import get_user_coupons
from .exceptions import CouponsServiceError

User = get_user_model()

logger = logging.getLogger(__name__)

SUCCESS = 'success'
ERROR = 'error'

Notifier = Callable[[str, str], None]

# Failures that leave the list untouched and are reported through notify
FAILURES = (CouponsServiceError, AccountsServiceError, DatabaseError)


def _log_notification(level: str, message: str) -> None:
    if level == ERROR:
        logger.warning(message)
    else:
        logger.info(message)


class CouponCollection:
    """
    A user's coupon list that only changes after the database does.

    Every mutation goes through the coupon services first. On success the
    local list is patched and a success notice is sent; on failure the list
    is left as it was, an error notice is sent and the exception is re-raised.

    Args:
        user: Owner whose coupons are tracked
        notify: Callable taking (level, message); defaults to logging
    """

    def __init__(self, user: User, notify: Optional[Notifier] = None):
        self.user = user
        self.notify = notify or _log_notification
        self._items: List[Coupon] = []
        self.loaded = False

    @property
    def items(self) -> List[Coupon]:
        return list(self._items)

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(list(self._items))

    def get(self, coupon_id) -> Optional[Coupon]:
        for coupon in self._items:
            if str(coupon.id) == str(coupon_id):
                return coupon
        return None

    def _fail(self, message: str, exc: Exception) -> None:
        self.notify(ERROR, f"{message}: {exc}")

    def _replace(self, coupon: Coupon) -> None:
        self._items = [
            coupon if str(item.id) == str(coupon.id) else item
            for item in self._items
        ]

    def load(self, **filters) -> List[Coupon]:
        """Replace the list with the user's coupons, newest first by default."""
        try:
            ensure_user_profile(user=self.user)
            coupons = list(get_user_coupons(user=self.user, **filters))
        except FAILURES as e:
            self._fail("Failed to load coupons", e)
            raise

        self._items = coupons
        self.loaded = True
        return self.items

    def create(self, **fields) -> Coupon:
        """Create a coupon and put it at the front of the list."""
        try:
            coupon = create_coupon(user=self.user, **fields)
        except FAILURES as e:
            self._fail("Failed to create coupon", e)
            raise

        self._items = [coupon] + self._items
        self.notify(SUCCESS, "Coupon created successfully")
        return coupon

    def update(self, coupon_id: UUID, **fields) -> Coupon:
        """
        Update a coupon in place.

        When the coupon is in the list, its updated_at is sent along so a
        concurrent edit elsewhere is rejected instead of overwritten.
        """
        cached = self.get(coupon_id)
        expected = cached.updated_at if cached is not None else None

        try:
            coupon = update_coupon(
                coupon_id=coupon_id,
                user=self.user,
                data=fields,
                expected_updated_at=expected,
            )
        except FAILURES as e:
            self._fail("Failed to update coupon", e)
            raise

        self._replace(coupon)
        self.notify(SUCCESS, "Coupon updated successfully")
        return coupon

    def redeem(self, coupon_id: UUID) -> Coupon:
        try:
            coupon = redeem_coupon(coupon_id=coupon_id, user=self.user)
        except FAILURES as e:
            self._fail("Failed to redeem coupon", e)
            raise

        self._replace(coupon)
        self.notify(SUCCESS, "Coupon marked as redeemed")
        return coupon

    def delete(self, coupon_id: UUID) -> None:
        try:
            delete_coupon(coupon_id=coupon_id, user=self.user)
        except FAILURES as e:
            self._fail("Failed to delete coupon", e)
            raise

        self._items = [c for c in self._items if str(c.id) != str(coupon_id)]
        self.notify(SUCCESS, "Coupon deleted successfully")
