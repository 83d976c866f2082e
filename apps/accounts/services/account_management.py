"""Account management service."""

import logging

from django.db import transaction
from django.contrib.auth import get_user_model
from uuid import UUID

from ..models import Profile
from .exceptions import PasswordConfirmationError

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def delete_user_account(*, user_id: UUID, password: str) -> None:
    """
    GDPR-compliant account deletion.

    Removes the user's coupons and profile, then anonymizes the account.

    Args:
        user_id: User's ID
        password: User's password for confirmation

    Raises:
        PasswordConfirmationError: If password is incorrect
    """
    user = (
        User.objects
        .select_for_update()
        .get(id=user_id)
    )

    if not user.check_password(password):
        raise PasswordConfirmationError("Invalid password")

    deleted_coupons, _ = user.coupons.all().delete()
    Profile.objects.filter(user=user).delete()

    user.anonymize()

    logger.info("Deleted account %s (%d coupon rows removed)", user_id, deleted_coupons)
