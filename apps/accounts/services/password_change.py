"""Password change service."""

import logging

from django.db import transaction
from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from uuid import UUID

from .exceptions import PasswordConfirmationError

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def change_password(*, user_id: UUID, current_password: str, new_password: str) -> User:
    """
    Change a user's password after re-verifying the current one.

    Args:
        user_id: User's ID
        current_password: Password the user signed in with
        new_password: Replacement password

    Returns:
        User instance

    Raises:
        PasswordConfirmationError: If current password is incorrect
        django.core.exceptions.ValidationError: If the new password is too weak
    """
    user = (
        User.objects
        .select_for_update()
        .get(id=user_id)
    )

    if not user.check_password(current_password):
        raise PasswordConfirmationError("Current password is incorrect")

    validate_password(new_password, user=user)

    user.set_password(new_password)
    user.save(update_fields=['password'])

    logger.info("Password changed for user %s", user.id)
    return user
