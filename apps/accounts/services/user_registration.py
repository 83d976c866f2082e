"""User registration service."""

import logging

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from .exceptions import UserRegistrationError, DuplicateEmailError
from .profile_management import ensure_user_profile

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def register_user(
    *,
    email: str,
    password: str,
    display_name: str = ""
) -> User:
    """
    Register a new user and create their profile.

    Args:
        email: User's email address
        password: User's password (will be hashed)
        display_name: Optional display name

    Returns:
        Created User instance

    Raises:
        DuplicateEmailError: If the email is already registered
        UserRegistrationError: If registration fails
    """
    email = User.objects.normalize_email(email)
    if User.objects.filter(email__iexact=email).exists():
        raise DuplicateEmailError("A user with this email already exists")

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=email,
                password=password,
                display_name=display_name
            )
    except IntegrityError as e:
        raise DuplicateEmailError("A user with this email already exists") from e
    except ValueError as e:
        raise UserRegistrationError(f"Registration failed: {e}") from e

    ensure_user_profile(user=user)

    logger.info("Registered user %s", user.id)
    return user
