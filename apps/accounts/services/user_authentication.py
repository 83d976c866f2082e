"""User authentication and session services."""

import logging

from django.conf import settings
from django.contrib.auth import get_user_model, login as django_login, logout as django_logout
from django.db import transaction
from django.utils import timezone

from .exceptions import InvalidCredentialsError, InactiveAccountError

User = get_user_model()

logger = logging.getLogger(__name__)

SESSION_BACKEND = 'django.contrib.auth.backends.ModelBackend'


@transaction.atomic
def authenticate_user(*, email: str, password: str) -> User:
    """
    Authenticate user with email and password.

    Uses select_for_update() to prevent race conditions when updating last_login.

    Args:
        email: User's email
        password: User's password

    Returns:
        Authenticated User instance

    Raises:
        InvalidCredentialsError: If credentials are invalid
        InactiveAccountError: If account is deactivated
    """
    try:
        user = (
            User.objects
            .select_for_update()
            .get(email__iexact=email)
        )
    except User.DoesNotExist:
        logger.warning("Login attempt for unknown email")
        raise InvalidCredentialsError("Invalid email or password")

    if not user.check_password(password):
        logger.warning("Login attempt with wrong password for user %s", user.id)
        raise InvalidCredentialsError("Invalid email or password")

    if not user.is_active:
        raise InactiveAccountError("Account is deactivated")

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])

    return user


def start_session(request, user: User, *, remember_me: bool = False) -> None:
    """
    Open a browser session for an authenticated user.

    With remember_me the session lasts REMEMBER_ME_SESSION_AGE seconds,
    otherwise it ends when the browser closes.
    """
    django_login(request, user, backend=SESSION_BACKEND)
    if remember_me:
        request.session.set_expiry(settings.REMEMBER_ME_SESSION_AGE)
    else:
        request.session.set_expiry(0)


def end_session(request) -> None:
    """Close the browser session, if any."""
    django_logout(request)
