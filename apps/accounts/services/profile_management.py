"""Profile bootstrap and user preference services."""

import logging

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from ..models import Profile, Theme
from .exceptions import ProfileError

User = get_user_model()

logger = logging.getLogger(__name__)

MIN_NAME_LENGTH = 2


def _default_profile_name(user: User) -> str:
    return user.display_name or user.email.split('@')[0] or 'User'


def ensure_user_profile(*, user: User) -> tuple[Profile, bool]:
    """
    Return the user's profile, creating it if absent.

    Create-if-absent keyed by the user's id. Safe to call on every
    authenticated request; concurrent callers end up with the same row.

    Args:
        user: Authenticated user

    Returns:
        Tuple of (Profile, created: bool)
    """
    try:
        with transaction.atomic():
            profile, created = Profile.objects.get_or_create(
                user=user,
                defaults={
                    'name': _default_profile_name(user),
                    'email': user.email,
                }
            )
    except IntegrityError:
        # Rare race condition: profile created between get and create
        profile = Profile.objects.get(user=user)
        created = False

    if created:
        logger.info("Created profile for user %s", user.id)

    return profile, created


@transaction.atomic
def update_display_name(*, user: User, name: str) -> User:
    """
    Rename a user, keeping the profile row in step.

    Raises:
        ProfileError: If the name is too short
    """
    name = (name or '').strip()
    if len(name) < MIN_NAME_LENGTH:
        raise ProfileError(f"Name must be at least {MIN_NAME_LENGTH} characters.")

    user = User.objects.select_for_update().get(id=user.id)
    user.display_name = name
    user.save(update_fields=['display_name'])

    profile, _ = ensure_user_profile(user=user)
    profile.name = name
    profile.save(update_fields=['name', 'updated_at'])

    return user


@transaction.atomic
def toggle_theme(*, user: User) -> str:
    """Flip the user's theme between light and dark and return the new one."""
    user = User.objects.select_for_update().get(id=user.id)
    new_theme = Theme.LIGHT if user.theme == Theme.DARK else Theme.DARK
    user.preferences = {**user.preferences, 'theme': str(new_theme)}
    user.save(update_fields=['preferences'])
    return str(new_theme)
