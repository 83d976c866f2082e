"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    UserRegistrationError,
    DuplicateEmailError,
    InvalidCredentialsError,
    InactiveAccountError,
    PasswordConfirmationError,
    ProfileError,
)
from .user_registration import register_user
from .user_authentication import authenticate_user, start_session, end_session
from .profile_management import ensure_user_profile, update_display_name, toggle_theme
from .password_change import change_password
from .account_management import delete_user_account

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'UserRegistrationError',
    'DuplicateEmailError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'PasswordConfirmationError',
    'ProfileError',
    # Services
    'register_user',
    'authenticate_user',
    'start_session',
    'end_session',
    'ensure_user_profile',
    'update_display_name',
    'toggle_theme',
    'change_password',
    'delete_user_account',
]
