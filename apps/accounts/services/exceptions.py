"""Domain-specific exceptions for accounts services."""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    code = 'accounts_error'


class UserRegistrationError(AccountsServiceError):
    """Raised when user registration fails."""
    code = 'registration_failed'


class DuplicateEmailError(UserRegistrationError):
    """Raised when the email is already registered."""
    code = 'user_already_exists'


class InvalidCredentialsError(AccountsServiceError):
    """Raised when authentication credentials are invalid."""
    code = 'invalid_credentials'


class InactiveAccountError(AccountsServiceError):
    """Raised when account is deactivated."""
    code = 'account_inactive'


class PasswordConfirmationError(AccountsServiceError):
    """Raised when the current password does not match."""
    code = 'password_mismatch'


class ProfileError(AccountsServiceError):
    """Raised when the profile cannot be created or updated."""
    code = 'profile_error'
