import pytest
from django.urls import reverse
from rest_framework import status
from apps.accounts.models import User, Profile
from apps.coupons.models import Coupon


# =============================================================================
# Registration Tests
# =============================================================================

@pytest.mark.django_db
class TestRegistration:
    """Tests for POST /api/auth/register/"""

    def test_register_success(self, api_client):
        """Successfully register a new user."""
        url = reverse('users:register')
        data = {
            'email': 'newuser@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
            'display_name': 'New User',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert 'access' in response.data['tokens']
        assert 'refresh' in response.data['tokens']
        assert User.objects.filter(email='newuser@example.com').exists()

    def test_register_creates_profile(self, api_client):
        """A profile row is created alongside the user."""
        url = reverse('users:register')
        data = {
            'email': 'profiled@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
            'display_name': 'Profiled',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        profile = Profile.objects.get(user__email='profiled@example.com')
        assert profile.name == 'Profiled'
        assert profile.email == 'profiled@example.com'

    def test_register_without_display_name(self, api_client):
        """Register without display name (optional field)."""
        url = reverse('users:register')
        data = {
            'email': 'minimal@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert Profile.objects.get(user__email='minimal@example.com').name == 'minimal'

    def test_register_duplicate_email(self, api_client, user):
        """Cannot register with existing email."""
        url = reverse('users:register')
        data = {
            'email': user.email,
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'user_already_exists'

    def test_register_password_mismatch(self, api_client):
        """Registration fails when passwords don't match."""
        url = reverse('users:register')
        data = {
            'email': 'mismatch@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'DifferentPass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'password_confirm' in response.data

    def test_register_short_password(self, api_client):
        """Passwords shorter than six characters are rejected."""
        url = reverse('users:register')
        data = {
            'email': 'weak@example.com',
            'password': 'Ab1!x',
            'password_confirm': 'Ab1!x',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert not User.objects.filter(email='weak@example.com').exists()

    def test_register_invalid_email(self, api_client):
        """Registration fails with invalid email format."""
        url = reverse('users:register')
        data = {
            'email': 'not-an-email',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# Login Tests
# =============================================================================

@pytest.mark.django_db
class TestLogin:
    """Tests for POST /api/auth/login/"""

    def test_login_success(self, api_client, user):
        """Successfully login with valid credentials."""
        url = reverse('users:login')
        data = {
            'email': user.email,
            'password': 'TestPass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data['tokens']
        assert 'refresh' in response.data['tokens']
        assert response.data['user']['email'] == user.email

    def test_login_is_case_insensitive_on_email(self, api_client, user):
        url = reverse('users:login')
        response = api_client.post(url, {
            'email': 'TestUser@Example.com',
            'password': 'TestPass123!',
        })

        assert response.status_code == status.HTTP_200_OK

    def test_login_wrong_password(self, api_client, user):
        """Login fails with wrong password."""
        url = reverse('users:login')
        data = {
            'email': user.email,
            'password': 'WrongPassword123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['code'] == 'invalid_credentials'
        assert 'error' in response.data

    def test_login_nonexistent_user(self, api_client):
        """Login fails for non-existent user."""
        url = reverse('users:login')
        data = {
            'email': 'nonexistent@example.com',
            'password': 'SomePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['code'] == 'invalid_credentials'

    def test_login_inactive_user(self, api_client, user_inactive):
        """Login fails for inactive user."""
        url = reverse('users:login')
        data = {
            'email': user_inactive.email,
            'password': 'TestPass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['code'] == 'account_inactive'

    def test_login_updates_last_login(self, api_client, user):
        """Login updates last_login timestamp."""
        url = reverse('users:login')
        data = {
            'email': user.email,
            'password': 'TestPass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_200_OK
        user.refresh_from_db()
        assert user.last_login is not None

    def test_login_bootstraps_missing_profile(self, api_client, user):
        """Users created without a profile get one on login."""
        assert not Profile.objects.filter(user=user).exists()

        url = reverse('users:login')
        api_client.post(url, {'email': user.email, 'password': 'TestPass123!'})

        assert Profile.objects.filter(user=user).count() == 1

    def test_login_without_remember_me_ends_with_browser(self, api_client, user):
        url = reverse('users:login')
        api_client.post(url, {'email': user.email, 'password': 'TestPass123!'})

        assert api_client.session.get_expire_at_browser_close() is True

    def test_login_with_remember_me_persists_session(self, api_client, user, settings):
        url = reverse('users:login')
        api_client.post(url, {
            'email': user.email,
            'password': 'TestPass123!',
            'remember_me': True,
        })

        session = api_client.session
        assert session.get_expire_at_browser_close() is False
        assert session.get_expiry_age() == settings.REMEMBER_ME_SESSION_AGE


# =============================================================================
# Logout Tests
# =============================================================================

@pytest.mark.django_db
class TestLogout:
    """Tests for POST /api/auth/logout/"""

    def test_logout_success(self, authenticated_client):
        """Successfully logout."""
        url = reverse('users:logout')
        response = authenticated_client.post(url, {})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['message'] == 'Logout successful'

    def test_logout_ends_session(self, api_client, user):
        api_client.post(reverse('users:login'), {
            'email': user.email,
            'password': 'TestPass123!',
        })
        assert '_auth_user_id' in api_client.session

        response = api_client.post(reverse('users:logout'))

        assert response.status_code == status.HTTP_200_OK
        assert '_auth_user_id' not in api_client.session

    def test_logout_unauthenticated(self, api_client):
        """Logout requires authentication."""
        url = reverse('users:logout')
        response = api_client.post(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Get Current User Tests
# =============================================================================

@pytest.mark.django_db
class TestGetCurrentUser:
    """Tests for GET /api/auth/user/"""

    def test_get_current_user(self, authenticated_client, user):
        """Get current authenticated user profile."""
        url = reverse('users:current-user')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['email'] == user.email
        assert response.data['display_name'] == user.display_name
        assert response.data['theme'] == 'light'
        assert response.data['profile']['name'] == 'Test User'

    def test_get_current_user_unauthenticated(self, api_client):
        """Cannot get user profile when not authenticated."""
        url = reverse('users:current-user')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Update Profile Tests
# =============================================================================

@pytest.mark.django_db
class TestUpdateProfile:
    """Tests for PATCH /api/auth/user/update/"""

    def test_update_display_name(self, authenticated_client, user):
        """Update user display name."""
        url = reverse('users:update-profile')
        data = {'display_name': 'Updated Name'}
        response = authenticated_client.patch(url, data)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['display_name'] == 'Updated Name'
        user.refresh_from_db()
        assert user.display_name == 'Updated Name'
        assert user.profile.name == 'Updated Name'

    def test_update_display_name_too_short(self, authenticated_client, user):
        url = reverse('users:update-profile')
        response = authenticated_client.patch(url, {'display_name': 'A'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        user.refresh_from_db()
        assert user.display_name == 'Test User'

    def test_update_profile_unauthenticated(self, api_client):
        """Cannot update profile when not authenticated."""
        url = reverse('users:update-profile')
        data = {'display_name': 'Hacked'}
        response = api_client.patch(url, data)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_cannot_update_email(self, authenticated_client, user):
        """Email is not accepted by the profile update."""
        url = reverse('users:update-profile')
        original_email = user.email
        authenticated_client.patch(url, {
            'display_name': 'Still Me',
            'email': 'newemail@example.com',
        })

        user.refresh_from_db()
        assert user.email == original_email


# =============================================================================
# Theme Tests
# =============================================================================

@pytest.mark.django_db
class TestSwitchTheme:
    """Tests for POST /api/auth/user/theme/"""

    def test_toggle_theme_round_trip(self, authenticated_client, user):
        url = reverse('users:switch-theme')

        response = authenticated_client.post(url)
        assert response.status_code == status.HTTP_200_OK
        assert response.data['theme'] == 'dark'

        response = authenticated_client.post(url)
        assert response.data['theme'] == 'light'

        user.refresh_from_db()
        assert user.preferences['theme'] == 'light'


# =============================================================================
# Change Password Tests
# =============================================================================

@pytest.mark.django_db
class TestChangePassword:
    """Tests for POST /api/auth/user/change-password/"""

    def test_change_password_success(self, authenticated_client, user):
        url = reverse('users:change-password')
        response = authenticated_client.post(url, {
            'current_password': 'TestPass123!',
            'new_password': 'BrandNew456!',
            'new_password_confirm': 'BrandNew456!',
        })

        assert response.status_code == status.HTTP_200_OK
        user.refresh_from_db()
        assert user.check_password('BrandNew456!')

    def test_change_password_wrong_current(self, authenticated_client, user):
        url = reverse('users:change-password')
        response = authenticated_client.post(url, {
            'current_password': 'NotMyPassword!',
            'new_password': 'BrandNew456!',
            'new_password_confirm': 'BrandNew456!',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'password_mismatch'
        user.refresh_from_db()
        assert user.check_password('TestPass123!')

    def test_change_password_confirmation_mismatch(self, authenticated_client):
        url = reverse('users:change-password')
        response = authenticated_client.post(url, {
            'current_password': 'TestPass123!',
            'new_password': 'BrandNew456!',
            'new_password_confirm': 'Different456!',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'new_password_confirm' in response.data


# =============================================================================
# Delete Account Tests
# =============================================================================

@pytest.mark.django_db
class TestDeleteAccount:
    """Tests for DELETE /api/auth/user/delete/"""

    def test_delete_account_success(self, authenticated_client, user):
        """Successfully delete account with GDPR anonymization."""
        Coupon.objects.create(user=user, store='BUYME', amount=100)
        url = reverse('users:delete-account')
        data = {
            'password': 'TestPass123!',
            'confirm': True,
        }
        response = authenticated_client.delete(url, data, format='json')

        assert response.status_code == status.HTTP_204_NO_CONTENT

        user.refresh_from_db()
        assert user.is_active is False
        assert user.gdpr_deleted_at is not None
        assert 'anonymized' in user.email
        assert not Coupon.objects.filter(user=user).exists()
        assert not Profile.objects.filter(user=user).exists()

    def test_delete_account_wrong_password(self, authenticated_client, user):
        """Cannot delete account with wrong password."""
        url = reverse('users:delete-account')
        data = {
            'password': 'WrongPassword!',
            'confirm': True,
        }
        response = authenticated_client.delete(url, data, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        user.refresh_from_db()
        assert user.is_active is True

    def test_delete_account_without_confirmation(self, authenticated_client, user):
        """Cannot delete account without confirmation."""
        url = reverse('users:delete-account')
        data = {
            'password': 'TestPass123!',
            'confirm': False,
        }
        response = authenticated_client.delete(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        user.refresh_from_db()
        assert user.is_active is True

    def test_delete_account_unauthenticated(self, api_client):
        """Cannot delete account when not authenticated."""
        url = reverse('users:delete-account')
        response = api_client.delete(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# User Model Tests
# =============================================================================

@pytest.mark.django_db
class TestUserModel:
    """Tests for User model methods."""

    def test_create_user(self, db):
        """Create user with create_user method."""
        user = User.objects.create_user(
            email='model@example.com',
            password='TestPass123!',
        )

        assert user.email == 'model@example.com'
        assert user.check_password('TestPass123!')
        assert user.is_active is True
        assert user.is_staff is False

    def test_create_superuser(self, db):
        """Create superuser with create_superuser method."""
        user = User.objects.create_superuser(
            email='admin@example.com',
            password='AdminPass123!',
        )

        assert user.is_staff is True
        assert user.is_superuser is True

    def test_get_display_name(self, user):
        """get_display_name returns display_name or email prefix."""
        assert user.get_display_name() == 'Test User'

        user.display_name = ''
        user.save()
        assert user.get_display_name() == 'testuser'

    def test_anonymize(self, user):
        """Anonymize user data for GDPR compliance."""
        original_id = user.id
        user.anonymize()

        assert user.is_active is False
        assert 'anonymized' in user.email
        assert user.display_name == 'Deleted User'
        assert user.gdpr_deleted_at is not None
        assert user.id == original_id

    def test_user_str(self, user):
        """User string representation is email."""
        assert str(user) == user.email
