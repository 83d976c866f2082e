import pytest
from datetime import timedelta
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.coupons.models import Coupon


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a test user."""
    return User.objects.create_user(
        email='testuser@example.com',
        password='TestPass123!',
        display_name='Test User',
    )


@pytest.fixture
def other_user(db):
    """Create and return another test user."""
    return User.objects.create_user(
        email='otheruser@example.com',
        password='OtherPass123!',
        display_name='Other User',
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an authenticated API client using JWT."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def today():
    return timezone.localdate()


@pytest.fixture
def coupon(db, user, today):
    """An active coupon with a preset store and amount."""
    return Coupon.objects.create(
        user=user,
        store='BUYME',
        amount=100,
        description='Birthday gift card',
        coupon_code='GIFT-100',
        expiry_date=today + timedelta(days=30),
    )


@pytest.fixture
def redeemed_coupon(db, user):
    """A coupon that has already been used."""
    return Coupon.objects.create(
        user=user,
        store='ויקטורי',
        amount=50,
        is_redeemed=True,
    )


@pytest.fixture
def expired_coupon(db, user, today):
    """A coupon whose expiry date has passed."""
    return Coupon.objects.create(
        user=user,
        store='כללית',
        amount=40,
        description='Pharmacy',
        expiry_date=today - timedelta(days=1),
    )


@pytest.fixture
def other_users_coupon(db, other_user):
    """A coupon owned by someone else."""
    return Coupon.objects.create(
        user=other_user,
        store='שופרסל',
        amount=200,
    )
