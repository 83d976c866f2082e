import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema
from .serializers import (
    UserRegistrationSerializer,
    UserLoginSerializer,
    UserSerializer,
    DisplayNameSerializer,
    ThemeSerializer,
    PasswordChangeSerializer,
)
from .services import (
    register_user,
    authenticate_user,
    start_session,
    end_session,
    ensure_user_profile,
    update_display_name,
    toggle_theme,
    change_password,
    delete_user_account,
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
    PasswordConfirmationError,
    ProfileError,
)

logger = logging.getLogger(__name__)


# Response serializers for API documentation
class TokensResponseSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class AuthResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    user = UserSerializer()
    tokens = TokensResponseSerializer()


class MessageResponseSerializer(serializers.Serializer):
    message = serializers.CharField()


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()
    code = serializers.CharField(required=False)


class DeleteAccountRequestSerializer(serializers.Serializer):
    password = serializers.CharField(help_text="Current password for confirmation")
    confirm = serializers.BooleanField(help_text="Must be true to confirm deletion")


def _tokens_for(user):
    refresh = RefreshToken.for_user(user)
    return {
        'refresh': str(refresh),
        'access': str(refresh.access_token),
    }


def _error(exc, status_code):
    return Response(
        {'error': str(exc), 'code': exc.code},
        status=status_code
    )


@extend_schema(
    request=UserRegistrationSerializer,
    responses={
        201: AuthResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Register a new user account and receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """Register a new user account."""
    serializer = UserRegistrationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    # Remove password_confirm before passing to service
    data = serializer.validated_data.copy()
    data.pop('password_confirm', None)

    try:
        user = register_user(**data)
    except UserRegistrationError as e:
        return _error(e, status.HTTP_400_BAD_REQUEST)

    start_session(request, user, remember_me=False)

    return Response({
        'message': 'Registration successful',
        'user': UserSerializer(user).data,
        'tokens': _tokens_for(user),
    }, status=status.HTTP_201_CREATED)


@extend_schema(
    request=UserLoginSerializer,
    responses={
        200: AuthResponseSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description=(
        "Authenticate with email and password. Returns JWT tokens and opens a "
        "browser session; remember_me keeps the session past browser close."
    ),
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """Login with email and password."""
    serializer = UserLoginSerializer(data=request.data)

    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        user = authenticate_user(
            email=serializer.validated_data['email'],
            password=serializer.validated_data['password'],
        )
    except InvalidCredentialsError as e:
        return _error(e, status.HTTP_401_UNAUTHORIZED)
    except InactiveAccountError as e:
        return _error(e, status.HTTP_403_FORBIDDEN)

    ensure_user_profile(user=user)
    start_session(request, user, remember_me=serializer.validated_data['remember_me'])

    return Response({
        'message': 'Login successful',
        'user': UserSerializer(user).data,
        'tokens': _tokens_for(user),
    })


@extend_schema(
    request=None,
    responses={200: MessageResponseSerializer},
    description="Logout and end the browser session.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout(request):
    """Logout the current user."""
    end_session(request)
    return Response({
        'message': 'Logout successful'
    })


@extend_schema(
    responses={200: UserSerializer},
    description="Get the current user's profile, creating the profile row if missing.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_current_user(request):
    """Get current authenticated user profile."""
    ensure_user_profile(user=request.user)
    return Response(UserSerializer(request.user).data)


@extend_schema(
    request=DisplayNameSerializer,
    responses={
        200: UserSerializer,
        400: ErrorResponseSerializer,
    },
    description="Update the current user's display name.",
    tags=['auth'],
)
@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def update_profile(request):
    """Update user display name."""
    serializer = DisplayNameSerializer(data=request.data)

    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        user = update_display_name(
            user=request.user,
            name=serializer.validated_data['display_name'],
        )
    except ProfileError as e:
        return _error(e, status.HTTP_400_BAD_REQUEST)

    return Response(UserSerializer(user).data)


@extend_schema(
    request=None,
    responses={200: ThemeSerializer},
    description="Toggle between the light and dark theme.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def switch_theme(request):
    """Toggle the UI theme."""
    theme = toggle_theme(user=request.user)
    return Response({'theme': theme})


@extend_schema(
    request=PasswordChangeSerializer,
    responses={
        200: MessageResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Change password. The current password is verified first.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def update_password(request):
    """Change the current user's password."""
    serializer = PasswordChangeSerializer(data=request.data)

    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        change_password(
            user_id=request.user.id,
            current_password=serializer.validated_data['current_password'],
            new_password=serializer.validated_data['new_password'],
        )
    except PasswordConfirmationError as e:
        return _error(e, status.HTTP_400_BAD_REQUEST)
    except DjangoValidationError as e:
        return Response(
            {'new_password': list(e.messages)},
            status=status.HTTP_400_BAD_REQUEST
        )

    return Response({
        'message': 'Password updated successfully'
    })


@extend_schema(
    request=DeleteAccountRequestSerializer,
    responses={
        204: None,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
    },
    description="GDPR-compliant account deletion. Removes coupons and anonymizes the user.",
    tags=['auth'],
)
@api_view(['DELETE'])
@permission_classes([IsAuthenticated])
def delete_account(request):
    """GDPR-compliant account deletion (anonymization)."""
    password = request.data.get('password')
    confirm = request.data.get('confirm')

    if not confirm:
        return Response({
            'error': 'Confirmation required'
        }, status=status.HTTP_400_BAD_REQUEST)

    try:
        delete_user_account(user_id=request.user.id, password=password or '')
    except PasswordConfirmationError as e:
        return _error(e, status.HTTP_401_UNAUTHORIZED)

    end_session(request)

    return Response(status=status.HTTP_204_NO_CONTENT)
