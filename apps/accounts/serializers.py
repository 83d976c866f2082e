from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password
from .models import User, Profile, Theme


class ProfileSerializer(serializers.ModelSerializer):
    """Denormalized profile row."""

    class Meta:
        model = Profile
        fields = ['name', 'email', 'created_at', 'updated_at']
        read_only_fields = fields


class UserSerializer(serializers.ModelSerializer):
    """Basic user serializer for profile display."""

    profile = ProfileSerializer(read_only=True)
    theme = serializers.CharField(read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'display_name',
            'theme',
            'profile',
            'created_at',
            'last_login',
        ]
        read_only_fields = ['id', 'email', 'created_at', 'last_login']


class UserRegistrationSerializer(serializers.ModelSerializer):
    """Serializer for user registration."""

    password = serializers.CharField(
        write_only=True,
        required=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    password_confirm = serializers.CharField(
        write_only=True,
        required=True,
        style={'input_type': 'password'}
    )

    class Meta:
        model = User
        fields = ['email', 'password', 'password_confirm', 'display_name']
        # Uniqueness is reported by the registration service with its own error code
        extra_kwargs = {'email': {'validators': []}}

    def validate(self, attrs):
        """Validate password confirmation."""
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError({
                'password_confirm': 'Passwords do not match'
            })
        return attrs


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )
    remember_me = serializers.BooleanField(default=False)


class DisplayNameSerializer(serializers.Serializer):
    display_name = serializers.CharField(min_length=2, max_length=100)


class ThemeSerializer(serializers.Serializer):
    theme = serializers.ChoiceField(choices=Theme.choices)


class PasswordChangeSerializer(serializers.Serializer):
    """Serializer for changing the password of a signed-in user."""

    current_password = serializers.CharField(
        required=True,
        style={'input_type': 'password'}
    )
    new_password = serializers.CharField(
        required=True,
        min_length=6,
        style={'input_type': 'password'}
    )
    new_password_confirm = serializers.CharField(
        required=True,
        style={'input_type': 'password'}
    )

    def validate(self, attrs):
        """Validate password confirmation."""
        if attrs['new_password'] != attrs['new_password_confirm']:
            raise serializers.ValidationError({
                'new_password_confirm': 'Passwords do not match'
            })
        return attrs
