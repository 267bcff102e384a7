from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password
from .models import User


PIN_FIELD_KWARGS = {
    'min_length': 4,
    'max_length': 4,
    'write_only': True,
    'style': {'input_type': 'password'},
}


class UserSerializer(serializers.ModelSerializer):
    """User profile as returned by auth endpoints."""

    full_name = serializers.CharField(source='get_full_name', read_only=True)
    avatar_initials = serializers.CharField(read_only=True)
    has_pin = serializers.BooleanField(read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'username',
            'first_name',
            'last_name',
            'full_name',
            'phone_number',
            'role',
            'avatar',
            'avatar_initials',
            'has_pin',
            'created_at',
            'last_login',
        ]
        read_only_fields = fields


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
    phone_number = serializers.CharField(max_length=20, required=False, allow_blank=True)

    class Meta:
        model = User
        fields = [
            'email',
            'username',
            'password',
            'password_confirm',
            'first_name',
            'last_name',
            'phone_number',
        ]
        extra_kwargs = {
            # Uniqueness is checked by the registration service
            'email': {'validators': []},
            'username': {'validators': []},
        }

    def validate(self, attrs):
        """Validate password confirmation."""
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError({
                'password_confirm': 'Passwords do not match'
            })
        return attrs


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    username = serializers.CharField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class ProfileUpdateSerializer(serializers.Serializer):
    """Partial profile update. Avatar is sent as multipart form data."""

    first_name = serializers.CharField(max_length=100, required=False, allow_blank=True)
    last_name = serializers.CharField(max_length=100, required=False, allow_blank=True)
    username = serializers.CharField(max_length=50, required=False)
    email = serializers.EmailField(required=False)
    phone_number = serializers.CharField(max_length=20, required=False, allow_blank=True)
    avatar = serializers.ImageField(required=False)


class ChangePasswordSerializer(serializers.Serializer):
    old_password = serializers.CharField(write_only=True, style={'input_type': 'password'})
    new_password = serializers.CharField(
        write_only=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )


class PasswordResetRequestSerializer(serializers.Serializer):
    """Serializer for password reset request."""

    email = serializers.EmailField(required=True)


class PasswordResetConfirmSerializer(serializers.Serializer):
    """Serializer for password reset confirmation."""

    token = serializers.CharField(required=True)
    new_password = serializers.CharField(
        required=True,
        validators=[validate_password],
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


class PinRegisterSerializer(serializers.Serializer):
    pin = serializers.CharField(**PIN_FIELD_KWARGS)
    confirm_pin = serializers.CharField(**PIN_FIELD_KWARGS)

    def validate(self, attrs):
        if attrs['pin'] != attrs['confirm_pin']:
            raise serializers.ValidationError({'confirm_pin': 'PINs do not match'})
        return attrs


class PinVerifySerializer(serializers.Serializer):
    pin = serializers.CharField(**PIN_FIELD_KWARGS)


class PinResetSerializer(serializers.Serializer):
    """Forgot-PIN: account password plus the new PIN twice."""

    password = serializers.CharField(write_only=True, style={'input_type': 'password'})
    new_pin = serializers.CharField(**PIN_FIELD_KWARGS)
    confirm_pin = serializers.CharField(**PIN_FIELD_KWARGS)

    def validate(self, attrs):
        if attrs['new_pin'] != attrs['confirm_pin']:
            raise serializers.ValidationError({'confirm_pin': 'PINs do not match'})
        return attrs


class UserPublicSerializer(serializers.ModelSerializer):
    """Public user info (for payment requests, trips, remittances)."""

    full_name = serializers.CharField(source='get_full_name', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'username', 'full_name', 'role']
        read_only_fields = fields
