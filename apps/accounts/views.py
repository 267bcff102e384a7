from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes, parser_classes
from rest_framework.parsers import JSONParser, FormParser, MultiPartParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema
from .serializers import (
    UserRegistrationSerializer,
    UserLoginSerializer,
    UserSerializer,
    ProfileUpdateSerializer,
    ChangePasswordSerializer,
    PasswordResetRequestSerializer,
    PasswordResetConfirmSerializer,
    PinRegisterSerializer,
    PinVerifySerializer,
    PinResetSerializer,
)
from .services import (
    register_user,
    authenticate_user,
    request_password_reset as request_password_reset_service,
    confirm_password_reset as confirm_password_reset_service,
    change_password as change_password_service,
    register_pin,
    has_pin,
    verify_pin as verify_pin_service,
    reset_pin as reset_pin_service,
    update_profile,
    get_role_redirect,
    # Exceptions
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
    InvalidTokenError,
    UserNotFoundError,
    PasswordConfirmationError,
    InvalidPinFormatError,
    PinNotSetError,
    InvalidPinError,
)


# Response serializers for API documentation
class TokensResponseSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class AuthResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    user = UserSerializer()
    tokens = TokensResponseSerializer()
    redirect_to = serializers.CharField()


class MessageResponseSerializer(serializers.Serializer):
    message = serializers.CharField()


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


class LogoutRequestSerializer(serializers.Serializer):
    refresh = serializers.CharField(help_text="Refresh token issued at login")


class PinStatusResponseSerializer(serializers.Serializer):
    has_pin = serializers.BooleanField()


class PinTokenResponseSerializer(serializers.Serializer):
    pin_token = serializers.CharField()


class RoleRedirectResponseSerializer(serializers.Serializer):
    role = serializers.CharField()
    redirect_to = serializers.CharField()


def _auth_payload(user, message):
    refresh = RefreshToken.for_user(user)
    return {
        'message': message,
        'user': UserSerializer(user).data,
        'tokens': {
            'refresh': str(refresh),
            'access': str(refresh.access_token),
        },
        'redirect_to': get_role_redirect(user=user)['redirect_to'],
    }


@extend_schema(
    request=UserRegistrationSerializer,
    responses={
        201: AuthResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Register a new passenger account and receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """Register a new user account."""
    serializer = UserRegistrationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    data = serializer.validated_data.copy()
    data.pop('password_confirm', None)

    try:
        user = register_user(**data)
    except UserRegistrationError as e:
        return Response(
            {'error': str(e)},
            status=status.HTTP_400_BAD_REQUEST
        )

    return Response(
        _auth_payload(user, 'Registration successful'),
        status=status.HTTP_201_CREATED
    )


@extend_schema(
    request=UserLoginSerializer,
    responses={
        200: AuthResponseSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="Authenticate with username and password to receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """Login with username and password."""
    serializer = UserLoginSerializer(data=request.data)

    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        user = authenticate_user(**serializer.validated_data)
    except InvalidCredentialsError as e:
        return Response({'error': str(e)}, status=status.HTTP_401_UNAUTHORIZED)
    except InactiveAccountError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    return Response(_auth_payload(user, 'Login successful'))


@extend_schema(
    request=LogoutRequestSerializer,
    responses={
        200: MessageResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Logout. The refresh token is validated and the client discards both tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout(request):
    """Logout the current session."""
    refresh_token = request.data.get('refresh')
    if refresh_token:
        try:
            RefreshToken(refresh_token)
        except TokenError:
            return Response({
                'error': 'Invalid token'
            }, status=status.HTTP_400_BAD_REQUEST)

    return Response({
        'message': 'Logout successful'
    })


@extend_schema(
    methods=['GET'],
    responses={200: UserSerializer},
    description="Get the current authenticated user's profile.",
    tags=['auth'],
)
@extend_schema(
    methods=['PATCH'],
    request=ProfileUpdateSerializer,
    responses={
        200: UserSerializer,
        400: ErrorResponseSerializer,
    },
    description="Update profile fields. Send multipart data to replace the avatar.",
    tags=['auth'],
)
@api_view(['GET', 'PATCH'])
@permission_classes([IsAuthenticated])
@parser_classes([JSONParser, FormParser, MultiPartParser])
def current_user(request):
    """Get or update the current user profile."""
    if request.method == 'GET':
        return Response(UserSerializer(request.user).data)

    serializer = ProfileUpdateSerializer(data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)

    try:
        user = update_profile(user=request.user, **serializer.validated_data)
    except UserRegistrationError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(UserSerializer(user).data)


@extend_schema(
    request=ChangePasswordSerializer,
    responses={
        200: MessageResponseSerializer,
        400: ErrorResponseSerializer,
    },
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def change_password(request):
    """Change password after confirming the current one."""
    serializer = ChangePasswordSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        change_password_service(user=request.user, **serializer.validated_data)
    except PasswordConfirmationError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({'message': 'Password changed successfully'})


@extend_schema(
    request=PasswordResetRequestSerializer,
    responses={200: MessageResponseSerializer},
    description="Request a password reset. Always returns success for security.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def request_password_reset(request):
    """Request password reset token."""
    serializer = PasswordResetRequestSerializer(data=request.data)

    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        request_password_reset_service(email=serializer.validated_data['email'])
    except UserNotFoundError:
        # Don't reveal if email exists
        pass

    return Response({
        'message': 'If account exists, password reset instructions have been sent'
    })


@extend_schema(
    request=PasswordResetConfirmSerializer,
    responses={
        200: MessageResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Confirm password reset with token and set new password.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def confirm_password_reset(request):
    """Confirm password reset with token."""
    serializer = PasswordResetConfirmSerializer(data=request.data)

    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        confirm_password_reset_service(
            token=serializer.validated_data['token'],
            new_password=serializer.validated_data['new_password'],
        )
    except InvalidTokenError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({
        'message': 'Password reset successful'
    })


@extend_schema(
    methods=['GET'],
    responses={200: PinStatusResponseSerializer},
    description="Whether the current user has registered a wallet PIN.",
    tags=['pin'],
)
@extend_schema(
    methods=['POST'],
    request=PinRegisterSerializer,
    responses={
        200: PinStatusResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Register or replace the wallet PIN.",
    tags=['pin'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def pin(request):
    """PIN status and registration."""
    if request.method == 'GET':
        return Response({'has_pin': has_pin(user=request.user)})

    serializer = PinRegisterSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = register_pin(user=request.user, pin=serializer.validated_data['pin'])
    except InvalidPinFormatError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({'has_pin': user.has_pin})


@extend_schema(
    request=PinVerifySerializer,
    responses={
        200: PinTokenResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Verify the wallet PIN and receive a short-lived token for payment approval.",
    tags=['pin'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def verify_pin(request):
    """Verify PIN and issue a pin token."""
    serializer = PinVerifySerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        token = verify_pin_service(user=request.user, pin=serializer.validated_data['pin'])
    except (PinNotSetError, InvalidPinError) as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({'pin_token': token})


@extend_schema(
    request=PinResetSerializer,
    responses={
        200: MessageResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Forgot PIN: confirm the account password and set a new PIN.",
    tags=['pin'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def reset_pin(request):
    """Reset PIN with password confirmation."""
    serializer = PinResetSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        reset_pin_service(
            user=request.user,
            password=serializer.validated_data['password'],
            new_pin=serializer.validated_data['new_pin'],
        )
    except (PasswordConfirmationError, InvalidPinFormatError) as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({'message': 'PIN reset successful'})


@extend_schema(
    responses={200: RoleRedirectResponseSerializer},
    description="Role of the current user and the app section it should land on.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def role_redirect(request):
    return Response(get_role_redirect(user=request.user))
