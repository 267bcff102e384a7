from django.http import HttpResponse
from rest_framework import viewsets, status, serializers as drf_serializers
from rest_framework.decorators import api_view, permission_classes, action
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema, OpenApiResponse

from .models import Notification
from .serializers import (
    TransactionSerializer,
    TransactionFilterSerializer,
    WalletSummarySerializer,
    SendMoneySerializer,
    CashInSerializer,
    CashInResponseSerializer,
    CashOutSerializer,
    TransferResponseSerializer,
    NotificationSerializer,
)
from .services import (
    get_balance,
    get_wallet_summary,
    list_transactions,
    send_money as send_money_service,
    cash_out as cash_out_service,
    create_cash_in,
    verify_cash_in as verify_cash_in_service,
    generate_wallet_qr,
    list_notifications,
    get_unread_count,
    mark_notification_read,
    mark_all_notifications_read,
    # Exceptions
    InvalidAmountError,
    InsufficientBalanceError,
    RecipientNotFoundError,
    SelfTransferError,
    TransactionNotFoundError,
    NotificationNotFoundError,
    PayMongoError,
)


class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()


class InsufficientBalanceResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()
    balance = drf_serializers.DecimalField(max_digits=12, decimal_places=2)


class UnreadCountResponseSerializer(drf_serializers.Serializer):
    unread = drf_serializers.IntegerField()


def insufficient_balance_response(error):
    return Response(
        {'error': str(error), 'balance': error.balance},
        status=status.HTTP_402_PAYMENT_REQUIRED
    )


class TransactionPagination(PageNumberPagination):
    """Pagination for wallet history."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


@extend_schema(
    responses={200: WalletSummarySerializer},
    description="Current wallet balance and pending cash-in total.",
    tags=['wallet'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def balance(request):
    summary = get_wallet_summary(user=request.user)
    return Response(WalletSummarySerializer(summary).data)


class TransactionViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Wallet history for the current user.

    list: Transactions, newest first (filter by ?type= and ?status=)
    retrieve: Single transaction by transaction_id
    """

    serializer_class = TransactionSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = TransactionPagination
    lookup_field = 'transaction_id'

    def get_queryset(self):
        filters = TransactionFilterSerializer(data=self.request.query_params)
        filters.is_valid(raise_exception=True)
        return list_transactions(user=self.request.user, **filters.validated_data)

    @extend_schema(parameters=[TransactionFilterSerializer])
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)


@extend_schema(
    request=SendMoneySerializer,
    responses={
        201: TransferResponseSerializer,
        400: ErrorResponseSerializer,
        402: InsufficientBalanceResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description="Send money to another user by username or phone number.",
    tags=['wallet'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def send_money(request):
    serializer = SendMoneySerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        result = send_money_service(
            sender=request.user,
            recipient_identifier=serializer.validated_data['recipient'],
            amount=serializer.validated_data['amount'],
            description=serializer.validated_data.get('description', ''),
        )
    except RecipientNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except (SelfTransferError, InvalidAmountError) as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    except InsufficientBalanceError as e:
        return insufficient_balance_response(e)

    return Response({
        'transaction': TransactionSerializer(result['sent']).data,
        'balance': result['sent'].balance_after,
    }, status=status.HTTP_201_CREATED)


@extend_schema(
    request=CashInSerializer,
    responses={
        201: CashInResponseSerializer,
        400: ErrorResponseSerializer,
        502: ErrorResponseSerializer,
    },
    description="Create a PayMongo payment link. The wallet is credited once the link is paid.",
    tags=['wallet'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def cash_in(request):
    serializer = CashInSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        result = create_cash_in(user=request.user, amount=serializer.validated_data['amount'])
    except InvalidAmountError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    except PayMongoError as e:
        return Response({'error': str(e)}, status=status.HTTP_502_BAD_GATEWAY)

    return Response({
        'transaction': TransactionSerializer(result['transaction']).data,
        'checkout_url': result['checkout_url'],
    }, status=status.HTTP_201_CREATED)


@extend_schema(
    request=None,
    responses={
        200: TransactionSerializer,
        404: ErrorResponseSerializer,
        502: ErrorResponseSerializer,
    },
    description="Check whether a pending cash-in has been paid.",
    tags=['wallet'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def verify_cash_in(request, transaction_id):
    try:
        txn = verify_cash_in_service(user=request.user, transaction_id=transaction_id)
    except TransactionNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except PayMongoError as e:
        return Response({'error': str(e)}, status=status.HTTP_502_BAD_GATEWAY)

    return Response(TransactionSerializer(txn).data)


@extend_schema(
    request=CashOutSerializer,
    responses={
        201: TransferResponseSerializer,
        400: ErrorResponseSerializer,
        402: InsufficientBalanceResponseSerializer,
    },
    tags=['wallet'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def cash_out(request):
    serializer = CashOutSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        txn = cash_out_service(user=request.user, **serializer.validated_data)
    except InvalidAmountError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    except InsufficientBalanceError as e:
        return insufficient_balance_response(e)

    return Response({
        'transaction': TransactionSerializer(txn).data,
        'balance': get_balance(user=request.user),
    }, status=status.HTTP_201_CREATED)


@extend_schema(
    responses={200: OpenApiResponse(response=OpenApiTypes.BINARY, description="PNG image")},
    description="Wallet QR code for conductors to scan.",
    tags=['wallet'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def wallet_qr(request):
    png = generate_wallet_qr(user=request.user)
    return HttpResponse(png, content_type='image/png')


class NotificationViewSet(viewsets.GenericViewSet):
    """
    In-app notifications for the current user.

    list: Notifications, newest first (?unread=true for unread only)
    read: Mark one as read
    read_all: Mark all as read
    unread_count: Number of unread notifications
    """

    serializer_class = NotificationSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = TransactionPagination
    queryset = Notification.objects.none()

    def get_queryset(self):
        unread_only = self.request.query_params.get('unread') in ('1', 'true', 'True')
        return list_notifications(user=self.request.user, unread_only=unread_only)

    def list(self, request):
        page = self.paginate_queryset(self.get_queryset())
        serializer = self.get_serializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    @extend_schema(request=None, responses={200: NotificationSerializer, 404: ErrorResponseSerializer})
    @action(detail=True, methods=['post'])
    def read(self, request, pk=None):
        """
        Mark a notification as read.

        POST /api/wallet/notifications/{id}/read/
        """
        try:
            notification = mark_notification_read(user=request.user, notification_id=pk)
        except NotificationNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(NotificationSerializer(notification).data)

    @extend_schema(request=None, responses={200: UnreadCountResponseSerializer})
    @action(detail=False, methods=['post'], url_path='read-all')
    def read_all(self, request):
        """
        Mark every notification as read.

        POST /api/wallet/notifications/read-all/
        """
        mark_all_notifications_read(user=request.user)
        return Response({'unread': 0})

    @extend_schema(responses={200: UnreadCountResponseSerializer})
    @action(detail=False, methods=['get'], url_path='unread-count')
    def unread_count(self, request):
        """
        GET /api/wallet/notifications/unread-count/
        """
        return Response({'unread': get_unread_count(user=request.user)})
