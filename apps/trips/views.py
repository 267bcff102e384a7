from rest_framework import viewsets, status, serializers as drf_serializers
from rest_framework.decorators import api_view, permission_classes, action
from rest_framework.pagination import PageNumberPagination
from rest_framework.parsers import JSONParser, FormParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.permissions import IsConductor, IsPassenger
from apps.fares.services import InvalidDistanceError
from apps.routes.services import NoActiveRouteError
from apps.wallet.services import InsufficientBalanceError, InvalidAmountError

from .models import PaymentRequest, Trip
from .serializers import (
    PaymentRequestSerializer,
    CreatePaymentRequestSerializer,
    PaymentRequestFilterSerializer,
    ApprovePaymentSerializer,
    TripSerializer,
    CashTripSerializer,
    TripFilterSerializer,
    ConductorStatsSerializer,
    ParseQRSerializer,
    ParsedQRSerializer,
)
from .services import (
    parse_qr_data,
    create_payment_request,
    list_payment_requests,
    get_payment_request,
    approve_payment_request,
    decline_payment_request,
    cancel_payment_request,
    record_cash_trip,
    list_trips,
    get_trip,
    get_conductor_stats,
    # Exceptions
    InvalidQRCodeError,
    PassengerNotFoundError,
    InvalidPassengerError,
    PaymentRequestNotFoundError,
    PaymentRequestExpiredError,
    InvalidPaymentRequestStateError,
    InvalidPinTokenError,
    NoFareDueError,
    TripNotFoundError,
)


class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()


class TripPagination(PageNumberPagination):
    """Pagination for trip history."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class PaymentRequestViewSet(viewsets.GenericViewSet):
    """
    ViewSet for QR fare payment requests.

    list: Requests issued (conductor) or received (passenger); poll with ?updated_since=
    create: Conductor charges a scanned wallet
    retrieve: Single request
    approve: Passenger pays with a PIN token
    decline: Passenger refuses
    cancel: Conductor withdraws a pending request
    """

    serializer_class = PaymentRequestSerializer
    permission_classes = [IsAuthenticated]
    queryset = PaymentRequest.objects.none()

    def get_permissions(self):
        if self.action in ('create', 'cancel'):
            return [IsAuthenticated(), IsConductor()]
        if self.action in ('approve', 'decline'):
            return [IsAuthenticated(), IsPassenger()]
        return super().get_permissions()

    @extend_schema(parameters=[PaymentRequestFilterSerializer])
    def list(self, request):
        filters = PaymentRequestFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)

        payment_requests = list_payment_requests(user=request.user, **filters.validated_data)
        return Response(PaymentRequestSerializer(payment_requests, many=True).data)

    @extend_schema(
        request=CreatePaymentRequestSerializer,
        responses={201: PaymentRequestSerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
    )
    def create(self, request):
        serializer = CreatePaymentRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            payment_request = create_payment_request(conductor=request.user, **serializer.validated_data)
        except PassengerNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (
            InvalidQRCodeError,
            InvalidPassengerError,
            NoActiveRouteError,
            InvalidDistanceError,
            NoFareDueError,
        ) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(PaymentRequestSerializer(payment_request).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: PaymentRequestSerializer, 404: ErrorResponseSerializer})
    def retrieve(self, request, pk=None):
        try:
            payment_request = get_payment_request(user=request.user, request_id=pk)
        except PaymentRequestNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(PaymentRequestSerializer(payment_request).data)

    @extend_schema(
        request=ApprovePaymentSerializer,
        responses={200: PaymentRequestSerializer, 400: ErrorResponseSerializer, 402: ErrorResponseSerializer},
    )
    @action(detail=True, methods=['post'])
    def approve(self, request, pk=None):
        """
        Pay the fare from the wallet.

        POST /api/trips/payment-requests/{id}/approve/
        """
        serializer = ApprovePaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            payment_request = approve_payment_request(
                passenger=request.user,
                request_id=pk,
                pin_token=serializer.validated_data['pin_token'],
            )
        except InvalidPinTokenError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except PaymentRequestNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (InvalidPaymentRequestStateError, PaymentRequestExpiredError, InvalidAmountError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except InsufficientBalanceError as e:
            return Response(
                {'error': str(e), 'balance': e.balance},
                status=status.HTTP_402_PAYMENT_REQUIRED
            )

        return Response(PaymentRequestSerializer(payment_request).data)

    @extend_schema(request=None, responses={200: PaymentRequestSerializer, 400: ErrorResponseSerializer})
    @action(detail=True, methods=['post'])
    def decline(self, request, pk=None):
        """
        POST /api/trips/payment-requests/{id}/decline/
        """
        try:
            payment_request = decline_payment_request(passenger=request.user, request_id=pk)
        except PaymentRequestNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidPaymentRequestStateError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(PaymentRequestSerializer(payment_request).data)

    @extend_schema(request=None, responses={200: PaymentRequestSerializer, 400: ErrorResponseSerializer})
    @action(detail=True, methods=['post'])
    def cancel(self, request, pk=None):
        """
        POST /api/trips/payment-requests/{id}/cancel/
        """
        try:
            payment_request = cancel_payment_request(conductor=request.user, request_id=pk)
        except PaymentRequestNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidPaymentRequestStateError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(PaymentRequestSerializer(payment_request).data)


class TripViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Trip history.

    list: Trips for the current user (?start_date=&end_date=, inclusive)
    retrieve: Trip by transaction number
    cash: Conductor records a cash fare
    stats: Conductor totals
    """

    serializer_class = TripSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = TripPagination
    lookup_field = 'transaction_number'
    lookup_value_regex = r'\d{10}'

    def get_permissions(self):
        if self.action in ('cash', 'stats'):
            return [IsAuthenticated(), IsConductor()]
        return super().get_permissions()

    def get_queryset(self):
        if self.action != 'list':
            return Trip.objects.none()

        filters = TripFilterSerializer(data=self.request.query_params)
        filters.is_valid(raise_exception=True)
        return list_trips(user=self.request.user, **filters.validated_data)

    @extend_schema(parameters=[TripFilterSerializer])
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(responses={200: TripSerializer, 404: ErrorResponseSerializer})
    def retrieve(self, request, transaction_number=None):
        try:
            trip = get_trip(user=request.user, transaction_number=transaction_number)
        except TripNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(TripSerializer(trip).data)

    @extend_schema(request=CashTripSerializer, responses={201: TripSerializer, 400: ErrorResponseSerializer})
    @action(detail=False, methods=['post'], parser_classes=[JSONParser, FormParser, MultiPartParser])
    def cash(self, request):
        """
        Record a cash fare, optionally with a passenger photo (multipart).

        POST /api/trips/cash/
        """
        serializer = CashTripSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            trip = record_cash_trip(conductor=request.user, **serializer.validated_data)
        except (NoActiveRouteError, InvalidDistanceError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(TripSerializer(trip).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: ConductorStatsSerializer})
    @action(detail=False, methods=['get'])
    def stats(self, request):
        """
        GET /api/trips/stats/
        """
        return Response(ConductorStatsSerializer(get_conductor_stats(conductor=request.user)).data)


@extend_schema(
    request=ParseQRSerializer,
    responses={200: ParsedQRSerializer, 400: ErrorResponseSerializer},
    description="Decode scanned wallet QR content into a user id and name.",
    tags=['trips'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def parse_qr(request):
    serializer = ParseQRSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        parsed = parse_qr_data(serializer.validated_data['qr_data'])
    except InvalidQRCodeError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(ParsedQRSerializer(parsed).data)
