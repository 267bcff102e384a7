from rest_framework import status, serializers as drf_serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated, IsAdminUser
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.permissions import IsConductor
from apps.routes.services import get_route_for_conductor, RouteNotFoundError

from .serializers import (
    CashRemittanceSerializer,
    SubmitRemittanceSerializer,
    BusSummarySerializer,
    TotalRemittedSerializer,
)
from .services import (
    get_bus_summaries,
    submit_remittance,
    verify_remittance as verify_remittance_service,
    get_remittance_history,
    get_total_remitted,
    list_pending_remittances,
    # Exceptions
    InvalidRemittanceAmountError,
    RemittanceAlreadyPendingError,
    RemittanceNotAllowedError,
    RemittanceNotFoundError,
    RemittanceAlreadyVerifiedError,
    NothingToRemitError,
)


class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()


class RemittancePagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


@extend_schema(
    methods=['GET'],
    responses={200: CashRemittanceSerializer(many=True)},
    description="Conductor's remittance history, newest first.",
    tags=['remittances'],
)
@extend_schema(
    methods=['POST'],
    request=SubmitRemittanceSerializer,
    responses={
        201: CashRemittanceSerializer,
        400: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description="Submit collected cash for one of the conductor's routes.",
    tags=['remittances'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsConductor])
def remittances(request):
    if request.method == 'GET':
        paginator = RemittancePagination()
        page = paginator.paginate_queryset(get_remittance_history(conductor=request.user), request)
        return paginator.get_paginated_response(CashRemittanceSerializer(page, many=True).data)

    serializer = SubmitRemittanceSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    try:
        route = get_route_for_conductor(conductor=request.user, route_id=data['route_id'])
    except RouteNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    try:
        remittance = submit_remittance(
            conductor=request.user,
            route=route,
            amount=data['amount'],
            notes=data['notes'],
        )
    except RemittanceNotAllowedError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    except (InvalidRemittanceAmountError, RemittanceAlreadyPendingError, NothingToRemitError) as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(CashRemittanceSerializer(remittance).data, status=status.HTTP_201_CREATED)


@extend_schema(
    responses={200: BusSummarySerializer(many=True)},
    description="Revenue, unremitted cash and remittance state for each of the conductor's buses.",
    tags=['remittances'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsConductor])
def bus_summaries(request):
    summaries = get_bus_summaries(conductor=request.user)
    return Response(BusSummarySerializer(summaries, many=True).data)


@extend_schema(responses={200: TotalRemittedSerializer}, tags=['remittances'])
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsConductor])
def total_remitted(request):
    total = get_total_remitted(conductor=request.user)
    return Response(TotalRemittedSerializer({'total_remitted': total}).data)


@extend_schema(
    responses={200: CashRemittanceSerializer(many=True)},
    description="Remittances awaiting verification (staff only).",
    tags=['remittances'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminUser])
def pending_remittances(request):
    return Response(CashRemittanceSerializer(list_pending_remittances(), many=True).data)


@extend_schema(
    request=None,
    responses={
        200: CashRemittanceSerializer,
        400: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description="Mark a pending remittance as received (staff only).",
    tags=['remittances'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminUser])
def verify_remittance(request, remittance_id):
    try:
        remittance = verify_remittance_service(remittance_id=remittance_id, staff_user=request.user)
    except RemittanceNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except RemittanceAlreadyVerifiedError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(CashRemittanceSerializer(remittance).data)
