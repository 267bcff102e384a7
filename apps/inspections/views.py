from rest_framework import status, serializers as drf_serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.permissions import IsInspector

from .serializers import (
    BusSerializer,
    BusSearchSerializer,
    BusPassengerSerializer,
    ClearBusSerializer,
    InspectionRecordSerializer,
    InspectorStatsSerializer,
)
from .services import (
    search_buses as search_buses_service,
    get_bus,
    get_bus_passengers,
    mark_bus_cleared,
    get_inspection_history,
    get_inspector_stats,
    # Exceptions
    BusNotFoundError,
)


class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()


@extend_schema(
    parameters=[BusSearchSerializer],
    responses={200: BusSerializer(many=True)},
    description="Find buses by (partial) bus number.",
    tags=['inspections'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsInspector])
def search_buses(request):
    serializer = BusSearchSerializer(data=request.query_params)
    serializer.is_valid(raise_exception=True)

    buses = search_buses_service(bus_number=serializer.validated_data['bus_number'])
    return Response(BusSerializer(buses, many=True).data)


@extend_schema(
    responses={200: BusPassengerSerializer(many=True), 404: ErrorResponseSerializer},
    description="Fares recorded on a bus within the recent passenger window.",
    tags=['inspections'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsInspector])
def bus_passengers(request, route_id):
    try:
        route = get_bus(route_id=route_id)
    except BusNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    trips = get_bus_passengers(route=route)
    return Response({
        'bus': BusSerializer(route).data,
        'passengers': BusPassengerSerializer(trips, many=True).data,
    })


@extend_schema(
    request=ClearBusSerializer,
    responses={201: InspectionRecordSerializer, 404: ErrorResponseSerializer},
    description="Record the inspection of a bus as cleared or flagged.",
    tags=['inspections'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsInspector])
def clear_bus(request, route_id):
    serializer = ClearBusSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        route = get_bus(route_id=route_id)
    except BusNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    record = mark_bus_cleared(inspector=request.user, route=route, **serializer.validated_data)
    return Response(InspectionRecordSerializer(record).data, status=status.HTTP_201_CREATED)


@extend_schema(responses={200: InspectionRecordSerializer(many=True)}, tags=['inspections'])
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsInspector])
def inspection_history(request):
    records = get_inspection_history(inspector=request.user)
    return Response(InspectionRecordSerializer(records, many=True).data)


@extend_schema(responses={200: InspectorStatsSerializer}, tags=['inspections'])
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsInspector])
def inspector_stats(request):
    return Response(InspectorStatsSerializer(get_inspector_stats(inspector=request.user)).data)
