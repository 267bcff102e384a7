from rest_framework import viewsets, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.permissions import IsConductorOrStaffOrReadOnly

from .models import Discount
from .serializers import (
    DiscountSerializer,
    FareQuoteInputSerializer,
    FareQuoteSerializer,
    DistanceQuerySerializer,
    DistanceSerializer,
    PlaceQuerySerializer,
    PlaceSerializer,
)
from .services import (
    create_discount,
    update_discount,
    delete_discount,
    calculate_fare,
    calculate_distance,
    autocomplete_places,
    # Exceptions
    DuplicateDiscountError,
    DiscountNotFoundError,
    InvalidDistanceError,
    GoogleMapsError,
)


class DiscountViewSet(viewsets.ModelViewSet):
    """
    ViewSet for fare discount configuration.

    Anyone signed in can read discounts; conductors and staff manage them.
    """

    queryset = Discount.objects.all()
    serializer_class = DiscountSerializer
    permission_classes = [IsAuthenticated, IsConductorOrStaffOrReadOnly]
    pagination_class = None

    def get_queryset(self):
        queryset = super().get_queryset()
        if self.request.query_params.get('active') in ('1', 'true', 'True'):
            queryset = queryset.filter(is_active=True)
        return queryset

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            discount = create_discount(**serializer.validated_data)
        except DuplicateDiscountError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(DiscountSerializer(discount).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            discount = update_discount(discount_id=instance.id, **serializer.validated_data)
        except DuplicateDiscountError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(DiscountSerializer(discount).data)

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        try:
            delete_discount(discount_id=instance.id)
        except DiscountNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    request=FareQuoteInputSerializer,
    responses={200: FareQuoteSerializer},
    description=(
        "Quote a fare. Pass kilometer directly, or origin and destination to "
        "look the distance up on Google Maps."
    ),
    tags=['fares'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def fare_quote(request):
    serializer = FareQuoteInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    kilometer = data.get('kilometer')
    if kilometer is None:
        distance = calculate_distance(origin=data['origin'], destination=data['destination'])
        if distance['status'] != 'OK':
            return Response(
                {'error': 'Could not determine distance between the given locations'},
                status=status.HTTP_400_BAD_REQUEST
            )
        kilometer = distance['distance_km']

    try:
        quote = calculate_fare(kilometer=kilometer, passenger_type=data['passenger_type'])
    except InvalidDistanceError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(FareQuoteSerializer(quote).data)


@extend_schema(
    parameters=[DistanceQuerySerializer],
    responses={200: DistanceSerializer},
    tags=['fares'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def distance(request):
    """Distance between two places. Failures come back with status ERROR."""
    serializer = DistanceQuerySerializer(data=request.query_params)
    serializer.is_valid(raise_exception=True)

    result = calculate_distance(**serializer.validated_data)
    return Response(DistanceSerializer(result).data)


@extend_schema(
    parameters=[PlaceQuerySerializer],
    responses={200: PlaceSerializer(many=True)},
    tags=['fares'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def places(request):
    """Place autocomplete for origin/destination inputs."""
    serializer = PlaceQuerySerializer(data=request.query_params)
    serializer.is_valid(raise_exception=True)

    try:
        results = autocomplete_places(text=serializer.validated_data['q'])
    except GoogleMapsError as e:
        return Response({'error': str(e)}, status=status.HTTP_502_BAD_GATEWAY)

    return Response(PlaceSerializer(results, many=True).data)
