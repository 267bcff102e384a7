from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.permissions import IsConductor, HasRole
from apps.accounts.models import UserRole

from .models import BusRoute
from .serializers import (
    BusRouteSerializer,
    StartRouteSerializer,
    UpdateRouteSerializer,
    BusSearchSerializer,
)
from .services import (
    start_route,
    get_active_route,
    end_route,
    list_routes,
    update_route,
    delete_route,
    search_buses,
    # Exceptions
    NoActiveRouteError,
    RouteInUseError,
)


class CanSearchBuses(HasRole):
    allowed_roles = (UserRole.CONDUCTOR, UserRole.INSPECTOR)


class BusRouteViewSet(viewsets.ModelViewSet):
    """
    ViewSet for a conductor's routes.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Conductor's routes, newest first
    create: Start a new active route
    partial_update: Edit details or toggle active
    destroy: Delete a route without trips
    """

    serializer_class = BusRouteSerializer
    permission_classes = [IsAuthenticated, IsConductor]
    pagination_class = None
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']

    def get_permissions(self):
        if self.action == 'search':
            return [IsAuthenticated(), CanSearchBuses()]
        return super().get_permissions()

    def get_queryset(self):
        if self.action == 'search':
            return BusRoute.objects.none()
        return list_routes(conductor=self.request.user)

    @extend_schema(request=StartRouteSerializer, responses={201: BusRouteSerializer})
    def create(self, request, *args, **kwargs):
        serializer = StartRouteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        route = start_route(conductor=request.user, **serializer.validated_data)
        return Response(BusRouteSerializer(route).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=UpdateRouteSerializer, responses={200: BusRouteSerializer})
    def partial_update(self, request, *args, **kwargs):
        route = self.get_object()
        serializer = UpdateRouteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        route = update_route(route=route, **serializer.validated_data)
        return Response(BusRouteSerializer(route).data)

    def destroy(self, request, *args, **kwargs):
        route = self.get_object()
        try:
            delete_route(route=route)
        except RouteInUseError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=['get'])
    def active(self, request):
        """
        Get the conductor's active route.

        GET /api/routes/active/
        """
        route = get_active_route(conductor=request.user)
        if route is None:
            return Response({'error': 'No active route'}, status=status.HTTP_404_NOT_FOUND)
        return Response(BusRouteSerializer(route).data)

    @action(detail=False, methods=['post'])
    def end(self, request):
        """
        End the conductor's active route.

        POST /api/routes/end/
        """
        try:
            route = end_route(conductor=request.user)
        except NoActiveRouteError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(BusRouteSerializer(route).data)

    @extend_schema(parameters=[BusSearchSerializer], responses={200: BusRouteSerializer(many=True)})
    @action(detail=False, methods=['get'])
    def search(self, request):
        """
        Find buses by number.

        GET /api/routes/search/?bus_number=ABC
        """
        serializer = BusSearchSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)

        routes = search_buses(bus_number=serializer.validated_data['bus_number'])
        return Response(BusRouteSerializer(routes, many=True).data)
