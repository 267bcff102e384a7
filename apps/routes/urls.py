from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'routes'

router = DefaultRouter()
router.register(r'', views.BusRouteViewSet, basename='route')

urlpatterns = [
    # GET    /api/routes/             - Conductor's routes
    # POST   /api/routes/             - Start a route
    # GET    /api/routes/{id}/        - Route detail
    # PATCH  /api/routes/{id}/        - Edit / toggle active
    # DELETE /api/routes/{id}/        - Delete route
    # GET    /api/routes/active/      - Active route
    # POST   /api/routes/end/         - End active route
    # GET    /api/routes/search/      - Search buses by number

    path('', include(router.urls)),
]
