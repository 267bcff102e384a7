from django.urls import path
from . import views

app_name = 'inspections'

urlpatterns = [
    # GET  /api/inspections/buses/?bus_number=            - Search buses
    # GET  /api/inspections/buses/{route_id}/passengers/  - Recent fares on a bus
    # POST /api/inspections/buses/{route_id}/clear/       - Clear or flag a bus
    # GET  /api/inspections/history/                      - Inspector's history
    # GET  /api/inspections/stats/                        - Inspector totals

    path('buses/', views.search_buses, name='bus-search'),
    path('buses/<uuid:route_id>/passengers/', views.bus_passengers, name='bus-passengers'),
    path('buses/<uuid:route_id>/clear/', views.clear_bus, name='bus-clear'),
    path('history/', views.inspection_history, name='history'),
    path('stats/', views.inspector_stats, name='stats'),
]
