from django.urls import path
from . import views

app_name = 'remittances'

urlpatterns = [
    # GET  /api/remittances/                  - Conductor history
    # POST /api/remittances/                  - Submit cash for a route
    # GET  /api/remittances/buses/            - Per-bus revenue and remittance state
    # GET  /api/remittances/total/            - Total verified cash
    # GET  /api/remittances/pending/          - Awaiting verification (staff)
    # POST /api/remittances/{id}/verify/      - Verify (staff)

    path('', views.remittances, name='remittance-list'),
    path('buses/', views.bus_summaries, name='bus-summaries'),
    path('total/', views.total_remitted, name='total'),
    path('pending/', views.pending_remittances, name='pending'),
    path('<uuid:remittance_id>/verify/', views.verify_remittance, name='verify'),
]
