from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'trips'

router = DefaultRouter()
router.register(r'payment-requests', views.PaymentRequestViewSet, basename='payment-request')
router.register(r'', views.TripViewSet, basename='trip')

urlpatterns = [
    # GET  /api/trips/payment-requests/                 - Issued/received requests
    # POST /api/trips/payment-requests/                 - Charge a scanned wallet
    # GET  /api/trips/payment-requests/{id}/            - Request detail
    # POST /api/trips/payment-requests/{id}/approve/    - Pay with PIN token
    # POST /api/trips/payment-requests/{id}/decline/    - Decline
    # POST /api/trips/payment-requests/{id}/cancel/     - Conductor cancels
    # GET  /api/trips/                                  - Trip history
    # GET  /api/trips/{transaction_number}/             - Trip detail
    # POST /api/trips/cash/                             - Record cash fare
    # GET  /api/trips/stats/                            - Conductor stats
    # POST /api/trips/parse-qr/                         - Decode wallet QR

    path('parse-qr/', views.parse_qr, name='parse-qr'),
    path('', include(router.urls)),
]
