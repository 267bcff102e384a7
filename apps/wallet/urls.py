from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'wallet'

router = DefaultRouter()
router.register(r'transactions', views.TransactionViewSet, basename='transaction')
router.register(r'notifications', views.NotificationViewSet, basename='notification')

urlpatterns = [
    # GET  /api/wallet/balance/                          - Balance summary
    # GET  /api/wallet/transactions/                     - History
    # GET  /api/wallet/transactions/{transaction_id}/    - Transaction detail
    # POST /api/wallet/send/                             - Send money
    # POST /api/wallet/cash-in/                          - Create PayMongo link
    # POST /api/wallet/cash-in/{transaction_id}/verify/  - Poll cash-in
    # POST /api/wallet/cash-out/                         - Cash out
    # GET  /api/wallet/qr/                               - Wallet QR (PNG)
    # GET  /api/wallet/notifications/                    - Notifications
    # POST /api/wallet/notifications/{id}/read/          - Mark read
    # POST /api/wallet/notifications/read-all/           - Mark all read
    # GET  /api/wallet/notifications/unread-count/       - Unread count

    path('balance/', views.balance, name='balance'),
    path('send/', views.send_money, name='send'),
    path('cash-in/', views.cash_in, name='cash-in'),
    path('cash-in/<str:transaction_id>/verify/', views.verify_cash_in, name='cash-in-verify'),
    path('cash-out/', views.cash_out, name='cash-out'),
    path('qr/', views.wallet_qr, name='qr'),
    path('', include(router.urls)),
]
