from django.contrib import admin
from .models import PaymentRequest, Trip


@admin.register(PaymentRequest)
class PaymentRequestAdmin(admin.ModelAdmin):
    list_display = ['id', 'conductor', 'passenger', 'fare', 'status', 'created_at', 'expires_at']
    list_filter = ['status', 'passenger_type', 'created_at']
    search_fields = ['conductor__username', 'passenger__username', 'origin', 'destination']
    raw_id_fields = ['conductor', 'passenger', 'route', 'transaction']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(Trip)
class TripAdmin(admin.ModelAdmin):
    list_display = [
        'transaction_number', 'passenger_name', 'conductor', 'fare',
        'payment_method', 'route', 'created_at'
    ]
    list_filter = ['payment_method', 'passenger_type', 'created_at']
    search_fields = ['transaction_number', 'passenger_name', 'conductor__username', 'route__bus_number']
    raw_id_fields = ['conductor', 'passenger', 'route', 'payment_request', 'transaction']
    readonly_fields = ['transaction_number', 'created_at']
    date_hierarchy = 'created_at'
