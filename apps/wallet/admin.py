from django.contrib import admin
from .models import Transaction, Notification


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    list_display = ['transaction_id', 'user', 'type', 'status', 'amount', 'balance_after', 'created_at']
    list_filter = ['type', 'status', 'created_at']
    search_fields = ['transaction_id', 'reference', 'payment_id', 'user__username', 'user__email']
    raw_id_fields = ['user', 'counterparty']
    readonly_fields = [
        'id', 'transaction_id', 'balance_after', 'created_at', 'updated_at', 'completed_at'
    ]
    date_hierarchy = 'created_at'

    # Balances are derived from the ledger; entries are not edited by hand
    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ['title', 'user', 'type', 'is_read', 'created_at']
    list_filter = ['type', 'is_read']
    search_fields = ['title', 'user__username']
    raw_id_fields = ['user', 'transaction']
