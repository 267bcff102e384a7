from django.contrib import admin
from .models import CashRemittance, RemittanceStatus
from .services import verify_remittance


@admin.register(CashRemittance)
class CashRemittanceAdmin(admin.ModelAdmin):
    list_display = ['bus_number', 'conductor', 'amount', 'status', 'submitted_at', 'verified_at', 'verified_by']
    list_filter = ['status', 'submitted_at']
    search_fields = ['bus_number', 'conductor__username', 'notes']
    raw_id_fields = ['route', 'conductor', 'verified_by']
    readonly_fields = ['submitted_at', 'verified_at', 'verified_by']
    date_hierarchy = 'submitted_at'

    actions = ['mark_remitted']

    @admin.action(description='Verify selected remittances')
    def mark_remitted(self, request, queryset):
        """Verify pending remittances, skipping ones already verified."""
        count = 0
        for remittance in queryset.filter(status=RemittanceStatus.PENDING):
            verify_remittance(remittance_id=remittance.id, staff_user=request.user)
            count += 1
        self.message_user(request, f'Verified {count} remittance(s).')

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('conductor', 'route', 'verified_by')
