from django.contrib import admin
from .models import InspectionRecord


@admin.register(InspectionRecord)
class InspectionRecordAdmin(admin.ModelAdmin):
    list_display = ['bus_number', 'inspector', 'conductor_name', 'passenger_count', 'status', 'inspected_at']
    list_filter = ['status', 'inspected_at']
    search_fields = ['bus_number', 'conductor_name', 'inspector__username', 'notes']
    raw_id_fields = ['inspector', 'route', 'conductor']
    readonly_fields = ['inspected_at']
    date_hierarchy = 'inspected_at'
