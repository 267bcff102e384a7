from django.contrib import admin
from .models import BusRoute


@admin.register(BusRoute)
class BusRouteAdmin(admin.ModelAdmin):
    list_display = ['bus_number', 'origin', 'destination', 'conductor', 'active', 'started_at', 'ended_at']
    list_filter = ['active', 'started_at']
    search_fields = ['bus_number', 'origin', 'destination', 'conductor__username']
    raw_id_fields = ['conductor']
    readonly_fields = ['started_at', 'updated_at']
    date_hierarchy = 'started_at'
