from django.contrib import admin
from .models import Discount


@admin.register(Discount)
class DiscountAdmin(admin.ModelAdmin):
    list_display = ['passenger_type', 'discount_percentage', 'is_active', 'updated_at']
    list_filter = ['is_active']
    list_editable = ['discount_percentage', 'is_active']
    search_fields = ['passenger_type', 'description']
    readonly_fields = ['created_at', 'updated_at']
