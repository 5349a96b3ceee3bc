from django.contrib import admin
from .models import Order


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = [
        'order_number', 'user', 'email', 'status', 'total_amount',
        'discount_code', 'discount_amount', 'points_earned', 'created_at', 'paid_at'
    ]
    list_filter = ['status', 'is_business', 'discount_rejection', 'created_at']
    search_fields = ['order_number', 'email', 'user__username', 'user__email']
    readonly_fields = ['points_earned', 'discount_rejection', 'paid_at', 'created_at']
    raw_id_fields = ['user', 'discount_code']
