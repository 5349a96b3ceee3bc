from django.contrib import admin
from .models import PointsAccount, PointsTransaction


@admin.register(PointsAccount)
class PointsAccountAdmin(admin.ModelAdmin):
    list_display = ['user', 'points_balance', 'lifetime_earned', 'lifetime_redeemed', 'updated_at']
    list_filter = ['created_at', 'updated_at']
    search_fields = ['user__username', 'user__email', 'user__phone']
    readonly_fields = ['points_balance', 'lifetime_earned', 'lifetime_redeemed', 'created_at', 'updated_at']

    def has_add_permission(self, request):
        return False  # Points accounts are created automatically


@admin.register(PointsTransaction)
class PointsTransactionAdmin(admin.ModelAdmin):
    list_display = ['user', 'transaction_type', 'points_change', 'balance_after', 'order_id', 'created_at']
    list_filter = ['transaction_type', 'created_at']
    search_fields = ['user__username', 'user__email', 'order_id', 'reason']
    readonly_fields = ['created_at']

    def has_add_permission(self, request):
        return False  # Transactions are created programmatically

    def has_change_permission(self, request, obj=None):
        return False  # Transactions should not be modified

    def has_delete_permission(self, request, obj=None):
        return False
