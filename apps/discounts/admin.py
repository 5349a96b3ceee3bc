from django.contrib import admin
from .models import DiscountCode, DiscountCodeProduct, DiscountCodeUser, DiscountRedemption


class DiscountCodeProductInline(admin.TabularInline):
    model = DiscountCodeProduct
    extra = 0


class DiscountCodeUserInline(admin.TabularInline):
    model = DiscountCodeUser
    extra = 0
    raw_id_fields = ['user']


@admin.register(DiscountCode)
class DiscountCodeAdmin(admin.ModelAdmin):
    list_display = [
        'code', 'name', 'discount_type', 'discount_value', 'usage_count',
        'usage_limit', 'is_active', 'starts_at', 'expires_at'
    ]
    list_filter = ['discount_type', 'is_active', 'first_purchase_only', 'created_at']
    search_fields = ['code', 'name']
    list_editable = ['is_active']
    readonly_fields = ['usage_count', 'created_at', 'updated_at']
    inlines = [DiscountCodeProductInline, DiscountCodeUserInline]

    def has_delete_permission(self, request, obj=None):
        if obj is not None and obj.redemptions.exists():
            return False  # Disable instead; redemption history references it
        return super().has_delete_permission(request, obj)


@admin.register(DiscountRedemption)
class DiscountRedemptionAdmin(admin.ModelAdmin):
    list_display = ['discount_code', 'order_id', 'user', 'amount_applied', 'created_at']
    list_filter = ['created_at']
    search_fields = ['discount_code__code', 'order_id', 'user__username']
    readonly_fields = ['discount_code', 'order_id', 'user', 'amount_applied', 'created_at']

    def has_add_permission(self, request):
        return False  # Redemptions are created programmatically

    def has_change_permission(self, request, obj=None):
        return False  # Redemptions are immutable

    def has_delete_permission(self, request, obj=None):
        return False
