from django.contrib import admin
from .models import Movement, MovementPayment
from .services import is_overdue


class MovementPaymentInline(admin.TabularInline):
    model = MovementPayment
    extra = 0
    readonly_fields = ['amount', 'payment_method', 'payment_reference', 'notes', 'recorded_by', 'created_at']
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False  # Payments go through PaymentTracker


@admin.register(Movement)
class MovementAdmin(admin.ModelAdmin):
    list_display = [
        'movement_number', 'movement_type', 'customer', 'counterparty_name',
        'total_amount', 'amount_paid', 'status', 'overdue', 'due_date', 'created_at'
    ]
    list_filter = ['movement_type', 'status', 'due_date', 'created_at']
    search_fields = ['movement_number', 'counterparty_name', 'customer__username', 'customer__email']
    readonly_fields = ['movement_number', 'amount_paid', 'status', 'created_by', 'created_at', 'updated_at']
    raw_id_fields = ['customer']
    inlines = [MovementPaymentInline]

    @admin.display(boolean=True)
    def overdue(self, obj):
        return is_overdue(obj)


@admin.register(MovementPayment)
class MovementPaymentAdmin(admin.ModelAdmin):
    list_display = ['movement', 'amount', 'payment_method', 'payment_reference', 'recorded_by', 'created_at']
    list_filter = ['payment_method', 'created_at']
    search_fields = ['movement__movement_number', 'payment_reference']
    readonly_fields = ['movement', 'amount', 'payment_method', 'payment_reference', 'notes', 'recorded_by', 'created_at']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False  # Payments are immutable

    def has_delete_permission(self, request, obj=None):
        return False
