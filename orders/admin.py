from django.contrib import admin

from .models import Order, OrderLine, Table


@admin.register(Table)
class TableAdmin(admin.ModelAdmin):
    list_display = ('number', 'seats', 'status', 'current_order')
    list_filter = ('status',)


class OrderLineInline(admin.TabularInline):
    model = OrderLine
    extra = 0
    readonly_fields = ('item', 'quantity', 'price', 'cost_price')


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ('id', 'order_type', 'status', 'payment_method', 'table_number', 'total', 'created_at')
    list_filter = ('status', 'order_type', 'payment_method')
    search_fields = ('customer_name', 'customer_phone', 'staff_name')
    inlines = [OrderLineInline]
