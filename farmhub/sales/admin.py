from django.contrib import admin
from .models import Sale


@admin.register(Sale)
class SaleAdmin(admin.ModelAdmin):
    list_display = ['sale_date', 'product', 'customer_name', 'quantity', 'total_amount', 'payment_method', 'payment_status', 'delivery_status']
    list_filter = ['payment_method', 'payment_status', 'delivery_status', 'sale_date']
    search_fields = ['customer_name', 'customer_phone', 'product__name']
    ordering = ['-sale_date']
    readonly_fields = ['created_at']
