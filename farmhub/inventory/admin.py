from django.contrib import admin
from .models import Input, Product, Harvest


@admin.register(Input)
class InputAdmin(admin.ModelAdmin):
    list_display = ['name', 'type', 'supplier', 'quantity_in_stock', 'unit', 'cost_per_unit', 'reorder_level', 'expiry_date']
    list_filter = ['type', 'expiry_date']
    search_fields = ['name', 'supplier']
    ordering = ['name']


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ['name', 'type', 'price_per_unit', 'unit', 'quantity_available', 'status', 'expiry_date']
    list_filter = ['status', 'type']
    search_fields = ['name', 'description']
    ordering = ['name']


@admin.register(Harvest)
class HarvestAdmin(admin.ModelAdmin):
    list_display = ['harvest_date', 'crop', 'field', 'quantity', 'unit', 'quality', 'storage_location', 'harvested_by']
    list_filter = ['quality', 'harvest_date']
    search_fields = ['crop__name', 'field__name', 'storage_location']
    ordering = ['-harvest_date']
    readonly_fields = ['created_at']
