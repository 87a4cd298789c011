from django.contrib import admin
from .models import Field, Crop


@admin.register(Field)
class FieldAdmin(admin.ModelAdmin):
    list_display = ['name', 'size', 'location', 'soil_type', 'irrigation_system', 'status', 'created_at']
    list_filter = ['status', 'soil_type', 'created_at']
    search_fields = ['name', 'location']
    ordering = ['name']


@admin.register(Crop)
class CropAdmin(admin.ModelAdmin):
    list_display = ['name', 'variety', 'field', 'area', 'planting_date', 'expected_harvest_date', 'status']
    list_filter = ['status', 'planting_date']
    search_fields = ['name', 'variety', 'field__name']
    ordering = ['-planting_date']
