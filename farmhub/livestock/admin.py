from django.contrib import admin
from .models import Livestock


@admin.register(Livestock)
class LivestockAdmin(admin.ModelAdmin):
    list_display = ['tag', 'type', 'breed', 'gender', 'weight', 'health_status', 'reproduction_status', 'created_at']
    list_filter = ['type', 'gender', 'health_status', 'reproduction_status']
    search_fields = ['tag', 'breed']
    ordering = ['tag']
