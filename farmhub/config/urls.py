"""
URL configuration for the farmhub project.

Every app mounts its endpoints under /api/v1/.
"""
from django.contrib import admin
from django.urls import path, include

admin.site.site_header = "Farm Management Admin Panel"
admin.site.site_title = "Farm Management Admin Portal"
admin.site.index_title = "Welcome to the Farm Management Admin Portal"

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/v1/', include('farmhub.core.urls')),
    path('api/v1/', include('farmhub.fields.urls')),
    path('api/v1/', include('farmhub.livestock.urls')),
    path('api/v1/', include('farmhub.inventory.urls')),
    path('api/v1/', include('farmhub.parties.urls')),
    path('api/v1/', include('farmhub.tasks.urls')),
    path('api/v1/', include('farmhub.sales.urls')),
]
