from django.urls import path
from farmhub.core.views import entity_list_create, entity_detail

urlpatterns = [
    path('livestock/', entity_list_create, {'kind': 'livestock'}, name='livestock-list-create'),
    path('livestock/<uuid:pk>/', entity_detail, {'kind': 'livestock'}, name='livestock-detail'),
]
