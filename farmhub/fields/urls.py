from django.urls import path
from farmhub.core.views import entity_list_create, entity_detail

urlpatterns = [
    path('fields/', entity_list_create, {'kind': 'fields'}, name='field-list-create'),
    path('fields/<uuid:pk>/', entity_detail, {'kind': 'fields'}, name='field-detail'),
    path('crops/', entity_list_create, {'kind': 'crops'}, name='crop-list-create'),
    path('crops/<uuid:pk>/', entity_detail, {'kind': 'crops'}, name='crop-detail'),
]
