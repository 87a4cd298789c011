from django.urls import path
from farmhub.core.views import entity_list_create, entity_detail

urlpatterns = [
    path('inputs/', entity_list_create, {'kind': 'inputs'}, name='input-list-create'),
    path('inputs/<uuid:pk>/', entity_detail, {'kind': 'inputs'}, name='input-detail'),
    path('products/', entity_list_create, {'kind': 'products'}, name='product-list-create'),
    path('products/<uuid:pk>/', entity_detail, {'kind': 'products'}, name='product-detail'),
    path('harvests/', entity_list_create, {'kind': 'harvests'}, name='harvest-list-create'),
    path('harvests/<uuid:pk>/', entity_detail, {'kind': 'harvests'}, name='harvest-detail'),
]
