from django.urls import path
from farmhub.core.views import entity_list_create, entity_detail

urlpatterns = [
    path('customers/', entity_list_create, {'kind': 'customers'}, name='customer-list-create'),
    path('customers/<uuid:pk>/', entity_detail, {'kind': 'customers'}, name='customer-detail'),
]
