from django.urls import path
from farmhub.core.views import entity_list_create, entity_detail
from .views import marketplace_order

urlpatterns = [
    path('sales/', entity_list_create, {'kind': 'sales'}, name='sale-list-create'),
    path('sales/<uuid:pk>/', entity_detail, {'kind': 'sales'}, name='sale-detail'),

    # Marketplace
    path('marketplace/orders/', marketplace_order, name='marketplace-order'),
]
