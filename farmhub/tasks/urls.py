from django.urls import path
from farmhub.core.views import entity_list_create, entity_detail

urlpatterns = [
    path('tasks/', entity_list_create, {'kind': 'tasks'}, name='task-list-create'),
    path('tasks/<uuid:pk>/', entity_detail, {'kind': 'tasks'}, name='task-detail'),
]
