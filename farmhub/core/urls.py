from django.urls import path
from .views import (
    login, logout, refresh_token, user_me, navigation,
    app_view, health,
)

urlpatterns = [
    # Auth endpoints
    path('auth/login/', login, name='login'),
    path('auth/logout/', logout, name='logout'),
    path('auth/refresh/', refresh_token, name='token_refresh'),
    path('auth/me/', user_me, name='user-me'),

    # Navigation and composed screens
    path('navigation/', navigation, name='navigation'),
    path('views/<str:view_id>/', app_view, name='app-view'),

    path('health/', health, name='health'),
]
