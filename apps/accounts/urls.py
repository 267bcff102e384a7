from django.urls import path
from . import views

app_name = 'users'

urlpatterns = [
    # Authentication
    path('register/', views.register, name='register'),
    path('login/', views.login, name='login'),
    path('logout/', views.logout, name='logout'),
    path('role-redirect/', views.role_redirect, name='role-redirect'),

    # User profile
    path('me/', views.current_user, name='current-user'),
    path('change-password/', views.change_password, name='change-password'),

    # Password reset
    path('password-reset/', views.request_password_reset, name='password-reset'),
    path('password-reset/confirm/', views.confirm_password_reset, name='password-reset-confirm'),

    # Wallet PIN
    path('pin/', views.pin, name='pin'),
    path('pin/verify/', views.verify_pin, name='pin-verify'),
    path('pin/reset/', views.reset_pin, name='pin-reset'),
]
