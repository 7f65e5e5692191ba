# apps/core/urls.py

from django.urls import path
from . import views

app_name = 'core'

urlpatterns = [
    # === AUTENTICAÇÃO ===
    path('signup/', views.signup_view, name='signup'),
    path('login/', views.login_view, name='login'),
    path('logout/', views.logout_view, name='logout'),

    # === VERIFICAÇÃO DE EMAIL ===
    path('verify/<str:verification_token>/', views.verify_email_view, name='verify'),
    path('user/verify/', views.resend_verification_view, name='resend_verification'),

    # === PERFIL DO USUÁRIO ===
    path('current-user/', views.current_user_view, name='current_user'),
    path('current-user/update/', views.update_user_view, name='update_user'),

    # === IMAGENS DE FUNDO ===
    path('background/', views.background_images_view, name='backgrounds'),
]
