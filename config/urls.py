# config/urls.py

from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

from apps.core.views import health_check

urlpatterns = [
    # Admin
    path('admin/', admin.site.urls),

    # API consumida pelo frontend
    path('taskPro/', include('apps.core.urls')),
    path('taskPro/', include('apps.board.urls')),

    # Monitoramento
    path('health/', health_check, name='health'),
]

# Servir avatares em desenvolvimento
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)

# Erros fora das views também respondem em JSON
handler404 = 'apps.core.views.not_found_view'
handler500 = 'apps.core.views.server_error_view'

# Customizar títulos do admin
admin.site.site_header = 'TaskPro Admin'
admin.site.site_title = 'TaskPro'
admin.site.index_title = 'Administração do Sistema'
