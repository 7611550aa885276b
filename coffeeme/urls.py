from django.contrib import admin
from django.urls import path, include
from drf_yasg.views import get_schema_view
from drf_yasg import openapi
from rest_framework import permissions
from django.conf.urls.static import static
from django.conf import settings

from . import views

# Setup Swagger schema view
schema_view = get_schema_view(
    openapi.Info(
        title='API Documentation COFFEE ME',
        default_version='v1',
        description="Items, tables, orders and shop settings for the Coffee Me POS",
    ),
    public=True,
    permission_classes=(permissions.AllowAny,),
)

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/health/', views.health_check, name='health-check'),
    path('api/items/', include('inventory.urls')),
    path('api/', include('orders.urls')),
    path('api/settings/', include('store.urls')),
    path('api/', include('dashboard.urls')),
    path('swagger/', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
]

if settings.DEBUG:
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
