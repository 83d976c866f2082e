"""
URL configuration for Coupix.

API endpoints live under /api/, HTML pages are served from the frontend
directory through config.views.serve_frontend.
"""
from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework_simplejwt.views import TokenRefreshView

from config.views import serve_frontend, health_check

urlpatterns = [
    # Health check (for Render)
    path('api/health/', health_check, name='health-check'),

    # Admin
    path('admin/', admin.site.urls),

    # API Documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='api-schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='api-schema'), name='api-docs'),

    # Authentication
    path('api/auth/', include('apps.accounts.urls')),
    path('api/auth/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),

    # API endpoints
    path('api/coupons/', include('apps.coupons.urls')),

    # Frontend pages
    path('', serve_frontend, {'page': 'coupons', 'require_auth': True}, name='home'),
    path('login', serve_frontend, {'page': 'login', 'guest_only': True}, name='login'),
    path('register', serve_frontend, {'page': 'register', 'guest_only': True}, name='register'),
    path('create', serve_frontend, {'page': 'coupon_form', 'require_auth': True}, name='coupon-create'),
    path('edit/<uuid:coupon_id>', serve_frontend, {'page': 'coupon_form', 'require_auth': True}, name='coupon-edit'),
    path('profile', serve_frontend, {'page': 'profile', 'require_auth': True}, name='profile'),
]

# Media files (development only)
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)


# Custom error handlers
handler404 = 'config.views.error_404'
handler500 = 'config.views.error_500'
