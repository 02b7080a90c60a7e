from django.conf import settings
from django.contrib import admin
from django.urls import path, include, re_path
from django.views.static import serve
from drf_spectacular.views import SpectacularAPIView
from invoices import health


def serve_upload(request, path):
    # UPLOAD_ROOT is resolved per request.
    return serve(request, path, document_root=settings.UPLOAD_ROOT)


urlpatterns = [
    path("admin/", admin.site.urls),
    path("health/", health.health_check, name="health_check"),
    path("api/schema/", SpectacularAPIView.as_view(), name="api_schema"),
    path("api/v1/", include("invoices.api.urls")),
    path("", include("invoices.urls", namespace="invoices")),
]

if settings.SERVE_UPLOADS:
    urlpatterns += [
        re_path(r"^%s(?P<path>.*)$" % settings.UPLOAD_URL.lstrip("/"), serve_upload, name="upload"),
    ]
