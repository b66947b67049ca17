from django.contrib import admin
from django.urls import path, include
from core.views import HealthCheckView

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/auth/', include('authx.urls')),
    path('api/', include('teams.urls')),
    path("api/health/", HealthCheckView.as_view(), name="health-check"),
]
