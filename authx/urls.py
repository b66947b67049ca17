# authx/urls.py
from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView, TokenVerifyView

from .views import LoginView, MeView

urlpatterns = [
    path("login/", LoginView.as_view(), name="admin-login"),
    path("me/", MeView.as_view(), name="admin-me"),
    path("jwt/refresh/", TokenRefreshView.as_view(), name="jwt-refresh"),
    path("jwt/verify/", TokenVerifyView.as_view(), name="jwt-verify"),
]
