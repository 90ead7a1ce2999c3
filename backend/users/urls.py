from django.urls import path

from .views import (
    CookieTokenRefreshView,
    CurrentUserView,
    LoginView,
    LogoutView,
)

app_name = "users"

urlpatterns = [
    # Auth
    path("login/", LoginView.as_view(), name="login"),
    path("token/refresh/", CookieTokenRefreshView.as_view(), name="token-refresh"),
    path("logout/", LogoutView.as_view(), name="logout"),
    path("me/", CurrentUserView.as_view(), name="me"),
]
