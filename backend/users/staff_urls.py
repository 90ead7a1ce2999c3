from django.urls import path

from .views import UserViewSet

app_name = "staff"

urlpatterns = [
    path("", UserViewSet.as_view({'get': 'list', 'post': 'create'}), name="user-list"),
    path("<int:pk>/", UserViewSet.as_view({
        'get': 'retrieve',
        'put': 'update',
        'patch': 'partial_update',
        'delete': 'destroy'
    }), name="user-detail"),
    path("<int:pk>/reset-password/", UserViewSet.as_view({'post': 'reset_password'}), name="user-reset-password"),
]
