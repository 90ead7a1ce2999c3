from django.urls import path

from .views import OrderViewSet

app_name = "orders"

urlpatterns = [
    path("", OrderViewSet.as_view({'get': 'list', 'post': 'create'}), name="order-list"),
    path("<int:pk>/", OrderViewSet.as_view({'get': 'retrieve'}), name="order-detail"),
    path(
        "<int:pk>/status/",
        OrderViewSet.as_view({'put': 'update_status', 'patch': 'update_status'}),
        name="order-status",
    ),
]
