from django.urls import path

from .views import ProductViewSet

app_name = "products"

# Explicit ViewSet mapping, no router
urlpatterns = [
    path("", ProductViewSet.as_view({'get': 'list', 'post': 'create'}), name="product-list"),
    path("<int:pk>/", ProductViewSet.as_view({
        'get': 'retrieve',
        'put': 'update',
        'patch': 'partial_update',
        'delete': 'destroy'
    }), name="product-detail"),
    path("<int:pk>/toggle/", ProductViewSet.as_view({'patch': 'toggle'}), name="product-toggle"),
]
