import os

import django

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "core_backend.settings")

# Setup Django explicitly before any models are imported
django.setup()

from channels.routing import ProtocolTypeRouter, URLRouter
from channels.security.websocket import AllowedHostsOriginValidator
from django.core.asgi import get_asgi_application

import notifications.routing
from core_backend.jwt_websocket_middleware import JWTAuthMiddleware
from tenant.websocket_middleware import TenantWebSocketMiddleware

django_asgi_app = get_asgi_application()

application = ProtocolTypeRouter(
    {
        "http": django_asgi_app,
        "websocket": AllowedHostsOriginValidator(
            JWTAuthMiddleware(
                TenantWebSocketMiddleware(
                    URLRouter(notifications.routing.websocket_urlpatterns)
                )
            )
        ),
    }
)
