"""
Orders views package - viewset plus action mixins.
"""

from .order_viewset import OrderViewSet

__all__ = [
    'OrderViewSet',
]
