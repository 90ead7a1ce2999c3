"""
Core backend base components.

Foundational viewsets, serializers and mixins shared by the apps.
"""

from .mixins import OptimizedQuerysetMixin
from .serializers import BaseModelSerializer, TimestampedSerializer
from .viewsets import BaseViewSet

__all__ = [
    'BaseViewSet',
    'BaseModelSerializer',
    'TimestampedSerializer',
    'OptimizedQuerysetMixin',
]
