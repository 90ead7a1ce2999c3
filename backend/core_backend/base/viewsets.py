from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, viewsets

from .mixins import OptimizedQuerysetMixin


class BaseViewSet(OptimizedQuerysetMixin, viewsets.ModelViewSet):
    """
    Base ViewSet that provides standard configuration for all ModelViewSets.

    Features:
    - Query optimization from serializer Meta
    - django-filter and ordering backends
    - Tenant-scoped queryset rebuilt on every request

    POS screens load whole lists at once, so there is no pagination.
    """

    pagination_class = None

    filter_backends = [
        DjangoFilterBackend,
        filters.OrderingFilter,
    ]

    ordering = ['-id']

    def get_queryset(self):
        """
        Re-evaluate the queryset at request time so tenant context applies.

        The class-level queryset is built at import time, before any tenant
        is set, so TenantManager would have returned an empty queryset.
        """
        if getattr(self, 'queryset', None) is not None:
            model = self.queryset.model
            original_queryset = self.queryset
            self.queryset = model.objects.all()
            try:
                return super().get_queryset()
            finally:
                self.queryset = original_queryset
        return super().get_queryset()

