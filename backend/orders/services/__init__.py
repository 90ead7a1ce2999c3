"""
Orders services package.

- OrderService: order lifecycle (create, advance, read helpers)
"""

from .order_service import OrderService

__all__ = [
    'OrderService',
]
