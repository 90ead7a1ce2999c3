class OrderNotFoundError(Exception):
    """The order does not exist or belongs to another tenant."""
    pass


class ProductNotFoundError(ValueError):
    """An ordered product is unknown to the tenant's catalog."""
    pass


class InvalidOrderStatusError(ValueError):
    pass


class InvalidStatusTransitionError(ValueError):
    """Raised only when strict transition enforcement is enabled."""
    pass
