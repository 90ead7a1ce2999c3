class TableNotFoundError(Exception):
    """No table with this number exists for the tenant."""
    pass


class TableAlreadyExistsError(ValueError):
    pass


class InvalidTableStatusError(ValueError):
    pass


class TableInUseError(ValueError):
    """The table still has orders that are neither served nor cancelled."""
    pass
