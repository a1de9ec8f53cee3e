"""
Error taxonomy for the data-access layer
"""


class DataAccessError(Exception):
    """Base class for every error raised by the model classes"""


class RecordNotFoundError(DataAccessError):
    """No row matched the requested id or email"""

    def __init__(self, message: str = "record not found"):
        super().__init__(message)


class EditConflictError(DataAccessError):
    """Update affected zero rows: the version is stale or the row is gone"""

    def __init__(self, message: str = "unable to update the record due to an edit conflict, please try again"):
        super().__init__(message)


class DuplicateEmailError(DataAccessError):
    """A user with this email address already exists"""

    def __init__(self, message: str = "a user with this email address already exists"):
        super().__init__(message)


class DeadlineExceededError(DataAccessError):
    """Operation did not finish within the query timeout"""

    def __init__(self, message: str = "database operation exceeded its deadline"):
        super().__init__(message)


class PersistenceError(DataAccessError):
    """Any other database failure; the original exception is chained"""
