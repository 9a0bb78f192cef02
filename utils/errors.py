"""
Exception types shared by the service layer and the blueprints.

ValidationError  -- the caller supplied bad input; shown to the user, never retried.
NotFoundError    -- a referenced row does not exist; routes turn it into a 404.
DataAccessError  -- the database rejected or failed a write; wraps the SQLAlchemy
                    error with a message naming the operation that failed.
"""


class ValidationError(ValueError):
    """Input failed validation before reaching the database."""


class NotFoundError(LookupError):
    """A referenced record does not exist."""

    def __init__(self, model_name, record_id):
        self.model_name = model_name
        self.record_id = record_id
        super().__init__(f'{model_name} {record_id} not found')


class DataAccessError(RuntimeError):
    """A database operation failed."""
