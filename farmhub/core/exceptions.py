class BackendError(Exception):
    """The row storage or auth collaborator failed or rejected a call."""

    def __init__(self, message, status=None):
        super().__init__(message)
        self.message = message
        self.status = status


class AuthenticationError(BackendError):
    """Credentials or token were rejected."""


class RowNotFound(BackendError):
    """No row with the requested id exists."""


class TransactionUnsupported(BackendError):
    """The backend cannot group several writes into one transaction."""


class InvalidReference(BackendError):
    """A foreign key column names a row that does not exist."""

    def __init__(self, message, column, status=400):
        super().__init__(message, status=status)
        self.column = column
