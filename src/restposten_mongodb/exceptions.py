"""
Errors raised by this layer itself.
Driver errors (pymongo.errors.*) are never wrapped and reach callers unchanged.
"""


class DatabaseError(Exception):
    """Base class for errors raised by restposten-mongodb."""

    def __init__(self, e=None, message=None):
        if message:
            super().__init__(message)
        elif e:
            super().__init__(str(e))
        else:
            super().__init__("Database error")
        self.error = e
        self.message = message


class MissingDatabaseName(DatabaseError):
    """Raised when connect() can not resolve a database name."""

    def __init__(self, message=None):
        super().__init__(message=message or "A database name is required to connect")


class ConnectionClosed(DatabaseError):
    """Raised when a database handle is used after a forced close."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(message=f"Database '{name}' has been closed and can not be reused")
