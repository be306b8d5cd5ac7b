# backend/repositories/errors.py


class UserStoreError(Exception):
    """Base class for every failure raised by a user store."""

    def __init__(self, message: str, username: str = None):
        super().__init__(message)
        self.username = username


class DirectoryReadError(UserStoreError):
    """The data directory could not be listed."""


class NotFoundError(UserStoreError):
    """No record exists for the requested username."""


class ReadError(UserStoreError):
    """The record exists but the file could not be read."""


class ParseError(UserStoreError):
    """The record file is not valid JSON."""
