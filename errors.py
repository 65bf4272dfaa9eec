"""Error taxonomy shared by the services and mapped to HTTP responses in app.py."""


class KerpicError(Exception):
    """Base error for the project."""

    status_code = 500


class PermissionDenied(KerpicError):
    """Path tried to escape the photos directory."""

    status_code = 403


class NotFound(KerpicError):
    status_code = 404


class InvalidFolder(KerpicError):
    """Path exists but is not a directory."""

    status_code = 404


class StorageError(KerpicError):
    """Read, write or move failure on disk."""

    status_code = 500


class DecodeError(KerpicError):
    status_code = 500
