"""Exception types raised by birdrec."""


class BirdrecError(Exception):
    """Base class for birdrec errors."""


class CaptureError(BirdrecError):
    """The audio backend failed to prepare or start capture."""


class SessionAlreadyActive(BirdrecError):
    """start() was called while a recording session is live."""


class PermissionAlreadyRequested(BirdrecError):
    """The permission gate only issues one request per launch."""
