from __future__ import annotations


class CloneError(Exception):
    """Base class for errors that end a clone run."""


class ListingError(CloneError):
    """Raised when services, controllers or namespaces cannot be listed."""


class ReplicationAborted(CloneError):
    """Raised when the failure policy stops the run after a failed create."""

    def __init__(self, message: str, *, rolled_back: bool = False) -> None:
        super().__init__(message)
        self.rolled_back = rolled_back


__all__ = ["CloneError", "ListingError", "ReplicationAborted"]
