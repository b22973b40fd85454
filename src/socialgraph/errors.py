"""Error taxonomy shared by the stores, the query engine and the service."""

from __future__ import annotations


class SocialGraphError(Exception):
    """Base class for every error raised by the graph core."""


class ValidationError(SocialGraphError):
    """A required field is blank or a uniqueness constraint was violated.

    Raised before any mutation takes place.
    """


class NotFoundError(SocialGraphError):
    """A strict lookup referenced a person that does not exist."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Person not found: {name!r}")
        self.name = name


class BackendError(SocialGraphError):
    """The storage backend failed (connectivity, driver or statement error)."""
