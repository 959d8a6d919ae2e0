from __future__ import annotations


class CollectionFailure(Exception):
    """Reading host information failed; the previous snapshot stays cached."""


class ProbeUnreachable(Exception):
    """The gateway could not be reached at the transport level."""


class ProbeRejected(Exception):
    """The gateway answered, but not with a usable success response."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
