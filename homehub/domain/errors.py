from __future__ import annotations


class HomeHubError(Exception):
    """Base class for errors raised by the service layer."""


class NotFoundError(HomeHubError):
    def __init__(self, kind: str, key: object) -> None:
        super().__init__(f"{kind} {key!r} not found")
        self.kind = kind
        self.key = key


class ValidationError(HomeHubError):
    pass


class HouseholdError(HomeHubError):
    pass
