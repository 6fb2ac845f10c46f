"""Exceptions raised while checking for dependency updates."""

from typing import Optional


class UpdateCheckError(Exception):
    """Base class for update checker failures."""


class UnknownStabilityError(UpdateCheckError, ValueError):
    """A stability label outside dev/alpha/beta/rc/stable was supplied."""

    def __init__(self, stability: str):
        super().__init__(f"Unknown stability: {stability}")
        self.stability = stability


class PackageNotFoundError(UpdateCheckError, LookupError):
    """A package was looked up in the lock data but is not locked."""

    def __init__(self, package: str):
        super().__init__(f"Cannot locate local package {package}")
        self.package = package


class RegistryClientError(UpdateCheckError):
    """The registry could not provide version information for a package."""

    def __init__(self, package: str, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.package = package
        self.status_code = status_code
