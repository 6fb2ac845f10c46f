"""Data models for version classification and update resolution."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Union

from .errors import PackageNotFoundError


class StabilityLevel(Enum):
    """Release maturity, declared least to most stable."""
    DEV = "dev"
    ALPHA = "alpha"
    BETA = "beta"
    RC = "rc"
    STABLE = "stable"


@dataclass
class VersionDetail:
    """One registry entry for a package version."""
    version: str
    name: str = ""
    source_reference: Optional[str] = None  # revision hash, set for branch references
    source_type: Optional[str] = None
    source_url: Optional[str] = None
    time: Optional[str] = None


# Ordered as published by the registry; insertion order is significant.
CandidateSet = Dict[str, VersionDetail]

# False when there is no update, otherwise the best version or revision hash.
UpdateResult = Union[str, bool]


@dataclass(frozen=True)
class ManifestPolicy:
    """Stability policy declared by the project manifest."""
    minimum_stability: Union[str, StabilityLevel] = StabilityLevel.STABLE
    prefer_stable: bool = True


@dataclass
class InstalledPackage:
    """A direct dependency and the version recorded for it in the lock."""
    name: str
    installed_version: str


@dataclass
class UpdateRecord:
    """Persisted outcome of a check: the package has a newer version available."""
    package: str
    installed: str
    available: str
    checked_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Optional[str]]:
        """Serialize for the JSON store and exports."""
        return {
            "package": self.package,
            "installed": self.installed,
            "available": self.available,
            "checked_at": self.checked_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Optional[str]]) -> "UpdateRecord":
        """Build a record from its serialized form."""
        return cls(
            package=str(data["package"]),
            installed=str(data.get("installed") or ""),
            available=str(data.get("available") or ""),
            checked_at=data.get("checked_at"),
        )


@dataclass
class ComposerManifest:
    """Parsed composer.json: the stability policy plus direct dependency names."""
    policy: ManifestPolicy = field(default_factory=ManifestPolicy)
    packages: List[str] = field(default_factory=list)


@dataclass
class LockEntry:
    """A package as recorded in composer.lock."""
    name: str
    version: str
    source_reference: Optional[str] = None


@dataclass
class ComposerLock:
    """Lock data for one run, passed to every lookup that needs it."""
    packages: Dict[str, LockEntry] = field(default_factory=dict)

    def installed_versions(self) -> Dict[str, str]:
        """Map of package name to the locked version string."""
        return {name: entry.version for name, entry in self.packages.items()}

    def installed_packages(self, names: Optional[List[str]] = None) -> List[InstalledPackage]:
        """Locked packages, restricted to ``names`` in their order when given."""
        wanted = list(self.packages) if names is None else [n for n in names if n in self.packages]
        return [InstalledPackage(name, self.packages[name].version) for name in wanted]

    def find_package(self, name: str) -> LockEntry:
        """Return the lock entry for ``name``.

        Raises:
            PackageNotFoundError: if the package is not in the lock.
        """
        entry = self.packages.get(name)
        if entry is None:
            raise PackageNotFoundError(name)
        return entry

    def source_reference(self, name: str) -> Optional[str]:
        """Locked revision hash of ``name``."""
        return self.find_package(name).source_reference
