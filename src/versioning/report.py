"""Build the update record that gets persisted for a package."""

from .models import ComposerLock, UpdateRecord
from .resolver import is_branch_reference


def build_update_record(package: str, installed: str, available: str, lock: ComposerLock) -> UpdateRecord:
    """Return the record for a discovered update.

    dev-master installs are stored with their locked revision hash so the
    history never contains the branch name.

    Raises:
        PackageNotFoundError: if a dev-master package is absent from the lock.
    """
    if is_branch_reference(installed):
        installed = lock.find_package(package).source_reference or ""
    return UpdateRecord(package=package, installed=installed, available=available)
