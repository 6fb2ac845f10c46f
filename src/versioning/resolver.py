"""Pick the best available upgrade for an installed version.

Two paths exist:

- ``dev-master`` installs have no version number; the locked revision hash is
  compared with the hash of the branch tip reported by the registry.
- Everything else goes through a stability-aware scan over the candidate
  versions, newest first, honoring the manifest's minimum-stability and
  prefer-stable settings.

Both return ``False`` when there is nothing newer.
"""

import logging
from typing import Optional

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled
from .models import CandidateSet, ComposerLock, ManifestPolicy, StabilityLevel, UpdateResult
from .parser import classify_stability, compare_versions, pure_numeric_prefix
from .stability import is_stable_enough, parse_stability

logger = logging.getLogger(__name__)


def is_branch_reference(version: str) -> bool:
    """True when ``version`` is the moving branch sentinel (dev-master)."""
    return version.strip().lower() == Constants.BRANCH_REFERENCE


def resolve_update(
    installed: str,
    candidates: CandidateSet,
    policy: ManifestPolicy,
    lock: Optional[ComposerLock] = None,
    package: Optional[str] = None,
) -> UpdateResult:
    """Check if an available version is better than the installed one.

    Args:
        installed: Version recorded in the lock (or "dev-master").
        candidates: Registry versions in publication order, oldest first.
        policy: Minimum stability and prefer-stable flag from the manifest.
        lock: Lock data, required only for dev-master installs.
        package: Package name used for the lock lookup of dev-master installs.

    Returns:
        False if no update is available, otherwise the best version. Unstable
        results carry their stability as a suffix ("2.2.0-beta" becomes
        "2.2.0-beta-beta"); dev-master installs return the new revision hash.

    Raises:
        UnknownStabilityError: if the policy's minimum stability is unknown.
    """
    current_version = installed.lower()

    if len(candidates) < 1:
        return False

    minimum = parse_stability(policy.minimum_stability)

    if is_branch_reference(current_version):
        return resolve_branch_update(candidates, lock, package)

    current_stability = classify_stability(current_version)
    best_version = current_version
    best_stability = current_stability

    # Registries publish oldest first; scanning newest first lets the most
    # recent of otherwise-equal candidates win, since only strict improvements
    # replace the current best.
    for version in reversed(list(candidates)):
        version_stability = classify_stability(version)

        if not is_stable_enough(minimum, version_stability):
            continue

        if policy.prefer_stable:
            if compare_versions(best_version, version) != -1:
                continue
        else:
            order = compare_versions(pure_numeric_prefix(best_version), pure_numeric_prefix(version))
            if order == 1:
                continue
            # Same numeric family: rc1 vs rc2 needs the full string compare
            if order == 0 and best_stability == version_stability:
                if compare_versions(best_version, version) != -1:
                    continue

        best_version = version
        best_stability = version_stability

    if best_version == current_version and best_stability == current_stability:
        return False

    if is_debug_enabled(logger):
        logger.debug(
            "Update candidate selected",
            extra=extra_context(
                event="decision",
                component="resolver",
                action="resolve_update",
                package=package,
                installed=current_version,
                selected=best_version,
                stability=best_stability.value,
            )
        )

    if best_stability == StabilityLevel.STABLE:
        return best_version
    return f"{best_version}-{best_stability.value}"


def resolve_branch_update(
    candidates: CandidateSet,
    lock: Optional[ComposerLock],
    package: Optional[str] = None,
) -> UpdateResult:
    """Return the branch tip hash if it differs from the locked hash.

    The package name defaults to the name carried by the dev-master entry.

    Raises:
        PackageNotFoundError: if the package is absent from the lock.
        ValueError: if no lock data was supplied.
    """
    dev_master = candidates.get(Constants.BRANCH_REFERENCE)
    if dev_master is None:
        if is_debug_enabled(logger):
            logger.debug(
                "No dev-master entry in candidates",
                extra=extra_context(
                    event="decision",
                    component="resolver",
                    action="resolve_branch_update",
                    outcome="no_branch_entry",
                    package=package,
                )
            )
        return False

    if lock is None:
        raise ValueError("Lock data is required to resolve dev-master installs")

    local_hash = lock.find_package(package or dev_master.name).source_reference
    remote_hash = dev_master.source_reference

    if local_hash != remote_hash:
        return remote_hash or False
    return False
