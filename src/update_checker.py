"""Runs the update check over every direct dependency of a Composer project."""

from __future__ import annotations

import logging
import os
from typing import List

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled
from registry.packagist import PackagistClient, parse_composer_json, parse_composer_lock
from storage.update_store import UpdateStore
from versioning.errors import RegistryClientError
from versioning.models import ComposerLock, ComposerManifest, UpdateRecord
from versioning.report import build_update_record
from versioning.resolver import resolve_update

logger = logging.getLogger(__name__)


def check_updates(
    manifest: ComposerManifest,
    lock: ComposerLock,
    client: PackagistClient,
    store: UpdateStore,
) -> List[UpdateRecord]:
    """Check each manifest package that is locked and store any update found.

    Registry failures for one package are logged and skipped.

    Returns:
        The records stored during this run, in manifest order.

    Raises:
        UnknownStabilityError: if the manifest policy is invalid.
        PackageNotFoundError: if a dev-master package is missing from the lock.
    """
    tracked = lock.installed_packages(manifest.packages)
    records: List[UpdateRecord] = []

    for package in manifest.packages:
        # verify that we need to check this package
        if package not in lock.packages:
            logger.debug("Skipping %s: not present in composer.lock", package)

    for dependency in tracked:
        package = dependency.name
        try:
            candidates = client.get_versions(package)
        except RegistryClientError as e:
            logger.warning("Couldn't fetch versions for %s: %s", package, e)
            continue

        current_version = dependency.installed_version
        result = resolve_update(current_version, candidates, manifest.policy, lock, package=package)
        if result is False:
            if is_debug_enabled(logger):
                logger.debug(
                    "No update",
                    extra=extra_context(
                        event="decision",
                        component="checker",
                        action="check_updates",
                        outcome="up_to_date",
                        package=package,
                    )
                )
            continue

        record = store.upsert(build_update_record(package, current_version, str(result), lock))
        logger.info("Update available for %s: %s -> %s", package, record.installed, record.available)
        records.append(record)

    logger.info("Checked %d package(s), %d update(s) found.", len(tracked), len(records))
    return records


def run_check(project_dir: str, client: PackagistClient, store: UpdateStore) -> List[UpdateRecord]:
    """Read composer.json and composer.lock from ``project_dir`` and check them."""
    manifest = parse_composer_json(os.path.join(project_dir, Constants.COMPOSER_JSON_FILE))
    lock = parse_composer_lock(os.path.join(project_dir, Constants.COMPOSER_LOCK_FILE))
    logger.info("Package list imported: %s", str(manifest.packages))
    return check_updates(manifest, lock, client, store)
