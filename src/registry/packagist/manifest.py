"""Manifest reader for Composer (composer.json)."""

from __future__ import annotations

import json
import logging
from typing import Any, List

from constants import Constants
from versioning.models import ComposerManifest, ManifestPolicy
from versioning.stability import parse_stability

logger = logging.getLogger(__name__)


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def _direct_packages(require: Any) -> List[str]:
    """Names from the require section that look like vendor/name.

    Platform requirements (php, ext-json, ...) carry no slash and are skipped,
    as are names starting with one.
    """
    if not isinstance(require, dict):
        return []
    return [name for name in require if isinstance(name, str) and name.find("/") > 0]


def parse_composer_json(manifest_path: str) -> ComposerManifest:
    """Read the stability policy and direct dependencies from composer.json.

    Defaults: minimum-stability "stable", prefer-stable true. A missing or
    malformed manifest yields an empty package list.

    Raises:
        UnknownStabilityError: if minimum-stability is not a known level.
    """
    try:
        with open(manifest_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        logger.warning("composer.json file not found: %s", e)
        return ComposerManifest()
    except IOError as e:
        logger.warning("Failed to read composer.json file: %s", e)
        return ComposerManifest()
    except ValueError as e:
        logger.warning("Failed to parse composer.json (invalid JSON): %s", e)
        return ComposerManifest()

    if not isinstance(data, dict):
        logger.warning("composer.json does not contain an object")
        return ComposerManifest()

    minimum = parse_stability(data.get("minimum-stability", Constants.DEFAULT_MINIMUM_STABILITY))
    prefer_stable = _coerce_bool(data.get("prefer-stable", Constants.DEFAULT_PREFER_STABLE))

    return ComposerManifest(
        policy=ManifestPolicy(minimum_stability=minimum, prefer_stable=prefer_stable),
        packages=_direct_packages(data.get("require")),
    )
