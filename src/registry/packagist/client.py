"""Packagist registry client: fetch the versions published for a package."""
from __future__ import annotations

import logging
import urllib.parse
from typing import Any, Dict, Optional

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, Timer, safe_url
from versioning.errors import RegistryClientError
from versioning.models import CandidateSet, VersionDetail

import registry.packagist as packagist_pkg

logger = logging.getLogger(__name__)


def _package_url(base_url: str, package: str) -> str:
    vendor, _, name = package.partition("/")
    return "{}/packages/{}/{}.json".format(
        base_url.rstrip("/"),
        urllib.parse.quote(vendor, safe=""),
        urllib.parse.quote(name, safe=""),
    )


def _version_detail(package: str, key: str, raw: Dict[str, Any]) -> VersionDetail:
    source = raw.get("source")
    if not isinstance(source, dict):
        source = {}
    return VersionDetail(
        version=str(raw.get("version") or key),
        name=str(raw.get("name") or package),
        source_reference=source.get("reference"),
        source_type=source.get("type"),
        source_url=source.get("url"),
        time=raw.get("time"),
    )


def parse_versions(package: str, payload: Any) -> CandidateSet:
    """Turn a Packagist package document into a CandidateSet.

    Key order of ``package.versions`` is kept as published.

    Raises:
        RegistryClientError: if the document has no versions map.
    """
    pkg = payload.get("package") if isinstance(payload, dict) else None
    versions = pkg.get("versions") if isinstance(pkg, dict) else None
    if not isinstance(versions, dict):
        raise RegistryClientError(package, "response has no versions map")

    candidates: CandidateSet = {}
    for key, raw in versions.items():
        if isinstance(raw, dict):
            candidates[key] = _version_detail(package, key, raw)
        else:
            candidates[key] = VersionDetail(version=key, name=package)
    return candidates


class PackagistClient:
    """Fetches candidate versions from a Packagist-compatible registry."""

    def __init__(self, base_url: Optional[str] = None):
        self.base_url = base_url or Constants.REGISTRY_URL_PACKAGIST

    def get_versions(self, package: str) -> CandidateSet:
        """Return every version Packagist reports for ``package``.

        Raises:
            RegistryClientError: on transport failure, non-200 status or an
                unusable response body.
        """
        url = _package_url(self.base_url, package)
        logger.debug(
            "HTTP request",
            extra=extra_context(
                event="http_request",
                component="client",
                action="GET",
                target=safe_url(url),
                package=package,
            )
        )

        with Timer() as timer:
            status_code, _, data = packagist_pkg.get_json(url)

        if status_code == 0:
            raise RegistryClientError(package, "registry unreachable")
        if status_code != 200:
            logger.debug(
                "HTTP non-2xx handled",
                extra=extra_context(
                    event="http_response",
                    outcome="handled_non_2xx",
                    status_code=status_code,
                    duration_ms=timer.duration_ms(),
                    target=safe_url(url),
                )
            )
            raise RegistryClientError(package, f"registry returned HTTP {status_code}", status_code)
        if data is None:
            raise RegistryClientError(package, "couldn't decode JSON", status_code)

        candidates = parse_versions(package, data)
        if is_debug_enabled(logger):
            logger.debug(
                "Fetched versions",
                extra=extra_context(
                    event="http_response",
                    outcome="success",
                    status_code=status_code,
                    duration_ms=timer.duration_ms(),
                    package=package,
                    count=len(candidates),
                )
            )
        return candidates
