"""Composer/Packagist support.

- manifest.py: composer.json reader (stability policy, direct dependencies)
- lockfile_parser.py: composer.lock reader (installed versions, revision hashes)
- client.py: HTTP interactions with the Packagist API
"""

# Patch points exposed for tests (e.g., monkeypatch in tests)
from common.http_client import get_json  # noqa: F401

# Public API re-exports
from .manifest import parse_composer_json  # noqa: F401
from .lockfile_parser import parse_composer_lock  # noqa: F401
from .client import PackagistClient, parse_versions  # noqa: F401

__all__ = [
    "parse_composer_json",
    "parse_composer_lock",
    "PackagistClient",
    "parse_versions",
    # Patch points for tests
    "get_json",
]
