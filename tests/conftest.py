"""Shared fixtures: isolate mutable runtime state between tests."""

import pytest

from common import http_client
from constants import Constants
from versioning.models import ComposerLock, LockEntry, VersionDetail


@pytest.fixture(autouse=True)
def _isolate_runtime_state(monkeypatch):
    """Restore Constants overrides and drop cached HTTP responses."""
    snapshot = {k: v for k, v in vars(Constants).items() if k.isupper()}
    for env_name in (Constants.ENV_REGISTRY_URL, Constants.ENV_REQUEST_TIMEOUT, Constants.LOG_LEVEL_ENV):
        monkeypatch.delenv(env_name, raising=False)
    http_client.clear_cache()
    yield
    for key, value in snapshot.items():
        setattr(Constants, key, value)
    http_client.clear_cache()


def _candidates(*versions, name="vendor/package", references=None):
    references = references or {}
    return {
        v: VersionDetail(version=v, name=name, source_reference=references.get(v))
        for v in versions
    }


def _lock(entries):
    lock = ComposerLock()
    for name, (version, reference) in entries.items():
        lock.packages[name] = LockEntry(name=name, version=version, source_reference=reference)
    return lock


@pytest.fixture
def make_candidates():
    """Factory for ordered CandidateSets built from version strings, oldest first."""
    return _candidates


@pytest.fixture
def make_lock():
    """Factory for ComposerLock objects from {name: (version, reference)}."""
    return _lock
