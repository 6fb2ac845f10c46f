"""Tests for the composer.json and composer.lock readers."""

import json

import pytest

from registry.packagist.lockfile_parser import parse_composer_lock
from registry.packagist.manifest import parse_composer_json
from versioning.errors import PackageNotFoundError, UnknownStabilityError
from versioning.models import StabilityLevel


def write_json(path, data):
    """Helper to dump a JSON document to ``path``."""
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


class TestComposerJsonParser:
    """Test composer.json reading."""

    def test_defaults(self, tmp_path):
        """Without stability settings the policy is stable + prefer-stable."""
        path = write_json(tmp_path / "composer.json", {"require": {"monolog/monolog": "^2.0"}})
        manifest = parse_composer_json(path)
        assert manifest.policy.minimum_stability == StabilityLevel.STABLE
        assert manifest.policy.prefer_stable is True
        assert manifest.packages == ["monolog/monolog"]

    def test_explicit_policy(self, tmp_path):
        """minimum-stability and prefer-stable are read from the manifest."""
        path = write_json(tmp_path / "composer.json", {
            "minimum-stability": "Beta",
            "prefer-stable": False,
            "require": {},
        })
        manifest = parse_composer_json(path)
        assert manifest.policy.minimum_stability == StabilityLevel.BETA
        assert manifest.policy.prefer_stable is False

    def test_prefer_stable_string_values(self, tmp_path):
        """String booleans are understood."""
        path = write_json(tmp_path / "composer.json", {"prefer-stable": "false"})
        assert parse_composer_json(path).policy.prefer_stable is False

    def test_filters_names_without_vendor(self, tmp_path):
        """Platform requirements and malformed names are dropped, order kept."""
        path = write_json(tmp_path / "composer.json", {
            "require": {
                "php": ">=7.4",
                "symfony/console": "^5.4",
                "ext-json": "*",
                "/broken": "1.0",
                "guzzlehttp/guzzle": "^7.0",
            },
        })
        assert parse_composer_json(path).packages == ["symfony/console", "guzzlehttp/guzzle"]

    def test_unknown_minimum_stability(self, tmp_path):
        """A malformed minimum-stability is fatal."""
        path = write_json(tmp_path / "composer.json", {"minimum-stability": "nightly"})
        with pytest.raises(UnknownStabilityError):
            parse_composer_json(path)

    def test_missing_file(self, tmp_path):
        """A missing manifest yields nothing to check."""
        manifest = parse_composer_json(str(tmp_path / "composer.json"))
        assert manifest.packages == []

    def test_invalid_json(self, tmp_path):
        """A malformed manifest yields nothing to check."""
        path = tmp_path / "composer.json"
        path.write_text("{not json", encoding="utf-8")
        assert parse_composer_json(str(path)).packages == []

    def test_non_object_document(self, tmp_path):
        """A JSON array is not a manifest."""
        path = write_json(tmp_path / "composer.json", ["monolog/monolog"])
        assert parse_composer_json(path).packages == []


class TestComposerLockParser:
    """Test composer.lock reading."""

    LOCK = {
        "packages": [
            {
                "name": "monolog/monolog",
                "version": "2.3.5",
                "source": {"type": "git", "url": "https://github.com/Seldaek/monolog.git", "reference": "fd4380d"},
            },
            {
                "name": "acme/tool",
                "version": "dev-master",
                "source": {"type": "git", "reference": "xyz999"},
            },
            {"version": "1.0.0"},
        ],
        "packages-dev": [
            {"name": "phpunit/phpunit", "version": "9.5.0"},
        ],
    }

    def test_installed_versions(self, tmp_path):
        """Runtime packages are mapped to their locked versions."""
        lock = parse_composer_lock(write_json(tmp_path / "composer.lock", self.LOCK))
        assert lock.installed_versions() == {"monolog/monolog": "2.3.5", "acme/tool": "dev-master"}

    def test_installed_packages_follow_requested_order(self, tmp_path):
        """Only requested names present in the lock are returned, in request order."""
        lock = parse_composer_lock(write_json(tmp_path / "composer.lock", self.LOCK))
        installed = lock.installed_packages(["acme/tool", "vendor/missing", "monolog/monolog"])
        assert [(p.name, p.installed_version) for p in installed] == [
            ("acme/tool", "dev-master"),
            ("monolog/monolog", "2.3.5"),
        ]

    def test_find_package(self, tmp_path):
        """Entries expose their revision hash."""
        lock = parse_composer_lock(write_json(tmp_path / "composer.lock", self.LOCK))
        assert lock.find_package("acme/tool").source_reference == "xyz999"
        assert lock.source_reference("monolog/monolog") == "fd4380d"

    def test_dev_packages_not_included(self, tmp_path):
        """packages-dev entries are not looked up."""
        lock = parse_composer_lock(write_json(tmp_path / "composer.lock", self.LOCK))
        with pytest.raises(PackageNotFoundError):
            lock.find_package("phpunit/phpunit")

    def test_entry_without_source(self, tmp_path):
        """Dist-only packages have no revision hash."""
        path = write_json(tmp_path / "composer.lock", {"packages": [{"name": "a/b", "version": "1.0.0"}]})
        assert parse_composer_lock(path).source_reference("a/b") is None

    def test_missing_file(self, tmp_path):
        """A missing lockfile yields an empty lock."""
        lock = parse_composer_lock(str(tmp_path / "composer.lock"))
        assert lock.installed_versions() == {}

    def test_invalid_json(self, tmp_path):
        """A malformed lockfile yields an empty lock."""
        path = tmp_path / "composer.lock"
        path.write_text("[[", encoding="utf-8")
        assert parse_composer_lock(str(path)).packages == {}

    def test_packages_not_a_list(self, tmp_path):
        """An unexpected packages section is ignored."""
        path = write_json(tmp_path / "composer.lock", {"packages": {"a/b": "1.0"}})
        assert parse_composer_lock(path).packages == {}
