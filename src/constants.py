"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    EXIT_UPDATES = 3
    CONFIG_ERROR = 4


class OutputFormats(Enum):
    """Export formats supported by the program.

    Args:
        Enum (string): Export formats supported by the program.
    """

    JSON = "json"
    CSV = "csv"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    REGISTRY_URL_PACKAGIST = "https://packagist.org"
    COMPOSER_JSON_FILE = "composer.json"
    COMPOSER_LOCK_FILE = "composer.lock"
    UPDATE_STORE_FILE = "composer-updates.json"
    BRANCH_REFERENCE = "dev-master"
    DEFAULT_MINIMUM_STABILITY = "stable"
    DEFAULT_PREFER_STABLE = True
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_LEVEL_ENV = "COMPOSER_UPDATES_LOG_LEVEL"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    HTTP_RETRY_MAX = 3
    HTTP_RETRY_BASE_DELAY_SEC = 0.3
    HTTP_CACHE_TTL_SEC = 300

    # Environment overrides applied by cli_config
    ENV_REGISTRY_URL = "COMPOSER_UPDATES_REGISTRY_URL"
    ENV_REQUEST_TIMEOUT = "COMPOSER_UPDATES_REQUEST_TIMEOUT"
