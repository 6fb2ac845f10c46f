"""Composer update checker - reports dependencies with newer versions available.

    Raises:
        SystemExit: always, carrying one of the ExitCodes values

    Returns:
        int: Exit code
"""
import csv
import sys
import logging
import json
import os

from constants import ExitCodes, Constants, OutputFormats
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from args import parse_args
from cli_config import ConfigError, configure
from registry.packagist import PackagistClient
from storage.update_store import JsonUpdateStore
from update_checker import run_check
from versioning.errors import PackageNotFoundError, UnknownStabilityError

logger = logging.getLogger(__name__)


def export_csv(records, path):
    """Exports the update records to a CSV file.

    Args:
        records (list): List of UpdateRecord instances.
        path (str): File path to export the CSV.
    """
    headers = ["Package Name", "Installed", "Available", "Checked At"]
    rows = [headers]

    def _nv(v):
        return "" if v is None else v

    for x in records:
        rows.append([x.package, x.installed, x.available, _nv(x.checked_at)])
    try:
        with open(path, 'w', newline='', encoding='utf-8') as file:
            export = csv.writer(file)
            export.writerows(rows)
        logging.info("CSV file has been successfully exported at: %s", path)
    except (OSError, csv.Error) as e:
        logging.error("CSV file couldn't be written to disk: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def export_json(records, path):
    """Exports the update records to a JSON file.

    Args:
        records (list): List of UpdateRecord instances.
        path (str): File path to export the JSON.
    """
    data = [x.to_dict() for x in records]
    try:
        with open(path, 'w', encoding='utf-8') as file:
            json.dump(data, file, ensure_ascii=False, indent=4)
        logging.info("JSON file has been successfully exported at: %s", path)
    except OSError as e:
        logging.error("JSON file couldn't be written to disk: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def _output_format(args):
    """Format from --format, else from the --output extension, else json."""
    if getattr(args, "OUTPUT_FORMAT", None):
        return args.OUTPUT_FORMAT.lower()
    if args.OUTPUT.lower().endswith(".csv"):
        return OutputFormats.CSV.value
    return OutputFormats.JSON.value


def _setup_logging(args, config=None):
    """Configure logging; CLI level beats environment, which beats the config file."""
    level = getattr(args, "LOG_LEVEL", None) or os.environ.get(Constants.LOG_LEVEL_ENV)
    if not level and config:
        level = config.get("log_level")
    configure_logging(level)

    root = logging.getLogger()
    if getattr(args, "QUIET", False):
        for handler in root.handlers:
            if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
                handler.setLevel(logging.CRITICAL + 1)

    log_file = getattr(args, "LOG_FILE", None)
    if log_file and not any(
        isinstance(h, logging.FileHandler) and h.baseFilename == os.path.abspath(log_file)
        for h in root.handlers
    ):
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        root.addHandler(file_handler)
        logger.info("Logging to file: %s", log_file)


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    _setup_logging(args)

    try:
        config = configure(args)
    except ConfigError as e:
        logging.error("%s", e)
        sys.exit(ExitCodes.CONFIG_ERROR.value)
    _setup_logging(args, config)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main")
        )

    logging.info("Checking %s for Composer updates.", os.path.abspath(args.PROJECT_DIR))

    client = PackagistClient(Constants.REGISTRY_URL_PACKAGIST)
    store = JsonUpdateStore(Constants.UPDATE_STORE_FILE)

    try:
        records = run_check(args.PROJECT_DIR, client, store)
    except UnknownStabilityError as e:
        logging.error("Invalid minimum-stability in composer.json: %s", e)
        sys.exit(ExitCodes.CONFIG_ERROR.value)
    except PackageNotFoundError as e:
        logging.error("composer.lock is out of sync with composer.json: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)
    except OSError as e:
        logging.error("Update history couldn't be written to disk: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)

    # OUTPUT
    if getattr(args, "OUTPUT", None):
        if _output_format(args) == OutputFormats.CSV.value:
            export_csv(records, args.OUTPUT)
        else:
            export_json(records, args.OUTPUT)

    logging.info("The check finished running. Update history is stored in %s", Constants.UPDATE_STORE_FILE)

    if records and args.ERROR_ON_UPDATES:
        logging.warning("Updates available, exiting with non-zero status code.")
        sys.exit(ExitCodes.EXIT_UPDATES.value)

    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()
