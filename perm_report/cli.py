"""Permission Set / Profile metadata -> Excel permissions report.

Reads Salesforce source-format ``*.permissionset-meta.xml`` or
``*.profile-meta.xml`` files and writes one worksheet per file listing every
object with its CRUD / Modify All / View All grants, followed by the field
level Edit / Read grants for that object.

Examples
--------
    perm-report -p force-app/main/default/permissionsets -o sfdocs/permissions.xlsx
    perm-report --type profiles -p force-app/main/default/profiles \\
        --use-labels --object-meta-path force-app/main/default/objects
    perm-report -c perm-report.yaml
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from . import __version__
from .config import VALID_TYPES, ConfigError, ReportSettings, load_config_file, resolve_settings, validate_settings
from .labels import LabelIndex, build_label_index
from .pipeline import discover_permission_files, process_permission_files
from .workbook import write_permissions_workbook

LOGGER = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def build_arg_parser() -> argparse.ArgumentParser:
    defaults = ReportSettings()
    parser = argparse.ArgumentParser(
        prog="perm-report",
        description=(
            "Process permission files (Permission Sets or Profiles) and generate an Excel report"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    # Defaults are None so config-file values are only overridden by explicit options.
    parser.add_argument(
        "-p", "--path", type=Path, help=f"Path to permission files (default: {defaults.path})"
    )
    parser.add_argument(
        "-g", "--glob", help=f"Glob pattern to select permission files (default: {defaults.glob})"
    )
    parser.add_argument(
        "-o", "--output", type=Path, help=f"Output Excel file (default: {defaults.output})"
    )
    parser.add_argument(
        "-t",
        "--true-icon",
        dest="true_icon",
        help=f"Icon representing true value (default: {defaults.true_icon})",
    )
    parser.add_argument(
        "-f",
        "--false-icon",
        dest="false_icon",
        help=f"Icon representing false value (default: {defaults.false_icon})",
    )
    parser.add_argument("-c", "--config", type=Path, help="Configuration file (JSON or YAML)")
    parser.add_argument(
        "-l",
        "--use-labels",
        dest="use_labels",
        action="store_true",
        default=None,
        help="Use labels instead of API names",
    )
    parser.add_argument(
        "--object-meta-path",
        dest="object_meta_path",
        type=Path,
        help=f"Path to custom object metadata files (default: {defaults.object_meta_path})",
    )
    parser.add_argument(
        "--type",
        help=f"Type of permission files to process: {' or '.join(VALID_TYPES)} (default: {defaults.type})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def settings_from_args(args: argparse.Namespace) -> ReportSettings:
    overrides: Dict[str, Any] = {
        "path": args.path,
        "glob": args.glob,
        "output": args.output,
        "true_icon": args.true_icon,
        "false_icon": args.false_icon,
        "use_labels": args.use_labels,
        "object_meta_path": args.object_meta_path,
        "type": args.type,
    }
    config = load_config_file(args.config) if args.config else {}
    return validate_settings(resolve_settings(overrides, config))


def run_report(settings: ReportSettings) -> int:
    """Discover, process and write; returns the process exit status."""

    pattern = f"{settings.path.as_posix()}/{settings.glob}".replace("\\", "/")
    LOGGER.info("Searching for permission files with pattern: %s", pattern)

    permission_files = discover_permission_files(settings)
    if not permission_files:
        LOGGER.error("No %s found matching the pattern: %s", settings.type, pattern)
        return EXIT_FAILURE
    LOGGER.info("Found %d %s.", len(permission_files), settings.type)

    labels: Optional[LabelIndex] = None
    if settings.use_labels:
        LOGGER.info("Collecting object and field labels...")
        labels = build_label_index(settings.object_meta_path)
        LOGGER.info("Labels collected successfully.")

    started = time.perf_counter()
    results = process_permission_files(permission_files, settings, labels)
    if not results:
        LOGGER.error("None of the %d %s contained permissions; no report written.", len(permission_files), settings.type)
        return EXIT_FAILURE

    write_permissions_workbook(settings.output, [(result.sheet_name, result.rows) for result in results])
    LOGGER.info("Execution time: %.3fs", time.perf_counter() - started)
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    try:
        settings = settings_from_args(args)
        return run_report(settings)
    except ConfigError as exc:
        LOGGER.error("%s", exc)
        return EXIT_FAILURE
    except Exception as exc:  # noqa: BLE001
        LOGGER.error("Unexpected error: %s", exc)
        LOGGER.debug("Traceback", exc_info=True)
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
