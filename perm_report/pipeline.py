from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Sequence

from .config import ReportSettings
from .documents import MalformedDocumentError, load_metadata_document
from .flatten import flatten_permissions
from .labels import LabelIndex
from .merge import merge_permissions
from .parser import parse_permissions
from .schema import FlatRow, MergedPermissionRecord
from .sheets import sanitize_sheet_name

LOGGER = logging.getLogger(__name__)


@dataclass
class PermissionFileResult:
    source: Path
    sheet_name: str
    records: List[MergedPermissionRecord] = field(default_factory=list)
    rows: List[FlatRow] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def has_permissions(self) -> bool:
        return bool(self.records)


def sheet_name_for(path: Path) -> str:
    """Sanitized sheet name from the file name minus its last extension."""

    return sanitize_sheet_name(Path(path).stem)


def discover_permission_files(settings: ReportSettings) -> List[Path]:
    """Expand ``<path>/<glob>`` and keep files of the configured type, sorted."""

    pattern = settings.glob.replace("\\", "/")
    suffix = settings.file_suffix
    matches = sorted(p for p in Path(settings.path).glob(pattern) if p.is_file())
    return [p for p in matches if p.name.endswith(suffix)]


def records_from_document(document: Any, source: Optional[str] = None) -> List[MergedPermissionRecord]:
    field_index, object_index = parse_permissions(document, source=source)
    return merge_permissions(field_index, object_index)


def process_permission_file(
    path: Path,
    settings: ReportSettings,
    labels: Optional[LabelIndex] = None,
) -> PermissionFileResult:
    """
    Run one file through load -> parse -> merge -> flatten.

    Load failures are logged and produce an empty result; they never propagate
    to the caller so the rest of the batch keeps going.
    """

    path = Path(path)
    result = PermissionFileResult(source=path, sheet_name=sheet_name_for(path))

    try:
        document = load_metadata_document(path)
    except MalformedDocumentError as exc:
        LOGGER.error("Error processing file %s: %s", path, exc.reason)
        result.error = exc.reason
        return result

    result.records = records_from_document(document, source=str(path))
    result.rows = flatten_permissions(
        result.records,
        use_labels=settings.use_labels,
        true_icon=settings.true_icon,
        false_icon=settings.false_icon,
        labels=labels,
    )
    return result


def process_permission_files(
    paths: Sequence[Path],
    settings: ReportSettings,
    labels: Optional[LabelIndex] = None,
) -> List[PermissionFileResult]:
    """Process files in order; files without permissions are logged and left out."""

    results: List[PermissionFileResult] = []
    for path in paths:
        sheet_name = sheet_name_for(path)
        LOGGER.info("Processing %s: %s", settings.item_label, sheet_name)
        result = process_permission_file(path, settings, labels)
        if not result.has_permissions:
            LOGGER.warning("No permissions found in %s: %s", settings.item_label, sheet_name)
            continue
        results.append(result)
    return results
