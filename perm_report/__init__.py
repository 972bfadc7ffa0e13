"""
Permission Set / Profile metadata to Excel report.

The core pipeline is parse -> merge -> (labels) -> flatten; the workbook
writer and command line sit on top of it.
"""

__version__ = "1.0.0"

from .schema import (  # noqa: E402,F401
    REPORT_COLUMNS,
    FieldPermission,
    FieldRow,
    FlatRow,
    MergedPermissionRecord,
    ObjectPermission,
    ObjectRow,
    Separator,
    is_granted,
    rows_to_cells,
)

from .documents import MalformedDocumentError, load_metadata_document  # noqa: E402,F401
from .parser import parse_permissions, unwrap  # noqa: E402,F401
from .merge import merge_permissions  # noqa: E402,F401
from .labels import LabelIndex, build_label_index  # noqa: E402,F401
from .flatten import flatten_permissions, format_icon  # noqa: E402,F401
from .sheets import sanitize_sheet_name, unique_sheet_name  # noqa: E402,F401

__all__ = [
    "__version__",
    "REPORT_COLUMNS",
    "FieldPermission",
    "FieldRow",
    "FlatRow",
    "MergedPermissionRecord",
    "ObjectPermission",
    "ObjectRow",
    "Separator",
    "is_granted",
    "rows_to_cells",
    "MalformedDocumentError",
    "load_metadata_document",
    "parse_permissions",
    "unwrap",
    "merge_permissions",
    "LabelIndex",
    "build_label_index",
    "flatten_permissions",
    "format_icon",
    "sanitize_sheet_name",
    "unique_sheet_name",
]
