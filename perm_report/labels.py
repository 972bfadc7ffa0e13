"""
Object and field label lookups built from SFDX source-format object metadata.

Expected layout under the label source directory::

    objects/
      Account/
        Account.object-meta.xml        -> <CustomObject><label>
        fields/
          Rating__c.field-meta.xml     -> <CustomField><label>

Object labels are keyed by the object folder name, field labels by
``"<object folder>.<field file stem>"``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from .documents import MalformedDocumentError, load_metadata_document
from .parser import unwrap

LOGGER = logging.getLogger(__name__)

OBJECT_META_SUFFIX = ".object-meta.xml"
FIELD_META_SUFFIX = ".field-meta.xml"
OBJECT_META_GLOB = f"**/*{OBJECT_META_SUFFIX}"
FIELD_META_GLOB = f"**/fields/*{FIELD_META_SUFFIX}"


def _frozen(mapping: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class LabelIndex:
    """Read-only API name -> label lookups."""

    object_labels: Mapping[str, str] = field(default_factory=dict)
    field_labels: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "object_labels", _frozen(self.object_labels))
        object.__setattr__(self, "field_labels", _frozen(self.field_labels))

    def object_label(self, object_name: str) -> str:
        return self.object_labels.get(object_name) or object_name

    def field_label(self, object_name: str, field_name: str) -> str:
        return self.field_labels.get(f"{object_name}.{field_name}") or field_name

    def __len__(self) -> int:
        return len(self.object_labels) + len(self.field_labels)


def _read_label(path: Path, root_name: str) -> str:
    document = load_metadata_document(path)
    root = unwrap(document.get(root_name))
    if not isinstance(root, Mapping):
        raise MalformedDocumentError(path, f"missing <{root_name}> root element")
    label = unwrap(root.get("label"))
    if not isinstance(label, str) or not label:
        raise MalformedDocumentError(path, "missing <label>")
    return label


def collect_object_labels(object_meta_path: Path) -> Dict[str, str]:
    labels: Dict[str, str] = {}
    for path in sorted(Path(object_meta_path).glob(OBJECT_META_GLOB)):
        try:
            label = _read_label(path, "CustomObject")
        except MalformedDocumentError as exc:
            LOGGER.warning("Failed to parse object metadata file: %s (%s)", path, exc.reason)
            continue
        labels[path.parent.name] = label
    return labels


def collect_field_labels(object_meta_path: Path) -> Dict[str, str]:
    labels: Dict[str, str] = {}
    for path in sorted(Path(object_meta_path).glob(FIELD_META_GLOB)):
        try:
            label = _read_label(path, "CustomField")
        except MalformedDocumentError as exc:
            LOGGER.warning("Failed to parse field metadata file: %s (%s)", path, exc.reason)
            continue
        object_name = path.parent.parent.name
        field_name = path.name[: -len(FIELD_META_SUFFIX)]
        labels[f"{object_name}.{field_name}"] = label
    return labels


def build_label_index(object_meta_path: Path) -> LabelIndex:
    """Scan ``object_meta_path`` once; unreadable files are skipped with a warning."""

    index = LabelIndex(
        object_labels=collect_object_labels(object_meta_path),
        field_labels=collect_field_labels(object_meta_path),
    )
    LOGGER.info(
        "Collected %d object label(s) and %d field label(s)",
        len(index.object_labels),
        len(index.field_labels),
    )
    return index
