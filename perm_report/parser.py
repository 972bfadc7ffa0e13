from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .schema import (
    FIELD_GRANT_KEYS,
    NOT_GRANTED,
    OBJECT_GRANT_KEYS,
    PERMISSION_ROOTS,
    FieldPermission,
    ObjectPermission,
)

LOGGER = logging.getLogger(__name__)

FieldIndex = Dict[str, List[FieldPermission]]
ObjectIndex = Dict[str, ObjectPermission]


def unwrap(value: Any, default: Any = None) -> Any:
    """
    Return the scalar held by a singleton container.

    The document loader wraps every child value in a list; a missing key, an
    empty list or ``None`` yields ``default``. Non-list values pass through.
    """

    if value is None:
        return default
    if isinstance(value, (list, tuple)):
        if not value:
            return default
        return value[0]
    return value


def _text(entry: Mapping[str, Any], key: str, default: str = "") -> str:
    value = unwrap(entry.get(key), default)
    if value is None:
        return default
    if isinstance(value, str):
        return value
    # Nested element where text was expected.
    return default


def _grant(entry: Mapping[str, Any], key: str) -> str:
    return _text(entry, key, NOT_GRANTED)


def _entries(root: Mapping[str, Any], key: str) -> Iterable[Mapping[str, Any]]:
    raw = root.get(key) or []
    if isinstance(raw, Mapping):
        raw = [raw]
    return [entry for entry in raw if isinstance(entry, Mapping)]


def find_permission_root(document: Any) -> Tuple[Optional[str], Optional[Mapping[str, Any]]]:
    """Locate the PermissionSet/Profile element; returns (root_name, root) or (None, None)."""

    if not isinstance(document, Mapping):
        return None, None
    for name in PERMISSION_ROOTS:
        if name in document:
            root = unwrap(document[name], {})
            if not isinstance(root, Mapping):
                # An empty <Profile/> carries no permissions but is still recognised.
                root = {}
            return name, root
    return None, None


def split_field_key(identifier: str) -> Optional[Tuple[str, str]]:
    """Split ``"Object.Field"`` on the first dot; both sides must be non-empty."""

    object_name, dot, field_name = identifier.partition(".")
    if not dot or not object_name or not field_name:
        return None
    return object_name, field_name


def map_field_permissions(entries: Iterable[Mapping[str, Any]]) -> FieldIndex:
    field_index: FieldIndex = {}
    for entry in entries:
        key = split_field_key(_text(entry, "field"))
        if key is None:
            # Incomplete identifiers are dropped without a log line.
            continue
        object_name, field_name = key
        field_index.setdefault(object_name, []).append(
            FieldPermission(
                field=field_name,
                **{grant: _grant(entry, grant) for grant in FIELD_GRANT_KEYS},
            )
        )
    return field_index


def map_object_permissions(entries: Iterable[Mapping[str, Any]]) -> ObjectIndex:
    object_index: ObjectIndex = {}
    for entry in entries:
        object_name = _text(entry, "object")
        if not object_name:
            continue
        object_index[object_name] = ObjectPermission(
            object=object_name,
            **{grant: _grant(entry, grant) for grant in OBJECT_GRANT_KEYS},
        )
    return object_index


def parse_permissions(document: Any, source: Optional[str] = None) -> Tuple[FieldIndex, ObjectIndex]:
    """
    Extract field and object permissions from one parsed permission document.

    Returns ``(field_index, object_index)``, both keyed by object API name in
    encounter order. A document whose root is neither ``PermissionSet`` nor
    ``Profile`` yields two empty indices.
    """

    root_name, root = find_permission_root(document)
    if root is None:
        if source:
            LOGGER.warning("No permissions found in file: %s", source)
        return {}, {}

    field_index = map_field_permissions(_entries(root, "fieldPermissions"))
    object_index = map_object_permissions(_entries(root, "objectPermissions"))
    LOGGER.debug(
        "%s: %s with %d object permission(s), %d object(s) with field permissions",
        source or "<document>",
        root_name,
        len(object_index),
        len(field_index),
    )
    return field_index, object_index
