from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

GRANTED = "true"
NOT_GRANTED = "false"

PERMISSION_SET_ROOT = "PermissionSet"
PROFILE_ROOT = "Profile"
PERMISSION_ROOTS: Tuple[str, ...] = (PERMISSION_SET_ROOT, PROFILE_ROOT)

# Field names as they appear inside objectPermissions entries.
OBJECT_GRANT_KEYS: Tuple[str, ...] = (
    "allowCreate",
    "allowDelete",
    "allowEdit",
    "allowRead",
    "modifyAllRecords",
    "viewAllRecords",
)
FIELD_GRANT_KEYS: Tuple[str, ...] = ("editable", "readable")

REPORT_COLUMNS: Tuple[str, ...] = (
    "Object",
    "Field",
    "Edit",
    "Read",
    "Create",
    "Delete",
    "Modify All",
    "View All",
)


def is_granted(value: object) -> bool:
    """Strict grant check: only the exact string ``"true"`` counts."""

    return value == GRANTED


@dataclass(frozen=True)
class FieldPermission:
    field: str
    editable: str = NOT_GRANTED
    readable: str = NOT_GRANTED


@dataclass(frozen=True)
class ObjectPermission:
    object: str
    allowCreate: str = NOT_GRANTED
    allowDelete: str = NOT_GRANTED
    allowEdit: str = NOT_GRANTED
    allowRead: str = NOT_GRANTED
    modifyAllRecords: str = NOT_GRANTED
    viewAllRecords: str = NOT_GRANTED


@dataclass(frozen=True)
class MergedPermissionRecord:
    """One object with its object-level grants and its field grants in source order."""

    name: str
    fieldPermissions: Tuple[FieldPermission, ...] = ()
    allowCreate: str = NOT_GRANTED
    allowDelete: str = NOT_GRANTED
    allowEdit: str = NOT_GRANTED
    allowRead: str = NOT_GRANTED
    modifyAllRecords: str = NOT_GRANTED
    viewAllRecords: str = NOT_GRANTED


@dataclass(frozen=True)
class ObjectRow:
    """Object header row; flags are already rendered as icons."""

    name: str
    edit: str
    read: str
    create: str
    delete: str
    modify_all: str
    view_all: str

    def cells(self) -> List[str]:
        return [
            self.name,
            "",
            self.edit,
            self.read,
            self.create,
            self.delete,
            self.modify_all,
            self.view_all,
        ]


@dataclass(frozen=True)
class FieldRow:
    field: str
    edit: str
    read: str

    def cells(self) -> List[str]:
        return ["", self.field, self.edit, self.read]


@dataclass(frozen=True)
class Separator:
    def cells(self) -> List[str]:
        return []


FlatRow = Union[ObjectRow, FieldRow, Separator]


def rows_to_cells(rows: Sequence[FlatRow]) -> List[List[str]]:
    """Positional cell lists for the tabular writer."""

    return [row.cells() for row in rows]
