from __future__ import annotations

from typing import Iterable, List, Optional

from .labels import LabelIndex
from .schema import (
    FieldRow,
    FlatRow,
    MergedPermissionRecord,
    ObjectRow,
    Separator,
    is_granted,
)

DEFAULT_TRUE_ICON = "✔"
DEFAULT_FALSE_ICON = "✖"


def format_icon(value: object, true_icon: str = DEFAULT_TRUE_ICON, false_icon: str = DEFAULT_FALSE_ICON) -> str:
    return true_icon if is_granted(value) else false_icon


def flatten_permissions(
    records: Iterable[MergedPermissionRecord],
    *,
    use_labels: bool = False,
    true_icon: str = DEFAULT_TRUE_ICON,
    false_icon: str = DEFAULT_FALSE_ICON,
    labels: Optional[LabelIndex] = None,
) -> List[FlatRow]:
    """
    Turn merged records into report rows.

    Each record produces an object row (Edit, Read, Create, Delete, Modify All,
    View All), one field row per field permission (Edit, Read) and a trailing
    separator. Labels replace API names only when ``use_labels`` is set and a
    label index is given.
    """

    label_index = labels if use_labels else None

    def icon(value: object) -> str:
        return format_icon(value, true_icon, false_icon)

    rows: List[FlatRow] = []
    for record in records:
        object_name = label_index.object_label(record.name) if label_index else record.name
        rows.append(
            ObjectRow(
                name=object_name,
                edit=icon(record.allowEdit),
                read=icon(record.allowRead),
                create=icon(record.allowCreate),
                delete=icon(record.allowDelete),
                modify_all=icon(record.modifyAllRecords),
                view_all=icon(record.viewAllRecords),
            )
        )
        for permission in record.fieldPermissions:
            field_name = (
                label_index.field_label(record.name, permission.field) if label_index else permission.field
            )
            rows.append(FieldRow(field=field_name, edit=icon(permission.editable), read=icon(permission.readable)))
        rows.append(Separator())
    return rows
