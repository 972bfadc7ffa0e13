from __future__ import annotations

from typing import List, Mapping, Sequence

from .schema import (
    NOT_GRANTED,
    OBJECT_GRANT_KEYS,
    FieldPermission,
    MergedPermissionRecord,
    ObjectPermission,
)


def merge_permissions(
    field_index: Mapping[str, Sequence[FieldPermission]],
    object_index: Mapping[str, ObjectPermission],
) -> List[MergedPermissionRecord]:
    """
    Combine field and object permissions into one record per object.

    Objects with object-level permissions come first, in their original order,
    followed by objects that only appear in field permissions (all object-level
    grants ``"false"``).
    """

    merged: List[MergedPermissionRecord] = []

    for object_name, object_permission in object_index.items():
        merged.append(
            MergedPermissionRecord(
                name=object_name,
                fieldPermissions=tuple(field_index.get(object_name, ())),
                **{grant: getattr(object_permission, grant) for grant in OBJECT_GRANT_KEYS},
            )
        )

    for object_name, fields in field_index.items():
        if object_name in object_index:
            continue
        merged.append(
            MergedPermissionRecord(
                name=object_name,
                fieldPermissions=tuple(fields),
                **{grant: NOT_GRANTED for grant in OBJECT_GRANT_KEYS},
            )
        )

    return merged
