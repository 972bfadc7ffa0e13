from pathlib import Path
from typing import Dict, Iterable, Optional

import pytest

SF_NS = "http://soap.sforce.com/2006/04/metadata"


def field_permission_xml(field: str, editable: Optional[str] = "false", readable: Optional[str] = "false") -> str:
    parts = []
    if editable is not None:
        parts.append(f"<editable>{editable}</editable>")
    parts.append(f"<field>{field}</field>")
    if readable is not None:
        parts.append(f"<readable>{readable}</readable>")
    return "<fieldPermissions>" + "".join(parts) + "</fieldPermissions>"


def object_permission_xml(obj: str, **grants: str) -> str:
    parts = [f"<{name}>{value}</{name}>" for name, value in grants.items()]
    parts.append(f"<object>{obj}</object>")
    return "<objectPermissions>" + "".join(parts) + "</objectPermissions>"


def permission_xml(root: str = "PermissionSet", entries: Iterable[str] = ()) -> str:
    body = "\n    ".join(entries)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<{root} xmlns="{SF_NS}">\n    <label>Test</label>\n    {body}\n</{root}>\n'
    )


def write_object_meta(objects_dir: Path, object_name: str, label: str, fields: Optional[Dict[str, str]] = None) -> None:
    obj_dir = objects_dir / object_name
    (obj_dir / "fields").mkdir(parents=True, exist_ok=True)
    (obj_dir / f"{object_name}.object-meta.xml").write_text(
        f'<?xml version="1.0" encoding="UTF-8"?>\n<CustomObject xmlns="{SF_NS}"><label>{label}</label></CustomObject>\n',
        encoding="utf-8",
    )
    for field_name, field_label in (fields or {}).items():
        (obj_dir / "fields" / f"{field_name}.field-meta.xml").write_text(
            f'<?xml version="1.0" encoding="UTF-8"?>\n<CustomField xmlns="{SF_NS}">'
            f"<fullName>{field_name}</fullName><label>{field_label}</label></CustomField>\n",
            encoding="utf-8",
        )


@pytest.fixture
def account_permission_set_xml():
    """Scenario A document: Account readable, Account.Name editable + readable."""

    return permission_xml(
        "PermissionSet",
        [
            field_permission_xml("Account.Name", editable="true", readable="true"),
            object_permission_xml(
                "Account",
                allowCreate="false",
                allowDelete="false",
                allowEdit="false",
                allowRead="true",
                modifyAllRecords="false",
                viewAllRecords="false",
            ),
        ],
    )
