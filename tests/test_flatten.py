import pytest

from conftest import field_permission_xml, object_permission_xml, permission_xml
from perm_report.documents import parse_metadata_string
from perm_report.flatten import flatten_permissions, format_icon
from perm_report.labels import LabelIndex
from perm_report.merge import merge_permissions
from perm_report.parser import parse_permissions
from perm_report.schema import (
    FieldPermission,
    FieldRow,
    MergedPermissionRecord,
    ObjectRow,
    Separator,
    rows_to_cells,
)

ICONS = {"true_icon": "✔", "false_icon": "✖"}


def _records(xml):
    return merge_permissions(*parse_permissions(parse_metadata_string(xml)))


@pytest.mark.parametrize(
    "value, expected",
    [("true", "Y"), ("false", "N"), ("", "N"), (None, "N"), ("TRUE", "N"), (" true", "N"), (True, "N")],
)
def test_format_icon_is_strict_string_equality(value, expected):
    assert format_icon(value, "Y", "N") == expected


def test_account_object_and_field_rows(account_permission_set_xml):
    rows = flatten_permissions(_records(account_permission_set_xml), **ICONS)

    assert rows_to_cells(rows) == [
        ["Account", "", "✖", "✔", "✖", "✖", "✖", "✖"],
        ["", "Name", "✔", "✔"],
        [],
    ]


def test_field_only_object_renders_false_icons():
    xml = permission_xml("PermissionSet", [field_permission_xml("Contact.Email", editable="false", readable="true")])

    rows = flatten_permissions(_records(xml), **ICONS)

    assert rows == [
        ObjectRow("Contact", "✖", "✖", "✖", "✖", "✖", "✖"),
        FieldRow("Email", "✖", "✔"),
        Separator(),
    ]


def test_labels_substitute_with_fallback():
    xml = permission_xml(
        "PermissionSet",
        [
            field_permission_xml("Account.Name", readable="true"),
            field_permission_xml("Account.Rating__c", readable="true"),
            field_permission_xml("Widget__c.Size__c", readable="true"),
        ],
    )
    labels = LabelIndex(
        object_labels={"Account": "Customer Account"},
        field_labels={"Account.Rating__c": "Rating"},
    )

    rows = flatten_permissions(_records(xml), use_labels=True, labels=labels, **ICONS)
    cells = rows_to_cells(rows)

    assert cells[0][0] == "Customer Account"
    assert [c[1] for c in cells[1:3]] == ["Name", "Rating"]
    assert cells[4][0] == "Widget__c"
    assert cells[5][1] == "Size__c"


def test_labels_ignored_when_disabled():
    xml = permission_xml("PermissionSet", [field_permission_xml("Account.Name")])
    labels = LabelIndex(object_labels={"Account": "Customer Account"}, field_labels={"Account.Name": "Account Name"})

    cells = rows_to_cells(flatten_permissions(_records(xml), use_labels=False, labels=labels))

    assert cells[0][0] == "Account"
    assert cells[1][1] == "Name"


def test_malformed_field_key_never_reaches_rows():
    xml = permission_xml(
        "PermissionSet",
        [field_permission_xml("BadKey", readable="true"), field_permission_xml("Account.Name", readable="true")],
    )

    cells = rows_to_cells(flatten_permissions(_records(xml)))

    assert all("BadKey" not in row for row in cells)
    assert len(cells) == 3


@pytest.mark.parametrize("field_counts", [[0], [3], [2, 0, 5], []])
def test_row_count_is_fields_plus_two_per_record(field_counts):
    records = [
        MergedPermissionRecord(
            name=f"Object{i}",
            fieldPermissions=tuple(FieldPermission(f"Field{j}") for j in range(count)),
        )
        for i, count in enumerate(field_counts)
    ]

    rows = flatten_permissions(records)

    assert len(rows) == sum(count + 2 for count in field_counts)
    if records:
        assert isinstance(rows[-1], Separator)
    assert sum(isinstance(row, Separator) for row in rows) == len(records)


def test_object_row_column_order_is_edit_read_create_delete_modify_view():
    record = MergedPermissionRecord(
        name="Case",
        allowEdit="true",
        allowRead="false",
        allowCreate="true",
        allowDelete="false",
        modifyAllRecords="true",
        viewAllRecords="false",
    )

    (object_row, _separator) = flatten_permissions([record], true_icon="1", false_icon="0")

    assert object_row.cells() == ["Case", "", "1", "0", "1", "0", "1", "0"]


def test_padded_grant_in_document_renders_false_icon():
    xml = permission_xml(
        "PermissionSet",
        [
            field_permission_xml("Account.Name", editable=" true", readable="true"),
            object_permission_xml("Account", allowRead=" true ", allowEdit="true"),
        ],
    )

    cells = rows_to_cells(flatten_permissions(_records(xml), true_icon="Y", false_icon="N"))

    assert cells[0] == ["Account", "", "Y", "N", "N", "N", "N", "N"]
    assert cells[1] == ["", "Name", "N", "Y"]
