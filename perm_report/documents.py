"""
Loading of Salesforce source-format metadata files.

Each XML file is read with ElementTree and converted into a nested mapping
in which every child value is a list, even when the element occurs once:

    <PermissionSet><label>Sales</label></PermissionSet>
    -> {"PermissionSet": {"label": ["Sales"]}}

Namespaces are dropped from tag names and attributes are ignored. Callers
unwrap the singleton lists themselves (see ``parser.unwrap``).
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Dict


class MalformedDocumentError(ValueError):
    """Raised when a metadata file cannot be read or is not well-formed XML."""

    def __init__(self, path: Path | str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = Path(path)
        self.reason = reason


def local_name(tag: str) -> str:
    """Strip an ElementTree ``{namespace}`` prefix from a tag."""

    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


def element_to_value(element: ET.Element) -> Any:
    """
    Leaf text is kept verbatim (``" true "`` stays padded); elements with
    children become mappings. Walks the tree with an explicit stack so nesting
    depth is not bounded by the interpreter's recursion limit.
    """

    if not len(element):
        return element.text or ""

    value: Dict[str, list] = {}
    pending = [(element, value)]
    while pending:
        node, target = pending.pop()
        for child in node:
            if len(child):
                child_value: Any = {}
                pending.append((child, child_value))
            else:
                child_value = child.text or ""
            target.setdefault(local_name(child.tag), []).append(child_value)
    return value


def element_to_document(root: ET.Element) -> Dict[str, Any]:
    return {local_name(root.tag): element_to_value(root)}


def parse_metadata_string(text: str | bytes, source: Path | str = "<string>") -> Dict[str, Any]:
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise MalformedDocumentError(source, f"invalid XML ({exc})") from exc
    return element_to_document(root)


def load_metadata_document(path: Path) -> Dict[str, Any]:
    """Read and convert one metadata file."""

    try:
        tree = ET.parse(path)
    except ET.ParseError as exc:
        raise MalformedDocumentError(path, f"invalid XML ({exc})") from exc
    except OSError as exc:
        raise MalformedDocumentError(path, f"unreadable ({exc.strerror or exc})") from exc
    return element_to_document(tree.getroot())
