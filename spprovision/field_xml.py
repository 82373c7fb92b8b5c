"""
Helpers for SharePoint field schema XML (``<Field ... />`` definitions).
"""

from __future__ import annotations

from dataclasses import dataclass
from xml.etree import ElementTree as ET

from spprovision.exceptions import FieldXmlError


@dataclass(frozen=True)
class FieldSchema:
    """Attributes of a field definition relevant to provisioning."""

    id: str | None
    internal_name: str
    display_name: str
    schema_xml: str

    def creation_xml(self) -> str:
        """
        Schema XML used to create the field.

        SharePoint derives the internal name from ``DisplayName`` when the
        field is created, so the field is created under its internal name and
        renamed to the real display name afterwards.
        """
        root = ET.fromstring(self.schema_xml)
        root.set("DisplayName", self.internal_name)
        return ET.tostring(root, encoding="unicode")


def parse_field_xml(field_xml: str) -> FieldSchema:
    """
    Parse a field schema XML string.

    Raises:
        FieldXmlError: If the XML is malformed, is not a ``Field`` element or
            lacks an ``InternalName``.
    """
    try:
        root = ET.fromstring(field_xml)
    except ET.ParseError as exc:
        raise FieldXmlError(field_xml, cause=exc)

    if root.tag != "Field":
        raise FieldXmlError(
            field_xml, f"Expected a <Field> element, got <{root.tag}>"
        )

    internal_name = root.get("InternalName") or root.get("Name")
    if not internal_name:
        raise FieldXmlError(field_xml, "Field schema XML has no InternalName")

    return FieldSchema(
        id=root.get("ID"),
        internal_name=internal_name,
        display_name=root.get("DisplayName") or internal_name,
        schema_xml=field_xml,
    )
