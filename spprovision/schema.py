"""
Declarative list descriptors.

The JSON shape follows the PnP provisioning template for lists, so keys are
PascalCase (``Title``, ``ContentTypeBindings``, ``FieldRefs``...). Every
descriptor is an immutable dataclass parsed with ``from_dict``.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from spprovision.exceptions import ListConfigurationError

logger = logging.getLogger(__name__)

# Generic custom list
DEFAULT_LIST_TEMPLATE = 100


def _require(data: dict[str, Any], key: str, owner: str) -> Any:
    value = data.get(key)
    if value in (None, ""):
        raise ListConfigurationError(f"{owner} is missing required key '{key}'")
    return value


def _as_list(data: dict[str, Any], key: str, owner: str) -> list[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ListConfigurationError(f"{owner}: '{key}' must be an array")
    return value


def _as_dict(data: dict[str, Any], key: str, owner: str) -> dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ListConfigurationError(f"{owner}: '{key}' must be an object")
    return dict(value)


def _as_bool(
    data: dict[str, Any], key: str, owner: str, default: bool | None = False
) -> bool | None:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ListConfigurationError(f"{owner}: '{key}' must be true or false")
    return value


def _ensure_mapping(data: Any, owner: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ListConfigurationError(f"{owner} must be an object")
    return data


@dataclass(frozen=True)
class ContentTypeBinding:
    """A content type to make available on a list."""

    content_type_id: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ContentTypeBinding:
        data = _ensure_mapping(data, "Content type binding")
        return cls(
            content_type_id=_require(data, "ContentTypeID", "Content type binding")
        )


@dataclass(frozen=True)
class ListFieldRef:
    """Overrides applied to an existing list field, looked up by ID."""

    id: str
    display_name: str | None = None
    hidden: bool | None = None
    required: bool | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ListFieldRef:
        data = _ensure_mapping(data, "Field ref")
        field_id = _require(data, "ID", "Field ref")
        owner = f"Field ref '{field_id}'"
        return cls(
            id=field_id,
            display_name=data.get("DisplayName"),
            hidden=_as_bool(data, "Hidden", owner, default=None),
            required=_as_bool(data, "Required", owner, default=None),
        )

    def properties(self) -> dict[str, Any]:
        """Field properties to update; unset overrides are not sent."""
        candidates = {
            "Hidden": self.hidden,
            "Required": self.required,
            "Title": self.display_name,
        }
        return {key: value for key, value in candidates.items() if value is not None}


@dataclass(frozen=True)
class ListView:
    """A view on a list with its ordered view fields."""

    title: str
    view_fields: list[str] = field(default_factory=list)
    personal_view: bool = False
    additional_settings: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ListView:
        data = _ensure_mapping(data, "View")
        title = _require(data, "Title", "View")
        owner = f"View '{title}'"
        return cls(
            title=title,
            view_fields=[str(name) for name in _as_list(data, "ViewFields", owner)],
            personal_view=_as_bool(data, "PersonalView", owner),
            additional_settings=_as_dict(data, "AdditionalSettings", owner),
        )


@dataclass(frozen=True)
class ListDefinition:
    """A list to provision together with its fields, field refs and views."""

    title: str
    description: str = ""
    template: int = DEFAULT_LIST_TEMPLATE
    content_types_enabled: bool = False
    remove_existing_content_types: bool = False
    content_type_bindings: list[ContentTypeBinding] = field(default_factory=list)
    fields: list[str] = field(default_factory=list)
    field_refs: list[ListFieldRef] = field(default_factory=list)
    views: list[ListView] = field(default_factory=list)
    additional_settings: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ListDefinition:
        data = _ensure_mapping(data, "List")
        title = _require(data, "Title", "List")
        owner = f"List '{title}'"

        fields = _as_list(data, "Fields", owner)
        for field_xml in fields:
            if not isinstance(field_xml, str):
                raise ListConfigurationError(
                    f"{owner}: every entry in 'Fields' must be an XML string"
                )

        try:
            template = int(data.get("Template", DEFAULT_LIST_TEMPLATE))
        except (TypeError, ValueError) as exc:
            raise ListConfigurationError(
                f"{owner}: 'Template' must be an integer", cause=exc
            )

        return cls(
            title=title,
            description=data.get("Description") or "",
            template=template,
            content_types_enabled=_as_bool(data, "ContentTypesEnabled", owner),
            remove_existing_content_types=_as_bool(
                data, "RemoveExistingContentTypes", owner
            ),
            content_type_bindings=[
                ContentTypeBinding.from_dict(item)
                for item in _as_list(data, "ContentTypeBindings", owner)
            ],
            fields=list(fields),
            field_refs=[
                ListFieldRef.from_dict(item)
                for item in _as_list(data, "FieldRefs", owner)
            ],
            views=[ListView.from_dict(item) for item in _as_list(data, "Views", owner)],
            additional_settings=_as_dict(data, "AdditionalSettings", owner),
        )


def parse_list_definitions(payload: Any) -> list[ListDefinition]:
    """
    Build list definitions from decoded JSON.

    Accepts either a bare array of lists or a template object carrying a
    top-level ``Lists`` array.
    """
    if isinstance(payload, dict):
        if "Lists" not in payload:
            raise ListConfigurationError("Template object has no 'Lists' array")
        payload = payload["Lists"]
    if not isinstance(payload, list):
        raise ListConfigurationError("Lists must be an array")
    return [ListDefinition.from_dict(item) for item in payload]


def load_list_definitions(source: str | Path) -> list[ListDefinition]:
    """
    Load list definitions from a JSON file or a JSON document string.

    Args:
        source: Path to a JSON file, or the JSON text itself.

    Raises:
        ListConfigurationError: If the JSON is invalid or a list is malformed.
    """
    path = Path(source) if not str(source).lstrip().startswith(("{", "[")) else None
    if path is not None:
        logger.debug(f"Reading list definitions from {path}")
        text = path.read_text(encoding="utf-8")
    else:
        text = str(source)

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ListConfigurationError("Invalid list definition JSON", cause=exc)

    definitions = parse_list_definitions(payload)
    logger.info(f"Loaded {len(definitions)} list definition(s)")
    return definitions
