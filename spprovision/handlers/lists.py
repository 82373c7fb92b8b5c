"""
Provisioning of SharePoint lists, their fields, field refs and views.

Every remote call is executed before the next one is queued. Lists are
processed phase by phase (lists, fields, field refs, views) so lookup fields
can reference any list of the configuration, and no two writes ever target
the same list concurrently.
"""

from __future__ import annotations

import logging
from typing import Any

from office365.runtime.client_request_exception import ClientRequestException
from office365.sharepoint.views.create_information import ViewCreationInformation

from spprovision.client import ensure_list, is_not_found
from spprovision.field_xml import parse_field_xml
from spprovision.handlers.base import HandlerBase
from spprovision.schema import ListDefinition, ListFieldRef, ListView
from spprovision.tokens import ProvisionedList, TokenReplacer

logger = logging.getLogger(__name__)

# Folder content types are never removed from a list
FOLDER_CONTENT_TYPE_ID = "0x0120"


class ListsHandler(HandlerBase):
    """Provisions lists described by ``ListDefinition`` objects."""

    def __init__(self) -> None:
        super().__init__("Lists")
        self.tokens = TokenReplacer()

    def provision_objects(self, web, lists: list[ListDefinition]) -> None:
        """
        Provision ``lists`` on ``web``.

        Args:
            web: The office365 ``Web`` of the target site.
            lists: List definitions, processed in order.
        """
        self.scope_started()
        try:
            for list_config in lists:
                self.process_list(web, list_config)
            for list_config in lists:
                self.process_fields(web, list_config)
            for list_config in lists:
                self.process_field_refs(web, list_config)
            for list_config in lists:
                self.process_views(web, list_config)
        finally:
            self.scope_ended()

    # ---------------------------------------------------------------------
    # Lists and content types
    # ---------------------------------------------------------------------

    def process_list(self, web, list_config: ListDefinition) -> None:
        result = ensure_list(
            web,
            list_config.title,
            list_config.description,
            list_config.template,
            list_config.content_types_enabled,
            list_config.additional_settings,
        )
        self.tokens.remember(
            ProvisionedList(
                title=result.data.get("Title", list_config.title),
                id=result.data.get("Id"),
            )
        )
        if result.created:
            logger.info(f"List {list_config.title} created successfully.")
        self.process_content_type_bindings(list_config, result.list)

    def process_content_type_bindings(self, list_config: ListDefinition, lst) -> None:
        bindings = list_config.content_type_bindings
        if not bindings:
            return

        for binding in bindings:
            lst.content_types.add_available_content_type(
                binding.content_type_id
            ).execute_query()
            logger.info(
                f"Content Type {binding.content_type_id} added successfully "
                f"to list {list_config.title}."
            )

        if not list_config.remove_existing_content_types:
            return

        content_types = lst.content_types.get().execute_query()
        for content_type in list(content_types):
            content_type_id = content_type.id.StringValue
            is_bound = any(
                binding.content_type_id in content_type_id for binding in bindings
            )
            if is_bound or FOLDER_CONTENT_TYPE_ID in content_type_id:
                continue
            logger.info(
                f"Removing content type {content_type_id} "
                f"from list {list_config.title}"
            )
            content_type.delete_object().execute_query()

    # ---------------------------------------------------------------------
    # Fields
    # ---------------------------------------------------------------------

    def process_fields(self, web, list_config: ListDefinition) -> None:
        for field_xml in list_config.fields:
            self.process_field(web, list_config, field_xml)

    def process_field(self, web, list_config: ListDefinition, field_xml: str) -> None:
        lst = web.lists.get_by_title(list_config.title)
        schema = parse_field_xml(self.tokens.replace(field_xml))

        if schema.id:
            # Some field types (lookups) cannot be updated, so they are recreated
            try:
                lst.fields.get_by_id(schema.id).delete_object().execute_query()
                logger.debug(
                    f"Existing field {schema.internal_name} deleted "
                    f"from list {list_config.title}"
                )
            except ClientRequestException as exc:
                logger.debug(
                    f"Field {schema.internal_name} not deleted from list "
                    f"{list_config.title}: {exc}"
                )

        field = lst.fields.create_field_as_xml(schema.creation_xml()).execute_query()
        field.set_property("Title", schema.display_name)
        field.update().execute_query()
        logger.info(
            f"Field '{schema.display_name}' added successfully "
            f"to list {list_config.title}."
        )

    # ---------------------------------------------------------------------
    # Field refs
    # ---------------------------------------------------------------------

    def process_field_refs(self, web, list_config: ListDefinition) -> None:
        for field_ref in list_config.field_refs:
            self.process_field_ref(web, list_config, field_ref)

    def process_field_ref(
        self, web, list_config: ListDefinition, field_ref: ListFieldRef
    ) -> None:
        properties = field_ref.properties()
        if not properties:
            logger.debug(f"Field ref {field_ref.id} has nothing to update")
            return
        lst = web.lists.get_by_title(list_config.title)
        field = lst.fields.get_by_id(field_ref.id)
        for name, value in properties.items():
            field.set_property(name, value)
        field.update().execute_query()
        logger.info(
            f"Field '{field_ref.id}' updated for list {list_config.title}."
        )

    # ---------------------------------------------------------------------
    # Views
    # ---------------------------------------------------------------------

    def process_views(self, web, list_config: ListDefinition) -> None:
        for view in list_config.views:
            self.process_view(web, list_config, view)

    def process_view(self, web, list_config: ListDefinition, view: ListView) -> None:
        lst = web.lists.get_by_title(list_config.title)
        target = self._get_view(lst, view.title)

        if target is None:
            info = ViewCreationInformation()
            info.Title = view.title
            info.PersonalView = view.personal_view
            # Only SP.ViewCreationInformation members are accepted on creation
            creation_keys = set(vars(info))
            for name, value in view.additional_settings.items():
                if name in creation_keys:
                    setattr(info, name, value)
            target = lst.views.add(info).execute_query()
            logger.info(
                f"View {view.title} added successfully to list {list_config.title}."
            )

        if view.additional_settings:
            for name, value in view.additional_settings.items():
                target.set_property(name, value)
            target.update().execute_query()
            logger.info(f"View {view.title} updated for list {list_config.title}.")

        self.process_view_fields(target, view.view_fields)

    def process_view_fields(self, view, view_fields: list[str]) -> None:
        view.view_fields.remove_all_view_fields()
        view.context.execute_query()
        for name in view_fields:
            view.view_fields.add_view_field(name)
            view.context.execute_query()

    def _get_view(self, lst, title: str) -> Any | None:
        try:
            return lst.views.get_by_title(title).get().execute_query()
        except ClientRequestException as exc:
            if not is_not_found(exc):
                raise
            logger.debug(f"View {title} not found in list")
            return None
