"""
sharepoint-provision: Declarative provisioning of SharePoint lists.

Creates lists, their fields, field refs and views on a SharePoint site from a
JSON template, talking to SharePoint through office365-rest-python-client.
"""

from pathlib import Path

from spprovision.client import SiteCredentials, connect, ensure_list
from spprovision.handlers.lists import ListsHandler
from spprovision.schema import (
    ContentTypeBinding,
    ListDefinition,
    ListFieldRef,
    ListView,
    load_list_definitions,
)

__version__ = "0.1.0"


def provision_lists(web, source: str | Path | list[ListDefinition]) -> ListsHandler:
    """
    Provision the lists described by ``source`` on ``web``.

    Args:
        web: The office365 ``Web`` of the target site.
        source: Path to a JSON template, JSON text, or parsed definitions.

    Returns:
        The handler used, whose ``tokens.lists`` holds the provisioned lists.

    Example:
        >>> import spprovision
        >>> ctx = spprovision.connect(credentials)
        >>> spprovision.provision_lists(ctx.web, "lists.json")
    """
    if isinstance(source, list):
        definitions = source
    else:
        definitions = load_list_definitions(source)
    handler = ListsHandler()
    handler.provision_objects(web, definitions)
    return handler


__all__ = [
    # Version
    "__version__",
    # Main functions
    "provision_lists",
    "load_list_definitions",
    "connect",
    "ensure_list",
    # Handlers
    "ListsHandler",
    # Descriptors
    "SiteCredentials",
    "ListDefinition",
    "ListFieldRef",
    "ListView",
    "ContentTypeBinding",
]
