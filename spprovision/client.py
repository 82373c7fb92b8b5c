"""
Connection to a SharePoint site through office365-rest-python-client.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from office365.runtime.auth.client_credential import ClientCredential
from office365.runtime.auth.user_credential import UserCredential
from office365.runtime.client_request_exception import ClientRequestException
from office365.sharepoint.client_context import ClientContext
from office365.sharepoint.lists.creation_information import ListCreationInformation

from spprovision.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SiteCredentials:
    """Site URL plus either app-only or user credentials."""

    site_url: str
    client_id: str | None = None
    client_secret: str | None = None
    username: str | None = None
    password: str | None = None

    @property
    def is_app_only(self) -> bool:
        return bool(self.client_id and self.client_secret)


@dataclass
class EnsureListResult:
    """Outcome of ``ensure_list``."""

    created: bool
    list: Any
    data: dict[str, Any]


def connect(credentials: SiteCredentials) -> ClientContext:
    """Build a client context for the configured site."""
    site_url = credentials.site_url.rstrip("/")
    if credentials.is_app_only:
        logger.info(f"Connecting to {site_url} with app credentials")
        return ClientContext(site_url).with_credentials(
            ClientCredential(credentials.client_id, credentials.client_secret)
        )
    if credentials.username and credentials.password:
        logger.info(f"Connecting to {site_url} as {credentials.username}")
        return ClientContext(site_url).with_credentials(
            UserCredential(credentials.username, credentials.password)
        )
    raise ConfigurationError(
        "sp_client_id",
        "Either client_id/client_secret or username/password is required",
    )


def is_not_found(exc: Exception) -> bool:
    """True when ``exc`` is a SharePoint 404 response."""
    if not isinstance(exc, ClientRequestException):
        return False
    response = getattr(exc, "response", None)
    return response is not None and response.status_code == 404


def ensure_list(
    web,
    title: str,
    description: str = "",
    template: int = 100,
    content_types_enabled: bool = False,
    additional_settings: dict[str, Any] | None = None,
) -> EnsureListResult:
    """
    Return the list titled ``title``, creating it when it does not exist.

    ``content_types_enabled`` and ``additional_settings`` are applied to the
    list in both cases.

    Raises:
        ClientRequestException: For any remote error other than the list
            lookup returning 404.
    """
    created = False
    try:
        lst = web.lists.get_by_title(title).get().execute_query()
        logger.debug(f"List {title} already exists")
    except ClientRequestException as exc:
        if not is_not_found(exc):
            raise
        info = ListCreationInformation()
        info.Title = title
        info.Description = description
        info.BaseTemplate = template
        lst = web.lists.add(info).execute_query()
        created = True

    settings = {"ContentTypesEnabled": content_types_enabled}
    settings.update(additional_settings or {})
    for name, value in settings.items():
        lst.set_property(name, value)
    lst.update().execute_query()

    return EnsureListResult(created=created, list=lst, data=dict(lst.properties))
