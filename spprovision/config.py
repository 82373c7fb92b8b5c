"""
Connection settings read from the environment (and an optional .env file).

Expected variables::

    sp_site_url=https://yourtenant.sharepoint.com/sites/yoursite
    sp_client_id=your-app-client-id
    sp_client_secret=your-client-secret-value

or, for user authentication, ``sp_username`` and ``sp_password`` instead of
the client id and secret.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import dotenv

from spprovision.client import SiteCredentials
from spprovision.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def _get_required_env(key: str) -> str:
    value = os.getenv(key)
    if not value:
        raise ConfigurationError(key)
    return value


def load_settings(
    env_file: str | Path | None = None, *, site_url: str | None = None
) -> SiteCredentials:
    """
    Load site credentials from the environment.

    Args:
        env_file: Optional .env file; when omitted python-dotenv searches for
            one starting from the working directory.
        site_url: Overrides ``sp_site_url``.

    Raises:
        ConfigurationError: If a required variable is missing.
    """
    if env_file is not None:
        dotenv.load_dotenv(env_file)
    else:
        dotenv.load_dotenv(dotenv.find_dotenv(usecwd=True))

    site_url = site_url or _get_required_env("sp_site_url")

    client_id = os.getenv("sp_client_id")
    if client_id:
        logger.debug("Using app-only credentials")
        return SiteCredentials(
            site_url=site_url,
            client_id=client_id,
            client_secret=_get_required_env("sp_client_secret"),
        )

    if os.getenv("sp_username"):
        logger.debug("Using user credentials")
        return SiteCredentials(
            site_url=site_url,
            username=_get_required_env("sp_username"),
            password=_get_required_env("sp_password"),
        )

    raise ConfigurationError(
        "sp_client_id",
        "Missing credentials: set sp_client_id/sp_client_secret "
        "or sp_username/sp_password",
    )
