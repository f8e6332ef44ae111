"""Application configuration loaded from environment variables."""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class AppConfig:
    """Centralized application configuration.

    Required fields have no defaults and will cause a KeyError at startup
    if the corresponding environment variable is missing. Browsing defaults
    can be overridden via environment variables.
    """

    # Required — no defaults, fail at startup if missing
    client_id: str
    client_secret: str
    tenant_id: str
    drive_user: str

    # Browsing defaults — overridable via env
    home_id: int = 1
    photo_cache_dir: str = "cache"
    page_size: int = 200


def load_config() -> AppConfig:
    """Construct an AppConfig from environment variables.

    Required environment variables:
        PS_CLIENT_ID: Azure AD application (client) ID.
        PS_CLIENT_SECRET: Azure AD application client secret.
        PS_TENANT_ID: Azure AD tenant ID.
        PS_DRIVE_USER: UPN or object ID of the OneDrive user to browse.

    Optional environment variables (with defaults):
        PS_HOME_ID: Entry id given to the drive root (default: 1).
        PS_PHOTO_CACHE_DIR: Directory downloaded photos are written to (default: cache).
        PS_PAGE_SIZE: Page size requested when listing folder children (default: 200).

    Returns:
        Configured AppConfig instance.
    """
    return AppConfig(
        client_id=os.environ["PS_CLIENT_ID"],
        client_secret=os.environ["PS_CLIENT_SECRET"],
        tenant_id=os.environ["PS_TENANT_ID"],
        drive_user=os.environ["PS_DRIVE_USER"],
        home_id=int(os.environ.get("PS_HOME_ID", "1")),
        photo_cache_dir=os.environ.get("PS_PHOTO_CACHE_DIR", "cache"),
        page_size=int(os.environ.get("PS_PAGE_SIZE", "200")),
    )
