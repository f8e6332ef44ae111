"""Microsoft Graph API client with MSAL authentication."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any
from urllib import request as urllib_request
from urllib.error import HTTPError

import msal

if TYPE_CHECKING:
    from photo_shell.config import AppConfig

logger = logging.getLogger(__name__)

GRAPH_BASE_URL = "https://graph.microsoft.com/v1.0"
GRAPH_SCOPES = ["https://graph.microsoft.com/.default"]
AUTHORITY_BASE_URL = "https://login.microsoftonline.com"


class GraphAuthError(Exception):
    """Raised when MSAL token acquisition fails."""


class GraphApiError(Exception):
    """Raised when the Graph API returns a non-2xx response."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"Graph API error {status_code}: {message}")
        self.status_code = status_code
        self.message = message


class GraphClient:
    """Authenticated client for Microsoft Graph API."""

    def __init__(self, client_id: str, client_secret: str, tenant_id: str) -> None:
        """Initialise the MSAL confidential client application.

        Args:
            client_id: Azure AD application (client) ID.
            client_secret: Azure AD application client secret.
            tenant_id: Azure AD tenant ID.
        """
        authority = f"{AUTHORITY_BASE_URL}/{tenant_id}"
        self._app = msal.ConfidentialClientApplication(
            client_id=client_id,
            client_credential=client_secret,
            authority=authority,
        )

    def _acquire_token(self) -> str:
        """Acquire a Bearer token using client credentials flow.

        MSAL keeps the token in its in-memory cache, so repeated calls only
        reach the identity platform once the token is close to expiry.

        Returns:
            Access token string.

        Raises:
            GraphAuthError: If MSAL cannot acquire a token.
        """
        result: dict[str, Any] = self._app.acquire_token_for_client(scopes=GRAPH_SCOPES) or {}
        if "access_token" not in result:
            error = result.get("error", "unknown_error")
            description = result.get("error_description", "No description provided")
            logger.error("[_acquire_token] MSAL token acquisition failed; error:%s", error)
            raise GraphAuthError(f"Token acquisition failed: {error} — {description}")
        return str(result["access_token"])

    def _open(self, path: str, accept: str) -> bytes:
        """Send an authenticated GET and return the raw response body.

        Raises:
            GraphAuthError: If token acquisition fails.
            GraphApiError: If the API returns a non-2xx status code.
        """
        token = self._acquire_token()
        url = path if path.startswith(GRAPH_BASE_URL) else f"{GRAPH_BASE_URL}{path}"
        req = urllib_request.Request(url, headers={"Accept": accept}, method="GET")
        # Not forwarded on redirect; /content redirects to a pre-authenticated URL.
        req.add_unredirected_header("Authorization", f"Bearer {token}")
        try:
            with urllib_request.urlopen(req) as resp:
                return resp.read()  # type: ignore[no-any-return]
        except HTTPError as exc:
            raw = exc.read()
            try:
                detail = json.loads(raw).get("error", {}).get("message", exc.reason)
            except Exception:
                detail = exc.reason
            raise GraphApiError(exc.code, detail) from exc

    def get(self, path: str) -> dict[str, Any]:
        """Perform an authenticated GET request to the Graph API.

        Args:
            path: URL path relative to GRAPH_BASE_URL (must start with '/'),
                or an absolute @odata.nextLink URL.

        Returns:
            Parsed JSON response body as a dict.

        Raises:
            GraphAuthError: If token acquisition fails.
            GraphApiError: If the API returns a non-2xx status code.
        """
        body = self._open(path, accept="application/json")
        return json.loads(body)  # type: ignore[no-any-return]

    def get_content(self, path: str) -> bytes:
        """Download raw item content from the Graph API.

        Graph answers ``/content`` requests with a redirect to a pre-authenticated
        download URL; urllib follows it transparently.

        Args:
            path: URL path relative to GRAPH_BASE_URL (must start with '/').

        Returns:
            Raw response bytes.

        Raises:
            GraphAuthError: If token acquisition fails.
            GraphApiError: If the API returns a non-2xx status code.
        """
        return self._open(path, accept="*/*")


def graph_client_from_config(config: AppConfig) -> GraphClient:
    """Construct a GraphClient from application configuration.

    Args:
        config: Application configuration instance.

    Returns:
        Configured GraphClient instance.
    """
    return GraphClient(
        client_id=config.client_id,
        client_secret=config.client_secret,
        tenant_id=config.tenant_id,
    )
