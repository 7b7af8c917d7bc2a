"""Registry HTTP client.

One method per registry call used by the publish pipeline. Each returns an
ApiResponse with the status code and the decoded body; interpreting the
status is left to the caller. Transport errors (requests.RequestException)
propagate.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version
from typing import Any
from urllib.parse import quote

import requests

from .models import ApiKey, ApiResponse, Auth, Credentials, Metadata

DEFAULT_API_URL = "http://localhost:4000/api"


def _user_agent() -> str:
    try:
        return f"pkgpush/{pkg_version('pkgpush')}"
    except PackageNotFoundError:
        return "pkgpush"


def decode_body(response: requests.Response) -> Any:
    """Decode a response body: JSON when possible, else text, None if empty."""
    if not response.content:
        return None
    if "json" in response.headers.get("Content-Type", ""):
        try:
            return response.json()
        except ValueError:
            pass
    return response.text


class RegistryClient:
    """Client for the registry's package and release endpoints.

    Args:
        api_url: Base URL of the registry API (e.g., "https://host/api").
        timeout: Seconds to wait for each request; None waits forever.
        session: Optional requests.Session to reuse.
    """

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {"Accept": "application/json", "User-Agent": _user_agent()}
        )

    def _url(self, *parts: str) -> str:
        return "/".join([self.api_url, *(quote(p, safe="") for p in parts)])

    def _request(self, method: str, url: str, auth: Auth, **kwargs: Any) -> ApiResponse:
        headers = dict(kwargs.pop("headers", {}))
        basic = None
        if isinstance(auth, Credentials):
            basic = (auth.username, auth.password)
        elif isinstance(auth, ApiKey):
            headers["Authorization"] = auth.key
        response = self.session.request(
            method, url, auth=basic, headers=headers, timeout=self.timeout, **kwargs
        )
        return ApiResponse(status_code=response.status_code, body=decode_body(response))

    def upsert_package(self, name: str, metadata: Metadata, auth: Auth) -> ApiResponse:
        """Create the package if it does not exist, otherwise update it."""
        return self._request(
            "PUT", self._url("packages", name), auth, json={"meta": metadata.to_payload()}
        )

    def upload_release(self, name: str, archive: bytes, auth: Auth) -> ApiResponse:
        """Upload a release archive for an existing package."""
        return self._request(
            "POST",
            self._url("packages", name, "releases"),
            auth,
            data=archive,
            headers={"Content-Type": "application/octet-stream"},
        )

    def delete_release(self, name: str, version: str, auth: Auth) -> ApiResponse:
        """Delete (revert) a published release."""
        return self._request(
            "DELETE", self._url("packages", name, "releases", version), auth
        )

    def close(self) -> None:
        self.session.close()
