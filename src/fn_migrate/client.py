"""
OpenFaaS gateway API client for reading cluster info and listing,
reading, creating and updating functions.
"""

from __future__ import annotations

import logging

import requests

from .config import DEFAULT_TIMEOUT, validate_name
from .models import ClusterInfo, Endpoint, FunctionDefinition, FunctionSummary

__all__ = ["GatewayClient", "GatewayError"]

logger = logging.getLogger(__name__)

# Response bodies quoted in error messages are cut to this length.
_MAX_ERROR_BODY = 500


class GatewayError(Exception):
    """Raised when a gateway request fails or returns a non-2xx status."""

    def __init__(
        self,
        method: str,
        url: str,
        status_code: int | None = None,
        body: str = "",
        reason: str = "",
    ):
        self.method = method
        self.url = url
        self.status_code = status_code
        self.body = body
        if status_code is not None:
            detail = f"HTTP {status_code}"
            if body:
                detail += f": {body}"
        else:
            detail = reason or "request failed"
        super().__init__(f"{method} {url} failed - {detail}")


def _build_session(endpoint: Endpoint) -> requests.Session:
    """Create a requests.Session with basic auth and JSON headers."""
    session = requests.Session()
    if endpoint.username or endpoint.password:
        session.auth = (endpoint.username, endpoint.password)
    session.headers.update({
        "Content-Type": "application/json",
        "Accept": "application/json",
    })
    return session


class GatewayClient:
    """HTTP client for one OpenFaaS gateway.

    The session can be injected for testing.
    """

    def __init__(
        self,
        endpoint: Endpoint,
        session: requests.Session | None = None,
        timeout: float | tuple[float, float] = DEFAULT_TIMEOUT,
    ):
        self.endpoint = endpoint
        self.api_url = endpoint.base_url.rstrip("/")
        self.session = session or _build_session(endpoint)
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"GatewayClient(api_url={self.api_url!r}, user={self.endpoint.username!r})"

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _request(
        self,
        method: str,
        path: str,
        params: dict | None = None,
        body: dict | None = None,
    ) -> requests.Response:
        """Send a request and raise GatewayError on transport or HTTP failure."""
        url = f"{self.api_url}{path}"
        logger.debug("%s %s %s", method, url, params or "")
        try:
            resp = self.session.request(
                method, url, params=params, json=body, timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise GatewayError(method, url, reason=str(exc)) from exc

        if resp.status_code >= 300:
            raise GatewayError(
                method, url,
                status_code=resp.status_code,
                body=(resp.text or "").strip()[:_MAX_ERROR_BODY],
            )
        return resp

    def _get_json(self, path: str, params: dict | None = None):
        resp = self._request("GET", path, params=params)
        try:
            return resp.json()
        except ValueError as exc:
            raise GatewayError(
                "GET", f"{self.api_url}{path}", reason=f"invalid JSON response: {exc}",
            ) from exc

    # ------------------------------------------------------------------
    # Cluster info
    # ------------------------------------------------------------------

    def get_info(self) -> ClusterInfo:
        """GET /system/info"""
        return ClusterInfo.from_api(self._get_json("/system/info") or {})

    # ------------------------------------------------------------------
    # Functions
    # ------------------------------------------------------------------

    def list_functions(self, namespace: str) -> list[FunctionSummary]:
        """GET /system/functions?namespace={ns}"""
        validate_name(namespace, "namespace")
        items = self._get_json("/system/functions", params={"namespace": namespace}) or []
        summaries = [FunctionSummary.from_api(item) for item in items if item.get("name")]
        logger.info("Found %d function(s) in namespace '%s'", len(summaries), namespace)
        return summaries

    def get_function(self, name: str, namespace: str) -> FunctionDefinition:
        """GET /system/function/{name}?namespace={ns}"""
        validate_name(name, "function name")
        validate_name(namespace, "namespace")
        data = self._get_json(f"/system/function/{name}", params={"namespace": namespace})
        return FunctionDefinition.from_api(data or {})

    def lookup_function(self, name: str, namespace: str) -> FunctionDefinition | None:
        """Look up a function, distinguishing absence from failure.

        Returns:
            The definition if the function exists, or None if the gateway
            answers 404.  Any other failure raises GatewayError.
        """
        try:
            return self.get_function(name, namespace)
        except GatewayError as exc:
            if exc.status_code == 404:
                logger.debug("Function '%s' not found in namespace '%s'", name, namespace)
                return None
            raise

    def deploy(self, definition: FunctionDefinition) -> int:
        """POST /system/functions - create a function, return the status code."""
        resp = self._request("POST", "/system/functions", body=definition.to_deployment())
        return resp.status_code

    def update(self, definition: FunctionDefinition) -> int:
        """PUT /system/functions - update a function, return the status code."""
        resp = self._request("PUT", "/system/functions", body=definition.to_deployment())
        return resp.status_code
