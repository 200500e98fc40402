"""Namespace lookup against the Kubernetes REST API using httpx.

Runs on the admission request path, so every call is bounded by the client
timeout and never retried here.
"""

import logging
import os
from typing import Dict, Optional

import httpx

from ....config.settings import GovernanceSettings
from ....core.exceptions import NamespaceLookupError

logger = logging.getLogger(__name__)


class KubeNamespaceLookup:
    """Reads namespace labels with a service-account bearer token."""

    def __init__(
        self,
        api_url: str,
        token: Optional[str] = None,
        ca_path: Optional[str] = None,
        timeout: float = 2.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the lookup.

        Args:
            api_url: Kubernetes API server base URL
            token: Bearer token; omitted from requests when None
            ca_path: CA bundle for the API server certificate
            timeout: Per-request timeout in seconds
            transport: Optional transport override
        """
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self._client = httpx.AsyncClient(
            base_url=api_url.rstrip("/"),
            headers=headers,
            verify=ca_path if ca_path else True,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: GovernanceSettings) -> "KubeNamespaceLookup":
        token = None
        if settings.kube_token_path and os.path.exists(settings.kube_token_path):
            with open(settings.kube_token_path) as f:
                token = f.read().strip()
        ca_path = settings.kube_ca_path
        if ca_path and not os.path.exists(ca_path):
            logger.warning(f"Kubernetes CA bundle {ca_path} not found, using system trust store")
            ca_path = None
        return cls(
            settings.kube_api_url,
            token=token,
            ca_path=ca_path,
            timeout=settings.admission_lookup_timeout_seconds,
        )

    async def get_namespace(self, name: str) -> Optional[Dict[str, str]]:
        try:
            response = await self._client.get(f"/api/v1/namespaces/{name}")
        except httpx.TimeoutException as e:
            raise NamespaceLookupError(f"timed out looking up namespace {name}: {e}")
        except httpx.HTTPError as e:
            raise NamespaceLookupError(f"failed to look up namespace {name}: {e}")

        if response.status_code == 404:
            return None
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise NamespaceLookupError(
                f"namespace {name} lookup returned {e.response.status_code}",
                details={"status_code": e.response.status_code},
            )

        try:
            body = response.json()
        except ValueError as e:
            raise NamespaceLookupError(f"namespace {name} lookup returned invalid JSON: {e}")

        metadata = body.get("metadata") or {}
        return dict(metadata.get("labels") or {})

    async def close(self) -> None:
        await self._client.aclose()
