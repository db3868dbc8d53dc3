"""Morpheus API adapter for the catalog port, over httpx."""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

import httpx

from morpheus_provisioner.config.schemas.client_schema import ClientConfig
from morpheus_provisioner.domain.base.ports.catalog_port import CatalogPort
from morpheus_provisioner.domain.core.exceptions import ValidationError
from morpheus_provisioner.domain.reference.value_objects import Candidate
from morpheus_provisioner.infrastructure.exceptions import (
    AuthenticationError,
    ResourceNotFoundError,
    ResponseDecodeError,
    TransportError,
)
from morpheus_provisioner.infrastructure.logging.logger import get_logger
from morpheus_provisioner.infrastructure.morpheus.endpoints import object_endpoint, option_endpoint

logger = get_logger(__name__)

SSL_CERT_ERROR_HINT = (
    "The certificate presented by the Morpheus appliance is not trusted. "
    "Fix the certificate, or disable verification with MORPHEUS_API_SECURE=false."
)


def _response_text(response: httpx.Response) -> str:
    return response.text[:2000]


class MorpheusClient(CatalogPort):
    """
    Synchronous Morpheus API client.

    Authenticates with a bearer token, or exchanges a username and password for
    one on first use. Every failure surfaces as a TransportError subclass;
    nothing is retried here.
    """

    def __init__(
        self,
        base_url: str,
        *,
        access_token: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        client_id: str = "morph-api",
        timeout_seconds: float = 30.0,
        verify: bool = True,
        transport: Optional[httpx.BaseTransport] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._access_token = access_token
        self._username = username
        self._password = password
        self._client_id = client_id
        self._owns_client = client is None
        self._client = client or httpx.Client(
            base_url=base_url,
            timeout=timeout_seconds,
            verify=verify,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    @classmethod
    def from_config(cls, config: ClientConfig,
                    transport: Optional[httpx.BaseTransport] = None) -> MorpheusClient:
        """Build a client from validated configuration."""
        if config.insecure:
            logger.warning("SSL certificate verification is disabled", url=config.url)
        return cls(
            config.url,
            access_token=config.access_token,
            username=config.login_username,
            password=config.password,
            client_id=config.client_id,
            timeout_seconds=config.timeout_seconds,
            verify=not config.insecure,
            transport=transport,
        )

    def close(self) -> None:
        """Close underlying transport resources when owned."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> MorpheusClient:
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

    # -- transport ----------------------------------------------------------

    def _authenticate(self) -> str:
        if self._access_token:
            return self._access_token
        if not (self._username and self._password):
            raise AuthenticationError(
                "No access token or username and password configured",
                method="POST", url="/oauth/token",
            )
        logger.debug("Requesting access token", username=self._username)
        body = self._send(
            "POST",
            "/oauth/token",
            params={"client_id": self._client_id, "grant_type": "password", "scope": "write"},
            data={"username": self._username, "password": self._password},
            authenticated=False,
        )
        token = body.get("access_token") if isinstance(body, dict) else None
        if not token:
            raise AuthenticationError(
                "Token response did not contain an access token",
                method="POST", url="/oauth/token",
            )
        self._access_token = token
        return token

    def _send(self, method: str, path: str, *, authenticated: bool = True, **kwargs: Any) -> Any:
        headers = kwargs.pop("headers", {})
        if authenticated:
            headers["Authorization"] = f"Bearer {self._authenticate()}"
        try:
            response = self._client.request(method, path, headers=headers, **kwargs)
        except httpx.ConnectError as e:
            message = f"HTTP request failed for {method} {path}: {e}"
            if "CERTIFICATE_VERIFY_FAILED" in str(e):
                message = f"{message}. {SSL_CERT_ERROR_HINT}"
            raise TransportError(message, method=method, url=path) from e
        except httpx.RequestError as e:
            raise TransportError(
                f"HTTP request failed for {method} {path}: {e}",
                method=method, url=path,
            ) from e

        url = str(response.request.url)
        logger.debug("API response", method=method, url=url, status_code=response.status_code)

        if response.status_code == 404:
            raise ResourceNotFoundError(
                f"HTTP 404 for {method} {url}",
                method=method, url=url, status_code=404,
                response_body=_response_text(response),
            )
        if response.is_error:
            raise TransportError(
                f"HTTP {response.status_code} for {method} {url}",
                method=method, url=url, status_code=response.status_code,
                response_body=_response_text(response),
            )
        if not response.content:
            return {}
        try:
            body = response.json()
        except ValueError as e:
            raise ResponseDecodeError(
                f"Invalid JSON response for {method} {url}",
                method=method, url=url, status_code=response.status_code,
                response_body=_response_text(response),
            ) from e
        # the API reports some failures as 200 with success=false
        if isinstance(body, dict) and body.get("success") is False:
            raise TransportError(
                f"API rejected {method} {url}: {body.get('msg') or body.get('errors')}",
                method=method, url=url, status_code=response.status_code,
                response_body=_response_text(response), details=body,
            )
        return body

    @staticmethod
    def _dig(body: Any, keys: tuple, method: str, url: str) -> Any:
        value = body
        for key in keys:
            if not isinstance(value, dict) or key not in value:
                raise ResponseDecodeError(
                    f"Response for {method} {url} is missing '{'.'.join(keys)}'",
                    method=method, url=url,
                )
            value = value[key]
        return value

    # -- catalog port -------------------------------------------------------

    def list_options(self, category: str, query: Optional[Mapping[str, str]] = None) -> List[Candidate]:
        endpoint = option_endpoint(category)
        body = self._send("GET", endpoint.path, params=dict(query or {}))
        rows = self._dig(body, endpoint.rows, "GET", endpoint.path)
        if rows is None:
            return []
        if not isinstance(rows, list):
            raise ResponseDecodeError(
                f"Expected a list of {category} options from {endpoint.path}",
                method="GET", url=endpoint.path,
            )
        try:
            return [Candidate.from_api(row) for row in rows]
        except ValidationError as e:
            raise ResponseDecodeError(str(e), method="GET", url=endpoint.path) from e

    def get(self, kind: str, object_id: Any) -> Dict[str, Any]:
        endpoint = object_endpoint(kind)
        path = f"{endpoint.path}/{object_id}"
        body = self._send("GET", path)
        return self._dig(body, (endpoint.item_key,), "GET", path)

    def list_objects(self, kind: str, query: Optional[Mapping[str, str]] = None) -> List[Dict[str, Any]]:
        endpoint = object_endpoint(kind)
        body = self._send("GET", endpoint.path, params=dict(query or {}))
        return self._dig(body, (endpoint.list_key,), "GET", endpoint.path) or []

    def create_instance(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        path = object_endpoint("instance").path
        body = self._send("POST", path, json=payload)
        return self._dig(body, ("instance",), "POST", path)

    def update_instance(self, instance_id: Any, payload: Dict[str, Any]) -> Dict[str, Any]:
        path = f"{object_endpoint('instance').path}/{instance_id}"
        body = self._send("PUT", path, json=payload)
        return self._dig(body, ("instance",), "PUT", path)

    def delete_instance(self, instance_id: Any, force: bool = False) -> None:
        path = f"{object_endpoint('instance').path}/{instance_id}"
        params = {"force": "true"} if force else {}
        self._send("DELETE", path, params=params)
