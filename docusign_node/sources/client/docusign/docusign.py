"""DocuSign eSignature REST client.

This module provides the authenticated, account-scoped request executor used by
the DocuSign node. Access tokens come either from an OAuth flow run by the host
or from a JWT grant performed through the official DocuSign eSignature SDK.
"""

import asyncio
import time
from typing import Any, Dict, Optional, Union

from aiolimiter import AsyncLimiter
from docusign_esign import ApiClient, ApiException
from pydantic import BaseModel, Field

from docusign_node.config.constants.docusign import (
    API_VERSION,
    DEMO_BASE_URL,
    OAUTH_BASE_URLS,
    PRODUCTION_BASE_URLS,
    Environment,
    Region,
)
from docusign_node.config.constants.http_status_code import HttpStatusCode
from docusign_node.config.settings import get_settings
from docusign_node.exceptions.docusign_exceptions import DocuSignApiError, DocuSignNodeError
from docusign_node.sources.client.http.http_client import HTTPClient
from docusign_node.sources.client.http.http_request import HTTPRequest
from docusign_node.sources.client.http.http_response import HTTPResponse
from docusign_node.sources.client.iclient import IClient
from docusign_node.utils.logger import create_logger

logger = create_logger("docusign_client")

# Refresh JWT tokens this many seconds before they expire
TOKEN_REFRESH_MARGIN = 60


class DocuSignClientError(DocuSignNodeError):
    """Raised when the client cannot be built or authenticated."""


def get_base_url(environment: Union[Environment, str], region: Union[Region, str] = Region.NA) -> str:
    """Return the REST base URL for an environment and region, including the API version.

    The demo environment has a single host; production is split by region.
    """
    environment = Environment(environment)
    if environment == Environment.DEMO:
        return f"{DEMO_BASE_URL}/{API_VERSION}"
    return f"{PRODUCTION_BASE_URLS[Region(region or Region.NA)]}/{API_VERSION}"


class DocuSignRESTClientViaToken(HTTPClient):
    """DocuSign client via an OAuth 2.0 access token obtained by the host."""

    def __init__(
        self,
        access_token: str,
        timeout: float = 30.0,
        **kwargs: Any,
    ) -> None:
        if not access_token:
            raise ValueError("access_token cannot be empty")
        super().__init__(token=access_token, token_type="Bearer", timeout=timeout, **kwargs)
        self.access_token = access_token
        self.headers.update({"Accept": "application/json"})

    async def ensure_token(self) -> None:
        # Token lifetime is managed by the host's OAuth flow
        return None


class DocuSignRESTClientViaJWT(HTTPClient):
    """DocuSign client via JWT grant (server-to-server), using the official SDK for the token exchange."""

    def __init__(
        self,
        client_id: str,
        user_id: str,
        private_key_data: str,
        environment: Union[Environment, str] = Environment.DEMO,
        expires_in: int = 3600,
        scopes: Optional[list[str]] = None,
        timeout: float = 30.0,
        **kwargs: Any,
    ) -> None:
        if not private_key_data:
            raise ValueError("private_key_data cannot be empty")
        super().__init__(token="", token_type="Bearer", timeout=timeout, **kwargs)
        self.client_id = client_id
        self.user_id = user_id
        self.private_key_data = private_key_data
        self.oauth_host_name = OAUTH_BASE_URLS[Environment(environment)]
        self.expires_in = expires_in
        self.scopes = scopes or ["signature", "impersonation"]
        self.access_token: Optional[str] = None
        self.token_expires_at = 0.0
        self.headers.update({"Accept": "application/json"})

    def fetch_access_token(self) -> str:
        """Run the JWT grant against the DocuSign account server."""
        api_client = ApiClient()
        api_client.set_oauth_host_name(self.oauth_host_name)
        try:
            token = api_client.request_jwt_user_token(
                client_id=self.client_id,
                user_id=self.user_id,
                oauth_host_name=self.oauth_host_name,
                private_key_bytes=self.private_key_data.encode(),
                expires_in=self.expires_in,
                scopes=self.scopes,
            )
        except ApiException as e:
            # str(e) fails when the SDK raises without an http response
            raise DocuSignClientError(
                f"JWT grant failed: {e.status} {e.reason}",
                {"status": e.status, "reason": e.reason, "body": getattr(e, "body", None)},
            ) from e

        self.access_token = token.access_token
        self.token_expires_at = time.time() + int(getattr(token, "expires_in", None) or self.expires_in)
        self.set_token(self.access_token)
        return self.access_token

    async def ensure_token(self) -> None:
        if self.access_token and time.time() < self.token_expires_at - TOKEN_REFRESH_MARGIN:
            return
        # The SDK is synchronous
        await asyncio.to_thread(self.fetch_access_token)


# ============================================================
# Config Models
# ============================================================


def _rate_limiter_from_settings() -> Optional[AsyncLimiter]:
    rate = get_settings().rate_limit_per_second
    if not rate:
        return None
    return AsyncLimiter(rate, 1)


class DocuSignTokenConfig(BaseModel):
    access_token: str
    account_id: str
    environment: Environment = Field(default_factory=lambda: get_settings().environment)
    region: Region = Field(default_factory=lambda: get_settings().region)
    base_url: Optional[str] = None

    def create_client(self) -> DocuSignRESTClientViaToken:
        return DocuSignRESTClientViaToken(
            access_token=self.access_token,
            timeout=get_settings().timeout,
            rate_limiter=_rate_limiter_from_settings(),
        )


class DocuSignJWTConfig(BaseModel):
    client_id: str
    user_id: str
    account_id: str
    private_key_data: str
    environment: Environment = Field(default_factory=lambda: get_settings().environment)
    region: Region = Field(default_factory=lambda: get_settings().region)
    base_url: Optional[str] = None
    expires_in: int = 3600

    def create_client(self) -> DocuSignRESTClientViaJWT:
        return DocuSignRESTClientViaJWT(
            client_id=self.client_id,
            user_id=self.user_id,
            private_key_data=self.private_key_data,
            environment=self.environment,
            expires_in=self.expires_in,
            timeout=get_settings().timeout,
            rate_limiter=_rate_limiter_from_settings(),
        )


# ============================================================
# Unified Client
# ============================================================


class DocuSignClient(IClient):
    """Account-scoped request executor for the DocuSign eSignature REST API.

    Every path passed to :meth:`request` is relative to
    ``<base url>/accounts/<account id>``. Non-success responses raise
    :class:`DocuSignApiError` carrying the vendor's error body.
    """

    def __init__(
        self,
        client: Union[DocuSignRESTClientViaToken, DocuSignRESTClientViaJWT],
        account_id: str,
        environment: Union[Environment, str] = Environment.DEMO,
        region: Union[Region, str] = Region.NA,
        base_url: Optional[str] = None,
    ) -> None:
        if not account_id:
            raise ValueError("Account ID not set")
        self.client = client
        self.account_id = account_id
        self.environment = Environment(environment)
        self.region = Region(region)
        self.base_url = (base_url or get_base_url(self.environment, self.region)).rstrip("/")

        if self.environment == Environment.DEMO:
            logger.warning("Using DocuSign demo environment. Switch to production before go-live.")

    def get_client(self) -> Union[DocuSignRESTClientViaToken, DocuSignRESTClientViaJWT]:
        return self.client

    def get_base_url(self) -> str:
        return self.base_url

    @property
    def account_url(self) -> str:
        return f"{self.base_url}/accounts/{self.account_id}"

    @classmethod
    def build_with_config(
        cls, config: Union[DocuSignTokenConfig, DocuSignJWTConfig]
    ) -> "DocuSignClient":
        client = config.create_client()
        return cls(
            client=client,
            account_id=config.account_id,
            environment=config.environment,
            region=config.region,
            base_url=config.base_url,
        )

    async def _send(
        self,
        method: str,
        path: str,
        body: Optional[Dict[str, Any]] = None,
        query: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, Any]] = None,
    ) -> HTTPResponse:
        await self.client.ensure_token()
        request = HTTPRequest(
            method=method,
            url=f"{self.account_url}{path}",
            headers=_as_str_dict(headers or {}),
            query_params=_as_str_dict(query or {}),
            body=body,
        )
        response = await self.client.execute(request)

        if response.status >= HttpStatusCode.BAD_REQUEST.value:
            error_body = _parse_error_body(response)
            logger.error(f"DocuSign {method} {path} failed with status {response.status}: {error_body}")
            raise DocuSignApiError(response.status, error_body)
        return response

    async def request(
        self,
        method: str,
        path: str,
        body: Optional[Dict[str, Any]] = None,
        query: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Perform one authenticated JSON request.

        Args:
            method: HTTP method
            path: Path relative to the account URL, e.g. ``/envelopes``
            body: Optional JSON body
            query: Optional query parameters, values are stringified
            headers: Optional extra headers

        Returns:
            The decoded JSON body, or an empty dict for empty responses
        """
        response = await self._send(method, path, body=body, query=query, headers=headers)
        if response.status == HttpStatusCode.NO_CONTENT.value or not response.bytes():
            return {}
        data = response.json()
        if isinstance(data, dict):
            return data
        return {"data": data}

    async def request_binary(
        self,
        method: str,
        path: str,
        query: Optional[Dict[str, Any]] = None,
    ) -> bytes:
        """Perform one authenticated request whose body is a raw byte stream."""
        response = await self._send(method, path, query=query, headers={"Accept": "application/pdf"})
        return response.bytes()

    async def close(self) -> None:
        await self.client.close()

    async def __aenter__(self) -> "DocuSignClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


def _parse_error_body(response: HTTPResponse) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text()


def _to_bool_str(v: Any) -> str:
    if isinstance(v, bool):
        return "true" if v else "false"
    return str(v)


def _serialize_value(v: Any) -> str:
    if v is None:
        return ""
    if isinstance(v, (list, tuple, set)):
        return ",".join(_to_bool_str(x) for x in v)
    return _to_bool_str(v)


def _as_str_dict(d: Dict[str, Any]) -> Dict[str, str]:
    return {str(k): _serialize_value(v) for k, v in (d or {}).items() if v is not None}

