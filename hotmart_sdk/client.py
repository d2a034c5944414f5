"""
Hotmart SDK HTTP Client

Authenticated transport for the Hotmart REST API. Obtains a
client-credentials access token on demand, caches it until shortly
before expiry, attaches it to every request and turns transport and
API failures into HotmartError subclasses.
"""

import asyncio
import base64
import logging
import time
from typing import Any, Dict, Literal, Optional

import httpx

from .types import AccessToken, HotmartConfig
from .errors import (
    ApiError,
    AuthenticationError,
    ConfigurationError,
    NetworkError,
    UnauthorizedError,
)
from .storage import TokenCache, TokenState


logger = logging.getLogger("hotmart_sdk")

HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]


class HotmartHttpClient:
    """
    Hotmart HTTP Client - asynchronous transport shared by all services.

    Every verb call runs the same pipeline: ensure a valid token, dispatch
    the request with a bearer header, and on a 401 drop the cached token so
    the next call re-authenticates. Failed calls are never retried.
    """

    def __init__(self, config: HotmartConfig) -> None:
        """Initialize the transport."""
        self._validate_config(config)

        self._client_id = config.client_id
        self._client_secret = config.client_secret
        self._base_url = config.api_base_url
        self._auth_url = config.auth_url
        self._timeout = config.timeout
        self._debug = config.debug
        self._custom_headers = config.headers or {}

        # State
        self._tokens = TokenCache()
        self._refresh_lock = asyncio.Lock()

        # HTTP client (created lazily)
        self._http_client: Optional[httpx.AsyncClient] = None

        self._log(f"HotmartHttpClient initialized (sandbox={config.is_sandbox}, base_url={self._base_url})")

    def _validate_config(self, config: HotmartConfig) -> None:
        """Validate configuration."""
        if not config.client_id:
            raise ConfigurationError("client_id is required")
        if not config.client_secret:
            raise ConfigurationError("client_secret is required")

    def _log(self, message: str, *args: Any) -> None:
        """Log debug message."""
        if self._debug:
            logger.debug(f"[Hotmart] {message}", *args)

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self._timeout)
        return self._http_client

    def _now_ms(self) -> int:
        return int(time.time() * 1000)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def token_state(self) -> TokenState:
        """Absent before the first exchange, valid while cached, stale after expiry or a 401."""
        return self._tokens.state(self._now_ms())

    # =========================================================================
    # Token lifecycle
    # =========================================================================

    async def authenticate(self) -> AccessToken:
        """
        Perform a client-credentials exchange and cache the issued token.

        Raises:
            AuthenticationError: If the exchange fails for any reason. The
                cache is left untouched.
        """
        basic_auth = base64.b64encode(
            f"{self._client_id}:{self._client_secret}".encode("utf-8")
        ).decode("ascii")

        self._log("Requesting access token")

        try:
            response = await self._get_client().post(
                self._auth_url,
                params={
                    "grant_type": "client_credentials",
                    "client_id": self._client_id,
                    "client_secret": self._client_secret,
                },
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Basic {basic_auth}",
                },
            )
        except httpx.TimeoutException:
            raise AuthenticationError(f"timeout of {self._timeout}s exceeded", details={"timeout": self._timeout})
        except httpx.RequestError as e:
            raise AuthenticationError(str(e) or e.__class__.__name__)

        body = self._decode_body(response)

        if not response.is_success:
            error = ApiError.from_api_response(body, response.status_code)
            raise AuthenticationError(error.message, response.status_code, {
                "error": error.error,
                "error_description": error.error_description,
            })

        try:
            token = AccessToken.from_dict(body)
        except (KeyError, TypeError, ValueError) as e:
            raise AuthenticationError(f"malformed token response ({e!r})", response.status_code)

        self._tokens.store(token.access_token, token.expires_in, self._now_ms())
        self._log(f"Access token issued (expires_in={token.expires_in}s)")
        return token

    async def _ensure_valid_token(self) -> str:
        """Return a valid token, authenticating first if none is cached."""
        token = self._tokens.get_valid(self._now_ms())
        if token:
            return token

        async with self._refresh_lock:
            # Another caller may have refreshed while we waited
            token = self._tokens.get_valid(self._now_ms())
            if token:
                return token
            result = await self.authenticate()
            return result.access_token

    async def get_access_token(self) -> str:
        """Get a valid access token (authenticates if needed)."""
        return await self._ensure_valid_token()

    def invalidate_token(self) -> None:
        """Drop the cached token; the next request re-authenticates."""
        self._tokens.invalidate()

    # =========================================================================
    # Request pipeline
    # =========================================================================

    async def request(
        self,
        method: HttpMethod,
        path: str,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """
        Make an authenticated request and return the decoded body.

        Raises:
            AuthenticationError: If a token could not be obtained. No API
                request is sent in that case.
            UnauthorizedError: On a 401 response.
            ApiError: On any other non-2xx response.
            NetworkError: On connection failures and timeouts.
        """
        token = await self._ensure_valid_token()

        url = f"{self._base_url}/{path.lstrip('/')}"
        request_headers: Dict[str, str] = {
            "Content-Type": "application/json",
            **self._custom_headers,
            **(headers or {}),
        }
        request_headers["Authorization"] = f"Bearer {token}"

        try:
            response = await self._get_client().request(
                method=method,
                url=url,
                params=params,
                json=json,
                headers=request_headers,
            )
        except httpx.TimeoutException:
            raise NetworkError(f"timeout of {self._timeout}s exceeded", {"timeout": self._timeout})
        except httpx.RequestError as e:
            raise NetworkError(str(e) or e.__class__.__name__)

        return self._handle_response(response, token)

    def _handle_response(self, response: httpx.Response, token: str) -> Any:
        """Return the decoded body or raise the matching error.

        A 401 discards the cached token only while it is still the one
        this request carried. A late 401 for a token that was already
        replaced leaves the newer token cached.
        """
        body = self._decode_body(response)

        if response.is_success:
            return body

        if response.status_code == 401:
            if self._tokens.invalidate(token):
                self._log("401 received, access token discarded")
            raise UnauthorizedError.from_api_response(body, response.status_code)

        raise ApiError.from_api_response(body, response.status_code)

    @staticmethod
    def _decode_body(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    async def get(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        return await self.request("GET", path, params=params, headers=headers)

    async def post(
        self,
        path: str,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        return await self.request("POST", path, json=json, params=params, headers=headers)

    async def put(
        self,
        path: str,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        return await self.request("PUT", path, json=json, params=params, headers=headers)

    async def patch(
        self,
        path: str,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        return await self.request("PATCH", path, json=json, params=params, headers=headers)

    async def delete(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        return await self.request("DELETE", path, params=params, headers=headers)

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "HotmartHttpClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()
