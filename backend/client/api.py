"""
Async HTTP client for the inventory API.

Every call returns an ApiResult instead of raising, so screens can show
``result.message`` directly. Transport failures are reported as retryable;
idempotent requests are retried automatically per the ClientConfig.
"""

import asyncio
import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx
from pydantic import BaseModel

from .config import ClientConfig
from .helpers import DEFAULT_CATEGORY, is_default_category

logger = logging.getLogger(__name__)

TIMEOUT_MESSAGE = "Request timed out. Please try again."
CONNECT_MESSAGE = "Cannot connect to server. Please check if the backend is running."
NETWORK_MESSAGE = "Network error. Please check your connection."

IDEMPOTENT_METHODS = frozenset({"GET", "PUT", "DELETE"})


def empty_stats() -> dict[str, Any]:
    return {"totalProducts": 0, "categoryCounts": {}, "recentProducts": []}


class ApiResult(BaseModel):
    """Outcome of one API call."""

    success: bool
    message: str = ""
    data: Any = None
    status: Optional[int] = None
    retryable: bool = False


def _error_message(body: Any, status: int) -> str:
    if isinstance(body, dict):
        if body.get("message"):
            return str(body["message"])
        if body.get("error"):
            return str(body["error"])
        errors = body.get("errors")
        if isinstance(errors, list) and errors:
            return ", ".join(
                str(e.get("message") or e.get("msg") or "") for e in errors if isinstance(e, dict)
            )
    return f"HTTP error! status: {status}"


class InventoryClient:
    """
    One authenticated session against the inventory API.

    Usage:
        async with InventoryClient(ClientConfig.for_environment("local")) as client:
            await client.login("alice", "secret1")
            result = await client.get_products(category="Dairy")
    """

    def __init__(
        self,
        config: ClientConfig,
        token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self.token = token
        self._http = httpx.AsyncClient(
            base_url=config.backend_url,
            timeout=config.timeout_seconds,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    async def __aenter__(self) -> "InventoryClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    def _headers(self) -> dict[str, str]:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    async def _send(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: Optional[dict[str, Any]] = None,
    ) -> ApiResult:
        """Issue one request and fold any outcome into an ApiResult."""
        try:
            response = await self._http.request(
                method, path, json=json, params=params, headers=self._headers()
            )
        except httpx.TimeoutException:
            return ApiResult(success=False, message=TIMEOUT_MESSAGE, retryable=True)
        except httpx.ConnectError:
            return ApiResult(success=False, message=CONNECT_MESSAGE, retryable=True)
        except httpx.TransportError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            return ApiResult(success=False, message=NETWORK_MESSAGE, retryable=True)

        try:
            body = response.json() if response.content else {}
        except ValueError:
            return ApiResult(
                success=False,
                message=f"Invalid response from server. Status: {response.status_code}",
                status=response.status_code,
                retryable=response.status_code >= 500,
            )

        if response.is_success:
            data = body.get("data") if isinstance(body, dict) else body
            message = body.get("message", "") if isinstance(body, dict) else ""
            return ApiResult(success=True, message=message, data=data, status=response.status_code)

        if response.status_code >= 500:
            logger.error("API error [%s] on %s %s", response.status_code, method, path)
        return ApiResult(
            success=False,
            message=_error_message(body, response.status_code),
            data=body.get("data") if isinstance(body, dict) else None,
            status=response.status_code,
            retryable=response.status_code >= 500,
        )

    async def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: Optional[dict[str, Any]] = None,
    ) -> ApiResult:
        """Send a request, retrying transport failures of idempotent methods."""
        method = method.upper()
        attempts = 1 + (self.config.retry_attempts if method in IDEMPOTENT_METHODS else 0)

        result = await self._send(method, path, json=json, params=params)
        for _ in range(attempts - 1):
            if result.success or result.status is not None or not result.retryable:
                break
            await asyncio.sleep(self.config.retry_delay_seconds)
            result = await self._send(method, path, json=json, params=params)
        return result

    # Auth

    async def register(self, username: str, password: str) -> ApiResult:
        return await self.request(
            "POST", "/api/auth/register", json={"username": username, "password": password}
        )

    async def login(self, username: str, password: str) -> ApiResult:
        """Log in and keep the returned token for later calls."""
        result = await self.request(
            "POST", "/api/auth/login", json={"username": username, "password": password}
        )
        if result.success and isinstance(result.data, dict):
            self.token = result.data.get("token")
        return result

    def logout(self) -> None:
        self.token = None

    async def me(self) -> ApiResult:
        return await self.request("GET", "/api/auth/me")

    async def request_email_verification(self, email: str) -> ApiResult:
        return await self.request("POST", "/api/auth/email/verify/request", json={"email": email})

    async def confirm_email_verification(self, otp: str) -> ApiResult:
        return await self.request("POST", "/api/auth/email/verify/confirm", json={"otp": otp})

    # Categories

    async def create_category(self, name: str) -> ApiResult:
        return await self.request("POST", "/api/categories", json={"name": name})

    async def get_categories(self) -> ApiResult:
        """
        Category names with the default first.

        On failure ``data`` is still a usable list holding only the default.
        """
        result = await self.request("GET", "/api/categories")
        if not result.success:
            result.data = [DEFAULT_CATEGORY]
            return result

        names = [n for n in (result.data or []) if not is_default_category(n)]
        result.data = [DEFAULT_CATEGORY] + names
        return result

    async def delete_category(self, name: str) -> ApiResult:
        return await self.request("DELETE", f"/api/categories/{quote(name, safe='')}")

    # Products

    async def create_product(
        self,
        barcode: str,
        name: str,
        price: Optional[float] = None,
        description: Optional[str] = None,
        category: Optional[str] = None,
    ) -> ApiResult:
        payload = {"barcode": barcode, "name": name}
        optional = {"price": price, "description": description, "category": category}
        payload.update({k: v for k, v in optional.items() if v is not None})
        return await self.request("POST", "/api/products", json=payload)

    async def get_products(
        self,
        category: Optional[str] = None,
        search: Optional[str] = None,
    ) -> ApiResult:
        params = {k: v for k, v in {"category": category, "search": search}.items() if v}
        result = await self.request("GET", "/api/products", params=params or None)
        if not result.success or result.data is None:
            result.data = []
        return result

    async def get_product(self, product_id: str) -> ApiResult:
        return await self.request("GET", f"/api/products/{quote(product_id, safe='')}")

    async def get_product_by_barcode(self, barcode: str) -> ApiResult:
        return await self.request("GET", f"/api/products/barcode/{quote(barcode, safe='')}")

    async def update_product(self, product_id: str, fields: dict[str, Any]) -> ApiResult:
        return await self.request(
            "PUT", f"/api/products/{quote(product_id, safe='')}", json=fields
        )

    async def delete_product(self, product_id: str) -> ApiResult:
        return await self.request("DELETE", f"/api/products/{quote(product_id, safe='')}")

    async def get_stats(self) -> ApiResult:
        """Dashboard statistics; an empty stats object on failure."""
        result = await self.request("GET", "/api/products/stats/analytics")
        if not result.success or not isinstance(result.data, dict):
            result.data = empty_stats()
        return result
