from __future__ import annotations

import inspect
import json
import logging
import os
import re
import time
from contextlib import asynccontextmanager
from dataclasses import asdict, dataclass, field, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from http.cookiejar import CookieJar, DefaultCookiePolicy
from io import BytesIO
from typing import Any, Callable, Dict, List, Optional, Union
from uuid import UUID, uuid4

import httpx

from .errors import VismaNetClientError, handle_exception
from .streaming import iter_json_array


logger = logging.getLogger("vismanet_server.http")

VERSION = "0.1.0"
DEFAULT_BASE_URL = "https://integration.visma.net/API/controller/api/v1/"
DEFAULT_APPLICATION_TYPE = "Visma.net Financials"
REQUEST_TIMEOUT_SECONDS = 300.0
BASE_USER_AGENT = f"Visma.Net/{VERSION} (+https://github.com/ON-IT/Visma.Net)"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

JSON_CONTENT_TYPE = "application/json; charset=utf-8"

# Whole location URL is replaced by its trailing numeric id
_LOCATION_ID_PATTERN = re.compile(r".(.*)\/(\d+)")

_http_client: Optional[httpx.AsyncClient] = None


def _redact_headers(headers: Dict[str, Any]) -> Dict[str, Any]:
    redacted = {}
    for k, v in headers.items():
        if str(k).lower() == "authorization":
            redacted[k] = "[REDACTED]"
        else:
            redacted[k] = v
    return redacted


def _force_https(url: str) -> str:
    return url.replace("http://", "https://")


def _cookieless_jar() -> CookieJar:
    return CookieJar(policy=DefaultCookiePolicy(allowed_domains=[]))


def get_http_client() -> httpx.AsyncClient:
    """Return the process-wide HTTP client, creating it on first use."""
    global _http_client
    if _http_client is None or _http_client.is_closed:
        _http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(REQUEST_TIMEOUT_SECONDS),
            headers={"User-Agent": BASE_USER_AGENT},
            cookies=_cookieless_jar(),
        )
    return _http_client


async def aclose_http_client() -> None:
    """Close the process-wide HTTP client if it was ever opened."""
    global _http_client
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None


def _json_default(obj: Any) -> Any:
    if isinstance(obj, datetime):
        return obj.strftime(DATE_FORMAT)
    if isinstance(obj, date):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.name
    if isinstance(obj, UUID):
        return str(obj)
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


@dataclass
class VismaNetAuthorization:
    """Credentials for one Visma.net company (and optionally one branch)."""

    token: str
    company_id: Union[int, str]
    branch_id: int = 0


@dataclass
class VismaNetClient:
    """Async client for the Visma.net REST API.

    All instances share one httpx.AsyncClient unless ``http_client`` is given.
    Requests are never retried.
    """

    authorization: Optional[VismaNetAuthorization] = None
    base_url: str = DEFAULT_BASE_URL
    application_name: Optional[str] = None
    application_type: str = DEFAULT_APPLICATION_TYPE
    http_client: Optional[httpx.AsyncClient] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if not self.base_url.endswith("/"):
            self.base_url = self.base_url + "/"

    @classmethod
    def from_env(cls) -> "VismaNetClient":
        """Create a client using environment variables loaded via dotenv.

        Required env vars:
        - VISMANET_TOKEN
        - VISMANET_COMPANY_ID
        Optional:
        - VISMANET_BRANCH_ID
        - VISMANET_BASE_URL (defaults to the integration API v1)
        - VISMANET_APPLICATION_NAME
        - VISMANET_APPLICATION_TYPE
        """
        token = os.getenv("VISMANET_TOKEN")
        company_id = os.getenv("VISMANET_COMPANY_ID")
        if not token or not company_id:
            raise VismaNetClientError(
                "Missing VISMANET_TOKEN or VISMANET_COMPANY_ID in environment."
            )

        branch_raw = os.getenv("VISMANET_BRANCH_ID")
        try:
            branch_id = int(branch_raw) if branch_raw else 0
        except ValueError:
            raise VismaNetClientError(
                f"VISMANET_BRANCH_ID must be an integer, got {branch_raw!r}"
            ) from None

        return cls(
            authorization=VismaNetAuthorization(
                token=token, company_id=company_id, branch_id=branch_id
            ),
            base_url=os.getenv("VISMANET_BASE_URL", DEFAULT_BASE_URL),
            application_name=os.getenv("VISMANET_APPLICATION_NAME") or None,
            application_type=os.getenv(
                "VISMANET_APPLICATION_TYPE", DEFAULT_APPLICATION_TYPE
            ),
        )

    def prepare_headers(self) -> Dict[str, str]:
        headers: Dict[str, str] = {}
        auth = self.authorization
        if auth is not None:
            headers["Authorization"] = f"Bearer {auth.token}"
            headers["ipp-company-id"] = f"{auth.company_id}"
            if auth.branch_id > 0:
                headers["branchid"] = str(auth.branch_id)
        headers["ipp-application-type"] = self.application_type
        headers["Accept"] = "application/json"
        if self.application_name:
            headers["User-Agent"] = f"{BASE_USER_AGENT} ({self.application_name})"
        return headers

    def _url(self, url: str) -> str:
        if url.startswith(("http://", "https://")):
            return url
        return str(httpx.URL(self.base_url).join(url))

    def _client(self) -> httpx.AsyncClient:
        return self.http_client if self.http_client is not None else get_http_client()

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        """Send one request with the Visma.net headers applied."""
        headers = self.prepare_headers()
        headers.update(kwargs.pop("headers", None) or {})
        full_url = self._url(url)

        logger.debug(
            "HTTP %s %s headers=%s", method.upper(), full_url, _redact_headers(headers)
        )
        start = time.perf_counter()
        response = await self._client().request(
            method.upper(), full_url, headers=headers, **kwargs
        )
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        logger.debug(
            "HTTP %s %s status=%s elapsed_ms=%.2f",
            method.upper(),
            full_url,
            response.status_code,
            elapsed_ms,
        )
        return response

    @asynccontextmanager
    async def _stream(self, method: str, url: str, **kwargs):
        full_url = self._url(url)
        async with self._client().stream(
            method.upper(), full_url, headers=self.prepare_headers(), **kwargs
        ) as response:
            logger.debug(
                "HTTP %s %s status=%s (streaming)",
                method.upper(),
                full_url,
                response.status_code,
            )
            yield response

    # ----------------------------- Serialization -----------------------------

    @staticmethod
    def serialize(obj: Any) -> str:
        """Indented JSON; Decimal values are written digit for digit."""
        marker = uuid4().hex

        def default(value: Any) -> Any:
            if isinstance(value, Decimal):
                if not value.is_finite():
                    raise TypeError(f"Decimal {value} is not a JSON number")
                return f"{marker}{value}{marker}"
            return _json_default(value)

        text = json.dumps(obj, indent=2, ensure_ascii=False, default=default)
        return re.sub(f'"{marker}(.*?){marker}"', r"\1", text)

    @staticmethod
    def deserialize(text: str) -> Any:
        return json.loads(text)

    # ----------------------------- Verbs -----------------------------

    async def get(self, url: str) -> Any:
        """GET a resource; returns parsed JSON, or None for an empty body."""
        url = _force_https(url)
        response = await self._request("get", url)
        body = response.text
        if response.status_code != 200:
            handle_exception(body, url=url, status_code=response.status_code)
        if not body:
            return None
        return self.deserialize(body)

    async def get_stream(self, url: str) -> BytesIO:
        """Download a binary resource (attachments, reports) into memory."""
        url = _force_https(url)
        response = await self._request("get", url)
        if response.status_code != 200:
            handle_exception(
                "Error downloading stream from Visma.net",
                url=url,
                status_code=response.status_code,
            )
        return BytesIO(response.content)

    async def post_message(
        self,
        url: str,
        *,
        content: Union[bytes, str, None] = None,
        content_type: Optional[str] = None,
        files: Optional[Dict[str, Any]] = None,
        return_location_id: bool = False,
    ) -> Any:
        """POST a pre-built body (raw bytes or multipart files).

        With ``return_location_id`` the id of the created resource is taken
        from the last segment of the Location header.
        """
        kwargs: Dict[str, Any] = {}
        if content is not None:
            kwargs["content"] = content
            if content_type:
                kwargs["headers"] = {"Content-Type": content_type}
        if files is not None:
            kwargs["files"] = files

        response = await self._request("post", url, **kwargs)
        if not 200 <= response.status_code < 300:
            if isinstance(content, bytes):
                request_body = content.decode("utf-8", errors="replace")
            elif content is not None:
                request_body = content
            else:
                request_body = f"<multipart: {', '.join(files or {})}>"
            handle_exception(
                response.text,
                request_body=request_body,
                url=url,
                status_code=response.status_code,
            )

        location = response.headers.get("Location")
        if location and return_location_id:
            return location.rsplit("/", 1)[-1]

        body = response.text
        if body:
            return self.deserialize(body)
        return None

    async def post(self, url: str, data: Any, url_to_get: Optional[str] = None) -> Any:
        """POST ``data`` as JSON and return the resulting resource.

        A Location header is followed with a GET. ``url_to_get`` overrides the
        location path for endpoints that report the wrong URL (sales orders of
        a type other than SO); only the trailing numeric id is kept.
        """
        serialized = self.serialize(data)
        response = await self._request(
            "post",
            url,
            content=serialized.encode("utf-8"),
            headers={"Content-Type": JSON_CONTENT_TYPE},
        )

        location = response.headers.get("Location")
        if location:
            if url_to_get is None:
                return await self.get(location)
            resource_id = _LOCATION_ID_PATTERN.sub(r"\2", location)
            return await self.get(f"{url_to_get}/{resource_id}")

        if response.status_code == 204:
            return await self.get(url)

        body = response.text
        if response.status_code != 200:
            handle_exception(
                body, request_body=serialized, url=url, status_code=response.status_code
            )
        if not body:
            return None
        try:
            return self.deserialize(body)
        except ValueError as e:
            raise VismaNetClientError("Could not serialize:\n\n" + body) from e

    async def put(self, url: str, data: Any, url_to_get: Optional[str] = None) -> Any:
        """PUT ``data`` as JSON and return the updated resource."""
        serialized = self.serialize(data)
        response = await self._request(
            "put",
            url,
            content=serialized.encode("utf-8"),
            headers={"Content-Type": JSON_CONTENT_TYPE},
        )

        location = response.headers.get("Location")
        if location:
            return await self.get(location)
        if response.status_code == 204:
            return await self.get(url_to_get if url_to_get is not None else url)

        body = response.text
        if response.status_code != 200:
            handle_exception(
                body, request_body=serialized, url=url, status_code=response.status_code
            )
        if not body:
            return None
        return self.deserialize(body)

    async def delete(self, url: str) -> None:
        response = await self._request("delete", url)
        if response.status_code not in (200, 204):
            handle_exception(response.text, url=url, status_code=response.status_code)

    async def for_each_in_stream(
        self,
        url: str,
        action: Callable[[Any], Any],
        model: Optional[Callable[[Any], Any]] = None,
    ) -> int:
        """Stream a JSON array response and call ``action`` once per element.

        Elements are decoded one at a time as the body arrives. ``model``, when
        given, converts each raw element before it reaches ``action``.
        ``action`` may be a plain function or a coroutine function.
        Returns the number of elements processed.
        """
        url = _force_https(url)
        count = 0
        async with self._stream("get", url) as response:
            if response.status_code != 200:
                await response.aread()
                handle_exception(response.text, url=url, status_code=response.status_code)
            async for element in iter_json_array(response.aiter_text()):
                if model is not None:
                    element = model(element)
                result = action(element)
                if inspect.isawaitable(result):
                    await result
                count += 1
        return count

    # ----------------------------- API methods -----------------------------

    @staticmethod
    def _with_query(resource: str, params: Dict[str, Any]) -> str:
        query = httpx.QueryParams({k: v for k, v in params.items() if v is not None})
        return f"{resource}?{query}" if query else resource

    async def _list(self, resource: str, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        data = await self.get(self._with_query(resource, params))
        if data is None:
            return []
        if not isinstance(data, list):
            raise VismaNetClientError(
                f"Expected a list from {resource}, got {type(data).__name__}"
            )
        return data

    async def health_check(self) -> Dict[str, Any]:
        """Perform a lightweight authenticated request to verify connectivity."""
        url = self._with_query("customer", {"pageNumber": 1, "pageSize": 1})
        response = await self._request("get", url)
        if response.status_code != 200:
            handle_exception(response.text, url=url, status_code=response.status_code)

        try:
            parsed = self.deserialize(response.text) if response.text else []
        except ValueError:
            parsed = None
        return {
            "ok": True,
            "status": response.status_code,
            "sample_count": len(parsed) if isinstance(parsed, list) else 0,
            "base_url": self.base_url,
            "company_id": self.authorization.company_id if self.authorization else None,
        }

    async def list_customers(
        self,
        *,
        page: int = 1,
        page_size: int = 100,
        name: Optional[str] = None,
        status: Optional[str] = None,
        last_modified: Optional[datetime] = None,
    ) -> List[Dict[str, Any]]:
        """List customers with pagination and optional filters."""
        params: Dict[str, Any] = {
            "pageNumber": page,
            "pageSize": page_size,
            "name": name,
            "status": status,
        }
        if last_modified is not None:
            params["lastModifiedDateTime"] = last_modified.strftime(DATE_FORMAT)
            params["lastModifiedDateTimeCondition"] = ">"
        return await self._list("customer", params)

    async def get_customer(self, customer_number: str) -> Dict[str, Any]:
        if not customer_number:
            raise VismaNetClientError("get_customer requires customer_number")
        return await self.get(f"customer/{customer_number}")

    async def create_customer(self, customer: Dict[str, Any]) -> Dict[str, Any]:
        """Create a customer and return it as stored by Visma.net."""
        return await self.post("customer", customer)

    async def update_customer(
        self, customer_number: str, customer: Dict[str, Any]
    ) -> Dict[str, Any]:
        if not customer_number:
            raise VismaNetClientError("update_customer requires customer_number")
        return await self.put(f"customer/{customer_number}", customer)

    async def for_each_customer(
        self,
        action: Callable[[Any], Any],
        model: Optional[Callable[[Any], Any]] = None,
    ) -> int:
        return await self.for_each_in_stream("customer", action, model=model)

    async def list_suppliers(
        self,
        *,
        page: int = 1,
        page_size: int = 100,
        name: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """List suppliers with pagination and optional filters."""
        params = {"pageNumber": page, "pageSize": page_size, "name": name, "status": status}
        return await self._list("supplier", params)

    async def get_supplier(self, supplier_number: str) -> Dict[str, Any]:
        if not supplier_number:
            raise VismaNetClientError("get_supplier requires supplier_number")
        return await self.get(f"supplier/{supplier_number}")

    async def create_supplier(self, supplier: Dict[str, Any]) -> Dict[str, Any]:
        return await self.post("supplier", supplier)

    async def update_supplier(
        self, supplier_number: str, supplier: Dict[str, Any]
    ) -> Dict[str, Any]:
        if not supplier_number:
            raise VismaNetClientError("update_supplier requires supplier_number")
        return await self.put(f"supplier/{supplier_number}", supplier)

    async def list_customer_invoices(
        self,
        *,
        page: int = 1,
        page_size: int = 100,
        status: Optional[str] = None,
        customer: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """List customer invoices, optionally filtered by status or customer number."""
        params = {
            "pageNumber": page,
            "pageSize": page_size,
            "status": status,
            "customer": customer,
        }
        return await self._list("customerinvoice", params)

    async def get_customer_invoice(self, invoice_number: str) -> Dict[str, Any]:
        if not invoice_number:
            raise VismaNetClientError("get_customer_invoice requires invoice_number")
        return await self.get(f"customerinvoice/{invoice_number}")

    async def create_customer_invoice(self, invoice: Dict[str, Any]) -> Dict[str, Any]:
        return await self.post("customerinvoice", invoice)

    async def add_customer_invoice_attachment(
        self,
        invoice_number: str,
        file_name: str,
        data: bytes,
        content_type: str = "application/octet-stream",
    ) -> str:
        """Attach a file to a customer invoice; returns the attachment id."""
        if not invoice_number:
            raise VismaNetClientError(
                "add_customer_invoice_attachment requires invoice_number"
            )
        return await self.post_message(
            f"customerinvoice/{invoice_number}/attachment",
            files={"file": (file_name, data, content_type)},
            return_location_id=True,
        )

    async def list_sales_orders(
        self,
        *,
        page: int = 1,
        page_size: int = 100,
        order_type: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """List sales orders with pagination and optional type/status filters."""
        params = {
            "pageNumber": page,
            "pageSize": page_size,
            "orderType": order_type,
            "status": status,
        }
        return await self._list("salesorder", params)

    async def get_sales_order(
        self, order_number: str, order_type: str = "SO"
    ) -> Dict[str, Any]:
        if not order_number:
            raise VismaNetClientError("get_sales_order requires order_number")
        if order_type == "SO":
            return await self.get(f"salesorder/{order_number}")
        return await self.get(f"salesorder/{order_type}/{order_number}")

    async def create_sales_order(self, order: Dict[str, Any]) -> Dict[str, Any]:
        """Create a sales order.

        Visma.net answers with an SO location even for other order types, so
        those are re-read from ``salesorder/<type>/<number>``.
        """
        order_type = order.get("orderType")
        if isinstance(order_type, dict):
            order_type = order_type.get("value")
        if order_type and order_type != "SO":
            return await self.post("salesorder", order, url_to_get=f"salesorder/{order_type}")
        return await self.post("salesorder", order)

    async def list_inventory(
        self,
        *,
        page: int = 1,
        page_size: int = 100,
        status: Optional[str] = None,
        description: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """List inventory items with pagination and optional filters."""
        params = {
            "pageNumber": page,
            "pageSize": page_size,
            "status": status,
            "description": description,
        }
        return await self._list("inventory", params)

    async def get_inventory_item(self, inventory_number: str) -> Dict[str, Any]:
        if not inventory_number:
            raise VismaNetClientError("get_inventory_item requires inventory_number")
        return await self.get(f"inventory/{inventory_number}")
