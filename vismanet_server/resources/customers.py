"""Customer tools."""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from ..vismanet_client import VismaNetClient
from ..utils.logging import truncate
from ..utils.projection import paginate, project_dict, project_items

logger = logging.getLogger("vismanet_server.resources.customers")

BASE_FIELDS = {"number", "name"}
EXPORT_MAX_ITEMS = 50_000


async def vismanet_customers(
    limit: int = 100,
    cursor: str | None = None,
    name: str | None = None,
    status: str | None = None,
    fields: list[str] | None = None,
) -> Dict[str, Any]:
    """List customers with pagination and optional filters.

    Parameters:
    - limit: Items per page
    - cursor: Opaque cursor for next page (pass from previous response)
    - name: Optional name filter
    - status: Optional status filter (Active, OnHold, CreditHold, Inactive, ...)
    - fields: Additional fields to include beyond defaults, or ["*"] for all

    Available fields: number, name, status, mainAddress, mainContact,
        customerClass, creditTerms, currencyId, vatRegistrationId, lastModifiedDateTime
    Default returns: number, name
    """
    logger.debug(
        "Tool call: vismanet_customers(limit=%s, cursor=%s, name=%s, status=%s)",
        limit, cursor, name, status,
    )
    page = int(cursor) if cursor else 1
    client = VismaNetClient.from_env()
    items = await client.list_customers(page=page, page_size=limit, name=name, status=status)

    result = paginate(project_items(items, fields, BASE_FIELDS), page, limit)
    logger.debug("Tool result: vismanet_customers -> %s", truncate(str(result)))
    return result


async def vismanet_get_customer(
    customer_number: str,
    fields: list[str] | None = None,
) -> Dict[str, Any]:
    """Get a single customer by customer number.

    Parameters:
    - customer_number: Visma.net customer number (e.g. "10001")
    - fields: Additional fields to include beyond defaults, or ["*"] for all

    Default returns: number, name
    """
    logger.debug("Tool call: vismanet_get_customer(customer_number=%s)", customer_number)
    client = VismaNetClient.from_env()
    result = await client.get_customer(customer_number)
    result = project_dict(result, fields, base_fields=BASE_FIELDS)
    logger.debug("Tool result: vismanet_get_customer -> %s", truncate(str(result)))
    return result


async def vismanet_create_customer(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Create a new Visma.net customer via POST customer.

    Read vismanet://templates/customer first to get the payload structure.
    Visma.net update DTOs wrap every value: {"name": {"value": "Acme"}}.

    The created customer is read back from the Location header and returned.
    """
    logger.debug("Tool call: vismanet_create_customer(payload=%s)", truncate(str(payload)))
    client = VismaNetClient.from_env()
    result = await client.create_customer(payload)
    logger.debug("Tool result: vismanet_create_customer -> %s", truncate(str(result)))
    return result


async def vismanet_update_customer(
    customer_number: str,
    payload: Dict[str, Any],
) -> Dict[str, Any]:
    """Update a Visma.net customer via PUT customer/{number}.

    Only the wrapped fields present in the payload are changed. Returns the
    customer as stored after the update.
    """
    logger.debug(
        "Tool call: vismanet_update_customer(customer_number=%s, payload=%s)",
        customer_number, truncate(str(payload)),
    )
    client = VismaNetClient.from_env()
    result = await client.update_customer(customer_number, payload)
    logger.debug("Tool result: vismanet_update_customer -> %s", truncate(str(result)))
    return result


async def vismanet_export_customers(
    fields: list[str] | None = None,
    max_items: int = EXPORT_MAX_ITEMS,
) -> Dict[str, Any]:
    """Export every customer in one streamed request.

    The response array is decoded element by element, so large registers do
    not need to fit in memory as raw JSON. Items beyond max_items are counted
    but not returned.
    """
    logger.debug("Tool call: vismanet_export_customers(max_items=%s)", max_items)
    client = VismaNetClient.from_env()
    collected: List[Dict[str, Any]] = []

    def collect(customer: Dict[str, Any]) -> None:
        if len(collected) < max_items:
            collected.append(customer)

    total = await client.for_each_customer(collect)
    items = project_items(collected, fields, BASE_FIELDS)
    result = {
        "results": items,
        "total": total,
        "truncated": total > len(items),
    }
    logger.debug("Tool result: vismanet_export_customers -> %d of %d", len(items), total)
    return result
