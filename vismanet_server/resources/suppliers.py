"""Supplier tools."""

from __future__ import annotations

import logging
from typing import Any, Dict

from ..vismanet_client import VismaNetClient
from ..utils.logging import truncate
from ..utils.projection import paginate, project_dict, project_items

logger = logging.getLogger("vismanet_server.resources.suppliers")

BASE_FIELDS = {"number", "name"}


async def vismanet_suppliers(
    limit: int = 100,
    cursor: str | None = None,
    name: str | None = None,
    status: str | None = None,
    fields: list[str] | None = None,
) -> Dict[str, Any]:
    """List suppliers with pagination and optional filters.

    Parameters:
    - limit: Items per page
    - cursor: Opaque cursor for next page (pass from previous response)
    - name: Optional name filter
    - status: Optional status filter
    - fields: Additional fields to include beyond defaults, or ["*"] for all

    Available fields: number, name, status, mainAddress, supplierClass,
        creditTerms, currencyId, vatRegistrationId
    Default returns: number, name
    """
    logger.debug(
        "Tool call: vismanet_suppliers(limit=%s, cursor=%s, name=%s, status=%s)",
        limit, cursor, name, status,
    )
    page = int(cursor) if cursor else 1
    client = VismaNetClient.from_env()
    items = await client.list_suppliers(page=page, page_size=limit, name=name, status=status)

    result = paginate(project_items(items, fields, BASE_FIELDS), page, limit)
    logger.debug("Tool result: vismanet_suppliers -> %s", truncate(str(result)))
    return result


async def vismanet_get_supplier(
    supplier_number: str,
    fields: list[str] | None = None,
) -> Dict[str, Any]:
    """Get a single supplier by supplier number.

    Default returns: number, name
    """
    logger.debug("Tool call: vismanet_get_supplier(supplier_number=%s)", supplier_number)
    client = VismaNetClient.from_env()
    result = await client.get_supplier(supplier_number)
    result = project_dict(result, fields, base_fields=BASE_FIELDS)
    logger.debug("Tool result: vismanet_get_supplier -> %s", truncate(str(result)))
    return result


async def vismanet_create_supplier(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Create a new Visma.net supplier via POST supplier.

    Values are wrapped as {"field": {"value": ...}}. Returns the stored supplier.
    """
    logger.debug("Tool call: vismanet_create_supplier(payload=%s)", truncate(str(payload)))
    client = VismaNetClient.from_env()
    result = await client.create_supplier(payload)
    logger.debug("Tool result: vismanet_create_supplier -> %s", truncate(str(result)))
    return result


async def vismanet_update_supplier(
    supplier_number: str,
    payload: Dict[str, Any],
) -> Dict[str, Any]:
    """Update a Visma.net supplier via PUT supplier/{number}."""
    logger.debug(
        "Tool call: vismanet_update_supplier(supplier_number=%s, payload=%s)",
        supplier_number, truncate(str(payload)),
    )
    client = VismaNetClient.from_env()
    result = await client.update_supplier(supplier_number, payload)
    logger.debug("Tool result: vismanet_update_supplier -> %s", truncate(str(result)))
    return result
