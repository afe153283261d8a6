"""Inventory item tools."""

from __future__ import annotations

import logging
from typing import Any, Dict

from ..vismanet_client import VismaNetClient
from ..utils.logging import truncate
from ..utils.projection import paginate, project_dict, project_items

logger = logging.getLogger("vismanet_server.resources.inventory")

BASE_FIELDS = {"inventoryNumber", "description", "status"}


async def vismanet_inventory(
    limit: int = 100,
    cursor: str | None = None,
    status: str | None = None,
    description: str | None = None,
    fields: list[str] | None = None,
) -> Dict[str, Any]:
    """List inventory items with pagination and optional filters.

    Default returns: inventoryNumber, description, status
    """
    logger.debug(
        "Tool call: vismanet_inventory(limit=%s, cursor=%s, status=%s, description=%s)",
        limit, cursor, status, description,
    )
    page = int(cursor) if cursor else 1
    client = VismaNetClient.from_env()
    items = await client.list_inventory(
        page=page, page_size=limit, status=status, description=description
    )

    result = paginate(project_items(items, fields, BASE_FIELDS), page, limit)
    logger.debug("Tool result: vismanet_inventory -> %s", truncate(str(result)))
    return result


async def vismanet_get_inventory_item(
    inventory_number: str,
    fields: list[str] | None = None,
) -> Dict[str, Any]:
    """Get a single inventory item by inventory number."""
    logger.debug(
        "Tool call: vismanet_get_inventory_item(inventory_number=%s)", inventory_number
    )
    client = VismaNetClient.from_env()
    result = await client.get_inventory_item(inventory_number)
    result = project_dict(result, fields, base_fields=BASE_FIELDS)
    logger.debug("Tool result: vismanet_get_inventory_item -> %s", truncate(str(result)))
    return result
