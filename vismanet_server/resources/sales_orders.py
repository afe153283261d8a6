"""Sales order tools."""

from __future__ import annotations

import logging
from typing import Any, Dict

from ..vismanet_client import VismaNetClient
from ..utils.logging import truncate
from ..utils.projection import paginate, project_dict, project_items

logger = logging.getLogger("vismanet_server.resources.sales_orders")

BASE_FIELDS = {"orderNo", "orderType", "status", "customer"}


async def vismanet_sales_orders(
    limit: int = 100,
    cursor: str | None = None,
    order_type: str | None = None,
    status: str | None = None,
    fields: list[str] | None = None,
) -> Dict[str, Any]:
    """List sales orders with pagination and optional filters.

    Parameters:
    - limit: Items per page
    - cursor: Opaque cursor for next page (pass from previous response)
    - order_type: Optional order type filter (SO, SI, QT, ...)
    - status: Optional status filter (Open, Hold, Completed, ...)
    - fields: Additional fields to include beyond defaults, or ["*"] for all

    Default returns: orderNo, orderType, status, customer
    """
    logger.debug(
        "Tool call: vismanet_sales_orders(limit=%s, cursor=%s, order_type=%s, status=%s)",
        limit, cursor, order_type, status,
    )
    page = int(cursor) if cursor else 1
    client = VismaNetClient.from_env()
    items = await client.list_sales_orders(
        page=page, page_size=limit, order_type=order_type, status=status
    )

    result = paginate(project_items(items, fields, BASE_FIELDS), page, limit)
    logger.debug("Tool result: vismanet_sales_orders -> %s", truncate(str(result)))
    return result


async def vismanet_get_sales_order(
    order_number: str,
    order_type: str = "SO",
    fields: list[str] | None = None,
) -> Dict[str, Any]:
    """Get a single sales order with its lines.

    Parameters:
    - order_number: Sales order number
    - order_type: Order type, defaults to SO
    - fields: Additional fields to include beyond defaults, or ["*"] for all
    """
    logger.debug(
        "Tool call: vismanet_get_sales_order(order_number=%s, order_type=%s)",
        order_number, order_type,
    )
    client = VismaNetClient.from_env()
    result = await client.get_sales_order(order_number, order_type=order_type)
    result = project_dict(result, fields, base_fields=BASE_FIELDS | {"lines"})
    logger.debug("Tool result: vismanet_get_sales_order -> %s", truncate(str(result)))
    return result


async def vismanet_create_sales_order(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Create a new sales order via POST salesorder.

    Read vismanet://templates/sales_order for the payload structure. The
    order type is taken from payload["orderType"]["value"]; orders of a type
    other than SO are read back from salesorder/{type}/{number}.
    """
    logger.debug("Tool call: vismanet_create_sales_order(payload=%s)", truncate(str(payload)))
    client = VismaNetClient.from_env()
    result = await client.create_sales_order(payload)
    logger.debug("Tool result: vismanet_create_sales_order -> %s", truncate(str(result)))
    return result
