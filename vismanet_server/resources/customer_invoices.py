"""Customer invoice tools."""

from __future__ import annotations

import logging
from typing import Any, Dict

from ..vismanet_client import VismaNetClient
from ..utils.logging import truncate
from ..utils.projection import paginate, project_dict, project_items

logger = logging.getLogger("vismanet_server.resources.customer_invoices")

BASE_FIELDS = {"referenceNumber", "customer", "status", "amount", "dueDate"}


async def vismanet_customer_invoices(
    limit: int = 100,
    cursor: str | None = None,
    status: str | None = None,
    customer: str | None = None,
    fields: list[str] | None = None,
) -> Dict[str, Any]:
    """List customer invoices with pagination and optional filters.

    Parameters:
    - limit: Items per page
    - cursor: Opaque cursor for next page (pass from previous response)
    - status: Optional status filter (Hold, Balanced, Open, Closed, ...)
    - customer: Optional customer number filter
    - fields: Additional fields to include beyond defaults, or ["*"] for all

    Default returns: referenceNumber, customer, status, amount, dueDate
    """
    logger.debug(
        "Tool call: vismanet_customer_invoices(limit=%s, cursor=%s, status=%s, customer=%s)",
        limit, cursor, status, customer,
    )
    page = int(cursor) if cursor else 1
    client = VismaNetClient.from_env()
    items = await client.list_customer_invoices(
        page=page, page_size=limit, status=status, customer=customer
    )

    result = paginate(project_items(items, fields, BASE_FIELDS), page, limit)
    logger.debug("Tool result: vismanet_customer_invoices -> %s", truncate(str(result)))
    return result


async def vismanet_get_customer_invoice(
    invoice_number: str,
    fields: list[str] | None = None,
) -> Dict[str, Any]:
    """Get a single customer invoice by reference number."""
    logger.debug("Tool call: vismanet_get_customer_invoice(invoice_number=%s)", invoice_number)
    client = VismaNetClient.from_env()
    result = await client.get_customer_invoice(invoice_number)
    result = project_dict(result, fields, base_fields=BASE_FIELDS | {"invoiceLines"})
    logger.debug("Tool result: vismanet_get_customer_invoice -> %s", truncate(str(result)))
    return result


async def vismanet_create_customer_invoice(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Create a customer invoice via POST customerinvoice.

    The payload must reference an existing customer number and contain at
    least one entry in invoiceLines. Returns the stored invoice.
    """
    logger.debug(
        "Tool call: vismanet_create_customer_invoice(payload=%s)", truncate(str(payload))
    )
    client = VismaNetClient.from_env()
    result = await client.create_customer_invoice(payload)
    logger.debug("Tool result: vismanet_create_customer_invoice -> %s", truncate(str(result)))
    return result
