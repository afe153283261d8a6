"""MCP resource handlers for templates."""

from __future__ import annotations

import json
import logging

from ..vismanet_client import VismaNetClient
from ..utils.logging import truncate

logger = logging.getLogger("vismanet_server.resources.templates")


# ----------------------------- Customer Templates -----------------------------

async def resource_customer_template() -> str:
    """Blank customer template in the wrapped-value update format.

    Use this template to see what fields are available when creating customers.
    """
    template = {
        "number": {"value": ""},
        "name": {"value": ""},
        "status": {"value": "Active"},
        "customerClassId": {"value": ""},
        "creditTermsId": {"value": ""},
        "currencyId": {"value": ""},
        "vatRegistrationId": {"value": ""},
        "mainAddress": {
            "value": {
                "addressLine1": {"value": ""},
                "postalCode": {"value": ""},
                "city": {"value": ""},
                "countryId": {"value": ""},
            }
        },
        "mainContact": {
            "value": {
                "name": {"value": ""},
                "email": {"value": ""},
                "phone1": {"value": ""},
            }
        },
    }
    return json.dumps(template, indent=2)


async def resource_customer_by_number(customer_number: str) -> str:
    """Get existing customer as template for updates."""
    logger.debug("Resource call: resource_customer_by_number(customer_number=%s)", customer_number)
    client = VismaNetClient.from_env()
    customer = await client.get_customer(customer_number)
    logger.debug("Resource result: resource_customer_by_number -> %s", truncate(str(customer)))
    return json.dumps(customer, indent=2)


# ----------------------------- Sales Order Templates -----------------------------

async def resource_sales_order_template() -> str:
    """Blank sales order template with one line."""
    template = {
        "orderType": {"value": "SO"},
        "customer": {"value": ""},
        "date": {"value": ""},
        "currency": {"value": ""},
        "description": {"value": ""},
        "lines": [
            {
                "operation": "Insert",
                "inventoryId": {"value": ""},
                "quantity": {"value": 1},
                "unitPrice": {"value": 0.0},
                "warehouse": {"value": ""},
            }
        ],
    }
    return json.dumps(template, indent=2)


async def resource_sales_order_by_number(order_number: str) -> str:
    """Get existing SO sales order as template for updates."""
    logger.debug("Resource call: resource_sales_order_by_number(order_number=%s)", order_number)
    client = VismaNetClient.from_env()
    order = await client.get_sales_order(order_number)
    logger.debug("Resource result: resource_sales_order_by_number -> %s", truncate(str(order)))
    return json.dumps(order, indent=2)
