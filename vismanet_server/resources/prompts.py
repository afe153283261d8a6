"""MCP prompt functions for workflow guidance."""

from __future__ import annotations


async def create_customer() -> str:
    """Guide for creating a Visma.net customer."""
    return """Create a customer in Visma.net:

1. Read vismanet://templates/customer to see the payload structure

2. Every value is wrapped: {"name": {"value": "Acme AS"}}

3. REQUIRED fields:
   - name
   - customerClassId (customer class from the company setup)
   - currencyId (e.g. NOK, SEK, EUR)

4. Leave number empty to let Visma.net assign the next number

5. Use vismanet_create_customer with the completed payload

6. The created customer is returned; verify it with vismanet_get_customer
"""


async def create_sales_order() -> str:
    """Guide for creating a Visma.net sales order."""
    return """Create a sales order in Visma.net:

1. Find the customer with vismanet_customers (note the customer number)

2. Find each item with vismanet_inventory (note inventoryNumber)

3. Read vismanet://templates/sales_order for the payload structure

4. Fill in:
   - orderType (SO unless told otherwise)
   - customer (customer number)
   - lines: one entry per item with operation "Insert",
     inventoryId, quantity and unitPrice

5. Show the complete order to the user and get explicit approval

6. Use vismanet_create_sales_order with the payload

7. Report the returned orderNo and status
"""
