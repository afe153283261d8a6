"""MCP server for Visma.net: tool, resource, and prompt registration."""

from __future__ import annotations

from fastmcp import FastMCP

from .resources import (
    auth as auth_tools,
    customers,
    suppliers,
    sales_orders,
    customer_invoices,
    inventory,
    templates,
    prompts,
)
from .utils.logging import setup_logging

setup_logging()


def create_mcp_server():
    """Create and configure the FastMCP server with all tools, resources, and prompts."""
    mcp = FastMCP("mcp-vismanet")

    # -- Tools: auth --------------------------------------------------------
    mcp.tool()(auth_tools.vismanet_status)

    # -- Tools: customers ---------------------------------------------------
    mcp.tool()(customers.vismanet_customers)
    mcp.tool()(customers.vismanet_get_customer)
    mcp.tool()(customers.vismanet_create_customer)
    mcp.tool()(customers.vismanet_update_customer)
    mcp.tool()(customers.vismanet_export_customers)

    # -- Tools: suppliers ---------------------------------------------------
    mcp.tool()(suppliers.vismanet_suppliers)
    mcp.tool()(suppliers.vismanet_get_supplier)
    mcp.tool()(suppliers.vismanet_create_supplier)
    mcp.tool()(suppliers.vismanet_update_supplier)

    # -- Tools: sales orders ------------------------------------------------
    mcp.tool()(sales_orders.vismanet_sales_orders)
    mcp.tool()(sales_orders.vismanet_get_sales_order)
    mcp.tool()(sales_orders.vismanet_create_sales_order)

    # -- Tools: customer invoices -------------------------------------------
    mcp.tool()(customer_invoices.vismanet_customer_invoices)
    mcp.tool()(customer_invoices.vismanet_get_customer_invoice)
    mcp.tool()(customer_invoices.vismanet_create_customer_invoice)

    # -- Tools: inventory ---------------------------------------------------
    mcp.tool()(inventory.vismanet_inventory)
    mcp.tool()(inventory.vismanet_get_inventory_item)

    # -- Resources ----------------------------------------------------------
    mcp.resource("vismanet://templates/customer")(templates.resource_customer_template)
    mcp.resource("vismanet://templates/customer/{customer_number}")(templates.resource_customer_by_number)
    mcp.resource("vismanet://templates/sales_order")(templates.resource_sales_order_template)
    mcp.resource("vismanet://templates/sales_order/{order_number}")(templates.resource_sales_order_by_number)

    # -- Prompts ------------------------------------------------------------
    mcp.prompt()(prompts.create_customer)
    mcp.prompt()(prompts.create_sales_order)

    return mcp


# Default server instance for stdio transport
server = create_mcp_server()
