"""Tests for MCP server prompt functions."""

from __future__ import annotations


class TestCreateCustomerPrompt:
    """Tests for the create_customer prompt."""

    async def test_mentions_template_and_tool(self):
        from vismanet_server.resources.prompts import create_customer

        result = await create_customer()
        assert "vismanet://templates/customer" in result
        assert "vismanet_create_customer" in result

    async def test_mentions_required_fields(self):
        from vismanet_server.resources.prompts import create_customer

        result = await create_customer()
        assert "customerClassId" in result
        assert "currencyId" in result


class TestCreateSalesOrderPrompt:
    """Tests for the create_sales_order prompt."""

    async def test_mentions_template_and_tools(self):
        from vismanet_server.resources.prompts import create_sales_order

        result = await create_sales_order()
        assert "vismanet://templates/sales_order" in result
        assert "vismanet_inventory" in result
        assert "vismanet_create_sales_order" in result
