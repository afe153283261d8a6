"""Stdio transport server for local MCP clients.

Usage:
    python -m vismanet_server.stdio_server

Environment Variables (required):
    VISMANET_TOKEN - Visma.net bearer token
    VISMANET_COMPANY_ID - Visma.net company id

Environment Variables (optional):
    VISMANET_BRANCH_ID - Branch id sent in the branchid header
    VISMANET_BASE_URL - API base URL (defaults to production)
    VISMANET_APPLICATION_NAME - Appended to the User-Agent
    VISMANET_APPLICATION_TYPE - ipp-application-type header value
    MCP_LOG_LEVEL - Logging level (default: INFO)
    MCP_LOG_FILE - Log file path with rotation
"""

from .server import server


def main():
    """Run the MCP server using stdio transport."""
    server.run(transport="stdio")


if __name__ == "__main__":
    main()
