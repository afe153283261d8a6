"""Authentication and status tools."""

from __future__ import annotations

import logging
from typing import Any, Dict

from ..vismanet_client import VismaNetClient
from ..utils.logging import truncate

logger = logging.getLogger("vismanet_server.resources.auth")


async def vismanet_status() -> Dict[str, Any]:
    """Verify Visma.net credentials by fetching a single customer."""
    logger.debug("Tool call: vismanet_status()")
    client = VismaNetClient.from_env()
    result = await client.health_check()
    logger.debug("Tool result: vismanet_status() -> %s", truncate(str(result)))
    return result
