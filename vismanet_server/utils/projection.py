"""Shared field projection helpers for MCP tools."""

from __future__ import annotations

from typing import Any, Dict, List, Optional


def project_dict(
    data: dict[str, Any] | None,
    fields: list[str] | None,
    base_fields: set[str],
) -> dict[str, Any]:
    """Project a single dict to base_fields + requested fields.

    - fields=None: returns only base_fields (minimal default)
    - fields=["x"]: returns base_fields + x
    - fields=["*"]: returns full data (no projection)
    """
    if data is None:
        return {}
    if fields is not None and "*" in fields:
        return data

    allowed = base_fields | set(fields or [])
    return {k: v for k, v in data.items() if k in allowed}


def project_items(
    items: List[Dict[str, Any]],
    fields: Optional[List[str]],
    base_fields: set[str],
) -> List[Dict[str, Any]]:
    """Project a list of dicts to only include base fields + requested fields."""
    if fields is not None and "*" in fields:
        return items
    allowed = base_fields | set(fields or [])
    projected: List[Dict[str, Any]] = []
    for it in items:
        if isinstance(it, dict):
            projected.append({k: v for k, v in it.items() if k in allowed})
        else:
            projected.append(it)
    return projected


def paginate(items: List[Dict[str, Any]], page: int, page_size: int) -> Dict[str, Any]:
    """Wrap a page of results in the cursor response shape.

    Visma.net list endpoints return bare arrays without a total, so a full
    page is taken to mean more results may follow.
    """
    has_more = len(items) >= page_size > 0
    return {
        "results": items,
        "has_more": has_more,
        "cursor": str(page + 1) if has_more else None,
        "total_returned": len(items),
    }
