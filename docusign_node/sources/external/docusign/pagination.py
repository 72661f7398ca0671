"""Offset pagination over DocuSign list endpoints."""

from typing import Any, Dict, List, Optional

from docusign_node.config.constants.docusign import DEFAULT_PAGE_SIZE
from docusign_node.sources.client.docusign.docusign import DocuSignClient
from docusign_node.utils.logger import create_logger

logger = create_logger("docusign_pagination")


def _has_more(page: Dict[str, Any], items: List[Any], page_size: int) -> bool:
    if len(items) < page_size:
        return False
    result_set_size = page.get("resultSetSize")
    if result_set_size is not None and int(result_set_size) < page_size:
        return False
    total = page.get("totalSetSize")
    end_position = page.get("endPosition")
    if total is not None and end_position is not None:
        return int(end_position) + 1 < int(total)
    if "nextUri" in page:
        return bool(page["nextUri"])
    return True


async def request_all_items(
    client: DocuSignClient,
    method: str,
    path: str,
    property_name: str,
    query: Optional[Dict[str, Any]] = None,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> List[Dict[str, Any]]:
    """Fetch every page of a list endpoint and return the concatenated items.

    Pages are requested sequentially with ``count`` and ``start_position``;
    the walk stops at the first page holding fewer than ``page_size`` items or
    when the response says no further results exist. A failing page request
    propagates its error, so a partial collection is never returned.

    Args:
        client: Account-scoped DocuSign client
        method: HTTP method, usually GET
        path: List endpoint path relative to the account
        property_name: Name of the array field holding the page items
        query: Base query parameters, sent with every page
        page_size: Number of items requested per page

    Returns:
        All items across pages
    """
    all_items: List[Dict[str, Any]] = []
    start_position = 0
    page_number = 0

    while True:
        page_query = {**(query or {}), "count": page_size, "start_position": start_position}
        page = await client.request(method, path, query=page_query)
        items = page.get(property_name) or []
        page_number += 1
        logger.debug(f"{path}: page {page_number} returned {len(items)} {property_name}")

        all_items.extend(items)

        if not _has_more(page, items, page_size):
            break

        start_position += len(items)

    return all_items
