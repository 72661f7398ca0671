"""Helpers shared by the operation handlers."""

import secrets
import string
import time
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from docusign_node.nodes.docusign.context import ItemContext
from docusign_node.nodes.docusign.items import NodeItem

DEFAULT_LIMIT = 50

HandlerResult = Union[Dict[str, Any], List[Dict[str, Any]], NodeItem]
Handler = Callable[[ItemContext], Awaitable[HandlerResult]]
ListPage = Callable[[Dict[str, Any]], Awaitable[Dict[str, Any]]]

_ALPHABET = string.ascii_lowercase + string.digits


def generate_client_user_id() -> str:
    """Client user id for embedded signing: ``embedded-<epoch ms>-<random>``."""
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(6))
    return f"embedded-{int(time.time() * 1000)}-{suffix}"


async def get_many(
    ctx: ItemContext,
    path: str,
    property_name: str,
    list_page: ListPage,
    query: Optional[Dict[str, Any]] = None,
) -> List[Dict[str, Any]]:
    """Either every item of the collection or a single page capped at ``limit``."""
    query = dict(query or {})
    if ctx.get_parameter("returnAll", False):
        return await ctx.data_source.fetch_all(path, property_name, query)

    query["count"] = ctx.get_parameter("limit", DEFAULT_LIMIT)
    response = await list_page(query)
    return response.get(property_name) or []


def limit_items(ctx: ItemContext, items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Client-side cap for endpoints that return the whole collection at once."""
    if ctx.get_parameter("returnAll", False):
        return items
    return items[: int(ctx.get_parameter("limit", DEFAULT_LIMIT))]
