"""Folder operations."""

from functools import partial
from typing import Any, Dict, List

from docusign_node.nodes.docusign.context import ItemContext
from docusign_node.nodes.docusign.handlers.common import get_many
from docusign_node.sources.external.docusign.tabs import split_options
from docusign_node.sources.external.docusign.validation import validate_field


async def get_all(ctx: ItemContext) -> Dict[str, Any]:
    return await ctx.data_source.list_folders()


async def get_items(ctx: ItemContext) -> List[Dict[str, Any]]:
    folder_id = validate_field("Folder ID", ctx.get_parameter("folderId"))
    return await get_many(
        ctx,
        f"/folders/{folder_id}",
        "folderItems",
        partial(ctx.data_source.list_folder_items, folder_id),
    )


async def move_envelope(ctx: ItemContext) -> Dict[str, Any]:
    folder_id = ctx.get_parameter("folderId")
    raw_ids = ctx.get_parameter("envelopeIds")
    folder_id = validate_field("Folder ID", folder_id)
    validate_field("Envelope IDs", raw_ids)

    envelope_ids = split_options(raw_ids)
    for envelope_id in envelope_ids:
        validate_field("Envelope ID", envelope_id, "uuid")

    return await ctx.data_source.move_envelopes(folder_id, envelope_ids)


async def search(ctx: ItemContext) -> List[Dict[str, Any]]:
    search_folder_id = ctx.get_parameter("searchFolderId")
    filters = ctx.get_collection("filters")
    search_folder_id = validate_field("Search Folder ID", search_folder_id)

    query: Dict[str, Any] = {}
    if filters.get("searchText"):
        query["search_text"] = filters["searchText"]
    if filters.get("fromDate"):
        validate_field("From Date", filters["fromDate"], "date")
        query["from_date"] = filters["fromDate"]
    if filters.get("toDate"):
        validate_field("To Date", filters["toDate"], "date")
        query["to_date"] = filters["toDate"]
    if filters.get("status"):
        query["status"] = filters["status"]

    return await get_many(
        ctx,
        f"/search_folders/{search_folder_id}",
        "folderItems",
        partial(ctx.data_source.search_folder, search_folder_id),
        query,
    )


HANDLERS = {
    "getAll": get_all,
    "getItems": get_items,
    "moveEnvelope": move_envelope,
    "search": search,
}
