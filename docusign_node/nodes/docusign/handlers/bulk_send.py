"""Bulk send operations."""

from typing import Any, Dict, List

from docusign_node.nodes.docusign.context import ItemContext, collection_entries
from docusign_node.nodes.docusign.handlers.common import get_many
from docusign_node.sources.external.docusign.builders import BulkSendListBuilder
from docusign_node.sources.external.docusign.validation import validate_field


def _list_id(ctx: ItemContext) -> str:
    return validate_field("List ID", ctx.get_parameter("listId"), "uuid")


async def create_list(ctx: ItemContext) -> Dict[str, Any]:
    list_name = ctx.get_parameter("listName")
    validate_field("List Name", list_name)

    bulk_list = BulkSendListBuilder(list_name)
    for recipient in collection_entries(ctx.get_parameter("recipients", {}), "recipient"):
        validate_field("Recipient Email", recipient.get("email"), "email")
        validate_field("Recipient Name", recipient.get("name"))
        bulk_list.add_recipient(recipient["email"], recipient["name"], recipient.get("roleName"))

    return await ctx.data_source.create_bulk_send_list(bulk_list.build())


async def get(ctx: ItemContext) -> Dict[str, Any]:
    return await ctx.data_source.get_bulk_send_list(_list_id(ctx))


async def get_all(ctx: ItemContext) -> List[Dict[str, Any]]:
    return await get_many(ctx, "/bulk_send_lists", "bulkListSummaries", ctx.data_source.list_bulk_send_lists)


async def delete_list(ctx: ItemContext) -> Dict[str, Any]:
    return await ctx.data_source.delete_bulk_send_list(_list_id(ctx))


async def send(ctx: ItemContext) -> Dict[str, Any]:
    list_id = _list_id(ctx)
    envelope_or_template_id = validate_field("Envelope/Template ID", ctx.get_parameter("envelopeOrTemplateId"), "uuid")
    return await ctx.data_source.send_bulk_send_list(list_id, envelope_or_template_id)


async def get_batch_status(ctx: ItemContext) -> Dict[str, Any]:
    batch_id = validate_field("Batch ID", ctx.get_parameter("batchId"), "uuid")
    return await ctx.data_source.get_bulk_send_batch_status(batch_id)


HANDLERS = {
    "createList": create_list,
    "get": get,
    "getAll": get_all,
    "deleteList": delete_list,
    "send": send,
    "getBatchStatus": get_batch_status,
}
