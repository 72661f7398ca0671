"""Template operations."""

from typing import Any, Dict, List

from docusign_node.nodes.docusign.context import ItemContext
from docusign_node.nodes.docusign.handlers.common import get_many
from docusign_node.sources.external.docusign.builders import (
    TemplateBuilder,
    build_update_body,
    resolve_document_base64,
)
from docusign_node.sources.external.docusign.validation import validate_field

UPDATABLE_FIELDS = ("emailSubject", "description", "name")


def _template_id(ctx: ItemContext) -> str:
    return validate_field("Template ID", ctx.get_parameter("templateId"), "uuid")


async def create(ctx: ItemContext) -> Dict[str, Any]:
    email_subject = ctx.get_parameter("emailSubject")
    document_input = ctx.get_parameter("document")
    document_name = ctx.get_parameter("documentName")
    options = ctx.get_collection("additionalOptions")

    validate_field("Email Subject", email_subject)
    validate_field("Document Name", document_name)

    template = TemplateBuilder(email_subject)
    template.add_document(resolve_document_base64(ctx.items, ctx.item_index, document_input), document_name)
    template.set_role_name(options.get("roleName"))
    template.set_name(ctx.get_parameter("name", "") or document_name)
    template.set_description(ctx.get_parameter("description", ""))
    template.set_email_blurb(options.get("emailBlurb"))

    return await ctx.data_source.create_template(template.build())


async def get(ctx: ItemContext) -> Dict[str, Any]:
    return await ctx.data_source.get_template(_template_id(ctx))


async def get_all(ctx: ItemContext) -> List[Dict[str, Any]]:
    filters = ctx.get_collection("filters")
    query: Dict[str, Any] = {}
    if filters.get("searchText"):
        query["search_text"] = filters["searchText"]
    if filters.get("folderId"):
        query["folder_ids"] = filters["folderId"]
    if filters.get("sharedByMe"):
        query["shared_by_me"] = True

    return await get_many(ctx, "/templates", "envelopeTemplates", ctx.data_source.list_templates, query)


async def update(ctx: ItemContext) -> Dict[str, Any]:
    template_id = _template_id(ctx)
    body = build_update_body(ctx.get_collection("updateFields"), UPDATABLE_FIELDS)
    return await ctx.data_source.update_template(template_id, body)


async def delete(ctx: ItemContext) -> Dict[str, Any]:
    return await ctx.data_source.delete_template(_template_id(ctx))


HANDLERS = {
    "create": create,
    "get": get,
    "getAll": get_all,
    "update": update,
    "delete": delete,
}
