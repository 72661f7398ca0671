"""Signing group operations."""

from typing import Any, Dict, List

from docusign_node.nodes.docusign.context import ItemContext, collection_entries
from docusign_node.nodes.docusign.handlers.common import limit_items
from docusign_node.sources.external.docusign.builders import build_signing_group, build_update_body
from docusign_node.sources.external.docusign.validation import validate_field


def _signing_group_id(ctx: ItemContext) -> str:
    return validate_field("Signing Group ID", ctx.get_parameter("signingGroupId"))


def _members(container: Any) -> List[Dict[str, Any]]:
    members = collection_entries(container, "member")
    for member in members:
        validate_field("Member Email", member.get("email"), "email")
        validate_field("Member Name", member.get("name"))
    return members


async def create(ctx: ItemContext) -> Dict[str, Any]:
    group_name = ctx.get_parameter("groupName")
    validate_field("Group Name", group_name)

    group = build_signing_group(group_name, _members(ctx.get_parameter("members", {})))
    return await ctx.data_source.create_signing_group(group)


async def get(ctx: ItemContext) -> Dict[str, Any]:
    return await ctx.data_source.get_signing_group(_signing_group_id(ctx))


async def get_all(ctx: ItemContext) -> List[Dict[str, Any]]:
    response = await ctx.data_source.list_signing_groups()
    return limit_items(ctx, response.get("groups") or [])


async def update(ctx: ItemContext) -> Dict[str, Any]:
    signing_group_id = _signing_group_id(ctx)
    update_fields = ctx.get_collection("updateFields")
    if "members" in update_fields:
        # an empty member group counts as not given
        update_fields["members"] = _members(update_fields["members"]) or None
    fields = build_update_body(update_fields, ("groupName", "members"))

    group = build_signing_group(fields.get("groupName"), fields.get("members"))
    return await ctx.data_source.update_signing_group(signing_group_id, group)


async def delete(ctx: ItemContext) -> Dict[str, Any]:
    return await ctx.data_source.delete_signing_group(_signing_group_id(ctx))


HANDLERS = {
    "create": create,
    "get": get,
    "getAll": get_all,
    "update": update,
    "delete": delete,
}
