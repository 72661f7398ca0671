"""PowerForm operations."""

from typing import Any, Dict, List

from docusign_node.nodes.docusign.context import ItemContext
from docusign_node.nodes.docusign.handlers.common import get_many
from docusign_node.sources.external.docusign.builders import build_power_form
from docusign_node.sources.external.docusign.validation import validate_field


def _power_form_id(ctx: ItemContext) -> str:
    return validate_field("PowerForm ID", ctx.get_parameter("powerFormId"), "uuid")


async def create(ctx: ItemContext) -> Dict[str, Any]:
    template_id = ctx.get_parameter("templateId")
    name = ctx.get_parameter("name")
    options = ctx.get_collection("additionalOptions")

    template_id = validate_field("Template ID", template_id, "uuid")
    validate_field("Name", name)

    power_form = build_power_form(
        template_id,
        name,
        email_subject=options.get("emailSubject"),
        email_body=options.get("emailBody"),
        signer_can_sign_on_mobile=options.get("signerCanSignOnMobile"),
        max_use=options.get("maxUse"),
    )
    return await ctx.data_source.create_power_form(power_form)


async def get(ctx: ItemContext) -> Dict[str, Any]:
    return await ctx.data_source.get_power_form(_power_form_id(ctx))


async def get_all(ctx: ItemContext) -> List[Dict[str, Any]]:
    return await get_many(ctx, "/powerforms", "powerForms", ctx.data_source.list_power_forms)


async def delete(ctx: ItemContext) -> Dict[str, Any]:
    return await ctx.data_source.delete_power_form(_power_form_id(ctx))


HANDLERS = {
    "create": create,
    "get": get,
    "getAll": get_all,
    "delete": delete,
}
