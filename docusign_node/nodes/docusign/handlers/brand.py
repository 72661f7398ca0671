"""Brand operations."""

from typing import Any, Dict, List

from docusign_node.nodes.docusign.context import ItemContext
from docusign_node.nodes.docusign.handlers.common import limit_items
from docusign_node.sources.external.docusign.builders import build_brand, build_update_body
from docusign_node.sources.external.docusign.validation import validate_field

UPDATABLE_FIELDS = ("brandName", "brandCompany", "isOverridingCompanyName")


def _brand_id(ctx: ItemContext) -> str:
    return validate_field("Brand ID", ctx.get_parameter("brandId"), "uuid")


async def create(ctx: ItemContext) -> Dict[str, Any]:
    brand_name = ctx.get_parameter("brandName")
    options = ctx.get_collection("additionalOptions")
    validate_field("Brand Name", brand_name)

    brand = build_brand(
        brand_name=brand_name,
        brand_company=options.get("brandCompany"),
        default_brand_language=options.get("defaultBrandLanguage"),
        is_overriding_company_name=options.get("isOverridingCompanyName"),
    )
    return await ctx.data_source.create_brand(brand)


async def get(ctx: ItemContext) -> Dict[str, Any]:
    return await ctx.data_source.get_brand(_brand_id(ctx))


async def get_all(ctx: ItemContext) -> List[Dict[str, Any]]:
    response = await ctx.data_source.list_brands()
    return limit_items(ctx, response.get("brands") or [])


async def update(ctx: ItemContext) -> Dict[str, Any]:
    brand_id = _brand_id(ctx)
    fields = build_update_body(ctx.get_collection("updateFields"), UPDATABLE_FIELDS)
    brand = build_brand(
        brand_name=fields.get("brandName"),
        brand_company=fields.get("brandCompany"),
        is_overriding_company_name=fields.get("isOverridingCompanyName"),
    )
    return await ctx.data_source.update_brand(brand_id, brand)


async def delete(ctx: ItemContext) -> Dict[str, Any]:
    return await ctx.data_source.delete_brand(_brand_id(ctx))


HANDLERS = {
    "create": create,
    "get": get,
    "getAll": get_all,
    "update": update,
    "delete": delete,
}
