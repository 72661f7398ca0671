"""Document generation form field operations."""

from typing import Any, Dict

from docusign_node.nodes.docusign.context import ItemContext, collection_entries
from docusign_node.sources.external.docusign.builders import build_doc_gen_form_fields
from docusign_node.sources.external.docusign.validation import validate_field


def _envelope_id(ctx: ItemContext) -> str:
    return validate_field("Envelope ID", ctx.get_parameter("envelopeId"), "uuid")


async def get_form_fields(ctx: ItemContext) -> Dict[str, Any]:
    return await ctx.data_source.get_doc_gen_form_fields(_envelope_id(ctx))


async def update_form_fields(ctx: ItemContext) -> Dict[str, Any]:
    envelope_id = _envelope_id(ctx)
    document_id = validate_field("Document ID", ctx.get_parameter("documentId"))

    fields = collection_entries(ctx.get_parameter("formFields", {}), "field")
    if not fields:
        validate_field("Form Fields", None)
    for field in fields:
        validate_field("Field Name", field.get("name"))

    return await ctx.data_source.update_doc_gen_form_fields(
        envelope_id,
        build_doc_gen_form_fields(document_id, fields),
    )


HANDLERS = {
    "getFormFields": get_form_fields,
    "updateFormFields": update_form_fields,
}
