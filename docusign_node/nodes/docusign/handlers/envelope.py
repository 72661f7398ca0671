"""Envelope operations."""

from typing import Any, Dict, List

from docusign_node.config.constants.docusign import (
    ADDITIONAL_SIGNER_Y_STEP,
    DEFAULT_FONT_SIZE,
    DEFAULT_SIGNATURE_X,
    DEFAULT_SIGNATURE_Y,
    PDF_MIME_TYPE,
    EnvelopeStatus,
)
from docusign_node.nodes.docusign.context import ItemContext, collection_entries
from docusign_node.nodes.docusign.handlers.common import generate_client_user_id, get_many
from docusign_node.nodes.docusign.items import BinaryData, NodeItem
from docusign_node.sources.external.docusign.builders import (
    EnvelopeBuilder,
    apply_signer_authentication,
    build_notification,
    build_recipient_update,
    build_recipient_view_request,
    build_template_role,
    build_text_custom_fields,
    build_update_body,
    resolve_document_base64,
)
from docusign_node.sources.external.docusign.tabs import (
    AbsolutePosition,
    AnchorPosition,
    AnyTab,
    MergeFieldTab,
    SignHereTab,
    group_tabs,
    parse_tab,
)
from docusign_node.sources.external.docusign.validation import validate_field

ENVELOPE_FLAGS = {
    "allowMarkup": EnvelopeBuilder.set_allow_markup,
    "allowReassign": EnvelopeBuilder.set_allow_reassign,
    "enableWetSign": EnvelopeBuilder.set_enable_wet_sign,
    "enforceSignerVisibility": EnvelopeBuilder.set_enforce_signer_visibility,
}


def _merge_field_tabs(options: Dict[str, Any]) -> List[MergeFieldTab]:
    return [
        MergeFieldTab(
            placeholder=field["placeholder"],
            value=str(field["value"]),
            font_size=field.get("fontSize") or DEFAULT_FONT_SIZE,
        )
        for field in collection_entries(options.get("mergeFields"), "fields")
        if field.get("placeholder") and field.get("value") is not None
    ]


def _primary_signer_tabs(options: Dict[str, Any]) -> List[AnyTab]:
    page = str(options.get("signaturePage") or 1)
    if options.get("useAnchor"):
        validate_field("Anchor String", options.get("anchorString"))
        position = AnchorPosition(anchor_string=str(options["anchorString"]))
    else:
        position = AbsolutePosition(
            x=str(options.get("signatureX") or DEFAULT_SIGNATURE_X),
            y=str(options.get("signatureY") or DEFAULT_SIGNATURE_Y),
        )

    tabs: List[AnyTab] = [SignHereTab(document_id="1", page_number=page, position=position)]
    tabs.extend(parse_tab(entry) for entry in collection_entries(options.get("additionalTabs"), "tabs"))
    tabs.extend(_merge_field_tabs(options))
    return tabs


async def create(ctx: ItemContext) -> Dict[str, Any]:
    email_subject = ctx.get_parameter("emailSubject")
    signer_email = ctx.get_parameter("signerEmail")
    signer_name = ctx.get_parameter("signerName")
    document_input = ctx.get_parameter("document")
    document_name = ctx.get_parameter("documentName")
    send_immediately = ctx.get_parameter("sendImmediately", True)
    options = ctx.get_collection("additionalOptions")

    validate_field("Email Subject", email_subject)
    validate_field("Signer Email", signer_email, "email")
    validate_field("Signer Name", signer_name)

    envelope = EnvelopeBuilder(email_subject)
    envelope.add_document(resolve_document_base64(ctx.items, ctx.item_index, document_input), document_name)

    for document in collection_entries(options.get("additionalDocuments"), "documents"):
        content = resolve_document_base64(ctx.items, ctx.item_index, document.get("document"))
        validate_field("Additional Document Name", document.get("documentName"))
        envelope.add_document(content, document["documentName"])

    client_user_id = None
    if options.get("embeddedSigning"):
        client_user_id = options.get("embeddedClientUserId") or generate_client_user_id()

    signer = envelope.add_signer(
        signer_email,
        signer_name,
        routing_order="1",
        tabs=_primary_signer_tabs(options),
        client_user_id=client_user_id,
    )

    auth = collection_entries(options.get("signerAuthentication"), "auth")
    if auth:
        apply_signer_authentication(
            signer,
            auth[0].get("authMethod"),
            access_code=auth[0].get("accessCode"),
            phone_number=auth[0].get("phoneNumber"),
        )

    for extra in collection_entries(options.get("additionalSigners"), "signers"):
        validate_field("Additional Signer Email", extra.get("email"), "email")
        validate_field("Additional Signer Name", extra.get("name"))
        signer_id = len(envelope.signers) + 1
        y = DEFAULT_SIGNATURE_Y + (signer_id - 1) * ADDITIONAL_SIGNER_Y_STEP
        tabs = [
            SignHereTab(
                document_id=str(document_index),
                page_number="1",
                position=AbsolutePosition(x=str(DEFAULT_SIGNATURE_X), y=str(y)),
            )
            for document_index in range(1, envelope.document_count + 1)
        ]
        envelope.add_signer(extra["email"], extra["name"], extra.get("routingOrder") or signer_id, tabs)

    if options.get("ccEmail") and options.get("ccName"):
        validate_field("CC Email", options["ccEmail"], "email")
        envelope.add_carbon_copy(options["ccEmail"], options["ccName"])

    envelope.send_immediately(bool(send_immediately))
    envelope.set_email_blurb(options.get("emailBlurb"))
    envelope.set_brand_id(options.get("brandId"))
    for name, setter in ENVELOPE_FLAGS.items():
        if name in options and options[name] is not None:
            setter(envelope, bool(options[name]))

    envelope.set_notification(
        build_notification(
            reminder_enabled=bool(options.get("reminderEnabled")),
            reminder_delay=options.get("reminderDelay"),
            reminder_frequency=options.get("reminderFrequency"),
            expire_enabled=bool(options.get("expireEnabled")),
            expire_after=options.get("expireAfter"),
            expire_warn=options.get("expireWarn"),
        )
    )
    envelope.set_text_custom_fields(
        build_text_custom_fields(collection_entries(options.get("customFields"), "textFields"))
    )

    return await ctx.data_source.create_envelope(envelope.build())


async def create_from_template(ctx: ItemContext) -> Dict[str, Any]:
    template_id = ctx.get_parameter("templateId")
    email_subject = ctx.get_parameter("emailSubject")
    role_name = ctx.get_parameter("roleName")
    recipient_email = ctx.get_parameter("recipientEmail")
    recipient_name = ctx.get_parameter("recipientName")
    options = ctx.get_collection("additionalOptions")

    template_id = validate_field("Template ID", template_id, "uuid")
    validate_field("Email Subject", email_subject)
    validate_field("Role Name", role_name)
    validate_field("Recipient Email", recipient_email, "email")
    validate_field("Recipient Name", recipient_name)

    role = build_template_role(recipient_email, recipient_name, role_name)
    merge_tabs = group_tabs(_merge_field_tabs(options))
    if merge_tabs:
        role["tabs"] = merge_tabs

    envelope: Dict[str, Any] = {
        "templateId": template_id,
        "emailSubject": email_subject,
        "templateRoles": [role],
        "status": EnvelopeStatus.SENT.value,
    }
    if options.get("emailBlurb"):
        envelope["emailBlurb"] = options["emailBlurb"]

    return await ctx.data_source.create_envelope(envelope)


def _envelope_id(ctx: ItemContext) -> str:
    return validate_field("Envelope ID", ctx.get_parameter("envelopeId"), "uuid")


async def get(ctx: ItemContext) -> Dict[str, Any]:
    return await ctx.data_source.get_envelope(_envelope_id(ctx))


async def get_all(ctx: ItemContext) -> List[Dict[str, Any]]:
    filters = ctx.get_collection("filters")
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

    return await get_many(ctx, "/envelopes", "envelopes", ctx.data_source.list_envelopes, query)


async def send(ctx: ItemContext) -> Dict[str, Any]:
    return await ctx.data_source.update_envelope(_envelope_id(ctx), {"status": EnvelopeStatus.SENT.value})


async def void(ctx: ItemContext) -> Dict[str, Any]:
    envelope_id = _envelope_id(ctx)
    void_reason = ctx.get_parameter("voidReason")
    validate_field("Void Reason", void_reason)
    return await ctx.data_source.update_envelope(
        envelope_id,
        {"status": EnvelopeStatus.VOIDED.value, "voidedReason": void_reason},
    )


async def download_document(ctx: ItemContext) -> NodeItem:
    """Download one document as a binary attachment on the output item."""
    envelope_id = _envelope_id(ctx)
    document_id = validate_field("Document ID", ctx.get_parameter("documentId"))
    binary_property = ctx.get_parameter("binaryPropertyName", "data") or "data"

    # combined, archive, certificate and numeric ids are accepted as-is
    if "-" in document_id:
        validate_field("Document ID", document_id, "uuid")

    content = await ctx.data_source.download_document(envelope_id, document_id)
    return NodeItem(
        json={"envelopeId": envelope_id, "documentId": document_id, "success": True},
        binary={
            binary_property: BinaryData.from_bytes(
                content,
                f"document_{envelope_id}_{document_id}.pdf",
                PDF_MIME_TYPE,
            )
        },
    )


async def resend(ctx: ItemContext) -> Dict[str, Any]:
    envelope_id = _envelope_id(ctx)
    resend_reason = ctx.get_parameter("resendReason", "")
    body = {"resendEnvelopeReason": resend_reason} if resend_reason else {}
    return await ctx.data_source.update_envelope(envelope_id, body, query={"resend_envelope": True})


async def get_recipients(ctx: ItemContext) -> Dict[str, Any]:
    return await ctx.data_source.list_recipients(_envelope_id(ctx))


async def update_recipients(ctx: ItemContext) -> Dict[str, Any]:
    envelope_id = _envelope_id(ctx)
    recipient_id = validate_field("Recipient ID", ctx.get_parameter("recipientId"))

    fields = build_update_body(ctx.get_collection("updateFields"), ("email", "name"))
    if "email" in fields:
        validate_field("Email", fields["email"], "email")

    return await ctx.data_source.update_recipients(
        envelope_id,
        build_recipient_update(recipient_id, email=fields.get("email"), name=fields.get("name")),
    )


async def get_audit_events(ctx: ItemContext) -> Dict[str, Any]:
    return await ctx.data_source.list_audit_events(_envelope_id(ctx))


async def delete(ctx: ItemContext) -> Dict[str, Any]:
    """Delete a draft; DocuSign only accepts this for envelopes still in ``created``."""
    return await ctx.data_source.update_envelope(_envelope_id(ctx), {"status": EnvelopeStatus.DELETED.value})


async def create_recipient_view(ctx: ItemContext) -> Dict[str, Any]:
    envelope_id = _envelope_id(ctx)
    signer_email = ctx.get_parameter("signerEmail")
    signer_name = ctx.get_parameter("signerName")
    return_url = ctx.get_parameter("returnUrl")
    authentication_method = ctx.get_parameter("authenticationMethod", "None")
    client_user_id = ctx.get_parameter("clientUserId", "")

    validate_field("Signer Email", signer_email, "email")
    validate_field("Signer Name", signer_name)
    validate_field("Return URL", return_url, "url")

    view_request = build_recipient_view_request(
        signer_email,
        signer_name,
        return_url,
        client_user_id or generate_client_user_id(),
        authentication_method,
    )
    return await ctx.data_source.create_recipient_view(envelope_id, view_request)


async def list_documents(ctx: ItemContext) -> Dict[str, Any]:
    return await ctx.data_source.list_documents(_envelope_id(ctx))


async def correct(ctx: ItemContext) -> Dict[str, Any]:
    envelope_id = _envelope_id(ctx)
    return_url = ctx.get_parameter("returnUrl")
    validate_field("Return URL", return_url, "url")
    return await ctx.data_source.create_correct_view(envelope_id, {"returnUrl": return_url})


HANDLERS = {
    "create": create,
    "createFromTemplate": create_from_template,
    "get": get,
    "getAll": get_all,
    "send": send,
    "void": void,
    "downloadDocument": download_document,
    "resend": resend,
    "getRecipients": get_recipients,
    "updateRecipients": update_recipients,
    "getAuditEvents": get_audit_events,
    "delete": delete,
    "createRecipientView": create_recipient_view,
    "listDocuments": list_documents,
    "correct": correct,
}
