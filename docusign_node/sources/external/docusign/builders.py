"""Request builders for DocuSign eSignature payloads.

Pure functions and builder types that turn validated parameter values into the
vendor's JSON request bodies. Nothing here performs I/O.
"""

import base64
import binascii
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from docusign_node.config.constants.docusign import (
    DEFAULT_EXPIRE_AFTER,
    DEFAULT_EXPIRE_WARN,
    DEFAULT_FILE_EXTENSION,
    DEFAULT_REMINDER_DELAY,
    DEFAULT_REMINDER_FREQUENCY,
    DEFAULT_ROLE_NAME,
    DEFAULT_SIGNATURE_X,
    DEFAULT_SIGNATURE_Y,
    MAX_LOCK_DURATION_SECONDS,
    EnvelopeStatus,
)
from docusign_node.exceptions.docusign_exceptions import (
    FieldValidationError,
    UnresolvableDocumentReferenceError,
)
from docusign_node.sources.external.docusign.tabs import (
    AbsolutePosition,
    AnchorPosition,
    AnyTab,
    SignHereTab,
    group_tabs,
    resolve_position,
)


def _bool_str(value: Any) -> str:
    return "true" if value else "false"


# ============================================================================
# Primitive builders
# ============================================================================


def get_file_extension(file_name: Optional[str]) -> str:
    """Return the lower-cased text after the last dot, or ``pdf`` when there is none."""
    if not file_name or "." not in file_name:
        return DEFAULT_FILE_EXTENSION
    extension = file_name.rsplit(".", 1)[1].strip().lower()
    return extension or DEFAULT_FILE_EXTENSION


def build_signer(email: str, name: str, recipient_id: str, routing_order: str) -> Dict[str, Any]:
    return {
        "email": email,
        "name": name,
        "recipientId": str(recipient_id),
        "routingOrder": str(routing_order),
    }


def build_carbon_copy(email: str, name: str, recipient_id: str, routing_order: str) -> Dict[str, Any]:
    return {
        "email": email,
        "name": name,
        "recipientId": str(recipient_id),
        "routingOrder": str(routing_order),
    }


def build_document(
    base64_content: str,
    document_id: Union[str, int],
    name: str,
    extension: Optional[str] = None,
) -> Dict[str, Any]:
    extension = (extension or get_file_extension(name)).lower()
    return {
        "documentBase64": base64_content,
        "documentId": str(document_id),
        "name": name,
        "fileExtension": extension,
    }


def build_sign_here_tab(
    document_id: Union[str, int],
    page_number: Union[str, int],
    position: Union[AnchorPosition, AbsolutePosition, Mapping[str, Any]],
) -> Dict[str, Any]:
    """Build one sign-here tab.

    ``position`` is either anchor based (``anchorString`` plus offsets) or
    absolute (``xPosition``/``yPosition``). When an anchor string is present the
    absolute coordinates are dropped, so the result never carries both.
    """
    return SignHereTab(
        document_id=str(document_id),
        page_number=str(page_number),
        position=resolve_position(position),
    ).to_dict()


def build_template_role(
    email: str,
    name: str,
    role_name: str,
    client_user_id: Optional[str] = None,
) -> Dict[str, Any]:
    role = {"email": email, "name": name, "roleName": role_name}
    if client_user_id:
        role["clientUserId"] = client_user_id
    return role


def build_notification(
    reminder_enabled: bool = False,
    reminder_delay: Optional[int] = None,
    reminder_frequency: Optional[int] = None,
    expire_enabled: bool = False,
    expire_after: Optional[int] = None,
    expire_warn: Optional[int] = None,
) -> Optional[Dict[str, Any]]:
    """Reminder and expiration settings; ``None`` when neither is enabled."""
    if not reminder_enabled and not expire_enabled:
        return None

    notification: Dict[str, Any] = {"useAccountDefaults": "false"}
    if reminder_enabled:
        notification["reminders"] = {
            "reminderEnabled": "true",
            "reminderDelay": str(reminder_delay or DEFAULT_REMINDER_DELAY),
            "reminderFrequency": str(reminder_frequency or DEFAULT_REMINDER_FREQUENCY),
        }
    if expire_enabled:
        notification["expirations"] = {
            "expireEnabled": "true",
            "expireAfter": str(expire_after or DEFAULT_EXPIRE_AFTER),
            "expireWarn": str(expire_warn or DEFAULT_EXPIRE_WARN),
        }
    return notification


def apply_signer_authentication(signer: Dict[str, Any], method: Optional[str], access_code: Optional[str] = None, phone_number: Optional[str] = None) -> Dict[str, Any]:
    """Attach an access code, phone or SMS authentication block to a signer."""
    if method == "accessCode":
        if not access_code:
            raise FieldValidationError("Access Code", "is required")
        signer["accessCode"] = access_code
    elif method == "phone":
        if not phone_number:
            raise FieldValidationError("Phone Number", "is required")
        signer["phoneAuthentication"] = {
            "recipMayProvideNumber": "true",
            "senderProvidedNumbers": [phone_number],
        }
    elif method == "sms":
        if not phone_number:
            raise FieldValidationError("Phone Number", "is required")
        signer["smsAuthentication"] = {"senderProvidedNumbers": [phone_number]}
    elif method:
        raise FieldValidationError("Authentication Method", f'"{method}" is not supported')
    return signer


def build_text_custom_fields(fields: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    custom_fields = []
    for field in fields:
        custom_field: Dict[str, Any] = {
            "name": field.get("name"),
            "value": field.get("value") or "",
            "show": _bool_str(field.get("show")),
            "required": _bool_str(field.get("required")),
        }
        if field.get("fieldId"):
            custom_field["fieldId"] = str(field["fieldId"])
        custom_fields.append(custom_field)
    return custom_fields


def _is_base64(value: str) -> bool:
    compact = "".join(value.split())
    if not compact:
        return False
    try:
        return bool(base64.b64decode(compact, validate=True))
    except (binascii.Error, ValueError):
        return False


def resolve_document_base64(items: Sequence[Any], item_index: int, reference: str) -> str:
    """Resolve a document reference to base64 content.

    The reference is first looked up as the name of a binary property on the
    current item; otherwise it must itself be base64 content.

    Raises:
        UnresolvableDocumentReferenceError: when neither form matches
    """
    reference = (reference or "").strip()
    if not reference:
        raise UnresolvableDocumentReferenceError(reference, item_index)

    if 0 <= item_index < len(items):
        binary = getattr(items[item_index], "binary", None) or {}
        attachment = binary.get(reference)
        if attachment is not None:
            return attachment.data

    if _is_base64(reference):
        return reference

    raise UnresolvableDocumentReferenceError(reference, item_index)


# ============================================================================
# Payload builder types
# ============================================================================


class EnvelopeBuilder:
    """Accumulates an envelope definition.

    Document ids and recipient ids are assigned in insertion order starting at
    ``"1"``. Signers and carbon copies share one id namespace; carbon copies
    are numbered after every signer regardless of the order they were added.
    """

    def __init__(self, email_subject: str) -> None:
        self.email_subject = email_subject
        self.status = EnvelopeStatus.CREATED
        self.documents: List[Dict[str, Any]] = []
        self.signers: List[Dict[str, Any]] = []
        self._carbon_copies: List[Dict[str, Any]] = []
        self.email_blurb: Optional[str] = None
        self.brand_id: Optional[str] = None
        self.notification: Optional[Dict[str, Any]] = None
        self.text_custom_fields: List[Dict[str, Any]] = []
        self._flags: Dict[str, str] = {}

    @property
    def document_count(self) -> int:
        return len(self.documents)

    def add_document(self, base64_content: str, name: str) -> str:
        document_id = str(len(self.documents) + 1)
        self.documents.append(build_document(base64_content, document_id, name, get_file_extension(name)))
        return document_id

    def add_signer(
        self,
        email: str,
        name: str,
        routing_order: Optional[Union[str, int]] = None,
        tabs: Iterable[AnyTab] = (),
        client_user_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Add a signer and return its (still mutable) block."""
        recipient_id = str(len(self.signers) + 1)
        signer = build_signer(email, name, recipient_id, str(routing_order or recipient_id))
        if client_user_id:
            signer["clientUserId"] = client_user_id
        grouped = group_tabs(tabs)
        if grouped:
            signer["tabs"] = grouped
        self.signers.append(signer)
        return signer

    def add_carbon_copy(self, email: str, name: str, routing_order: Optional[Union[str, int]] = None) -> None:
        self._carbon_copies.append({"email": email, "name": name, "routingOrder": routing_order})

    def set_status(self, status: Union[EnvelopeStatus, str]) -> None:
        self.status = EnvelopeStatus(status)

    def send_immediately(self, send: bool) -> None:
        self.set_status(EnvelopeStatus.SENT if send else EnvelopeStatus.CREATED)

    def set_email_blurb(self, blurb: Optional[str]) -> None:
        self.email_blurb = blurb or None

    def set_brand_id(self, brand_id: Optional[str]) -> None:
        self.brand_id = brand_id or None

    def set_allow_markup(self, allow: bool) -> None:
        self._flags["allowMarkup"] = _bool_str(allow)

    def set_allow_reassign(self, allow: bool) -> None:
        self._flags["allowReassign"] = _bool_str(allow)

    def set_enable_wet_sign(self, enable: bool) -> None:
        self._flags["enableWetSign"] = _bool_str(enable)

    def set_enforce_signer_visibility(self, enforce: bool) -> None:
        self._flags["enforceSignerVisibility"] = _bool_str(enforce)

    def set_notification(self, notification: Optional[Dict[str, Any]]) -> None:
        self.notification = notification

    def set_text_custom_fields(self, fields: List[Dict[str, Any]]) -> None:
        self.text_custom_fields = fields

    def _carbon_copy_blocks(self) -> List[Dict[str, Any]]:
        blocks = []
        for offset, cc in enumerate(self._carbon_copies, start=1):
            recipient_id = str(len(self.signers) + offset)
            blocks.append(build_carbon_copy(cc["email"], cc["name"], recipient_id, str(cc["routingOrder"] or recipient_id)))
        return blocks

    def _check_tab_documents(self) -> None:
        document_ids = {document["documentId"] for document in self.documents}
        for signer in self.signers:
            for tab_list in (signer.get("tabs") or {}).values():
                for tab in tab_list:
                    document_id = tab.get("documentId")
                    if document_id is not None and document_id not in document_ids:
                        raise FieldValidationError(
                            "Tab Document ID",
                            f'"{document_id}" does not match any document in the envelope',
                        )

    def build(self) -> Dict[str, Any]:
        if not self.documents:
            raise FieldValidationError("Document", "is required")
        if not self.signers:
            raise FieldValidationError("Signer", "is required")
        self._check_tab_documents()

        recipients: Dict[str, Any] = {"signers": self.signers}
        carbon_copies = self._carbon_copy_blocks()
        if carbon_copies:
            recipients["carbonCopies"] = carbon_copies

        envelope: Dict[str, Any] = {
            "emailSubject": self.email_subject,
            "documents": self.documents,
            "recipients": recipients,
            "status": self.status.value,
        }
        if self.email_blurb:
            envelope["emailBlurb"] = self.email_blurb
        envelope.update(self._flags)
        if self.brand_id:
            envelope["brandId"] = self.brand_id
        if self.notification:
            envelope["notification"] = self.notification
        if self.text_custom_fields:
            envelope["customFields"] = {"textCustomFields": self.text_custom_fields}
        return envelope


class TemplateBuilder:
    """Accumulates a template definition with one role-based signer."""

    def __init__(self, email_subject: str) -> None:
        self.email_subject = email_subject
        self.documents: List[Dict[str, Any]] = []
        self.role_name = DEFAULT_ROLE_NAME
        self.description: Optional[str] = None
        self.name: Optional[str] = None
        self.email_blurb: Optional[str] = None

    def add_document(self, base64_content: str, name: str) -> str:
        document_id = str(len(self.documents) + 1)
        self.documents.append(build_document(base64_content, document_id, name, get_file_extension(name)))
        return document_id

    def set_role_name(self, role_name: Optional[str]) -> None:
        self.role_name = role_name or DEFAULT_ROLE_NAME

    def set_description(self, description: Optional[str]) -> None:
        self.description = description or None

    def set_name(self, name: Optional[str]) -> None:
        self.name = name or None

    def set_email_blurb(self, blurb: Optional[str]) -> None:
        self.email_blurb = blurb or None

    def build(self) -> Dict[str, Any]:
        if not self.documents:
            raise FieldValidationError("Document", "is required")

        template: Dict[str, Any] = {
            "emailSubject": self.email_subject,
            "documents": self.documents,
            "recipients": {
                "signers": [
                    {
                        "recipientId": "1",
                        "routingOrder": "1",
                        "roleName": self.role_name,
                        "tabs": {
                            "signHereTabs": [
                                build_sign_here_tab(
                                    "1",
                                    "1",
                                    AbsolutePosition(str(DEFAULT_SIGNATURE_X), str(DEFAULT_SIGNATURE_Y)),
                                )
                            ]
                        },
                    }
                ]
            },
        }
        if self.name:
            template["name"] = self.name
        if self.description:
            template["description"] = self.description
        if self.email_blurb:
            template["emailBlurb"] = self.email_blurb
        return template


class BulkSendListBuilder:
    """Accumulates a bulk send list: one bulk copy per recipient."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.bulk_copies: List[Dict[str, Any]] = []

    def add_recipient(self, email: str, name: str, role_name: Optional[str] = None) -> None:
        self.bulk_copies.append(
            {
                "recipients": [
                    {
                        "email": email,
                        "name": name,
                        "roleName": role_name or DEFAULT_ROLE_NAME,
                    }
                ]
            }
        )

    def build(self) -> Dict[str, Any]:
        return {"name": self.name, "bulkCopies": self.bulk_copies}


# ============================================================================
# Small request bodies
# ============================================================================


def build_update_body(update_fields: Mapping[str, Any], allowed: Sequence[str], label: str = "Update Fields") -> Dict[str, Any]:
    """Keep the non-empty allowed update fields.

    Raises:
        FieldValidationError: naming both the supported and the offered fields when none is usable
    """
    body = {name: update_fields[name] for name in allowed if update_fields.get(name) not in (None, "")}
    if not body:
        offered = ", ".join(sorted(name for name, value in update_fields.items() if value not in (None, ""))) or "none"
        raise FieldValidationError(
            label,
            "needs at least one field",
            f"At least one update field is required ({', '.join(allowed)}); received: {offered}",
        )
    return body


def build_recipient_update(recipient_id: str, email: Optional[str] = None, name: Optional[str] = None) -> Dict[str, Any]:
    signer: Dict[str, Any] = {"recipientId": str(recipient_id)}
    if email:
        signer["email"] = email
    if name:
        signer["name"] = name
    return {"signers": [signer]}


def build_recipient_view_request(
    email: str,
    user_name: str,
    return_url: str,
    client_user_id: str,
    authentication_method: str = "None",
) -> Dict[str, Any]:
    return {
        "email": email,
        "userName": user_name,
        "returnUrl": return_url,
        "authenticationMethod": authentication_method or "None",
        "clientUserId": client_user_id,
    }


def build_power_form(
    template_id: str,
    name: str,
    email_subject: Optional[str] = None,
    email_body: Optional[str] = None,
    signer_can_sign_on_mobile: Optional[bool] = None,
    max_use: Optional[int] = None,
) -> Dict[str, Any]:
    power_form: Dict[str, Any] = {"templateId": template_id, "name": name}
    if email_subject:
        power_form["emailSubject"] = email_subject
    if email_body:
        power_form["emailBody"] = email_body
    if signer_can_sign_on_mobile is not None:
        power_form["signerCanSignOnMobile"] = _bool_str(signer_can_sign_on_mobile)
    if max_use:
        power_form["maxUse"] = str(max_use)
    return power_form


def build_brand(
    brand_name: Optional[str] = None,
    brand_company: Optional[str] = None,
    default_brand_language: Optional[str] = None,
    is_overriding_company_name: Optional[bool] = None,
) -> Dict[str, Any]:
    brand: Dict[str, Any] = {}
    if brand_name:
        brand["brandName"] = brand_name
    if brand_company:
        brand["brandCompany"] = brand_company
    if default_brand_language:
        brand["defaultBrandLanguage"] = default_brand_language
    if is_overriding_company_name is not None:
        brand["isOverridingCompanyName"] = _bool_str(is_overriding_company_name)
    return brand


def build_signing_group(
    group_name: Optional[str] = None,
    members: Optional[Iterable[Mapping[str, Any]]] = None,
) -> Dict[str, Any]:
    group: Dict[str, Any] = {"groupType": "sharedSigningGroup"}
    if group_name:
        group["groupName"] = group_name
    if members is not None:
        group["users"] = [{"email": member["email"], "userName": member["name"]} for member in members]
    return group


def build_lock_request(lock_duration_seconds: int, locked_by_app: Optional[str] = None) -> Dict[str, Any]:
    if not 1 <= int(lock_duration_seconds) <= MAX_LOCK_DURATION_SECONDS:
        raise FieldValidationError(
            "Lock Duration (Seconds)",
            f"must be between 1 and {MAX_LOCK_DURATION_SECONDS}",
        )
    lock_request: Dict[str, Any] = {"lockDurationInSeconds": str(int(lock_duration_seconds))}
    if locked_by_app:
        lock_request["lockedByApp"] = locked_by_app
    return lock_request


def build_doc_gen_form_fields(document_id: str, fields: Iterable[Mapping[str, Any]]) -> Dict[str, Any]:
    return {
        "docGenFormFields": [
            {
                "documentId": str(document_id),
                "docGenFormFieldList": [
                    {"name": field["name"], "value": "" if field.get("value") is None else str(field["value"])}
                    for field in fields
                ],
            }
        ]
    }
